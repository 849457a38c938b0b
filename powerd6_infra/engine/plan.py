"""
Plan engine - renders the resource graph instead of applying it.

Useful to review what a `pulumi up` would declare, or to diff the desired
state between two revisions of the catalog.
"""
import hashlib
import json
from typing import Any, Dict, List

import yaml

from powerd6_infra.core.graph import ResourceGraph
from powerd6_infra.models import ManagedResourceSet, ResourceNode, ResourceRef
from .base import ReconciliationEngine

PLAN_FORMATS = ('yaml', 'json')


def _plain(value: Any) -> Any:
    """Replace references by their '${id.attribute}' form."""
    if isinstance(value, ResourceRef):
        return str(value)
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class PlanEngine(ReconciliationEngine):
    """Serializes the graph with its creation and deletion order."""

    def __init__(self, fmt: str = 'yaml', include_content: bool = False):
        """
        Initialize the engine.

        Args:
            fmt: Output format, 'yaml' or 'json'
            include_content: Render file contents verbatim instead of as a SHA-256 digest
        """
        if fmt not in PLAN_FORMATS:
            raise ValueError(f"Unknown plan format: {fmt}")
        self.fmt = fmt
        self.include_content = include_content

    def _describe(self, node: ResourceNode) -> Dict[str, Any]:
        attributes = _plain(node.attributes)
        if not self.include_content and 'content' in attributes:
            digest = hashlib.sha256(attributes['content'].encode('utf-8')).hexdigest()
            attributes['content'] = f"sha256:{digest}"
        return {
            'id': node.id,
            'kind': node.kind.value,
            'parent': node.parent,
            'depends_on': list(node.depends_on),
            'deleted_with': node.deleted_with,
            'attributes': attributes,
        }

    def submit(self, graph: ResourceGraph) -> Dict[str, Any]:
        graph.validate()
        return {node.id: self._describe(node) for node in graph}

    def plan(self, graph: ResourceGraph) -> Dict[str, Any]:
        """Resources, their creation and deletion waves, and the nodes each owner removes with it."""
        resources = self.submit(graph)

        def wave_ids(waves: List[List[ResourceNode]]) -> List[List[str]]:
            return [[node.id for node in wave] for wave in waves]

        return {
            'resources': list(resources.values()),
            'creation_waves': wave_ids(graph.creation_waves()),
            'deletion_waves': wave_ids(graph.deletion_waves()),
            'cascade_deletes': {
                node.id: [dependent.id for dependent in graph.cascade_dependents(node.id)]
                for node in graph
                if graph.cascade_dependents(node.id)
            },
        }

    def render(self, graph: ResourceGraph) -> str:
        """The plan as text in the configured format."""
        return self.dump(self.plan(graph))

    def dump(self, data: Any) -> str:
        if self.fmt == 'json':
            return json.dumps(data, indent=2)
        return yaml.dump(data, sort_keys=False, default_flow_style=False)

    def outputs(self, resource_set: ManagedResourceSet, submitted: Dict[str, Any]) -> Dict[str, Any]:
        return resource_set.outputs.to_dict()
