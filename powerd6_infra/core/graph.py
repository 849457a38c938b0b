"""
Resource graph - the desired state as an explicit DAG.

Nodes are resource declarations; edges come from `depends_on`, `parent`,
ResourceRef attributes and the `deleted_with` cascade binding. The graph
only computes orderings. Creating, updating and deleting the resources is
the reconciliation engine's job.
"""
import logging
from typing import Dict, Iterable, Iterator, List, Set

from powerd6_infra.errors import ConfigurationError
from powerd6_infra.models import ResourceNode

logger = logging.getLogger(__name__)


def _calculate_levels(node_ids: List[str], waits_for: Dict[str, Set[str]]) -> List[List[str]]:
    """
    Group nodes into levels.

    Level 0 holds nodes that wait for nothing, level 1 nodes that wait only
    for level 0 nodes, and so on. Order inside a level follows node_ids.

    Raises:
        ConfigurationError: If some nodes can never be scheduled (a cycle)
    """
    levels: List[List[str]] = []
    assigned: Set[str] = set()

    while len(assigned) < len(node_ids):
        current_level = [
            node_id for node_id in node_ids
            if node_id not in assigned and waits_for[node_id] <= assigned
        ]
        if not current_level:
            stuck = [node_id for node_id in node_ids if node_id not in assigned]
            raise ConfigurationError(f"Dependency cycle between resources: {', '.join(stuck)}")
        levels.append(current_level)
        assigned.update(current_level)

    return levels


class ResourceGraph:
    """An ordered collection of resource nodes keyed by id."""

    def __init__(self, nodes: Iterable[ResourceNode] = ()):
        self._nodes: Dict[str, ResourceNode] = {}
        for node in nodes:
            self.add(node)

    def add(self, node: ResourceNode) -> ResourceNode:
        """
        Add a node.

        Raises:
            ConfigurationError: If a node with the same id already exists
        """
        if node.id in self._nodes:
            raise ConfigurationError(f"Duplicate resource id: {node.id}")
        self._nodes[node.id] = node
        return node

    def get(self, node_id: str) -> ResourceNode:
        return self._nodes[node_id]

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[ResourceNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def nodes(self) -> List[ResourceNode]:
        return list(self._nodes.values())

    def creation_dependencies(self, node: ResourceNode) -> Set[str]:
        """Ids that must exist before the node can be created."""
        deps = set(node.depends_on)
        deps.update(ref.resource_id for ref in node.references())
        if node.parent:
            deps.add(node.parent)
        return deps

    def validate(self):
        """
        Check that every edge points at a known node and that there is no cycle.

        Raises:
            ConfigurationError: On a dangling edge or a cycle
        """
        for node in self._nodes.values():
            targets = set(self.creation_dependencies(node))
            if node.deleted_with:
                targets.add(node.deleted_with)
            missing = sorted(target for target in targets if target not in self._nodes)
            if missing:
                raise ConfigurationError(
                    f"Resource {node.id} refers to unknown resources: {', '.join(missing)}"
                )
        self.creation_waves()

    def creation_waves(self) -> List[List[ResourceNode]]:
        """
        Batches in creation order.

        Nodes of one batch have no edge between them and could be applied
        concurrently; each batch only needs the batches before it.
        """
        node_ids = list(self._nodes)
        waits_for = {
            node_id: self.creation_dependencies(self._nodes[node_id]) & self._nodes.keys()
            for node_id in node_ids
        }
        levels = _calculate_levels(node_ids, waits_for)
        logger.debug(f"Computed {len(levels)} creation waves for {len(node_ids)} resources")
        return [[self._nodes[node_id] for node_id in level] for level in levels]

    def deletion_waves(self) -> List[List[ResourceNode]]:
        """
        Batches in deletion order.

        A node is deleted only after everything that depends on it, and after
        everything bound to it through `deleted_with`.
        """
        node_ids = list(self._nodes)
        waits_for: Dict[str, Set[str]] = {node_id: set() for node_id in node_ids}
        for node in self._nodes.values():
            owners = self.creation_dependencies(node)
            if node.deleted_with:
                owners.add(node.deleted_with)
            for owner in owners:
                if owner in waits_for:
                    waits_for[owner].add(node.id)
        levels = _calculate_levels(node_ids, waits_for)
        return [[self._nodes[node_id] for node_id in level] for level in levels]

    def cascade_dependents(self, owner_id: str) -> List[ResourceNode]:
        """Nodes removed automatically when the owner is removed."""
        return [node for node in self._nodes.values() if node.deleted_with == owner_id]
