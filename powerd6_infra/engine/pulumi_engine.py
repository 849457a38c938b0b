"""
Pulumi engine - registers the resource graph with the Pulumi GitHub provider.

Must run inside a Pulumi program (`pulumi up` / `pulumi preview`). Pulumi
then diffs the declared resources against its state and applies the
changes, respecting the dependency edges declared here.
"""
import logging
from typing import Any, Dict, List, Optional

import pulumi
import pulumi_github as github

from powerd6_infra.core.graph import ResourceGraph
from powerd6_infra.models import ManagedResourceSet, ResourceKind, ResourceNode, ResourceRef
from .base import ReconciliationEngine

logger = logging.getLogger(__name__)

RESOURCE_TYPES = {
    ResourceKind.REPOSITORY: github.Repository,
    ResourceKind.BRANCH: github.Branch,
    ResourceKind.BRANCH_PROTECTION: github.BranchProtection,
    ResourceKind.REPOSITORY_FILE: github.RepositoryFile,
    ResourceKind.ISSUE_LABEL: github.IssueLabel,
}

_FEATURE_ARGS = {
    'advanced_security': github.RepositorySecurityAndAnalysisAdvancedSecurityArgs,
    'secret_scanning': github.RepositorySecurityAndAnalysisSecretScanningArgs,
    'secret_scanning_push_protection': github.RepositorySecurityAndAnalysisSecretScanningPushProtectionArgs,
}


def _security_and_analysis_args(value: Dict[str, Any]) -> github.RepositorySecurityAndAnalysisArgs:
    return github.RepositorySecurityAndAnalysisArgs(**{
        key: _FEATURE_ARGS[key](**feature) for key, feature in value.items()
    })


def _pages_args(value: Dict[str, Any]) -> github.RepositoryPagesArgs:
    pages = dict(value)
    if 'source' in pages:
        pages['source'] = github.RepositoryPagesSourceArgs(**pages['source'])
    return github.RepositoryPagesArgs(**pages)


def repository_args(attributes: Dict[str, Any]) -> Dict[str, Any]:
    """Convert nested repository settings into provider input types."""
    args = dict(attributes)
    if 'security_and_analysis' in args:
        args['security_and_analysis'] = _security_and_analysis_args(args['security_and_analysis'])
    if 'pages' in args:
        args['pages'] = _pages_args(args['pages'])
    if 'template' in args:
        args['template'] = github.RepositoryTemplateArgs(**args['template'])
    return args


def branch_protection_args(attributes: Dict[str, Any]) -> Dict[str, Any]:
    """Convert nested protection settings into provider input types."""
    args = dict(attributes)
    if 'required_pull_request_reviews' in args:
        args['required_pull_request_reviews'] = [
            github.BranchProtectionRequiredPullRequestReviewArgs(**review)
            for review in args['required_pull_request_reviews']
        ]
    if 'required_status_checks' in args:
        args['required_status_checks'] = [
            github.BranchProtectionRequiredStatusCheckArgs(**check)
            for check in args['required_status_checks']
        ]
    return args


_ARG_CONVERTERS = {
    ResourceKind.REPOSITORY: repository_args,
    ResourceKind.BRANCH_PROTECTION: branch_protection_args,
}


class PulumiEngine(ReconciliationEngine):
    """
    Registers every node as a pulumi_github resource.

    Nodes are registered wave by wave so that parents, dependencies and
    referenced resources always exist as Pulumi objects first.
    """

    def __init__(self, parent: Optional[pulumi.Resource] = None,
                 provider: Optional[pulumi.ProviderResource] = None):
        """
        Initialize the engine.

        Args:
            parent: Resource to parent top-level nodes under, e.g. the organization
            provider: Explicit GitHub provider (default: the stack's default provider)
        """
        self.parent = parent
        self.provider = provider

    def _resolve(self, value: Any, created: Dict[str, pulumi.CustomResource]) -> Any:
        if isinstance(value, ResourceRef):
            return getattr(created[value.resource_id], value.attribute)
        if isinstance(value, dict):
            return {key: self._resolve(item, created) for key, item in value.items()}
        if isinstance(value, list):
            return [self._resolve(item, created) for item in value]
        return value

    def _options(self, node: ResourceNode, created: Dict[str, pulumi.CustomResource]) -> pulumi.ResourceOptions:
        parent = created[node.parent] if node.parent else self.parent
        deleted_with = created[node.deleted_with] if node.deleted_with else None
        depends_on: List[pulumi.Resource] = [created[dep] for dep in node.depends_on]
        return pulumi.ResourceOptions(
            parent=parent,
            depends_on=depends_on,
            deleted_with=deleted_with,
            provider=self.provider,
        )

    def register(self, node: ResourceNode, created: Dict[str, pulumi.CustomResource]) -> pulumi.CustomResource:
        """
        Register a single node.

        Args:
            node: Node to register
            created: Already registered resources by id

        Returns:
            The Pulumi resource
        """
        args = self._resolve(node.attributes, created)
        convert = _ARG_CONVERTERS.get(node.kind)
        if convert:
            args = convert(args)
        resource_type = RESOURCE_TYPES[node.kind]
        return resource_type(node.id, opts=self._options(node, created), **args)

    def submit(self, graph: ResourceGraph) -> Dict[str, pulumi.CustomResource]:
        graph.validate()
        created: Dict[str, pulumi.CustomResource] = {}
        for wave in graph.creation_waves():
            for node in wave:
                created[node.id] = self.register(node, created)
        logger.info(f"Registered {len(created)} resources with Pulumi")
        return created

    def outputs(self, resource_set: ManagedResourceSet, submitted: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'repository': submitted[resource_set.repository.id].name,
            'branches': [submitted[resource_set.branch.id].branch],
            'branch_protection': [submitted[resource_set.branch_protection.id].id],
            'files': [submitted[f.id].file for f in resource_set.files],
            'labels': [submitted[label.id].name for label in resource_set.labels],
        }
