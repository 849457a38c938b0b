"""
Resource expansion - turns one repository description into its full set of
managed resources.

Each repository expands to:
1. the repository itself, built from the defaults with its overrides on top
2. a `main` branch
3. a protection rule on that branch
4. the managed files, committed once protection is in place
5. one issue label per label definition
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from powerd6_infra.core.graph import ResourceGraph
from powerd6_infra.core.merge import merge_options
from powerd6_infra.errors import ConfigurationError
from powerd6_infra.models import (
    Catalog, CommitIdentity, LabelDefinition, ManagedFile, ManagedResourceSet,
    RepositoryDescription, RepositoryOptions, ResourceKind, ResourceNode, ResourceRef,
)
from powerd6_infra.utils.slugify import ensure_unique_slugs

logger = logging.getLogger(__name__)

MAIN_BRANCH = 'main'


def branch_id(repository_name: str) -> str:
    return f"{repository_name}/Branch/Main"


def branch_protection_id(repository_name: str) -> str:
    return f"{repository_name}/BranchProtection/Main"


def file_id(repository_name: str, key: str) -> str:
    return f"{repository_name}/Files/{key}"


def label_id(repository_name: str, label: LabelDefinition) -> str:
    return f"{repository_name}/IssueLabel/{label.slug}"


def _as_description(description: Union[RepositoryDescription, Mapping[str, Any]]) -> RepositoryDescription:
    if isinstance(description, RepositoryDescription):
        return description
    try:
        return RepositoryDescription.model_validate(description)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid repository description: {e}") from e


def _as_options(defaults: Union[RepositoryOptions, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(defaults, RepositoryOptions):
        return defaults.overrides()
    try:
        return RepositoryOptions.model_validate(defaults).overrides()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid default repository options: {e}") from e


def _as_label(label: Union[LabelDefinition, Mapping[str, Any]]) -> LabelDefinition:
    if isinstance(label, LabelDefinition):
        return label
    try:
        return LabelDefinition.model_validate(label)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid label definition: {e}") from e


def _ensure_unique_labels(labels: List[LabelDefinition]):
    names = [label.name for label in labels]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ConfigurationError(f"Duplicate label names found: {', '.join(duplicates)}")
    ensure_unique_slugs(names)


def branch_protection_rules(bypass: Sequence[str]) -> dict:
    """
    Protection settings applied to every main branch.

    Args:
        bypass: Identities allowed to force-push and to bypass pull request requirements

    Returns:
        Attribute dict without the repository and pattern targets
    """
    return {
        'allows_deletions': False,
        'allows_force_pushes': False,
        'lock_branch': False,
        'require_conversation_resolution': True,
        'required_linear_history': True,
        'required_pull_request_reviews': [
            {
                'dismiss_stale_reviews': False,
                'require_last_push_approval': True,
                'required_approving_review_count': 1,
                'restrict_dismissals': True,
                'pull_request_bypassers': list(bypass),
            },
        ],
        'required_status_checks': [
            {
                'strict': True,
            },
        ],
        'enforce_admins': True,
        'force_push_bypassers': list(bypass),
    }


def expand(
    description: Union[RepositoryDescription, Mapping[str, Any]],
    defaults: Union[RepositoryOptions, Mapping[str, Any]],
    labels: Iterable[Union[LabelDefinition, Mapping[str, Any]]],
    bypass: Sequence[str],
    *,
    files: Sequence[ManagedFile],
    committer: Optional[CommitIdentity] = None,
) -> ManagedResourceSet:
    """
    Expand one repository description into its managed resources.

    Pure: no I/O, and the same inputs always give equal results.

    Args:
        description: The repository, as a model or raw mapping
        defaults: Options every repository starts from
        labels: Labels to create in the repository
        bypass: Identities exempt from the branch protection rule
        files: Files to commit on the main branch
        committer: Identity of the file commits (default: the infrastructure bot)

    Returns:
        ManagedResourceSet for the repository

    Raises:
        ConfigurationError: If the description, the defaults or a label is malformed,
            or two labels share a name or slug
    """
    repo_description = _as_description(description)
    label_definitions = [_as_label(label) for label in labels]
    _ensure_unique_labels(label_definitions)
    committer = committer or CommitIdentity()
    name = repo_description.name

    repository = ResourceNode(
        id=name,
        kind=ResourceKind.REPOSITORY,
        attributes=merge_options(_as_options(defaults), repo_description.overrides()),
    )

    branch = ResourceNode(
        id=branch_id(name),
        kind=ResourceKind.BRANCH,
        attributes={
            'repository': ResourceRef(repository.id, 'name'),
            'branch': MAIN_BRANCH,
        },
        depends_on=[repository.id],
        parent=repository.id,
    )

    protection_attributes = {
        'repository_id': ResourceRef(repository.id, 'node_id'),
        'pattern': ResourceRef(branch.id, 'branch'),
    }
    protection_attributes.update(branch_protection_rules(bypass))
    branch_protection = ResourceNode(
        id=branch_protection_id(name),
        kind=ResourceKind.BRANCH_PROTECTION,
        attributes=protection_attributes,
        depends_on=[branch.id],
        parent=branch.id,
    )

    # Files wait for the protection rule so they never land on an unprotected branch
    managed_files = [
        ResourceNode(
            id=file_id(name, managed_file.key),
            kind=ResourceKind.REPOSITORY_FILE,
            attributes={
                'repository': ResourceRef(repository.id, 'name'),
                'branch': ResourceRef(branch.id, 'branch'),
                'file': managed_file.path,
                'content': managed_file.content,
                'commit_author': committer.author,
                'commit_email': committer.email,
                'commit_message': committer.message_for(managed_file.path),
                'overwrite_on_create': True,
            },
            depends_on=[branch.id, branch_protection.id],
            parent=repository.id,
            deleted_with=repository.id,
        )
        for managed_file in files
    ]

    issue_labels = [
        ResourceNode(
            id=label_id(name, label),
            kind=ResourceKind.ISSUE_LABEL,
            attributes={
                'repository': ResourceRef(repository.id, 'name'),
                'name': label.name,
                'description': label.description,
                'color': label.color,
            },
            depends_on=[repository.id],
            parent=repository.id,
            deleted_with=repository.id,
        )
        for label in label_definitions
    ]

    logger.debug(f"Expanded {name}: {len(managed_files)} files, {len(issue_labels)} labels")

    return ManagedResourceSet(
        repository=repository,
        branch=branch,
        branch_protection=branch_protection,
        files=managed_files,
        labels=issue_labels,
    )


def expand_catalog(
    catalog: Catalog,
    files: Sequence[ManagedFile],
    committer: Optional[CommitIdentity] = None,
) -> List[ManagedResourceSet]:
    """
    Expand every repository of a catalog, in declaration order.

    Args:
        catalog: Validated catalog
        files: Files to commit in every repository
        committer: Identity of the file commits

    Returns:
        One ManagedResourceSet per repository
    """
    resource_sets = [
        expand(
            repo,
            catalog.defaults,
            catalog.labels,
            catalog.bypass_principals,
            files=files,
            committer=committer,
        )
        for repo in catalog.repositories
    ]
    logger.info(f"Expanded {len(resource_sets)} repositories")
    return resource_sets


def build_graph(resource_sets: Iterable[ManagedResourceSet]) -> ResourceGraph:
    """
    Collect resource sets into one validated graph.

    Raises:
        ConfigurationError: On duplicate ids, dangling edges or cycles
    """
    graph = ResourceGraph()
    for resource_set in resource_sets:
        for node in resource_set.nodes:
            graph.add(node)
    graph.validate()
    return graph
