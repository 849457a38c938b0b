"""
Declarative resource records.

These are the nodes of the desired-state graph handed to a reconciliation
engine. They carry no behaviour beyond simple accessors: the engine decides
how and when each node is created, updated or deleted.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ResourceKind(Enum):
    """Kind of managed resource."""
    REPOSITORY = "repository"
    BRANCH = "branch"
    BRANCH_PROTECTION = "branch_protection"
    REPOSITORY_FILE = "repository_file"
    ISSUE_LABEL = "issue_label"


@dataclass(frozen=True)
class ResourceRef:
    """
    A value only known once another resource exists.

    For example the protection rule needs the repository's `node_id`, which
    GitHub assigns at creation time.
    """
    resource_id: str
    attribute: str

    def __str__(self):
        return f"${{{self.resource_id}.{self.attribute}}}"


@dataclass(frozen=True)
class ManagedFile:
    """A file committed to the main branch of every managed repository."""
    path: str      # Path inside the repository, e.g. 'LICENSE.md'
    content: str
    key: str       # Resource id suffix, e.g. 'License'


@dataclass(frozen=True)
class CommitIdentity:
    """Author of the commits that write managed files."""
    author: str = 'powerd6/infrastructure'
    email: str = 'infrastructure@powerd6.org'

    def message_for(self, path: str) -> str:
        return f"Updating {path} . Managed by infrastructure."


@dataclass
class ResourceNode:
    """A single resource declaration in the graph."""
    id: str
    kind: ResourceKind
    attributes: Dict[str, Any]
    depends_on: List[str] = field(default_factory=list)
    parent: Optional[str] = None
    deleted_with: Optional[str] = None  # Cascade-delete owner

    def references(self) -> List[ResourceRef]:
        """Every ResourceRef found in the attributes, nested values included."""
        found: List[ResourceRef] = []

        def walk(value: Any):
            if isinstance(value, ResourceRef):
                found.append(value)
            elif isinstance(value, dict):
                for item in value.values():
                    walk(item)
            elif isinstance(value, (list, tuple)):
                for item in value:
                    walk(item)

        walk(self.attributes)
        return found

    def __repr__(self):
        return f"<ResourceNode(id='{self.id}', kind={self.kind.value})>"


@dataclass
class RepositoryOutputs:
    """Values other stacks consume for one repository."""
    repository: str
    branches: List[str]
    branch_protection: List[str]
    files: List[str]
    labels: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'repository': self.repository,
            'branches': list(self.branches),
            'branch_protection': list(self.branch_protection),
            'files': list(self.files),
            'labels': list(self.labels),
        }


@dataclass
class ManagedResourceSet:
    """Everything declared for one repository."""
    repository: ResourceNode
    branch: ResourceNode
    branch_protection: ResourceNode
    files: List[ResourceNode]
    labels: List[ResourceNode]

    @property
    def nodes(self) -> List[ResourceNode]:
        """All nodes of the set, owners before dependents."""
        return [self.repository, self.branch, self.branch_protection, *self.files, *self.labels]

    @property
    def outputs(self) -> RepositoryOutputs:
        return RepositoryOutputs(
            repository=self.repository.attributes['name'],
            branches=[self.branch.attributes['branch']],
            branch_protection=[self.branch_protection.id],
            files=[f.attributes['file'] for f in self.files],
            labels=[label.attributes['name'] for label in self.labels],
        )
