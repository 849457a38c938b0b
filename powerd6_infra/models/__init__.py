from .repository import (
    RepositoryOptions, RepositoryDescription, SecurityAndAnalysis, FeatureStatus,
    Pages, PagesSource, TemplateReference,
)
from .label import LabelDefinition
from .resource import (
    ResourceKind, ResourceRef, ResourceNode, ManagedFile, CommitIdentity,
    ManagedResourceSet, RepositoryOutputs,
)
from .catalog import Catalog, load_catalog

__all__ = ['RepositoryOptions', 'RepositoryDescription', 'SecurityAndAnalysis', 'FeatureStatus',
           'Pages', 'PagesSource', 'TemplateReference', 'LabelDefinition',
           'ResourceKind', 'ResourceRef', 'ResourceNode', 'ManagedFile', 'CommitIdentity',
           'ManagedResourceSet', 'RepositoryOutputs', 'Catalog', 'load_catalog']
