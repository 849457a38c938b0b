"""
Catalog - the complete static input of an expansion pass.

A catalog can be built in Python (see `powerd6_infra.catalog`) or loaded
from a YAML file with the same shape.
"""
from typing import List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from powerd6_infra.errors import ConfigurationError
from powerd6_infra.models.label import LabelDefinition
from powerd6_infra.models.repository import RepositoryDescription, RepositoryOptions
from powerd6_infra.utils.slugify import ensure_unique_slugs


class Catalog(BaseModel):
    """Repositories, labels, bypass principals and shared defaults."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    defaults: RepositoryOptions = Field(default_factory=RepositoryOptions)
    repositories: List[RepositoryDescription] = Field(default_factory=list)
    labels: List[LabelDefinition] = Field(default_factory=list)
    bypass_principals: List[str] = Field(default_factory=list)

    @field_validator('repositories')
    @classmethod
    def validate_unique_repositories(cls, v: List[RepositoryDescription]) -> List[RepositoryDescription]:
        """Ensure all repository names are unique."""
        names = [repo.name for repo in v]
        if len(names) != len(set(names)):
            duplicates = sorted({name for name in names if names.count(name) > 1})
            raise ValueError(f"Duplicate repository names found: {', '.join(duplicates)}")
        return v

    @field_validator('labels')
    @classmethod
    def validate_unique_labels(cls, v: List[LabelDefinition]) -> List[LabelDefinition]:
        """Ensure label names are unique and never share a slug."""
        names = [label.name for label in v]
        if len(names) != len(set(names)):
            duplicates = sorted({name for name in names if names.count(name) > 1})
            raise ValueError(f"Duplicate label names found: {', '.join(duplicates)}")
        try:
            ensure_unique_slugs(names)
        except ConfigurationError as e:
            raise ValueError(str(e))
        return v

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "Catalog":
        """
        Parse a catalog from YAML content.

        Raises:
            ConfigurationError: If the YAML is invalid or does not describe a valid catalog
        """
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}")
        if data is None:
            return cls()
        return load_catalog(data)

    def to_yaml(self) -> str:
        """Convert the catalog to YAML, writing only the fields that were set."""
        data = {
            'defaults': self.defaults.overrides(),
            'repositories': [repo.overrides() for repo in self.repositories],
            'labels': [label.model_dump() for label in self.labels],
            'bypass_principals': list(self.bypass_principals),
        }
        return yaml.dump(data, sort_keys=False, default_flow_style=False)


def load_catalog(data: dict) -> Catalog:
    """
    Validate raw catalog data.

    Args:
        data: Mapping with the Catalog fields

    Returns:
        Validated Catalog

    Raises:
        ConfigurationError: If the data is not a valid catalog
    """
    try:
        return Catalog.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid catalog: {e}") from e
