"""Repository description models - the desired state of one GitHub repository."""
import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

REPOSITORY_NAME_PATTERN = re.compile(r'^[A-Za-z0-9._-]+$')

FeatureState = Literal['enabled', 'disabled']


class FeatureStatus(BaseModel):
    """Status toggle of a single security feature."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    status: FeatureState


class SecurityAndAnalysis(BaseModel):
    """Security and analysis features of a repository."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    advanced_security: Optional[FeatureStatus] = None
    secret_scanning: Optional[FeatureStatus] = None
    secret_scanning_push_protection: Optional[FeatureStatus] = None


class PagesSource(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    branch: str
    path: Optional[str] = None


class Pages(BaseModel):
    """GitHub Pages configuration."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    build_type: Optional[Literal['legacy', 'workflow']] = None
    cname: Optional[str] = None
    source: Optional[PagesSource] = None


class TemplateReference(BaseModel):
    """The template repository a repository is generated from."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    owner: str
    repository: str
    include_all_branches: bool = False


class RepositoryOptions(BaseModel):
    """
    Every repository setting that can be defaulted or overridden.

    Only the fields explicitly set on an instance take part in a merge, see
    `overrides()`. Nested objects (security_and_analysis, pages, template)
    are always treated as a single value.
    """
    model_config = ConfigDict(frozen=True, extra='forbid')

    # Metadata
    topics: Optional[List[str]] = None
    visibility: Optional[Literal['public', 'private', 'internal']] = None
    is_template: Optional[bool] = None
    archived: Optional[bool] = None
    auto_init: Optional[bool] = None
    homepage_url: Optional[str] = None
    template: Optional[TemplateReference] = None

    # Merge behaviour
    allow_auto_merge: Optional[bool] = None
    allow_merge_commit: Optional[bool] = None
    allow_rebase_merge: Optional[bool] = None
    allow_squash_merge: Optional[bool] = None
    delete_branch_on_merge: Optional[bool] = None
    allow_update_branch: Optional[bool] = None
    archive_on_destroy: Optional[bool] = None
    merge_commit_message: Optional[Literal['PR_BODY', 'PR_TITLE', 'BLANK']] = None
    merge_commit_title: Optional[Literal['PR_TITLE', 'MERGE_MESSAGE']] = None
    squash_merge_commit_message: Optional[Literal['PR_BODY', 'COMMIT_MESSAGES', 'BLANK']] = None
    squash_merge_commit_title: Optional[Literal['PR_TITLE', 'COMMIT_OR_PR_TITLE']] = None

    # Features
    has_discussions: Optional[bool] = None
    has_downloads: Optional[bool] = None
    has_issues: Optional[bool] = None
    has_projects: Optional[bool] = None
    has_wiki: Optional[bool] = None
    pages: Optional[Pages] = None

    # Security
    ignore_vulnerability_alerts_during_read: Optional[bool] = None
    vulnerability_alerts: Optional[bool] = None
    security_and_analysis: Optional[SecurityAndAnalysis] = None

    def overrides(self) -> Dict[str, Any]:
        """
        Return the explicitly set fields as plain data, in declaration order.

        Returns:
            Dict of field name to value; nested models become dicts
        """
        data = self.model_dump(exclude_none=True)
        return {key: value for key, value in data.items() if key in self.model_fields_set}


class RepositoryDescription(RepositoryOptions):
    """A managed repository: its name, description and per-repository overrides."""

    name: str = Field(..., description="Repository name, also the identity of every derived resource")
    description: Optional[str] = Field(default=None, description="Human-readable description")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure the name is a valid GitHub repository name."""
        if not v or not v.strip():
            raise ValueError("Repository name cannot be empty")
        v = v.strip()
        if v in (".", ".."):
            raise ValueError(f"Reserved repository name: {v!r}")
        if not REPOSITORY_NAME_PATTERN.match(v):
            raise ValueError(f"Invalid repository name: {v!r}")
        return v

    def __repr__(self):
        return f"<RepositoryDescription(name='{self.name}')>"
