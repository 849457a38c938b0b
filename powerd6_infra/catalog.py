"""
The managed repositories, their shared defaults and the issue labels
applied to each of them.

Append new repositories to REPOSITORIES; every entry gets a protected
main branch, the license and contributing guide, and all LABELS.
"""
from powerd6_infra.models import (
    Catalog, FeatureStatus, LabelDefinition, Pages, RepositoryDescription,
    RepositoryOptions, SecurityAndAnalysis, TemplateReference,
)

# Identities exempt from force-push and pull request restrictions on main
BYPASS_PRINCIPALS = (
    '/HectorCastelli',
)

DEFAULT_REPOSITORY_OPTIONS = RepositoryOptions(
    # Metadata
    topics=['powerd6'],
    visibility='public',
    is_template=False,
    archived=False,
    auto_init=True,

    # Merge behaviour
    allow_auto_merge=False,
    allow_merge_commit=False,
    allow_rebase_merge=False,
    allow_squash_merge=True,
    delete_branch_on_merge=True,
    allow_update_branch=True,
    archive_on_destroy=True,
    merge_commit_message='PR_BODY',
    merge_commit_title='PR_TITLE',
    squash_merge_commit_message='PR_BODY',
    squash_merge_commit_title='PR_TITLE',

    # Features
    has_discussions=False,
    has_downloads=False,
    has_issues=True,
    has_projects=True,
    has_wiki=False,

    # Security
    ignore_vulnerability_alerts_during_read=True,
    vulnerability_alerts=True,
    security_and_analysis=SecurityAndAnalysis(
        secret_scanning=FeatureStatus(status='enabled'),
        secret_scanning_push_protection=FeatureStatus(status='enabled'),
    ),
)

REPOSITORIES = (
    RepositoryDescription(
        name='.github',
        description='The location for Github-specific artifacts, actions, and shared workflows.',
    ),
    RepositoryDescription(
        name='infrastructure',
        description='The shared infrastructure for the powerd6 project.',
    ),
    RepositoryDescription(
        name='branding',
        description='The branding artifacts for the project.',
    ),
    RepositoryDescription(
        name='template_website',
        description='A website, with testing and configuration pre-made.',
        is_template=True,
        pages=Pages(build_type='workflow'),
    ),
    RepositoryDescription(
        name='landing_page',
        description='The landing page for the project.',
        homepage_url='powerd6.org',
        template=TemplateReference(
            owner='powerd6',
            repository='template_website',
            include_all_branches=False,
        ),
    ),
)

LABELS = (
    LabelDefinition(name='goal: addition', description='Addition of a new feature', color='ffffff'),
    LabelDefinition(name='goal: improvement', description='Improvement to an existing feature', color='ffffff'),
    LabelDefinition(name='goal: fix', description='Bug fix', color='ffffff'),
    LabelDefinition(name='good first issue', description='New-contributor friendly', color='7f0799'),
    LabelDefinition(name='help wanted', description='Open to participation from the community', color='7f0799'),
    LabelDefinition(name='priority: high', description='Stalls work on the project or its dependents', color='ff9f1c'),
    LabelDefinition(name='priority: medium', description='Not blocking but should be fixed soon', color='ffcc00'),
    LabelDefinition(name='priority: low', description="Low priority and doesn't need to be rushed", color='cfda2c'),
)


def default_catalog() -> Catalog:
    """The built-in catalog, validated."""
    return Catalog(
        defaults=DEFAULT_REPOSITORY_OPTIONS,
        repositories=list(REPOSITORIES),
        labels=list(LABELS),
        bypass_principals=list(BYPASS_PRINCIPALS),
    )
