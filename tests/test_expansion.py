"""
Tests for the resource expansion function.
Covers the shape of each resource set, the merge, and the dependency edges.
"""

import pytest

from powerd6_infra.catalog import BYPASS_PRINCIPALS, LABELS, REPOSITORIES
from powerd6_infra.core import MAIN_BRANCH, build_graph, expand, expand_catalog
from powerd6_infra.errors import ConfigurationError
from powerd6_infra.models import ResourceKind, ResourceRef


def test_resource_set_shape(expand_args, managed_files):
    """Every repository gets one repo, one main branch, one rule, two files and all labels"""
    for description in REPOSITORIES:
        resource_set = expand(description, *expand_args, files=managed_files)

        assert resource_set.repository.kind == ResourceKind.REPOSITORY
        assert resource_set.branch.kind == ResourceKind.BRANCH
        assert resource_set.branch.attributes['branch'] == MAIN_BRANCH
        assert resource_set.branch_protection.kind == ResourceKind.BRANCH_PROTECTION
        assert len(resource_set.files) == 2
        assert len(resource_set.labels) == len(LABELS)
        assert all(node.kind == ResourceKind.ISSUE_LABEL for node in resource_set.labels)


def test_landing_page_scenario(expand_args, managed_files):
    description = {
        'name': 'landing_page',
        'homepage_url': 'powerd6.org',
        'template': {'owner': 'powerd6', 'repository': 'template_website'},
    }

    repo = expand(description, *expand_args, files=managed_files).repository.attributes

    assert repo['visibility'] == 'public'
    assert repo['allow_squash_merge'] is True
    assert repo['homepage_url'] == 'powerd6.org'
    assert repo['template']['owner'] == 'powerd6'
    assert repo['template']['repository'] == 'template_website'
    assert repo['template']['include_all_branches'] is False


def test_override_wins_over_defaults(expand_args, managed_files):
    description = {'name': 'private-one', 'visibility': 'private', 'has_wiki': True}

    repo = expand(description, *expand_args, files=managed_files).repository.attributes

    assert repo['visibility'] == 'private'
    assert repo['has_wiki'] is True
    assert repo['has_issues'] is True


def test_security_override_replaces_default_object(expand_args, managed_files):
    description = {
        'name': 'no-push-protection',
        'security_and_analysis': {'secret_scanning': {'status': 'enabled'}},
    }

    repo = expand(description, *expand_args, files=managed_files).repository.attributes

    assert repo['security_and_analysis'] == {'secret_scanning': {'status': 'enabled'}}


def test_missing_name_fails_fast(expand_args, managed_files):
    with pytest.raises(ConfigurationError):
        expand({'description': 'no name'}, *expand_args, files=managed_files)


def test_unknown_option_fails_fast(expand_args, managed_files):
    with pytest.raises(ConfigurationError):
        expand({'name': 'typo', 'visibilty': 'public'}, *expand_args, files=managed_files)


def test_malformed_label_fails_fast(managed_files):
    from powerd6_infra.catalog import DEFAULT_REPOSITORY_OPTIONS

    with pytest.raises(ConfigurationError):
        expand({'name': 'repo'}, DEFAULT_REPOSITORY_OPTIONS,
               [{'name': 'bad', 'color': 'red'}], BYPASS_PRINCIPALS, files=managed_files)


def test_label_slug_collision_fails_fast(managed_files):
    labels = [
        {'name': 'goal: fix', 'color': 'aaaaaa'},
        {'name': 'goal fix', 'color': 'bbbbbb'},
    ]
    with pytest.raises(ConfigurationError, match="Slug collision"):
        expand({'name': 'repo'}, {}, labels, BYPASS_PRINCIPALS, files=managed_files)


def test_duplicate_label_names_fail_fast(managed_files):
    labels = [
        {'name': 'help wanted', 'color': 'aaaaaa'},
        {'name': 'help wanted', 'color': 'bbbbbb'},
    ]
    with pytest.raises(ConfigurationError, match="Duplicate label names"):
        expand({'name': 'repo'}, {}, labels, BYPASS_PRINCIPALS, files=managed_files)


def test_mapping_defaults_are_validated(managed_files):
    with pytest.raises(ConfigurationError):
        expand({'name': 'repo'}, {'visibilty': 'public'}, [], BYPASS_PRINCIPALS, files=managed_files)
    with pytest.raises(ConfigurationError):
        expand({'name': 'repo'}, {'has_wiki': 'sometimes'}, [], BYPASS_PRINCIPALS, files=managed_files)


def test_mapping_defaults_merge_under_overrides(managed_files):
    defaults = {'visibility': 'private', 'has_wiki': False}
    repo = expand({'name': 'repo', 'has_wiki': True}, defaults, [], BYPASS_PRINCIPALS,
                  files=managed_files).repository.attributes

    assert repo['visibility'] == 'private'
    assert repo['has_wiki'] is True
    assert repo['name'] == 'repo'


@pytest.mark.parametrize('name', ['.', '..'])
def test_reserved_repository_names_fail_fast(name, expand_args, managed_files):
    with pytest.raises(ConfigurationError):
        expand({'name': name}, *expand_args, files=managed_files)


def test_dependency_edges(expand_args, managed_files):
    resource_set = expand(REPOSITORIES[0], *expand_args, files=managed_files)
    repo_id = resource_set.repository.id
    branch_id = resource_set.branch.id
    protection_id = resource_set.branch_protection.id

    assert resource_set.branch.depends_on == [repo_id]
    assert branch_id in resource_set.branch_protection.depends_on
    for file_node in resource_set.files:
        assert branch_id in file_node.depends_on
        assert protection_id in file_node.depends_on
    for label in resource_set.labels:
        assert branch_id not in label.depends_on
        assert protection_id not in label.depends_on
        assert label.depends_on == [repo_id]


def test_cascade_delete_bindings(expand_args, managed_files):
    resource_set = expand(REPOSITORIES[0], *expand_args, files=managed_files)
    repo_id = resource_set.repository.id

    assert all(node.deleted_with == repo_id for node in resource_set.files)
    assert all(node.deleted_with == repo_id for node in resource_set.labels)
    assert resource_set.branch.deleted_with is None
    assert resource_set.branch_protection.deleted_with is None


def test_branch_protection_rules(expand_args, managed_files):
    for description in REPOSITORIES:
        rule = expand(description, *expand_args, files=managed_files).branch_protection.attributes

        assert rule['allows_deletions'] is False
        assert rule['allows_force_pushes'] is False
        assert rule['required_linear_history'] is True
        assert rule['require_conversation_resolution'] is True
        assert rule['enforce_admins'] is True
        assert rule['required_status_checks'] == [{'strict': True}]

        review = rule['required_pull_request_reviews'][0]
        assert review['require_last_push_approval'] is True
        assert review['required_approving_review_count'] >= 1
        assert review['pull_request_bypassers'] == list(BYPASS_PRINCIPALS)
        assert rule['force_push_bypassers'] == list(BYPASS_PRINCIPALS)

        assert rule['repository_id'] == ResourceRef(description.name, 'node_id')
        assert rule['pattern'] == ResourceRef(f"{description.name}/Branch/Main", 'branch')


def test_resource_ids_are_name_scoped(expand_args, managed_files):
    resource_set = expand(REPOSITORIES[1], *expand_args, files=managed_files)

    assert resource_set.repository.id == 'infrastructure'
    assert resource_set.branch.id == 'infrastructure/Branch/Main'
    assert resource_set.branch_protection.id == 'infrastructure/BranchProtection/Main'
    assert [f.id for f in resource_set.files] == [
        'infrastructure/Files/License',
        'infrastructure/Files/Contributing',
    ]
    assert resource_set.labels[0].id == 'infrastructure/IssueLabel/goal-addition'


def test_files_share_content_and_commit_identity(expand_args, managed_files, committer):
    first = expand(REPOSITORIES[0], *expand_args, files=managed_files, committer=committer)
    second = expand(REPOSITORIES[2], *expand_args, files=managed_files, committer=committer)

    for a, b in zip(first.files, second.files):
        assert a.attributes['content'] == b.attributes['content']
    license_file = first.files[0].attributes
    assert license_file['file'] == 'LICENSE.md'
    assert license_file['commit_author'] == 'tester/infrastructure'
    assert license_file['commit_email'] == 'tester@example.com'
    assert license_file['commit_message'] == 'Updating LICENSE.md . Managed by infrastructure.'
    assert license_file['overwrite_on_create'] is True


def test_outputs(expand_args, managed_files):
    outputs = expand(REPOSITORIES[3], *expand_args, files=managed_files).outputs

    assert outputs.repository == 'template_website'
    assert outputs.branches == ['main']
    assert outputs.branch_protection == ['template_website/BranchProtection/Main']
    assert outputs.files == ['LICENSE.md', 'CONTRIBUTING.md']
    assert outputs.labels == [label.name for label in LABELS]


def test_expansion_is_idempotent(catalog, managed_files):
    """Expanding twice gives equal resources"""
    first = expand_catalog(catalog, managed_files)
    second = expand_catalog(catalog, managed_files)

    assert [s.nodes for s in first] == [s.nodes for s in second]


def test_expand_catalog_builds_valid_graph(catalog, managed_files):
    resource_sets = expand_catalog(catalog, managed_files)
    graph = build_graph(resource_sets)

    per_repository = 3 + 2 + len(LABELS)
    assert len(resource_sets) == len(REPOSITORIES)
    assert len(graph) == len(REPOSITORIES) * per_repository
