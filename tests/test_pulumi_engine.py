"""
Tests for the Pulumi engine, run against Pulumi's mock monitor.
No GitHub API is contacted.
"""

import pulumi
import pulumi_github as github

from powerd6_infra.catalog import default_catalog
from powerd6_infra.core import build_graph, expand_catalog
from powerd6_infra.engine import PulumiEngine
from powerd6_infra.models import ManagedFile


class GithubMocks(pulumi.runtime.Mocks):
    """Echo inputs back as state and give repositories a node id"""

    def __init__(self):
        self.registered = {}

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.registered[args.name] = (args.typ, dict(args.inputs))
        outputs = dict(args.inputs)
        if args.typ == 'github:index/repository:Repository':
            outputs['nodeId'] = f"R_{args.name}"
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}


mocks = GithubMocks()
pulumi.runtime.set_mocks(mocks, preview=False)

FILES = [
    ManagedFile(path='LICENSE.md', content='license', key='License'),
    ManagedFile(path='CONTRIBUTING.md', content='contributing', key='Contributing'),
]


def submit():
    resource_sets = expand_catalog(default_catalog(), FILES)
    engine = PulumiEngine()
    return engine, resource_sets, engine.submit(build_graph(resource_sets))


@pulumi.runtime.test
def test_registers_every_node_with_its_type():
    _, resource_sets, created = submit()

    expected_ids = [node.id for s in resource_sets for node in s.nodes]
    assert sorted(created) == sorted(expected_ids)
    assert isinstance(created['branding'], github.Repository)
    assert isinstance(created['branding/Branch/Main'], github.Branch)
    assert isinstance(created['branding/BranchProtection/Main'], github.BranchProtection)
    assert isinstance(created['branding/Files/License'], github.RepositoryFile)
    assert isinstance(created['branding/IssueLabel/good-first-issue'], github.IssueLabel)

    def check(args):
        typ, inputs = mocks.registered['branding/IssueLabel/good-first-issue']
        assert typ == 'github:index/issueLabel:IssueLabel'
        assert inputs['name'] == 'good first issue'
        assert inputs['color'] == '7f0799'

    return created['branding/IssueLabel/good-first-issue'].name.apply(check)


@pulumi.runtime.test
def test_protection_targets_branch_and_repository_node():
    _, _, created = submit()
    protection = created['branding/BranchProtection/Main']

    def check(args):
        pattern, repository_id, enforce_admins, bypassers = args
        assert pattern == 'main'
        assert repository_id == 'R_branding'
        assert enforce_admins is True
        assert bypassers == ['/HectorCastelli']

    return pulumi.Output.all(
        protection.pattern,
        protection.repository_id,
        protection.enforce_admins,
        protection.force_push_bypassers,
    ).apply(check)


@pulumi.runtime.test
def test_files_and_labels_use_repository_name():
    _, _, created = submit()
    license_file = created['landing_page/Files/License']
    label = created['landing_page/IssueLabel/priority-high']

    def check(args):
        file_repository, file_branch, file_path, label_repository = args
        assert file_repository == 'landing_page'
        assert file_branch == 'main'
        assert file_path == 'LICENSE.md'
        assert label_repository == 'landing_page'

    return pulumi.Output.all(
        license_file.repository,
        license_file.branch,
        license_file.file,
        label.repository,
    ).apply(check)


@pulumi.runtime.test
def test_nested_repository_settings_are_sent():
    _, _, created = submit()

    def check(args):
        _, landing_page = mocks.registered['landing_page']
        assert landing_page['template']['owner'] == 'powerd6'
        assert landing_page['template']['repository'] == 'template_website'
        assert landing_page['homepageUrl'] == 'powerd6.org'
        assert landing_page['securityAndAnalysis']['secretScanning']['status'] == 'enabled'

        _, template_website = mocks.registered['template_website']
        assert template_website['isTemplate'] is True
        assert template_website['pages']['buildType'] == 'workflow'

    return pulumi.Output.all(created['landing_page'].name, created['template_website'].name).apply(check)


@pulumi.runtime.test
def test_outputs():
    engine, resource_sets, created = submit()
    outputs = engine.outputs(resource_sets[1], created)

    def check(args):
        repository, branches, files, labels = args
        assert repository == 'infrastructure'
        assert branches == ['main']
        assert files == ['LICENSE.md', 'CONTRIBUTING.md']
        assert len(labels) == 8

    return pulumi.Output.all(
        outputs['repository'],
        pulumi.Output.all(*outputs['branches']),
        pulumi.Output.all(*outputs['files']),
        pulumi.Output.all(*outputs['labels']),
    ).apply(check)
