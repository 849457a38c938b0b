"""
Pytest configuration and shared fixtures.
"""

import tempfile
import shutil
from pathlib import Path

import pytest

from powerd6_infra.catalog import BYPASS_PRINCIPALS, DEFAULT_REPOSITORY_OPTIONS, LABELS, default_catalog
from powerd6_infra.models import CommitIdentity
from powerd6_infra.utils import load_static_content

LICENSE_TEXT = "# License\n\nCopyright powerd6\n"
CONTRIBUTING_TEXT = "# Contributing\n\nOpen a pull request.\n"


@pytest.fixture
def temp_dir():
    """Fixture that provides a temporary directory and cleans it up after test"""
    tmp = tempfile.mkdtemp()
    yield tmp
    shutil.rmtree(tmp)


@pytest.fixture
def content_dir(temp_dir):
    """Fixture that provides a directory with both static content files"""
    path = Path(temp_dir) / 'content'
    path.mkdir()
    (path / 'LICENSE.md').write_text(LICENSE_TEXT, encoding='utf-8')
    (path / 'CONTRIBUTING.md').write_text(CONTRIBUTING_TEXT, encoding='utf-8')
    return str(path)


@pytest.fixture
def managed_files(content_dir):
    return load_static_content(content_dir)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def expand_args():
    """Positional arguments of expand() after the description"""
    return DEFAULT_REPOSITORY_OPTIONS, LABELS, BYPASS_PRINCIPALS


@pytest.fixture
def committer():
    return CommitIdentity(author='tester/infrastructure', email='tester@example.com')
