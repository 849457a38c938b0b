"""Wiring shared by the Pulumi program and the CLI."""
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from powerd6_infra.catalog import default_catalog
from powerd6_infra.config import Config
from powerd6_infra.core import ResourceGraph, build_graph, expand_catalog
from powerd6_infra.models import Catalog, CommitIdentity, ManagedResourceSet
from powerd6_infra.utils import load_content, load_static_content

logger = logging.getLogger(__name__)


def setup_logging(log_level: str):
    """Configure logging for the program and the CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def get_catalog(catalog_file: Optional[str] = None) -> Catalog:
    """Get the catalog - from a YAML file if configured, otherwise the built-in one"""
    catalog_file = catalog_file or Config.CATALOG_FILE
    if not catalog_file:
        return default_catalog()

    logger.info(f"Loading catalog from {catalog_file}")
    path = Path(catalog_file)
    return Catalog.from_yaml(load_content(path.name, path.parent))


def get_committer() -> CommitIdentity:
    return CommitIdentity(author=Config.COMMIT_AUTHOR, email=Config.COMMIT_EMAIL)


def load_resources(catalog: Optional[Catalog] = None,
                   content_dir: Optional[str] = None) -> Tuple[List[ManagedResourceSet], ResourceGraph]:
    """
    Read the static content, expand the catalog and build the graph.

    Any failure here happens before a single resource reaches the engine.

    Returns:
        Tuple of (resource sets in catalog order, validated graph)

    Raises:
        ConfigurationError: If the catalog is malformed
        FileAccessError: If a static content file cannot be read
    """
    catalog = catalog or get_catalog()
    content_dir = content_dir or Config.CONTENT_DIR
    files = load_static_content(content_dir)

    resource_sets = expand_catalog(catalog, files, get_committer())
    return resource_sets, build_graph(resource_sets)
