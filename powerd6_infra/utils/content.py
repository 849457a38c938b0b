"""Static content loader for the reference documents committed into every repository."""
import logging
from pathlib import Path
from typing import List, Optional, Union

from powerd6_infra.errors import FileAccessError
from powerd6_infra.models.resource import ManagedFile

logger = logging.getLogger(__name__)

# (path inside the repository, resource id suffix)
STATIC_FILES = (
    ('LICENSE.md', 'License'),
    ('CONTRIBUTING.md', 'Contributing'),
)


def load_content(relative_path: str, base_dir: Optional[Union[str, Path]] = None) -> str:
    """
    Read a UTF-8 text asset.

    Args:
        relative_path: Path of the asset, relative to base_dir
        base_dir: Directory holding the assets (default: current directory)

    Returns:
        Full text content

    Raises:
        FileAccessError: If the asset is missing, unreadable or not UTF-8
    """
    path = Path(base_dir or '.') / relative_path
    try:
        content = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Failed to read static content {path}: {e}", str(path)) from e

    logger.debug(f"Loaded {len(content)} characters from {path}")
    return content


def load_static_content(content_dir: Union[str, Path]) -> List[ManagedFile]:
    """
    Load every managed file once.

    The returned objects are shared by all repository expansions, so each
    repository receives identical content.

    Args:
        content_dir: Directory containing LICENSE.md and CONTRIBUTING.md

    Returns:
        List of ManagedFile in commit order
    """
    return [
        ManagedFile(path=path, content=load_content(path, content_dir), key=key)
        for path, key in STATIC_FILES
    ]
