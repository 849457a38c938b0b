"""Slug normalization for display strings such as label names."""
import re
import unicodedata
from typing import Dict, Iterable

from powerd6_infra.errors import ConfigurationError

_NON_ALNUM = re.compile(r'[^a-z0-9]+')


def slugify(value: str, separator: str = '-') -> str:
    """
    Turn an arbitrary display string into an identifier-safe token.

    Accents are folded to ASCII, the text is lowercased, every run of
    non-alphanumeric characters becomes a single separator and separators
    are stripped from both ends, e.g. 'goal: addition' -> 'goal-addition'.

    Args:
        value: Display string
        separator: Replacement for non-alphanumeric runs

    Returns:
        The slug

    Raises:
        ConfigurationError: If nothing alphanumeric is left
    """
    normalized = unicodedata.normalize('NFKD', value)
    ascii_only = normalized.encode('ascii', 'ignore').decode('ascii')
    slug = _NON_ALNUM.sub(separator, ascii_only.lower()).strip(separator)
    if not slug:
        raise ConfigurationError(f"Cannot derive a slug from {value!r}")
    return slug


def ensure_unique_slugs(values: Iterable[str]) -> Dict[str, str]:
    """
    Check that distinct values never share a slug.

    Args:
        values: Display strings, e.g. every label name of the catalog

    Returns:
        Mapping of slug to the value it came from

    Raises:
        ConfigurationError: If two different values collapse to the same slug
    """
    seen: Dict[str, str] = {}
    for value in values:
        slug = slugify(value)
        existing = seen.get(slug)
        if existing is not None and existing != value:
            raise ConfigurationError(
                f"Slug collision: {existing!r} and {value!r} both normalize to {slug!r}"
            )
        seen[slug] = value
    return seen
