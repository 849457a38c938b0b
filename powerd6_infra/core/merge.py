"""Shallow merge of repository defaults and per-repository overrides."""
import copy
from typing import Any, Dict, Mapping


def merge_options(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge two option mappings, the override winning on every key collision.

    The merge is one level deep only: an object-valued key present in
    `overrides` replaces the default object wholesale, its fields are never
    merged with the default's. The result is a deep copy, so later changes
    to it never leak back into either input.

    Args:
        defaults: Baseline options shared by every repository
        overrides: Options set for one repository

    Returns:
        New dict with the keys of defaults (in order) followed by keys only in overrides
    """
    merged = dict(defaults)
    merged.update(overrides)
    return copy.deepcopy(merged)
