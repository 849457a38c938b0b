from .slugify import slugify, ensure_unique_slugs
from .content import load_content, load_static_content

__all__ = ['slugify', 'ensure_unique_slugs', 'load_content', 'load_static_content']
