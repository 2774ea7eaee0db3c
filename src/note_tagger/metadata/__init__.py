"""Front matter parsing and tag merging."""

from .frontmatter import (
    extract_existing_tags,
    find_frontmatter,
    find_tags_field,
    split_frontmatter,
    strip_frontmatter,
)
from .merger import (
    format_tags_field,
    merge_tags,
    unique_tags,
)

__all__ = [
    "extract_existing_tags",
    "find_frontmatter",
    "find_tags_field",
    "split_frontmatter",
    "strip_frontmatter",
    "format_tags_field",
    "merge_tags",
    "unique_tags",
]
