"""
Front matter handling for Markdown notes.

A note may start with a metadata header delimited by `---` lines:

    ---
    title: Weekly review
    tags: [planning, "review"]
    ---
    # Weekly review
    ...

Only the header is inspected for tags; the body is never scanned, so a
`tags:` line inside a code block further down the note is left alone.
"""

import re
from typing import List, Optional, Tuple


# Header at the very start of the note. Group 1 is the header content
# (None for an empty header); the closing delimiter may end the file.
FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)

# tags: [a, "b", 'c']  (may span lines; quoted items may contain "]")
INLINE_TAGS_RE = re.compile(
    r"^tags:[ \t]*\[((?:\"[^\"\r\n]*\"|'[^'\r\n]*'|[^\]])*+)\]",
    re.MULTILINE,
)

# tags:
#   - a
#   - b
BLOCK_TAGS_RE = re.compile(
    r"^tags:[ \t]*(?:\r?\n|\Z)((?:[ \t]*-[ \t]*\S.*(?:\r?\n|\Z))*)",
    re.MULTILINE,
)

# tags: a, b
SCALAR_TAGS_RE = re.compile(r"^tags:[ \t]*([^\s\[].*?)[ \t]*$", re.MULTILINE)

_QUOTE_CHARS = "'\""


def find_frontmatter(content: str) -> Optional[re.Match]:
    """Return the header match at the start of a note, or None."""
    return FRONTMATTER_RE.match(content)


def split_frontmatter(content: str) -> Tuple[Optional[str], str]:
    """
    Split a note into header content and body.

    Args:
        content: Full note text

    Returns:
        Tuple of (header content without delimiters or None, body)
    """
    match = find_frontmatter(content)
    if not match:
        return None, content
    return match.group(1) or "", content[match.end():]


def strip_frontmatter(content: str) -> str:
    """Return the note body with any metadata header removed."""
    return split_frontmatter(content)[1]


def _clean_tag(raw: str) -> str:
    return raw.strip().strip(_QUOTE_CHARS).strip()


def _split_inline(items: str) -> List[str]:
    """Split a comma list, ignoring commas inside a quoted item."""
    parts = []
    current = ""
    quote = None
    for char in items:
        if quote:
            current += char
            if char == quote:
                quote = None
        elif char in _QUOTE_CHARS and not current.strip():
            quote = char
            current += char
        elif char == ",":
            parts.append(current)
            current = ""
        else:
            current += char
    parts.append(current)

    tags = [_clean_tag(part) for part in parts]
    return [tag for tag in tags if tag]


def _split_block(items: str) -> List[str]:
    tags = []
    for line in items.splitlines():
        line = line.strip()
        if line.startswith("-"):
            line = line[1:]
        tag = _clean_tag(line)
        if tag:
            tags.append(tag)
    return tags


def find_tags_field(header: str) -> Optional[Tuple[re.Match, List[str]]]:
    """
    Locate the tags field inside header content.

    Inline lists win over block lists, which win over a bare scalar value.

    Args:
        header: Header content (between the delimiters)

    Returns:
        Tuple of (field match, parsed tags), or None if there is no tags field
    """
    match = INLINE_TAGS_RE.search(header)
    if match:
        return match, _split_inline(match.group(1))

    match = BLOCK_TAGS_RE.search(header)
    if match:
        return match, _split_block(match.group(1))

    match = SCALAR_TAGS_RE.search(header)
    if match:
        return match, _split_inline(match.group(1))

    return None


def extract_existing_tags(content: str) -> List[str]:
    """
    Extract the tags already declared in a note's header.

    Args:
        content: Full note text

    Returns:
        Trimmed, quote-stripped tags in declaration order; empty when the
        note has no header or the header has no tags field
    """
    header, _ = split_frontmatter(content)
    if not header:
        return []

    found = find_tags_field(header)
    if not found:
        return []
    return found[1]
