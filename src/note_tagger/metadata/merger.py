"""
Merge generated tags into a note's metadata header.

The merge rewrites only the tags field. Every other header line and the
whole body are carried over byte for byte, so applying the same tags twice
leaves the note exactly as the first application did.
"""

from typing import Iterable, List

from .frontmatter import find_frontmatter, find_tags_field


def unique_tags(tags: Iterable[str]) -> List[str]:
    """Drop repeated tags, keeping the first occurrence of each."""
    seen = set()
    result = []
    for tag in tags:
        if tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def format_tags_field(tags: Iterable[str]) -> str:
    """Render tags as an inline YAML list: tags: ["a", "b"]"""
    return "tags: [" + ", ".join(f'"{tag}"' for tag in tags) + "]"


def _line_ending(text: str) -> str:
    if text.endswith("\r\n"):
        return "\r\n"
    if text.endswith("\n"):
        return "\n"
    return ""


def merge_tags(content: str, new_tags: Iterable[str]) -> str:
    """
    Add tags to a note's header, creating the header if needed.

    With a header, the existing tags and the new ones are combined (existing
    first, then unseen new tags in order) and written back where the tags
    field already is: an inline list, a block list or a scalar value. A
    header without a tags field gets one appended. A note without a header
    gets a new one holding only the new tags, followed by a blank line and
    the untouched original text.

    Args:
        content: Full note text
        new_tags: Tags to add

    Returns:
        Updated note text (unchanged if nothing new would be added)
    """
    new_tags = list(new_tags)
    match = find_frontmatter(content)

    if not match:
        tags = unique_tags(new_tags)
        if not tags:
            return content
        return f"---\n{format_tags_field(tags)}\n---\n\n{content}"

    header = match.group(1)

    if header is None:
        # "---\n---\n": insert the field right after the opening delimiter
        tags = unique_tags(new_tags)
        if not tags:
            return content
        opening_end = content.index("\n") + 1
        return content[:opening_end] + format_tags_field(tags) + "\n" + content[opening_end:]

    found = find_tags_field(header)
    existing = found[1] if found else []
    merged = unique_tags(existing + new_tags)

    if found:
        if merged == existing:
            return content
        field = found[0]
        new_header = (
            header[:field.start()]
            + format_tags_field(merged)
            + _line_ending(field.group(0))
            + header[field.end():]
        )
    else:
        if not merged:
            return content
        newline = "\r\n" if "\r\n" in match.group(0) else "\n"
        separator = newline if header else ""
        new_header = header + separator + format_tags_field(merged)

    return content[:match.start(1)] + new_header + content[match.end(1):]
