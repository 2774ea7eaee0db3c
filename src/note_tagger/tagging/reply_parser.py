"""Turn a model's free-text reply into a tag list."""

from typing import List


MAX_TAG_LENGTH = 50

# Quote characters models like to wrap tags in
_WRAPPING_CHARS = "\"'`"


def parse_model_reply(text: str, max_tags: int) -> List[str]:
    """
    Parse a comma-separated model reply into tags.

    Entries are trimmed, unquoted and lowercased. Empty entries and entries
    longer than MAX_TAG_LENGTH characters are dropped, then the first
    max_tags survivors are kept in reply order. Repeats are not removed here.

    Args:
        text: Raw reply text, e.g. "Go, Databases, Systems-Engineering"
        max_tags: Hard cap on the number of tags returned

    Returns:
        List of lowercase tags

    Example:
        >>> parse_model_reply("Go, , Databases, Systems-Engineering, Go", 3)
        ['go', 'databases', 'systems-engineering']
    """
    tags = []
    for entry in text.split(","):
        tag = entry.strip().strip(_WRAPPING_CHARS).replace('"', "").strip().lower()
        if 0 < len(tag) <= MAX_TAG_LENGTH:
            tags.append(tag)
    return tags[:max_tags]
