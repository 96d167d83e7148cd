"""Input normalization applied at the ingestion boundary."""
from typing import Iterable, List, Optional

from app.constants import MAX_REPORT_TAGS, Tag


def truncate(value: Optional[str], limit: int) -> Optional[str]:
    """Cut a string down to at most ``limit`` characters."""
    if value is None:
        return None
    return value if len(value) <= limit else value[:limit]


def parse_tag(value: Optional[str]) -> Optional[Tag]:
    """
    Parse a tag name case-insensitively.

    Returns:
        The matching Tag, or None for anything that is not a known tag
    """
    if not isinstance(value, str):
        return None
    try:
        return Tag(value.strip().upper())
    except ValueError:
        return None


def normalize_tags(values: Optional[Iterable[str]], limit: int = MAX_REPORT_TAGS) -> Optional[List[str]]:
    """
    Turn submitted tag strings into a list of valid tag names.

    Unknown values and repeats are dropped, submission order is kept, and
    the result is capped at ``limit`` entries.

    Args:
        values: Tag strings as submitted, or None
        limit: Maximum number of tags to keep

    Returns:
        Tag names, or None when ``values`` is None
    """
    if values is None:
        return None

    tags: List[str] = []
    for value in values:
        tag = parse_tag(value)
        if tag is None or tag.value in tags:
            continue
        tags.append(tag.value)
        if len(tags) == limit:
            break
    return tags
