"""
Helper Utilities
General purpose utility functions
"""
from typing import Any, Iterable, List, Sequence, Tuple


def merge_unique(existing: Sequence[Any], incoming: Iterable[Any]) -> Tuple[Any, ...]:
    """
    Append incoming items that are not already present

    Identity is decided by each item's ``identity_key``. Duplicates inside
    ``incoming`` collapse too; the first occurrence wins and later ones are
    dropped without merging fields.

    Args:
        existing: Ordered collection accumulated so far
        incoming: New batch in arrival order

    Returns:
        New tuple; neither input is modified
    """
    seen = {item.identity_key for item in existing}
    result: List[Any] = list(existing)

    for item in incoming:
        key = item.identity_key
        if key not in seen:
            seen.add(key)
            result.append(item)

    return tuple(result)


def sanitize_title(title: str) -> str:
    """
    Sanitize title for safe display

    Args:
        title: Original title

    Returns:
        Sanitized title
    """
    if not title:
        return ""

    return title.strip()[:200]  # Limit length
