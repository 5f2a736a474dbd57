"""Text processing utilities."""

from __future__ import annotations

from typing import Iterable, List


def dedupe_preserving_order(texts: Iterable[str]) -> List[str]:
    """
    Strip texts, drop empty ones and remove duplicates.

    First occurrence wins, so the original line order is kept.

    Args:
        texts: Raw text lines

    Returns:
        Unique, non-empty, stripped lines
    """
    seen: dict[str, None] = {}
    for text in texts:
        cleaned = text.strip()
        if cleaned:
            seen.setdefault(cleaned)
    return list(seen)


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to maximum length with suffix.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to append if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
