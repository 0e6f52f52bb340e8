"""Split location mentions into distinct search terms."""

from __future__ import annotations

import re
from typing import Iterable

_SEPARATOR = re.compile(r",\s*")
_TRAILING = re.compile(r"[.\s]+$")


def split_mention(mention: str | None) -> list[str]:
    """Split one mention on commas and trim trailing dots from each part."""
    if not mention:
        return []
    parts = []
    for part in _SEPARATOR.split(mention):
        part = _TRAILING.sub("", part).strip()
        if part:
            parts.append(part)
    return parts


def normalize_terms(mentions: Iterable[str | None]) -> list[str]:
    """
    Turn raw location mentions into distinct search terms.

    "Munich, Berlin." yields "Munich" and "Berlin"; empty parts are
    dropped and each term appears once, in first-seen order.

    Args:
        mentions: Mention strings, possibly empty or None

    Returns:
        Distinct non-empty terms without trailing dots
    """
    seen: dict[str, None] = {}
    for mention in mentions:
        for term in split_mention(mention):
            seen.setdefault(term, None)
    return list(seen)
