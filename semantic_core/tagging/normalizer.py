# Path: semantic_core/tagging/normalizer.py
# Purpose: Canonicalize raw tag strings identically for every downstream consumer.
# Layer: core/tagging.
# Details: Only separators, a double space, and case change; tag meaning is never altered.

from __future__ import annotations

from typing import Iterable, List


def normalize_tag(tag: str) -> str:
    """Trim, fold ``_``/``-`` into spaces, collapse one level of double spaces, and lowercase.

    The double-space replacement is a single ``str.replace`` pass, so runs of
    three or more spaces are only partially collapsed.
    """

    trimmed = tag.strip()
    if not trimmed:
        return ""
    return trimmed.replace("_", " ").replace("-", " ").replace("  ", " ").lower()


def normalize_tags(tags: Iterable[str]) -> List[str]:
    """Normalize each tag and drop the ones that end up empty, keeping input order."""

    cleaned = (normalize_tag(tag) for tag in tags)
    return [tag for tag in cleaned if tag]


def dedup_sorted(tags: Iterable[str]) -> List[str]:
    """Deduplicate through a set, then sort ascending."""

    return sorted(set(tags))
