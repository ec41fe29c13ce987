# Path: semantic_core/prompting/synthesizer.py
# Purpose: Build frequency-ranked keyword lists for a downstream image generation model.
# Layer: core/prompting.
# Details: Keywords only, no spatial words or sentences; ties rank alphabetically for determinism.

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Sequence, Union

from semantic_core.models.domain import RegionMap, RegionTag

FALLBACK_PROMPT = "person, indoor room"
MAX_KEYWORDS = 8
MIN_KEYWORD_LENGTH = 2

TagSource = Union[RegionMap, Sequence[str]]


def flatten_tags(source: TagSource) -> List[str]:
    """Return every tag of a region map in order, or the flat list itself."""

    flat: List[str] = []
    for item in source:
        if isinstance(item, RegionTag):
            flat.extend(item.tags)
        else:
            flat.append(item)
    return flat


def rank_by_frequency(tags: Iterable[str]) -> List[str]:
    """Distinct tags ordered by occurrence count desc, then alphabetically."""

    counts = Counter(tags)
    return [tag for tag, _ in sorted(counts.items(), key=lambda item: (-item[1], item[0]))]


def _clean(tag: str) -> str:
    return tag.lower().strip()


def is_valid_keyword(tag: str) -> bool:
    return len(tag) >= MIN_KEYWORD_LENGTH and any(ch.isalpha() for ch in tag)


def rank_object_tags(source: TagSource, limit: int = 6, min_length: int = 3) -> List[str]:
    """Most frequent object tags of at least ``min_length`` characters, used as prompt modifiers."""

    cleaned = [tag for tag in map(_clean, flatten_tags(source)) if len(tag) >= min_length]
    return rank_by_frequency(cleaned)[:limit]


class PromptSynthesizer:
    """Convert region tags or a flat tag list into a comma-separated keyword prompt."""

    def __init__(self, max_keywords: int = MAX_KEYWORDS, fallback: str = FALLBACK_PROMPT) -> None:
        self.max_keywords = max_keywords
        self.fallback = fallback

    def synthesize(self, source: TagSource) -> str:
        cleaned = [tag for tag in map(_clean, flatten_tags(source)) if is_valid_keyword(tag)]
        selected = rank_by_frequency(cleaned)[: self.max_keywords]
        if not selected:
            return self.fallback
        return ", ".join(selected)
