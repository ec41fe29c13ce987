# Path: semantic_core/prompting/__init__.py
# Purpose: Package initializer for generation prompt synthesis.
# Layer: core/prompting.
# Details: Exposes the keyword prompt synthesizer and the shared frequency ranking helpers.

from .synthesizer import (
    FALLBACK_PROMPT,
    PromptSynthesizer,
    flatten_tags,
    is_valid_keyword,
    rank_by_frequency,
    rank_object_tags,
)

__all__ = [
    "FALLBACK_PROMPT",
    "PromptSynthesizer",
    "flatten_tags",
    "is_valid_keyword",
    "rank_by_frequency",
    "rank_object_tags",
]
