# Path: semantic_core/captioning/__init__.py
# Purpose: Package initializer for deterministic captioning.
# Layer: core/captioning.
# Details: Exposes the caption composer and its English phrasing helpers.

from .composer import CaptionComposer, english_list, region_phrase, with_indefinite_article

__all__ = ["CaptionComposer", "english_list", "region_phrase", "with_indefinite_article"]
