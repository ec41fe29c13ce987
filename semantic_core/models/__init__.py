# Path: semantic_core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses used across tagging, captioning, prompting, and posting layers.

from .domain import ExtractionResult, LabelVector, PostRecord, PostStatus, RegionMap, RegionTag

__all__ = ["ExtractionResult", "LabelVector", "PostRecord", "PostStatus", "RegionMap", "RegionTag"]
