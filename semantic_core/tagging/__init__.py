# Path: semantic_core/tagging/__init__.py
# Purpose: Package initializer for tag normalization and region tagging.
# Layer: core/tagging.
# Details: Exposes the tag normalizer helpers and the multi-scale region extractor.

from .normalizer import dedup_sorted, normalize_tag, normalize_tags
from .regions import GLOBAL_REGION, RegionExtractor, merge_regions, region_name, split_image

__all__ = [
    "GLOBAL_REGION",
    "RegionExtractor",
    "dedup_sorted",
    "merge_regions",
    "normalize_tag",
    "normalize_tags",
    "region_name",
    "split_image",
]
