# Path: semantic_core/embedders/__init__.py
# Purpose: Package initializer for encoder implementations and interfaces.
# Layer: core/embedders.
# Details: Exposes base interface and the reference placeholder encoder.

from .base import Embedder
from .pixel_stats_embedder import PixelStatsEmbedder

__all__ = ["Embedder", "PixelStatsEmbedder"]
