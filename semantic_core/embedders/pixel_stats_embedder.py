# Path: semantic_core/embedders/pixel_stats_embedder.py
# Purpose: Provide a lightweight deterministic encoder for tiles and vocabulary labels.
# Layer: core/embedders.
# Details: Uses numpy pixel statistics as a stand-in for a SigLIP-style vision tower.

from __future__ import annotations

import hashlib

import numpy as np
from PIL import Image

from .base import Embedder


class PixelStatsEmbedder(Embedder):
    """Stub encoder mapping identical pixels to identical vectors."""

    def __init__(self, dim: int = 768, image_size: int = 224) -> None:
        self.dim = dim
        self.image_size = image_size
        self.name = "pixel_stats"

    def embed_image(self, image: Image.Image) -> np.ndarray:
        """Generate a deterministic embedding from channel statistics and a coarse colour layout."""

        resized = image.convert("RGB").resize((self.image_size, self.image_size))
        pixels = np.asarray(resized, dtype=np.float32) / 255.0
        per_channel = pixels.reshape(-1, 3)
        pooled = np.concatenate([
            per_channel.mean(axis=0),
            per_channel.std(axis=0),
            np.percentile(per_channel, [25, 50, 75], axis=0).flatten(),
        ])
        layout = np.asarray(resized.resize((8, 8)), dtype=np.float32).flatten() / 255.0
        features = np.concatenate([pooled, layout])
        tiled = np.tile(features, self.dim // features.size + 1)
        return self._normalize(tiled[: self.dim])

    def embed_text(self, text: str) -> np.ndarray:
        """Generate a deterministic text embedding based on hashing."""

        hash_bytes = hashlib.sha256(text.encode("utf-8")).digest()
        expanded = np.frombuffer(hash_bytes * (self.dim // len(hash_bytes) + 1), dtype=np.uint8)
        vector = expanded[: self.dim].astype(np.float32) - 127.5
        return self._normalize(vector)
