# Path: semantic_core/embedders/base.py
# Purpose: Define the Embedder interface for image tiles and vocabulary text.
# Layer: core/embedders.
# Details: Provides abstract methods so the vision encoder stays an external, pluggable collaborator.

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from PIL import Image


class Embedder(ABC):
    """Abstract base class for encoders producing vectors in the label embedding space."""

    name: str
    dim: int

    @abstractmethod
    def embed_image(self, image: Image.Image) -> np.ndarray:
        """Return an embedding for a given image or image tile."""

    @abstractmethod
    def embed_text(self, text: str) -> np.ndarray:
        """Return an embedding for a vocabulary label."""

    @staticmethod
    def _normalize(vector: np.ndarray) -> np.ndarray:
        """Normalize embedding vectors to unit length to simplify similarity comparisons."""

        norm = np.linalg.norm(vector)
        if norm == 0:
            return vector.astype(np.float32)
        return (vector / norm).astype(np.float32)
