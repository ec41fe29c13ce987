# Path: semantic_core/vector_store/base.py
# Purpose: Define the LabelIndex interface for label vocabularies searched by embedding similarity.
# Layer: core/vector_store.
# Details: Provides abstract methods for loading a vocabulary and answering top-K label queries.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np


class LabelIndex(ABC):
    """Abstract base class for read-only label vocabularies."""

    name: str
    dim: int

    @abstractmethod
    def load(self, labels: Sequence[str], vectors: Sequence[Sequence[float]] | np.ndarray) -> None:
        """Load the full vocabulary; called once before any query."""

    @abstractmethod
    def top_k(self, query: np.ndarray, k: int) -> List[str]:
        """Return the k labels most similar to the query, best first."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of indexed labels."""
