# Path: semantic_core/vector_store/label_index.py
# Purpose: Provide an in-memory cosine-similarity label index and its on-disk dictionary format.
# Layer: core/vector_store.
# Details: Labels live in a JSON array, vectors in a float32 .npy matrix with one row per label.

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from semantic_core.errors import DimensionMismatch, EmptyIndex, QueryDimensionMismatch
from semantic_core.models.domain import LabelVector
from .base import LabelIndex

logger = logging.getLogger(__name__)

# Added to the norm product so zero vectors score 0 instead of dividing by zero.
COSINE_EPSILON = 1e-6


@dataclass
class LabelDictionary:
    """Parsed (labels, vectors) pair backing one label index."""

    labels: List[str]
    vectors: np.ndarray

    @classmethod
    def from_files(cls, labels_path: Path | str, vectors_path: Path | str) -> "LabelDictionary":
        """Read a JSON label list and the matching .npy embedding matrix."""

        labels_file = Path(labels_path)
        vectors_file = Path(vectors_path)
        if not labels_file.exists() or not vectors_file.exists():
            raise FileNotFoundError(f"Missing label dictionary files {labels_file} / {vectors_file}.")

        labels = json.loads(labels_file.read_text(encoding="utf-8"))
        if not isinstance(labels, list):
            raise ValueError(f"{labels_file} must contain a JSON array of labels.")
        vectors = np.load(vectors_file).astype(np.float32)
        if vectors.ndim != 2:
            raise DimensionMismatch(f"{vectors_file} must hold a 2-D matrix, got shape {vectors.shape}.")
        return cls(labels=[str(label) for label in labels], vectors=vectors)

    def save(self, labels_path: Path | str, vectors_path: Path | str) -> None:
        """Persist labels as JSON and vectors as float32 .npy."""

        labels_file = Path(labels_path)
        vectors_file = Path(vectors_path)
        labels_file.parent.mkdir(parents=True, exist_ok=True)
        vectors_file.parent.mkdir(parents=True, exist_ok=True)
        labels_file.write_text(json.dumps(self.labels, ensure_ascii=False), encoding="utf-8")
        np.save(vectors_file, self.vectors.astype(np.float32))


class VectorLabelIndex(LabelIndex):
    """Cosine-similarity top-K search over a fixed label vocabulary.

    The index is immutable once loaded, so any number of threads may query it
    without coordination. Equal scores keep vocabulary load order.
    """

    def __init__(self, name: str = "labels") -> None:
        self.name = name
        self.dim = 0
        self._labels: List[str] = []
        self._vectors: Optional[np.ndarray] = None
        self._norms: Optional[np.ndarray] = None

    @classmethod
    def from_files(cls, labels_path: Path | str, vectors_path: Path | str, name: str = "labels") -> "VectorLabelIndex":
        """Build a loaded index from a dictionary stored on disk."""

        dictionary = LabelDictionary.from_files(labels_path, vectors_path)
        index = cls(name=name)
        index.load(dictionary.labels, dictionary.vectors)
        return index

    def load(self, labels: Sequence[str], vectors: Sequence[Sequence[float]] | np.ndarray) -> None:
        """Load labels with their vectors, keeping the first occurrence of a repeated label."""

        if len(labels) == 0 or len(vectors) == 0:
            raise EmptyIndex(f"Index '{self.name}' received {len(labels)} labels and {len(vectors)} vectors.")
        if len(labels) != len(vectors):
            raise DimensionMismatch(
                f"Index '{self.name}' received {len(labels)} labels but {len(vectors)} vectors."
            )

        rows = [np.asarray(vector, dtype=np.float32).reshape(-1) for vector in vectors]
        dim = rows[0].shape[0]
        for row_number, row in enumerate(rows):
            if row.shape[0] != dim:
                raise DimensionMismatch(
                    f"Vector {row_number} of index '{self.name}' has dimension {row.shape[0]}, expected {dim}."
                )

        kept_labels: List[str] = []
        kept_rows: List[np.ndarray] = []
        seen = set()
        for label, row in zip(labels, rows):
            if label in seen:
                continue
            seen.add(label)
            kept_labels.append(label)
            kept_rows.append(row)

        matrix = np.vstack(kept_rows)
        self._labels = kept_labels
        self._vectors = matrix
        self._norms = np.linalg.norm(matrix, axis=1)
        self.dim = dim

        dropped = len(labels) - len(kept_labels)
        if dropped:
            logger.warning("Index '%s' dropped %d duplicate labels.", self.name, dropped)
        logger.info("Index '%s' loaded: %d labels, dim=%d", self.name, len(kept_labels), dim)

    def __len__(self) -> int:
        return len(self._labels)

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    def entries(self) -> List[LabelVector]:
        """Return the loaded vocabulary as immutable label/vector pairs."""

        if self._vectors is None:
            return []
        return [LabelVector(label=label, vector=self._vectors[i].copy()) for i, label in enumerate(self._labels)]

    def scores(self, query: np.ndarray) -> np.ndarray:
        """Return the cosine score of the query against every label, in load order."""

        if self._vectors is None or self._norms is None or not self._labels:
            raise EmptyIndex(f"Index '{self.name}' is not loaded.")

        vector = np.asarray(query, dtype=np.float32).reshape(-1)
        if vector.shape[0] != self.dim:
            raise QueryDimensionMismatch(
                f"Query dimensionality {vector.shape[0]} does not match index '{self.name}' dimension {self.dim}."
            )

        query_norm = np.linalg.norm(vector)
        return (self._vectors @ vector) / (query_norm * self._norms + COSINE_EPSILON)

    def top_k(self, query: np.ndarray, k: int) -> List[str]:
        """Return up to k labels ordered by descending cosine similarity."""

        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}.")

        scores = self.scores(query)
        # Stable sort on the negated scores keeps load order among exact ties.
        ranked = np.argsort(-scores, kind="stable")[:k]
        return [self._labels[i] for i in ranked]
