# Path: semantic_core/vector_store/__init__.py
# Purpose: Package initializer for label index interfaces and implementations.
# Layer: core/vector_store.
# Details: Exposes the base label index contract, the cosine index, and the tagger set holder.

from .base import LabelIndex
from .label_index import LabelDictionary, VectorLabelIndex
from .tagger_set import TaggerSet

__all__ = ["LabelIndex", "LabelDictionary", "VectorLabelIndex", "TaggerSet"]
