# Path: semantic_core/errors.py
# Purpose: Define the exception taxonomy shared by indexing, extraction, captioning, and upload.
# Layer: core.
# Details: Index errors are fatal for their index; extraction errors abort one image only.

from __future__ import annotations


class SemanticCoreError(Exception):
    """Base class for every error raised by the semantic core."""


class LabelIndexError(SemanticCoreError):
    """Misconfigured label index or malformed query against it."""


class DimensionMismatch(LabelIndexError):
    """Label and vector counts differ, or vectors disagree on dimensionality."""


class EmptyIndex(LabelIndexError):
    """The index has no labels, either because loading failed or nothing was supplied."""


class QueryDimensionMismatch(LabelIndexError):
    """A query vector does not match the index dimensionality."""


class ExtractionError(SemanticCoreError):
    """Per-image failure while building a region map."""


class TileConversionError(ExtractionError):
    """A tile could not be rendered into a pixel buffer."""


class EncoderFailure(ExtractionError):
    """The external image encoder failed or was cancelled."""


class EmptyInput(SemanticCoreError):
    """No usable regions or tags were supplied to the caption composer."""

    def __init__(self, message: str = "No region tags provided.") -> None:
        super().__init__(message)


class UploadFailure(SemanticCoreError):
    """The posting collaborator rejected or could not deliver a record."""


__all__ = [
    "SemanticCoreError",
    "LabelIndexError",
    "DimensionMismatch",
    "EmptyIndex",
    "QueryDimensionMismatch",
    "ExtractionError",
    "TileConversionError",
    "EncoderFailure",
    "EmptyInput",
    "UploadFailure",
]
