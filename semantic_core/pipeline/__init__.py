# Path: semantic_core/pipeline/__init__.py
# Purpose: Package initializer for extraction orchestration and posting.
# Layer: core/pipeline.
# Details: Exposes the orchestrator entrypoint and the uploader implementations.

from .orchestrator import FALLBACK_SCENE_PROMPT, SemanticExtractionOrchestrator
from .uploader import HttpPostUploader, NullUploader, PostUploader

__all__ = [
    "FALLBACK_SCENE_PROMPT",
    "SemanticExtractionOrchestrator",
    "HttpPostUploader",
    "NullUploader",
    "PostUploader",
]
