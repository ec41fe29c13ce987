# Path: semantic_core/pipeline/uploader.py
# Purpose: Deliver finished post annotations to the posting backend.
# Layer: core/pipeline.
# Details: Transport failures surface as UploadFailure; retry policy belongs to the caller of the backend.

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

import requests

from semantic_core.errors import UploadFailure
from semantic_core.models.domain import ExtractionResult

logger = logging.getLogger(__name__)


class PostUploader(Protocol):
    """Receives the region tags, caption, and prompt produced for one post."""

    def upload(self, post_id: str, result: ExtractionResult) -> None:
        """Send the annotation for ``post_id``; raise UploadFailure on rejection."""


class HttpPostUploader:
    """POST annotations as JSON to an update endpoint."""

    def __init__(self, url: str, timeout: float = 15.0, session: Optional[requests.Session] = None) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def upload(self, post_id: str, result: ExtractionResult) -> None:
        body = {"id": post_id, **result.to_payload()}
        try:
            response = self.session.post(self.url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise UploadFailure(f"Upload of post {post_id} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise UploadFailure(f"Upload of post {post_id} rejected with HTTP {response.status_code}.")
        logger.info("Updated semantic prompt for post %s", post_id)


class NullUploader:
    """Keep uploads in memory; used when no backend endpoint is configured."""

    def __init__(self) -> None:
        self.uploads: List[Tuple[str, ExtractionResult]] = []

    def upload(self, post_id: str, result: ExtractionResult) -> None:
        self.uploads.append((post_id, result))
