# Path: api/app.py
# Purpose: Expose a FastAPI application for captioning and prompt synthesis.
# Layer: api.
# Details: Provides health checks plus caption, prompt, and full extraction endpoints delegating to the core.

from __future__ import annotations

import base64
import binascii
import io
from typing import Any, Dict, List, Optional

from PIL import Image, UnidentifiedImageError

from semantic_core.captioning.composer import CaptionComposer
from semantic_core.errors import EmptyInput
from semantic_core.models.domain import RegionTag
from semantic_core.pipeline.orchestrator import SemanticExtractionOrchestrator
from semantic_core.prompting.synthesizer import PromptSynthesizer


def _parse_region_tags(payload: Dict[str, Any]) -> List[RegionTag]:
    return [RegionTag.from_dict(item) for item in payload.get("region_tags") or []]


def create_app(
    orchestrator: Optional[SemanticExtractionOrchestrator] = None,
    composer: Optional[CaptionComposer] = None,
    synthesizer: Optional[PromptSynthesizer] = None,
):  # type: ignore[override]
    """Create a FastAPI app instance wired to the provided core services."""

    from fastapi import FastAPI, HTTPException

    composer = composer or CaptionComposer()
    synthesizer = synthesizer or PromptSynthesizer()
    app = FastAPI(title="Semantic Caption API", version="0.1.0")

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "ok"}

    @app.post("/caption")
    def caption(payload: Dict[str, Any]) -> Dict[str, str]:
        """Compose a caption from region tags, or from flat ``tags`` when no regions are sent."""

        try:
            if payload.get("region_tags"):
                text = composer.compose(_parse_region_tags(payload))
            else:
                text = composer.compose_flat([str(tag) for tag in payload.get("tags") or []])
        except EmptyInput as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {"caption": text}

    @app.post("/prompt")
    def prompt(payload: Dict[str, Any]) -> Dict[str, str]:
        """Synthesize a keyword prompt from region tags or flat tags."""

        if payload.get("region_tags"):
            return {"prompt": synthesizer.synthesize(_parse_region_tags(payload))}
        return {"prompt": synthesizer.synthesize([str(tag) for tag in payload.get("tags") or []])}

    @app.post("/extract")
    def extract(payload: Dict[str, Any]) -> Dict[str, Any]:
        """Run the full extraction over a base64-encoded image."""

        if orchestrator is None:
            raise HTTPException(status_code=500, detail="Extraction pipeline is not configured.")

        try:
            raw = base64.b64decode(payload.get("image") or "", validate=True)
            image = Image.open(io.BytesIO(raw))
            image.load()
        except (binascii.Error, UnidentifiedImageError, OSError) as exc:
            raise HTTPException(status_code=400, detail=f"Invalid image payload: {exc}") from exc

        result = orchestrator.extract(image)
        return {**result.to_payload(), "degraded": result.degraded}

    return app
