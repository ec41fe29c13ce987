"""Tests for the HTTP API layer."""

from __future__ import annotations

import base64
import io

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from config.settings import TaggingSettings
from semantic_core.pipeline.orchestrator import SemanticExtractionOrchestrator


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def _encode(image) -> str:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


class TestRoutes:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_caption_from_regions(self, client):
        response = client.post("/caption", json={"region_tags": [{"region": "center", "tags": ["cat"]}]})
        assert response.status_code == 200
        assert response.json() == {"caption": "A cat appears in the image, with a cat in the center."}

    def test_caption_from_flat_tags(self, client):
        response = client.post("/caption", json={"tags": ["table", "chair", "cat"]})
        assert response.json()["caption"] == "A cat, chair, and table appear in the image."

    def test_caption_empty_input(self, client):
        assert client.post("/caption", json={"tags": []}).status_code == 422

    def test_prompt(self, client):
        assert client.post("/prompt", json={"tags": ["a", "dog", "dog", "cat"]}).json() == {"prompt": "dog, cat"}
        assert client.post("/prompt", json={}).json() == {"prompt": "person, indoor room"}

    def test_extract_without_pipeline(self, client):
        assert client.post("/extract", json={"image": ""}).status_code == 500


class TestExtractRoute:
    @pytest.fixture
    def client(self, mean_encoder, tagger_set) -> TestClient:
        orchestrator = SemanticExtractionOrchestrator(
            encoder=mean_encoder, taggers=tagger_set, settings=TaggingSettings(region_top_k=1)
        )
        return TestClient(create_app(orchestrator=orchestrator))

    def test_extract(self, client, quadrant_image):
        response = client.post("/extract", json={"image": _encode(quadrant_image)})
        body = response.json()
        assert response.status_code == 200
        assert body["regionTags"][0] == {"region": "global", "tags": ["red"]}
        assert body["semanticPrompt"] == "photo, watercolor, sketch, red, blue, green, a red scene"
        assert body["degraded"] is False

    def test_invalid_image(self, client):
        response = client.post("/extract", json={"image": base64.b64encode(b"not an image").decode("ascii")})
        assert response.status_code == 400
