"""Tests for configuration loading and the placeholder encoder."""

from __future__ import annotations

import numpy as np
from PIL import Image

from config.settings import AppSettings
from semantic_core.embedders.pixel_stats_embedder import PixelStatsEmbedder


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.tagging.grid_sizes == [1, 2]
        assert settings.tagging.region_top_k == 4
        assert settings.tagging.style_top_k == 3
        assert settings.tagging.caption_top_k == 1
        assert settings.tagging.object_limit == 6
        assert settings.upload_url is None

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SEMCAP_WORKERS", "4")
        monkeypatch.setenv("SEMCAP_UPLOAD_URL", "https://example.test/updatePost")
        settings = AppSettings.from_env()
        assert settings.workers == 4
        assert settings.upload_url == "https://example.test/updatePost"

    def test_nested_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SEMCAP_TAGGING__GRID_SIZES", "[1,2,4]")
        monkeypatch.setenv("SEMCAP_TAGGING__REGION_TOP_K", "2")
        monkeypatch.setenv("SEMCAP_EMBEDDER__DIM", "64")
        settings = AppSettings.from_env()
        assert settings.tagging.grid_sizes == [1, 2, 4]
        assert settings.tagging.region_top_k == 2
        assert settings.tagging.style_top_k == 3
        assert settings.embedder.dim == 64


class TestPixelStatsEmbedder:
    def test_deterministic_unit_vectors(self):
        embedder = PixelStatsEmbedder(dim=64, image_size=32)
        image = Image.new("RGB", (50, 30), (10, 200, 40))
        first = embedder.embed_image(image)
        second = embedder.embed_image(image.copy())
        assert first.shape == (64,)
        np.testing.assert_array_equal(first, second)
        assert abs(np.linalg.norm(first) - 1.0) < 1e-5

    def test_text_embeddings_differ(self):
        embedder = PixelStatsEmbedder(dim=64)
        assert not np.allclose(embedder.embed_text("cat"), embedder.embed_text("dog"))
