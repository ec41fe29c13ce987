"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from semantic_core.embedders.base import Embedder
from semantic_core.vector_store.label_index import VectorLabelIndex
from semantic_core.vector_store.tagger_set import TaggerSet

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


class MeanColorEncoder(Embedder):
    """Embeds an image as its mean RGB value, so colour labels are easy to predict."""

    name = "mean_color"
    dim = 3

    def __init__(self) -> None:
        self.calls = 0

    def embed_image(self, image: Image.Image) -> np.ndarray:
        self.calls += 1
        return np.asarray(image.convert("RGB"), dtype=np.float64).reshape(-1, 3).mean(axis=0)

    def embed_text(self, text: str) -> np.ndarray:
        raise NotImplementedError


class FailingEncoder(MeanColorEncoder):
    """Fails on the ``fail_on``-th call and every call after it."""

    name = "failing"

    def __init__(self, fail_on: int = 1) -> None:
        super().__init__()
        self.fail_on = fail_on

    def embed_image(self, image: Image.Image) -> np.ndarray:
        if self.calls + 1 >= self.fail_on:
            self.calls += 1
            raise RuntimeError("encoder offline")
        return super().embed_image(image)


def make_index(name: str, labels, vectors) -> VectorLabelIndex:
    index = VectorLabelIndex(name=name)
    index.load(labels, vectors)
    return index


@pytest.fixture
def identity3() -> np.ndarray:
    return np.eye(3, dtype=np.float32)


@pytest.fixture
def color_index(identity3) -> VectorLabelIndex:
    return make_index("object", ["red", "green", "blue"], identity3)


@pytest.fixture
def tagger_set(color_index, identity3) -> TaggerSet:
    style = make_index("style", ["photo", "watercolor", "sketch"], identity3)
    caption = make_index("caption", ["a red scene", "a calm lake"], [identity3[0], identity3[2]])
    return TaggerSet.from_indexes(color_index, caption, style)


@pytest.fixture
def quadrant_image() -> Image.Image:
    """40x40 image: red, green / blue, red quadrants."""

    image = Image.new("RGB", (40, 40), RED)
    image.paste(GREEN, (20, 0, 40, 20))
    image.paste(BLUE, (0, 20, 20, 40))
    return image


@pytest.fixture
def mean_encoder() -> MeanColorEncoder:
    return MeanColorEncoder()
