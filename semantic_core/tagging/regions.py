# Path: semantic_core/tagging/regions.py
# Purpose: Tile an image into a grid pyramid and tag every tile against a label index.
# Layer: core/tagging.
# Details: Tags from all pyramid levels are merged per region id, keeping duplicates for frequency ranking.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from PIL import Image

from semantic_core.embedders.base import Embedder
from semantic_core.errors import EncoderFailure, TileConversionError
from semantic_core.models.domain import RegionMap, RegionTag
from semantic_core.vector_store.base import LabelIndex

logger = logging.getLogger(__name__)

GLOBAL_REGION = "global"
DEFAULT_GRID_SIZES = (1, 2)
DEFAULT_REGION_TOP_K = 4


@dataclass
class Tile:
    """One cropped grid cell."""

    image: Image.Image
    row: int
    col: int


def region_name(grid: int, row: int, col: int) -> str:
    """Return the region id for a tile; the single grid-1 tile is the whole image."""

    if grid == 1:
        return GLOBAL_REGION
    return f"g{grid}-r{row}-c{col}"


def split_image(image: Image.Image, grid: int) -> List[Tile]:
    """Split an image into ``grid`` x ``grid`` equal tiles, row by row.

    Tile size uses integer division; leftover pixels on the right and bottom
    edges are dropped.
    """

    if grid < 1:
        raise ValueError(f"Grid size must be at least 1, got {grid}.")

    width, height = image.size
    tile_w = width // grid
    tile_h = height // grid
    if tile_w == 0 or tile_h == 0:
        raise TileConversionError(f"Image of size {width}x{height} is too small for a {grid}x{grid} grid.")

    tiles: List[Tile] = []
    for row in range(grid):
        for col in range(grid):
            box = (col * tile_w, row * tile_h, (col + 1) * tile_w, (row + 1) * tile_h)
            try:
                crop = image.crop(box).convert("RGB")
            except (OSError, ValueError) as exc:
                raise TileConversionError(f"Failed to render tile r{row}-c{col} of grid {grid}: {exc}") from exc
            tiles.append(Tile(image=crop, row=row, col=col))
    return tiles


def merge_regions(entries: Sequence[RegionTag]) -> RegionMap:
    """Group entries by region id, concatenating tag lists without deduplication.

    ``global`` comes first, the remaining region ids follow in lexicographic order.
    """

    grouped: Dict[str, List[str]] = {}
    for entry in entries:
        grouped.setdefault(entry.region, []).extend(entry.tags)

    keys = sorted(grouped, key=lambda region: (region != GLOBAL_REGION, region))
    return [RegionTag(region=region, tags=grouped[region]) for region in keys]


class RegionExtractor:
    """Build a region -> tags map from an image at several grid resolutions."""

    def __init__(self, grid_sizes: Sequence[int] = DEFAULT_GRID_SIZES, top_k: int = DEFAULT_REGION_TOP_K) -> None:
        self.grid_sizes = list(grid_sizes)
        self.top_k = top_k

    def extract(
        self,
        image: Image.Image,
        encoder: Embedder,
        tagger: LabelIndex,
        grid_sizes: Optional[Sequence[int]] = None,
    ) -> RegionMap:
        """
        Tag every tile of every pyramid level and merge the results per region.

        Any tile or encoder failure aborts the whole extraction.

        External calls:
        - semantic_core/embedders/base.py::Embedder.embed_image - embed each tile.
        - semantic_core/vector_store/label_index.py::VectorLabelIndex.top_k - tag each tile embedding.
        """

        entries: List[RegionTag] = []
        for grid in grid_sizes if grid_sizes is not None else self.grid_sizes:
            for tile in split_image(image, grid):
                try:
                    vector = encoder.embed_image(tile.image)
                except Exception as exc:  # noqa: BLE001 - any encoder error aborts this image
                    raise EncoderFailure(f"Encoder '{encoder.name}' failed on grid {grid} tile: {exc}") from exc

                tags = tagger.top_k(vector, self.top_k)
                region = region_name(grid, tile.row, tile.col)
                logger.debug("Region %s tagged: %s", region, tags)
                entries.append(RegionTag(region=region, tags=tags))

        return merge_regions(entries)
