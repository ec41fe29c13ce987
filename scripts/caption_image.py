# Path: scripts/caption_image.py
# Purpose: Simple CLI to caption an image and build its generation prompt.
# Layer: scripts.
# Details: Loads the three label dictionaries, runs the orchestrator, and optionally uploads the result.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PIL import Image

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings
from semantic_core.embedders.pixel_stats_embedder import PixelStatsEmbedder
from semantic_core.models.domain import PostRecord
from semantic_core.pipeline.orchestrator import SemanticExtractionOrchestrator
from semantic_core.pipeline.uploader import HttpPostUploader, NullUploader
from semantic_core.vector_store.tagger_set import TaggerSet


def main() -> None:
    """Run semantic extraction on one image from the command line."""

    parser = argparse.ArgumentParser(description="Caption an image and synthesize its prompt")
    parser.add_argument("image", type=Path, help="Image file to annotate")
    parser.add_argument("--post-id", type=str, default=None, help="Post identifier sent to the upload endpoint")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    logging.basicConfig(level=settings.log_level)

    embedder = PixelStatsEmbedder(dim=settings.embedder.dim, image_size=settings.embedder.image_size)
    taggers = TaggerSet.from_settings(settings.tagging)
    if settings.upload_url:
        uploader = HttpPostUploader(settings.upload_url, timeout=settings.upload_timeout)
    else:
        uploader = NullUploader()

    with Image.open(args.image) as image:
        post = PostRecord(id=args.post_id or args.image.stem, image=image.convert("RGB"))

    with SemanticExtractionOrchestrator(
        encoder=embedder, taggers=taggers, uploader=uploader, settings=settings.tagging, workers=settings.workers
    ) as orchestrator:
        result = orchestrator.process(post)

    if result is None:
        sys.exit(1)
    for region in result.region_tags:
        print(f"{region.region}: {', '.join(region.tags)}")
    print(f"caption: {result.caption}")
    print(f"prompt: {result.semantic_prompt}")


if __name__ == "__main__":
    main()
