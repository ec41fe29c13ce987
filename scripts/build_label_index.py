# Path: scripts/build_label_index.py
# Purpose: CLI tool to embed a label vocabulary and write it as a label dictionary.
# Layer: scripts.
# Details: Reads one label per line, embeds each with the text encoder, and saves .json + .npy files.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np
from tqdm import tqdm

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings
from semantic_core.embedders.pixel_stats_embedder import PixelStatsEmbedder
from semantic_core.vector_store.label_index import LabelDictionary


def main() -> None:
    """Embed a vocabulary file into a label dictionary."""

    parser = argparse.ArgumentParser(description="Build a label dictionary for semantic tagging")
    parser.add_argument("--vocabulary", type=Path, required=True, help="Text file with one label per line")
    parser.add_argument("--labels-out", type=Path, required=True, help="Destination JSON file for labels")
    parser.add_argument("--vectors-out", type=Path, required=True, help="Destination .npy file for vectors")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    logging.basicConfig(level=settings.log_level)

    labels = [line.strip() for line in args.vocabulary.read_text(encoding="utf-8").splitlines() if line.strip()]
    embedder = PixelStatsEmbedder(dim=settings.embedder.dim, image_size=settings.embedder.image_size)
    vectors = [embedder.embed_text(label) for label in tqdm(labels, desc="Embedding labels", unit="label")]

    dictionary = LabelDictionary(labels=labels, vectors=np.vstack(vectors).astype(np.float32))
    dictionary.save(args.labels_out, args.vectors_out)
    print(f"Wrote {len(labels)} labels to {args.labels_out} and {args.vectors_out}")


if __name__ == "__main__":
    main()
