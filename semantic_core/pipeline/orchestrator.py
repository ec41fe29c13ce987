# Path: semantic_core/pipeline/orchestrator.py
# Purpose: Sequence region tagging, captioning, and prompt assembly for one image or post.
# Layer: core/pipeline.
# Details: Degraded extractions fall back to an empty caption and a fixed prompt; posts are always uploaded.

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, List, Optional

from PIL import Image
from tqdm import tqdm

from config.settings import TaggingSettings
from semantic_core.captioning.composer import CaptionComposer
from semantic_core.embedders.base import Embedder
from semantic_core.errors import EncoderFailure, SemanticCoreError, UploadFailure
from semantic_core.models.domain import ExtractionResult, PostRecord, RegionMap
from semantic_core.prompting.synthesizer import rank_object_tags
from semantic_core.tagging.regions import RegionExtractor
from semantic_core.vector_store.tagger_set import TaggerSet
from .uploader import NullUploader, PostUploader

logger = logging.getLogger(__name__)

FALLBACK_SCENE_PROMPT = "simple scene"


class SemanticExtractionOrchestrator:
    """High-level service turning an image into region tags, a caption, and a generation prompt.

    All collaborators are injected; the tagger set is shared read-only between
    concurrent extractions.
    """

    def __init__(
        self,
        encoder: Embedder,
        taggers: TaggerSet,
        uploader: Optional[PostUploader] = None,
        settings: Optional[TaggingSettings] = None,
        composer: Optional[CaptionComposer] = None,
        workers: int = 2,
    ) -> None:
        self.encoder = encoder
        self.taggers = taggers
        self.uploader: PostUploader = uploader or NullUploader()
        self.settings = settings or TaggingSettings()
        self.composer = composer or CaptionComposer()
        self.extractor = RegionExtractor(grid_sizes=self.settings.grid_sizes, top_k=self.settings.region_top_k)
        self._workers = workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    def extract(self, image: Image.Image) -> ExtractionResult:
        """
        Produce the annotation record for one image.

        Caption and prompt are independent best-effort outputs: a failure in one
        never prevents the other.

        External calls:
        - semantic_core/tagging/regions.py::RegionExtractor.extract - region tags from the object index.
        - semantic_core/captioning/composer.py::CaptionComposer.compose - one caption sentence.
        - semantic_core/embedders/base.py::Embedder.embed_image - whole-image embedding for style/context.
        """

        # Index construction errors are fatal and propagate; only per-image failures degrade.
        indexes = self.taggers.ensure_loaded()
        degraded = False

        region_tags: RegionMap = []
        try:
            region_tags = self.extractor.extract(image, self.encoder, indexes["object"])
        except SemanticCoreError:
            logger.warning("Region extraction failed; continuing without region tags.", exc_info=True)
            degraded = True

        try:
            caption = self.composer.compose(region_tags)
        except SemanticCoreError as exc:
            logger.warning("Caption generation failed: %s", exc)
            caption = ""

        object_tags = rank_object_tags(region_tags, limit=self.settings.object_limit)

        style_tags: List[str] = []
        context_tags: List[str] = []
        try:
            global_vector = self._embed_whole_image(image)
            style_tags = indexes["style"].top_k(global_vector, self.settings.style_top_k)
            context_tags = indexes["caption"].top_k(global_vector, self.settings.caption_top_k)
        except SemanticCoreError:
            logger.warning("Whole-image tagging failed; using fallback prompt.", exc_info=True)
            degraded = True

        parts = style_tags + object_tags + context_tags
        if degraded or not parts:
            prompt = FALLBACK_SCENE_PROMPT
        else:
            prompt = ", ".join(parts)

        return ExtractionResult(region_tags=region_tags, caption=caption, semantic_prompt=prompt, degraded=degraded)

    def process(self, post: PostRecord) -> Optional[ExtractionResult]:
        """Annotate a post in place and hand the result to the uploader exactly once."""

        if post.image is None:
            logger.error("Post %s has no image to process.", post.id)
            return None

        post.mark_processing()
        try:
            result = self.extract(post.image)
        except SemanticCoreError:
            # Index construction failed; the record is still completed and uploaded before the error surfaces.
            logger.warning("Extraction aborted for post %s.", post.id, exc_info=True)
            self._complete(post, _fallback_result())
            raise

        self._complete(post, result)

        if result.degraded:
            logger.info("Post %s completed with fallback annotations.", post.id)
        else:
            logger.info("Semantic extraction completed for post %s", post.id)
        return result

    def _complete(self, post: PostRecord, result: ExtractionResult) -> None:
        post.apply(result)
        try:
            self.uploader.upload(post.id, result)
        except UploadFailure:
            logger.warning("Upload failed for post %s.", post.id, exc_info=True)

    def submit(self, post: PostRecord) -> "Future[Optional[ExtractionResult]]":
        """Process a post on a background worker; the future resolves once the record is updated."""

        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="semantic-extract")
            return self._executor.submit(self.process, post)

    def process_many(self, posts: Iterable[PostRecord]) -> List[Optional[ExtractionResult]]:
        """Process a batch of posts sequentially with progress reporting."""

        return [self.process(post) for post in tqdm(list(posts), desc="Annotating posts", unit="post")]

    def close(self) -> None:
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "SemanticExtractionOrchestrator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _embed_whole_image(self, image: Image.Image):
        try:
            return self.encoder.embed_image(image.convert("RGB"))
        except Exception as exc:  # noqa: BLE001 - any encoder error degrades this image
            raise EncoderFailure(f"Encoder '{self.encoder.name}' failed on whole image: {exc}") from exc


def _fallback_result() -> ExtractionResult:
    return ExtractionResult(region_tags=[], caption="", semantic_prompt=FALLBACK_SCENE_PROMPT, degraded=True)
