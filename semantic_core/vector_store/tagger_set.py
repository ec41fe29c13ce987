# Path: semantic_core/vector_store/tagger_set.py
# Purpose: Own the object, caption-context, and style label indexes used by the extraction pipeline.
# Layer: core/vector_store.
# Details: Indexes are built lazily exactly once; concurrent first callers block until loading finishes.

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

from config.settings import LabelDictionarySettings, TaggingSettings
from .label_index import LabelDictionary, VectorLabelIndex

logger = logging.getLogger(__name__)

DictionaryLoader = Callable[[], LabelDictionary]

ROLES = ("object", "caption", "style")


def _file_loader(settings: LabelDictionarySettings) -> DictionaryLoader:
    def load() -> LabelDictionary:
        return LabelDictionary.from_files(settings.labels_path, settings.vectors_path)

    return load


class TaggerSet:
    """Holder for the three label indexes, constructed once per process and injected.

    A loading error propagates to the caller and leaves the set unloaded, so no
    partially built index is ever served.
    """

    def __init__(self, loaders: Dict[str, DictionaryLoader]) -> None:
        missing = [role for role in ROLES if role not in loaders]
        if missing:
            raise ValueError(f"TaggerSet requires loaders for: {', '.join(missing)}")
        self._loaders = dict(loaders)
        self._indexes: Optional[Dict[str, VectorLabelIndex]] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: TaggingSettings) -> "TaggerSet":
        return cls(
            {
                "object": _file_loader(settings.object_dictionary),
                "caption": _file_loader(settings.caption_dictionary),
                "style": _file_loader(settings.style_dictionary),
            }
        )

    @classmethod
    def from_indexes(
        cls, object_index: VectorLabelIndex, caption_index: VectorLabelIndex, style_index: VectorLabelIndex
    ) -> "TaggerSet":
        """Wrap indexes that are already loaded."""

        tagger_set = cls({role: _unused_loader for role in ROLES})
        tagger_set._indexes = {"object": object_index, "caption": caption_index, "style": style_index}
        return tagger_set

    @property
    def is_loaded(self) -> bool:
        return self._indexes is not None

    def ensure_loaded(self) -> Dict[str, VectorLabelIndex]:
        """Build all indexes on first use and return them."""

        indexes = self._indexes
        if indexes is not None:
            return indexes

        with self._lock:
            if self._indexes is None:
                built: Dict[str, VectorLabelIndex] = {}
                for role in ROLES:
                    dictionary = self._loaders[role]()
                    index = VectorLabelIndex(name=role)
                    index.load(dictionary.labels, dictionary.vectors)
                    built[role] = index
                self._indexes = built
                logger.info("Tagger set ready: %s", ", ".join(f"{r}={len(built[r])}" for r in ROLES))
            return self._indexes

    @property
    def object_index(self) -> VectorLabelIndex:
        return self.ensure_loaded()["object"]

    @property
    def caption_index(self) -> VectorLabelIndex:
        return self.ensure_loaded()["caption"]

    @property
    def style_index(self) -> VectorLabelIndex:
        return self.ensure_loaded()["style"]


def _unused_loader() -> LabelDictionary:
    raise RuntimeError("Preloaded TaggerSet has no dictionary loader.")
