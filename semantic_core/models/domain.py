# Path: semantic_core/models/domain.py
# Purpose: Define domain models shared across tagging, captioning, prompting, and posting workflows.
# Layer: core/models.
# Details: Lightweight dataclasses; PostRecord guards its annotation fields so updates land atomically.

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class LabelVector:
    """One vocabulary entry of a label index."""

    label: str
    vector: np.ndarray


@dataclass
class RegionTag:
    """Tags inferred for one spatial region of an image."""

    region: str
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"region": self.region, "tags": list(self.tags)}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "RegionTag":
        return cls(region=str(payload["region"]), tags=[str(tag) for tag in payload.get("tags", [])])


RegionMap = List[RegionTag]


@dataclass
class ExtractionResult:
    """Region tags, caption, and generation prompt produced for one image."""

    region_tags: RegionMap
    caption: str
    semantic_prompt: str
    degraded: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """Serialize into the field names the posting backend expects."""

        return {
            "regionTags": [region.to_dict() for region in self.region_tags],
            "caption": self.caption,
            "semanticPrompt": self.semantic_prompt,
        }


class PostStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"


@dataclass
class PostRecord:
    """A user post awaiting semantic annotation.

    Readers call :meth:`snapshot` and writers call :meth:`apply`; both take the
    same lock so a caption is never observed without its prompt.
    """

    id: str
    image: Optional[Image.Image] = None
    status: PostStatus = PostStatus.PENDING
    region_tags: RegionMap = field(default_factory=list)
    caption: Optional[str] = None
    semantic_prompt: Optional[str] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def mark_processing(self) -> None:
        with self._lock:
            self.status = PostStatus.PROCESSING

    def apply(self, result: ExtractionResult) -> None:
        """Write every annotation field and the completed status in one step."""

        with self._lock:
            self.region_tags = list(result.region_tags)
            self.caption = result.caption
            self.semantic_prompt = result.semantic_prompt
            self.status = PostStatus.COMPLETED

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "id": self.id,
                "status": self.status,
                "region_tags": list(self.region_tags),
                "caption": self.caption,
                "semantic_prompt": self.semantic_prompt,
            }
