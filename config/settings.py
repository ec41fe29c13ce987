# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes settings for the encoder, label dictionaries, region tagging, and uploads.

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbedderSettings(BaseModel):
    """Settings describing which encoder implementation to use and how to load it."""

    name: str = Field(default="pixel_stats", description="Identifier of the encoder implementation.")
    dim: int = Field(default=768, description="Embedding dimensionality produced by the encoder.")
    image_size: int = Field(default=224, description="Square size images are resized to before encoding.")


class LabelDictionarySettings(BaseModel):
    """Location of one label dictionary: a JSON list of labels plus a float32 .npy matrix."""

    labels_path: Path
    vectors_path: Path


class TaggingSettings(BaseModel):
    """Settings for the three label indexes and the region tiling pyramid."""

    object_dictionary: LabelDictionarySettings = Field(
        default_factory=lambda: LabelDictionarySettings(
            labels_path=Path("storage/labels/tag_labels.json"),
            vectors_path=Path("storage/labels/tag_embs.npy"),
        ),
        description="General object tag vocabulary queried per region tile.",
    )
    caption_dictionary: LabelDictionarySettings = Field(
        default_factory=lambda: LabelDictionarySettings(
            labels_path=Path("storage/labels/caption_labels.json"),
            vectors_path=Path("storage/labels/caption_embs.npy"),
        ),
        description="Caption-context phrase vocabulary queried with the whole-image embedding.",
    )
    style_dictionary: LabelDictionarySettings = Field(
        default_factory=lambda: LabelDictionarySettings(
            labels_path=Path("storage/labels/style_labels.json"),
            vectors_path=Path("storage/labels/style_embs.npy"),
        ),
        description="Style vocabulary queried with the whole-image embedding.",
    )
    grid_sizes: List[int] = Field(default_factory=lambda: [1, 2], description="Tiles per image side for each pyramid level.")
    region_top_k: int = Field(default=4, description="Labels requested per region tile.")
    style_top_k: int = Field(default=3, description="Style labels added to the final prompt.")
    caption_top_k: int = Field(default=1, description="Caption-context labels added to the final prompt.")
    object_limit: int = Field(default=6, description="Maximum number of ranked object tags in the final prompt.")


class AppSettings(BaseSettings):
    """Top-level application settings shared across services and interfaces.

    Every field can be overridden from the environment with the ``SEMCAP_`` prefix;
    nested sections use ``__``, e.g. ``SEMCAP_TAGGING__GRID_SIZES=[1,2,4]``.
    """

    embedder: EmbedderSettings = Field(default_factory=EmbedderSettings)
    tagging: TaggingSettings = Field(default_factory=TaggingSettings)
    upload_url: Optional[str] = Field(default=None, description="Endpoint receiving finished post annotations.")
    upload_timeout: float = Field(default=15.0, description="Seconds before an upload request is abandoned.")
    workers: int = Field(default=2, description="Worker threads used for background extraction.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")

    model_config = SettingsConfigDict(
        env_prefix="SEMCAP_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Instantiate settings from environment variables and an optional .env file."""

        return cls()


__all__ = ["AppSettings", "EmbedderSettings", "LabelDictionarySettings", "TaggingSettings"]
