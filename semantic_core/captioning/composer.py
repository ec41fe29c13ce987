# Path: semantic_core/captioning/composer.py
# Purpose: Turn region tags into exactly one deterministic English caption sentence.
# Layer: core/captioning.
# Details: Only tag strings and a fixed phrase table reach the output, so nothing absent from the tags is named.

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Set

from semantic_core.errors import EmptyInput
from semantic_core.models.domain import RegionMap, RegionTag
from semantic_core.tagging.normalizer import dedup_sorted, normalize_tags

# Reading order used to stabilize region iteration; unknown regions sort after these by id.
REGION_ORDER: Dict[str, int] = {
    "upper-left": 0,
    "upper-center": 1,
    "upper-right": 2,
    "middle-left": 3,
    "center": 4,
    "middle-right": 5,
    "lower-left": 6,
    "lower-center": 7,
    "lower-right": 8,
}

REGION_PHRASES: Dict[str, str] = {
    "upper-left": "in the upper left",
    "upper-center": "in the upper center",
    "upper-right": "in the upper right",
    "middle-left": "on the left",
    "center": "in the center",
    "middle-right": "on the right",
    "lower-left": "in the lower left",
    "lower-center": "in the lower center",
    "lower-right": "in the lower right",
}

CENTER_REGIONS = frozenset({"center", "upper-center", "lower-center", "middle-left", "middle-right"})

UNKNOWN_REGION_RANK = 999
VOWELS = frozenset("aeiou")
EMPTY_SCENE_SENTENCE = "An image is shown."


def with_indefinite_article(noun: str) -> str:
    word = noun.strip()
    if word and word[0] in VOWELS:
        return f"an {word}"
    return f"a {word}"


def english_list(items: Iterable[str]) -> str:
    """Join items as an English list with an Oxford comma."""

    words = [item for item in items if item]
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    if len(words) == 2:
        return f"{words[0]} and {words[1]}"
    return f"{', '.join(words[:-1])}, and {words[-1]}"


def region_phrase(region: str) -> Optional[str]:
    return REGION_PHRASES.get(region)


def _capitalize_first(sentence: str) -> str:
    return sentence[:1].upper() + sentence[1:]


class CaptionComposer:
    """Deterministic captioner: the same region tags always yield the same sentence."""

    def __init__(
        self,
        max_main_objects: int = 3,
        max_spatial_mentions: int = 2,
        min_regions_for_main: int = 1,
        prefer_center_regions: bool = True,
    ) -> None:
        self.max_main_objects = max_main_objects
        self.max_spatial_mentions = max_spatial_mentions
        self.min_regions_for_main = min_regions_for_main
        self.prefer_center_regions = prefer_center_regions

    def compose(self, region_map: RegionMap) -> str:
        """Generate one caption sentence from region tags.

        Raises :class:`EmptyInput` when there are no regions or no tag survives
        normalization.
        """

        if not region_map:
            raise EmptyInput()

        normalized = self.normalize_regions(region_map)
        all_tags = self._all_unique_tags(normalized)
        if not all_tags:
            raise EmptyInput("Region tags contain no usable tags.")

        presence = self.region_presence(normalized)
        candidates = self.rank_main_candidates(normalized, presence)

        main = candidates[: self.max_main_objects] or all_tags[: self.max_main_objects]
        mentions = self.spatial_mentions(presence, main + all_tags)
        return self.build_sentence(main, mentions)

    def compose_flat(self, tags: Sequence[str]) -> str:
        """Caption a region-less tag list: no spatial reasoning, alphabetical main objects."""

        cleaned = normalize_tags(tags)
        if not cleaned:
            raise EmptyInput()
        main = dedup_sorted(cleaned)[: self.max_main_objects]
        return self.build_sentence(main, [])

    # Core steps

    @staticmethod
    def normalize_regions(region_map: RegionMap) -> List[RegionTag]:
        """Normalize and dedup tags per region, then order regions by reading position."""

        normalized = [
            RegionTag(region=entry.region, tags=dedup_sorted(normalize_tags(entry.tags))) for entry in region_map
        ]
        return sorted(normalized, key=lambda entry: (REGION_ORDER.get(entry.region, UNKNOWN_REGION_RANK), entry.region))

    @staticmethod
    def region_presence(normalized: Sequence[RegionTag]) -> Dict[str, Set[str]]:
        """Map each tag to the set of regions it appears in."""

        presence: Dict[str, Set[str]] = {}
        for entry in normalized:
            for tag in entry.tags:
                presence.setdefault(tag, set()).add(entry.region)
        return presence

    def rank_main_candidates(self, normalized: Sequence[RegionTag], presence: Dict[str, Set[str]]) -> List[str]:
        """Order candidate subjects by region count desc, tag asc, then move centre tags forward."""

        counted = [(tag, len(regions)) for tag, regions in presence.items() if len(regions) >= self.min_regions_for_main]
        ranked = [tag for tag, _ in sorted(counted, key=lambda item: (-item[1], item[0]))]

        if not self.prefer_center_regions:
            return ranked

        center_tags = {tag for entry in normalized if entry.region in CENTER_REGIONS for tag in entry.tags}
        # Stable partition: relative order inside each group is preserved.
        return [tag for tag in ranked if tag in center_tags] + [tag for tag in ranked if tag not in center_tags]

    def spatial_mentions(self, presence: Dict[str, Set[str]], candidates: Sequence[str]) -> List[str]:
        """Build "<article> <tag> <phrase>" for tags confined to one known region."""

        mentions: List[str] = []
        used: Set[str] = set()
        for tag in candidates:
            if len(mentions) >= self.max_spatial_mentions:
                break
            if tag in used:
                continue
            regions = presence.get(tag)
            if not regions or len(regions) != 1:
                continue
            phrase = region_phrase(next(iter(regions)))
            if phrase is None:
                continue
            mentions.append(f"{with_indefinite_article(tag)} {phrase}")
            used.add(tag)
        return mentions

    @staticmethod
    def build_sentence(main_tags: Sequence[str], mentions: Sequence[str]) -> str:
        objects = [tag.strip() for tag in main_tags]
        if not objects:
            return EMPTY_SCENE_SENTENCE

        if len(objects) == 1:
            base = f"{with_indefinite_article(objects[0])} appears in the image"
        else:
            listed = [with_indefinite_article(objects[0])] + objects[1:]
            base = f"{english_list(listed)} appear in the image"

        if mentions:
            base = f"{base}, with {english_list(mentions)}"
        return _capitalize_first(f"{base}.".strip())

    @staticmethod
    def _all_unique_tags(normalized: Sequence[RegionTag]) -> List[str]:
        return dedup_sorted(tag for entry in normalized for tag in entry.tags)
