"""Tests for the deterministic caption composer."""

from __future__ import annotations

import pytest

from semantic_core.captioning.composer import CaptionComposer, english_list, with_indefinite_article
from semantic_core.errors import EmptyInput
from semantic_core.models.domain import RegionTag


@pytest.fixture
def composer() -> CaptionComposer:
    return CaptionComposer()


class TestHelpers:
    def test_articles(self):
        assert with_indefinite_article("owl") == "an owl"
        assert with_indefinite_article("cat") == "a cat"
        assert with_indefinite_article("unicorn") == "an unicorn"

    def test_english_list(self):
        assert english_list([]) == ""
        assert english_list(["a"]) == "a"
        assert english_list(["a", "b"]) == "a and b"
        assert english_list(["a", "b", "c"]) == "a, b, and c"


class TestCompose:
    def test_single_center_tag(self, composer):
        caption = composer.compose([RegionTag("center", ["cat"])])
        assert caption == "A cat appears in the image, with a cat in the center."

    def test_three_objects_without_spatial_clause(self, composer):
        caption = composer.compose([RegionTag("global", ["table", "cat", "chair"])])
        assert caption == "A cat, chair, and table appear in the image."

    def test_two_objects(self, composer):
        caption = composer.compose([RegionTag("global", ["dog", "ball"]), RegionTag("g2-r0-c0", ["dog"])])
        assert caption == "A dog and ball appear in the image."

    def test_normalizes_and_dedups(self, composer):
        caption = composer.compose([RegionTag("center", ["Big_Dog", "big-dog", "  "])])
        assert caption == "A big dog appears in the image, with a big dog in the center."

    def test_vowel_article(self, composer):
        caption = composer.compose([RegionTag("center", ["owl"])])
        assert caption == "An owl appears in the image, with an owl in the center."

    def test_center_tags_move_forward_stably(self, composer):
        caption = composer.compose(
            [
                RegionTag("global", ["cat"]),
                RegionTag("center", ["cat", "ant"]),
                RegionTag("upper-left", ["dog"]),
            ]
        )
        assert caption == (
            "A cat, ant, and dog appear in the image, with an ant in the center and a dog in the upper left."
        )

    def test_spatial_mentions_capped_at_two(self, composer):
        caption = composer.compose(
            [
                RegionTag("lower-right", ["eel"]),
                RegionTag("upper-left", ["bee"]),
                RegionTag("lower-left", ["dog"]),
                RegionTag("upper-right", ["cow"]),
            ]
        )
        assert caption == (
            "A bee, cow, and dog appear in the image, with a bee in the upper left and a cow in the upper right."
        )

    def test_spatial_falls_back_to_other_tags(self, composer):
        caption = composer.compose(
            [
                RegionTag("global", ["ant", "bee", "cat"]),
                RegionTag("g2-r0-c0", ["ant", "bee", "cat"]),
                RegionTag("upper-left", ["zoo"]),
            ]
        )
        assert caption == "An ant, bee, and cat appear in the image, with a zoo in the upper left."

    def test_middle_regions_count_as_center(self, composer):
        caption = composer.compose(
            [
                RegionTag("global", ["ant", "bee", "cat"]),
                RegionTag("g2-r0-c0", ["ant", "bee", "cat"]),
                RegionTag("middle-right", ["yak"]),
            ]
        )
        assert caption == "A yak, ant, and bee appear in the image, with a yak on the right."

    def test_region_order_does_not_matter(self, composer):
        regions = [RegionTag("lower-left", ["dog"]), RegionTag("center", ["cat", "dog"]), RegionTag("global", ["sky"])]
        assert composer.compose(regions) == composer.compose(list(reversed(regions)))

    def test_empty_map(self, composer):
        with pytest.raises(EmptyInput):
            composer.compose([])

    def test_regions_without_tags(self, composer):
        with pytest.raises(EmptyInput):
            composer.compose([RegionTag("global", []), RegionTag("center", ["  "])])

    def test_without_center_preference(self):
        composer = CaptionComposer(prefer_center_regions=False)
        caption = composer.compose([RegionTag("upper-left", ["ant"]), RegionTag("center", ["zebra"])])
        assert caption == (
            "An ant and zebra appear in the image, with an ant in the upper left and a zebra in the center."
        )


class TestComposeFlat:
    def test_sorted_and_truncated(self, composer):
        caption = composer.compose_flat(["Table", "cat", "zebra", "chair", "cat"])
        assert caption == "A cat, chair, and table appear in the image."

    def test_single(self, composer):
        assert composer.compose_flat(["apple_pie"]) == "An apple pie appears in the image."

    def test_empty(self, composer):
        with pytest.raises(EmptyInput):
            composer.compose_flat([" ", ""])
