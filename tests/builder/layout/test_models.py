"""
Unit tests for layout models.
"""

from pathlib import Path

import pytest

from cardsheet_toolkit.builder.layout import (
    CardImage,
    Dimensions,
    ImageFormat,
    PagePlan,
    PlacedCard,
    Point,
    RGBColor,
    SheetPlan,
)


class TestRGBColor:
    """Tests for RGBColor validation."""

    def test_init_when_components_in_range_then_created(self):
        color = RGBColor(0.0, 0.5, 1.0)

        assert color.green == 0.5

    def test_init_when_component_above_one_then_raises_error(self):
        with pytest.raises(ValueError, match="red must be between 0 and 1"):
            RGBColor(108, 13, 190)


class TestImageFormat:
    """Tests for suffix detection."""

    @pytest.mark.parametrize("suffix,expected", [
        (".png", ImageFormat.PNG),
        (".PNG", ImageFormat.PNG),
        (".jpg", ImageFormat.JPEG),
        (".jpeg", ImageFormat.JPEG),
        (".JPG", ImageFormat.JPEG),
    ])
    def test_from_suffix_when_supported_then_format(self, suffix, expected):
        assert ImageFormat.from_suffix(suffix) is expected

    @pytest.mark.parametrize("suffix", [".gif", ".webp", ""])
    def test_from_suffix_when_unsupported_then_none(self, suffix):
        assert ImageFormat.from_suffix(suffix) is None


class TestCardImage:
    """Tests for CardImage."""

    def test_name_when_path_source_then_file_name(self):
        card = CardImage(Path("/cards/strike+.png"), b"", ImageFormat.PNG, is_back=True)

        assert card.name == "strike+.png"

    def test_repr_when_created_then_omits_bytes(self):
        card = CardImage("strike", b"\x89PNG" * 100, ImageFormat.PNG)

        assert "PNG\\x" not in repr(card)


class TestSheetPlan:
    """Tests for derived SheetPlan properties."""

    def test_grid_size_when_three_by_two_then_includes_inner_gaps(self):
        sheet = SheetPlan(
            columns=3,
            rows=2,
            grid_origin=Point(27, 139.5),
            page_size=Dimensions(612, 792),
            card_size=Dimensions(180, 252),
            spacing=9,
            bleed=0,
            mark_length=15,
        )

        assert sheet.cards_per_page == 6
        assert sheet.grid_size == Dimensions(558, 513)


class TestPagePlan:
    """Tests for PagePlan."""

    def test_is_empty_when_no_placements_then_true(self):
        page = PagePlan(index=0, page_size=Dimensions(612, 792), placements=())

        assert page.is_empty
        assert list(page.operations()) == []

    def test_bleed_box_when_bleed_then_expanded(self):
        card = CardImage("c", b"", ImageFormat.PNG)
        placed = PlacedCard(card, Point(10, 20), Dimensions(100, 200), bleed=5)

        assert placed.bleed_box == (Point(5, 15), Point(115, 225))
