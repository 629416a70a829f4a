"""
Unit tests for the sheet geometry planner.
"""

import pytest

from cardsheet_toolkit.builder.layout import (
    Dimensions,
    LayoutConfig,
    POINTS_PER_INCH,
    plan,
)


class TestPlanCapacity:
    """Tests for column/row counts."""

    def test_plan_when_poker_cards_on_letter_then_three_by_two(self, letter_config):
        """2.5x3.5in cards on 8.5x11in with 0.25in margin give a 3x2 grid."""
        # Act
        sheet = plan(letter_config)

        # Assert
        assert sheet.columns == 3
        assert sheet.rows == 2
        assert sheet.cards_per_page == 6
        assert not sheet.is_empty

    def test_plan_when_default_config_then_three_by_four(self):
        """Defaults (12x18in page, 1in margin, 0.5in spacing) fit 3x4."""
        # usable_w = 864 - 144 + 36 = 756; 756 / 216 = 3.5 -> 3
        # usable_h = 1296 - 144 + 36 = 1188; 1188 / 288 = 4.125 -> 4
        sheet = plan(LayoutConfig())

        assert sheet.columns == 3
        assert sheet.rows == 4

    def test_plan_when_spacing_correction_then_exact_fit_counts(self):
        """A row that fills the usable width exactly keeps its last card."""
        # Arrange: 3 cards of 2in with 0.5in gaps = 7in usable width
        config = LayoutConfig(
            card_size=Dimensions(2.0, 2.0),
            page_size=Dimensions(9.0, 9.0),
            margin=1.0,
            spacing=0.5,
        )

        # Act
        sheet = plan(config)

        # Assert
        assert sheet.columns == 3
        assert sheet.rows == 3

    def test_plan_when_card_larger_than_page_then_zero_capacity(self):
        """Oversized cards produce an empty plan, not an error."""
        config = LayoutConfig(
            card_size=Dimensions(9.0, 12.0),
            page_size=Dimensions(8.5, 11),
            margin=0.25,
        )

        sheet = plan(config)

        assert sheet.columns == 0
        assert sheet.cards_per_page == 0
        assert sheet.is_empty

    def test_plan_when_margins_swallow_page_then_clamped_to_zero(self):
        """Negative usable area never yields negative counts."""
        config = LayoutConfig(
            card_size=Dimensions(1.0, 1.0),
            page_size=Dimensions(2.0, 2.0),
            margin=3.0,
            spacing=0.0,
        )

        sheet = plan(config)

        assert sheet.columns == 0
        assert sheet.rows == 0

    @pytest.mark.parametrize("card_w,card_h", [(1.0, 1.0), (2.5, 3.5), (3.9, 5.2), (7.9, 10.4)])
    def test_plan_when_card_fits_usable_area_then_at_least_one_slot(self, card_w, card_h):
        config = LayoutConfig(
            card_size=Dimensions(card_w, card_h),
            page_size=Dimensions(8.5, 11),
            margin=0.25,
            spacing=0.125,
        )

        sheet = plan(config)

        assert sheet.columns >= 1
        assert sheet.rows >= 1


class TestPlanGeometry:
    """Tests for unit conversion and grid centering."""

    def test_plan_when_converted_then_lengths_in_points(self, letter_config):
        sheet = plan(letter_config)

        assert sheet.page_size == Dimensions(8.5 * POINTS_PER_INCH, 11 * POINTS_PER_INCH)
        assert sheet.card_size == Dimensions(180.0, 252.0)
        assert sheet.spacing == pytest.approx(9.0)
        assert sheet.bleed == pytest.approx(9.0)
        assert sheet.mark_length == pytest.approx(15.0)

    def test_grid_origin_when_planned_then_grid_centered(self, letter_config):
        """Grid midpoint coincides with page midpoint."""
        sheet = plan(letter_config)
        grid = sheet.grid_size

        assert sheet.grid_origin.x + grid.width / 2 == pytest.approx(sheet.page_size.width / 2)
        assert sheet.grid_origin.y + grid.height / 2 == pytest.approx(sheet.page_size.height / 2)

    def test_grid_origin_when_letter_then_expected_values(self, letter_config):
        # grid_w = 3*180 + 2*9 = 558 -> x = (612 - 558) / 2 = 27
        # grid_h = 2*252 + 9 = 513 -> y = (792 - 513) / 2 = 139.5
        sheet = plan(letter_config)

        assert sheet.grid_origin.x == pytest.approx(27.0)
        assert sheet.grid_origin.y == pytest.approx(139.5)

    def test_plan_when_same_config_then_same_plan(self, letter_config):
        """Planning is deterministic and cached per config."""
        first = plan(letter_config)
        second = plan(LayoutConfig(**vars(letter_config)))

        assert first == second


class TestLayoutConfig:
    """Tests for LayoutConfig validation."""

    def test_init_when_negative_margin_then_raises_error(self):
        with pytest.raises(ValueError, match="margin must be non-negative"):
            LayoutConfig(margin=-0.1)

    def test_init_when_negative_card_width_then_raises_error(self):
        with pytest.raises(ValueError, match="card width"):
            LayoutConfig(card_size=Dimensions(-1.0, 3.5))

    def test_init_when_zero_card_and_zero_spacing_then_raises_error(self):
        with pytest.raises(ValueError, match="cannot both be zero"):
            LayoutConfig(card_size=Dimensions(0.0, 3.5), spacing=0.0)

    def test_init_when_oversized_card_then_accepted(self):
        config = LayoutConfig(card_size=Dimensions(20.0, 20.0))

        assert config.card_size.width == 20.0
