"""
Module: builder.layout.config

Purpose:
    Configuration for the sheet layout engine.
    Defines card size, page size, margins, spacing, bleed and mark length,
    all expressed in inches.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Key Functions:
    - inch_to_pt(): The single inch -> point conversion

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.planner: Sheet geometry
    - builder.config: Run configuration
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import Dimensions


# PDF points per inch
POINTS_PER_INCH = 72.0

# 15pt corner marks
DEFAULT_MARK_LENGTH_IN = 15 / POINTS_PER_INCH


def inch_to_pt(inches: float) -> float:
    """Convert inches to PDF points (1/72 inch)."""
    return inches * POINTS_PER_INCH


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for sheet layout (immutable).

    All lengths are in inches. A card that does not fit the usable page
    area is accepted here; it simply yields a plan with no capacity.

    Attributes:
        card_size: Card width and height
        page_size: Page width and height
        margin: Page margin on every side
        spacing: Gap between neighbouring cards
        bleed: Extra printed area beyond each card edge
        mark_length: Length of each crop mark stroke

    Example:
        >>> config = LayoutConfig(page_size=Dimensions(8.5, 11))
        >>> config.card_size
        Dimensions(width=2.5, height=3.5)
    """

    card_size: Dimensions = Dimensions(2.5, 3.5)
    page_size: Dimensions = Dimensions(12.0, 18.0)
    margin: float = 1.0
    spacing: float = 0.5
    bleed: float = 0.0
    mark_length: float = DEFAULT_MARK_LENGTH_IN

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        lengths = {
            "card width": self.card_size.width,
            "card height": self.card_size.height,
            "page width": self.page_size.width,
            "page height": self.page_size.height,
            "margin": self.margin,
            "spacing": self.spacing,
            "bleed": self.bleed,
            "mark_length": self.mark_length,
        }
        for name, value in lengths.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")
        if self.card_size.width + self.spacing <= 0:
            raise ValueError("card width and spacing cannot both be zero")
        if self.card_size.height + self.spacing <= 0:
            raise ValueError("card height and spacing cannot both be zero")
