"""
Module: builder.layout

Purpose:
    Sheet layout engine.
    Plans the card grid for a page and composes card images into
    positioned pages with crop marks.

Key Functions:
    - plan(): Derive grid geometry from a LayoutConfig
    - compose_pages(): Arrange cards onto pages
    - crop_marks(): Corner marks around a bleed box

Key Classes:
    - LayoutConfig: Layout configuration (inches)
    - SheetPlan: Derived grid geometry (points)
    - CardImage: Card image with source identity
    - PagePlan: Single page layout plan

Dependencies:
    - dataclasses, functools (std)

Used By:
    - builder.controller: Main build controller
"""

from .config import LayoutConfig, POINTS_PER_INCH, inch_to_pt
from .models import (
    BLACK,
    CardImage,
    Dimensions,
    FillRect,
    ImageFormat,
    LineSegment,
    PagePlan,
    PlacedCard,
    Point,
    RGBColor,
    SheetPlan,
)
from .planner import plan
from .compositor import PageSequence, compose_pages, grid_cell
from .marks import crop_marks, registration_crosshair

__all__ = [
    # Config
    "LayoutConfig",
    "POINTS_PER_INCH",
    "inch_to_pt",
    # Models
    "BLACK",
    "CardImage",
    "Dimensions",
    "FillRect",
    "ImageFormat",
    "LineSegment",
    "PagePlan",
    "PlacedCard",
    "Point",
    "RGBColor",
    "SheetPlan",
    # Functions
    "plan",
    "compose_pages",
    "grid_cell",
    "crop_marks",
    "registration_crosshair",
    "PageSequence",
]
