"""
Module: builder.layout.models

Purpose:
    Data models for sheet layout.
    Immutable dataclasses for geometry, card images, placements, draw
    operations and page plans.

Key Classes:
    - Dimensions, Point: Geometry values
    - RGBColor: Fill and stroke color
    - SheetPlan: Derived grid geometry (points)
    - CardImage: Encoded card image plus its source identity
    - PlacedCard: Card positioned on a page with its crop marks
    - LineSegment, FillRect: Draw operations
    - PagePlan: Complete page layout

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.planner: Creates SheetPlans
    - builder.layout.compositor: Creates PagePlans
    - builder.output.renderer: Consumes draw operations
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Dimensions:
    """Width and height of a rectangle."""
    width: float
    height: float


@dataclass(frozen=True)
class Point:
    """Page coordinate, origin at the bottom-left corner."""
    x: float
    y: float


@dataclass(frozen=True)
class RGBColor:
    """
    RGB color with components in the range 0..1.

    Example:
        >>> RGBColor(108 / 255, 13 / 255, 190 / 255)
    """
    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1: {value}")


BLACK = RGBColor(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class SheetPlan:
    """
    Grid geometry derived from a LayoutConfig (immutable).

    All lengths are in points. A plan with zero columns or rows is valid
    and means nothing fits on the page.

    Attributes:
        columns: Cards per row
        rows: Rows per page
        grid_origin: Bottom-left corner of the centered card grid
        page_size: Page size
        card_size: Card size
        spacing: Gap between cards
        bleed: Bleed beyond each card edge
        mark_length: Crop mark stroke length

    Example:
        >>> sheet = plan(LayoutConfig(page_size=Dimensions(8.5, 11), ...))
        >>> sheet.cards_per_page
        6
    """

    columns: int
    rows: int
    grid_origin: Point
    page_size: Dimensions
    card_size: Dimensions
    spacing: float
    bleed: float
    mark_length: float

    @property
    def cards_per_page(self) -> int:
        """Number of card slots on one page."""
        return self.columns * self.rows

    @property
    def is_empty(self) -> bool:
        """True when no card fits on the page."""
        return self.cards_per_page == 0

    @property
    def grid_size(self) -> Dimensions:
        """Total width and height of the card grid block."""
        return Dimensions(
            self.columns * self.card_size.width + (self.columns - 1) * self.spacing,
            self.rows * self.card_size.height + (self.rows - 1) * self.spacing,
        )


class ImageFormat(Enum):
    """Raster formats that can be embedded in the output document."""

    PNG = "PNG"
    JPEG = "JPEG"

    @classmethod
    def from_suffix(cls, suffix: str) -> Optional["ImageFormat"]:
        """Return the format for a file suffix like '.png', or None."""
        return _SUFFIX_FORMATS.get(suffix.lower())


_SUFFIX_FORMATS = {
    ".png": ImageFormat.PNG,
    ".jpg": ImageFormat.JPEG,
    ".jpeg": ImageFormat.JPEG,
}


@dataclass(frozen=True)
class CardImage:
    """
    Card image ready for layout (immutable).

    The compositor never looks at ``data``; it is handed unchanged to the
    document renderer.

    Attributes:
        source: Path or identifier the image was loaded from
        data: Encoded image bytes
        image_format: Format detected from the source suffix
        is_back: True if the source is named as a card back
        pixel_size: Decoded (width, height) in pixels, if known
    """
    source: Union[Path, str]
    data: bytes = field(repr=False)
    image_format: ImageFormat
    is_back: bool = False
    pixel_size: Optional[Tuple[int, int]] = None

    @property
    def name(self) -> str:
        """Display name of the source (file name for paths)."""
        if isinstance(self.source, Path):
            return self.source.name
        return str(self.source)


@dataclass(frozen=True)
class LineSegment:
    """Straight stroke from start to end."""
    start: Point
    end: Point
    color: RGBColor = BLACK
    thickness: float = 0.5


@dataclass(frozen=True)
class FillRect:
    """Filled rectangle (used for page backgrounds)."""
    x: float
    y: float
    width: float
    height: float
    color: RGBColor


@dataclass(frozen=True)
class PlacedCard:
    """
    A card image positioned on a page.

    Attributes:
        image: The card being placed
        position: Bottom-left corner of the card
        size: Card size (equal to the plan's card size)
        bleed: Bleed used when the crop marks were computed
        crop_marks: Eight corner mark segments around the bleed box
    """

    image: CardImage
    position: Point
    size: Dimensions
    bleed: float = 0.0
    crop_marks: Tuple[LineSegment, ...] = ()

    @property
    def bleed_box(self) -> Tuple[Point, Point]:
        """(bottom-left, top-right) corners of the bleed-expanded card."""
        return (
            Point(self.position.x - self.bleed, self.position.y - self.bleed),
            Point(
                self.position.x + self.size.width + self.bleed,
                self.position.y + self.size.height + self.bleed,
            ),
        )


DrawOperation = Union[FillRect, PlacedCard, LineSegment]


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Attributes:
        index: Page number (0-indexed)
        page_size: Page size in points
        placements: Cards in placement order
        background_color: Full-page fill drawn behind the cards, if any
        registration_marks: Extra marks drawn after all cards

    Example:
        >>> page.placement_count
        6
        >>> [type(op).__name__ for op in page.operations()][:2]
        ['FillRect', 'PlacedCard']
    """

    index: int
    page_size: Dimensions
    placements: Tuple[PlacedCard, ...]
    background_color: Optional[RGBColor] = None
    registration_marks: Tuple[LineSegment, ...] = ()

    @property
    def placement_count(self) -> int:
        """Number of cards on this page."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        """Check if page has no placements."""
        return len(self.placements) == 0

    def operations(self) -> Iterator[DrawOperation]:
        """
        Yield draw operations in rendering order.

        Background first, then each card followed immediately by its
        crop marks, then any registration marks.
        """
        if self.background_color is not None:
            yield FillRect(
                0.0, 0.0, self.page_size.width, self.page_size.height,
                self.background_color,
            )
        for placement in self.placements:
            yield placement
            yield from placement.crop_marks
        yield from self.registration_marks
