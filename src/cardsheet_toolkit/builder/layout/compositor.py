"""
Module: builder.layout.compositor

Purpose:
    Arrange an ordered list of card images onto pages of a SheetPlan.
    Cards fill each page row-major from the top-left slot; back sheets
    mirror the column order so they register with the fronts after a
    duplex flip.

Key Functions:
    - compose_pages(): Validate and return a lazy PageSequence
    - grid_cell(): Slot index -> (column, row)

Key Classes:
    - PageSequence: Finite, restartable sequence of PagePlans

Dependencies:
    - builder.layout.models: SheetPlan, CardImage, PagePlan
    - builder.layout.marks: Crop and registration marks

Used By:
    - builder.controller: Front and back sheets
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, Optional, Sequence, Tuple

from ..errors import ConfigurationError
from .marks import crop_marks, registration_crosshair
from .models import BLACK, CardImage, PagePlan, PlacedCard, Point, RGBColor, SheetPlan

logger = logging.getLogger(__name__)


def grid_cell(index: int, columns: int, *, mirror: bool = False) -> Tuple[int, int]:
    """
    Map a slot index within a page to its (column, row).

    Row 0 is the top row. Mirroring reverses the column order within
    each row and leaves rows untouched.
    """
    col = index % columns
    row = index // columns
    if mirror:
        col = columns - 1 - col
    return col, row


def card_position(plan: SheetPlan, col: int, row: int) -> Point:
    """Bottom-left corner of the card in grid cell (col, row)."""
    x = plan.grid_origin.x + col * (plan.card_size.width + plan.spacing)
    y = plan.grid_origin.y + (plan.rows - 1 - row) * (plan.card_size.height + plan.spacing)
    return Point(x, y)


class PageSequence:
    """
    Lazily composed pages for one sheet (fronts or backs).

    Pages are rebuilt from the immutable image tuple on every iteration,
    so the sequence can be iterated any number of times.

    Example:
        >>> pages = compose_pages(images, sheet, mirror=True)
        >>> len(pages)
        2
        >>> [page.placement_count for page in pages]
        [6, 2]
    """

    def __init__(
        self,
        images: Tuple[CardImage, ...],
        plan: SheetPlan,
        *,
        mirror: bool,
        background_color: Optional[RGBColor],
        mark_color: RGBColor,
        mark_thickness: float,
        draw_crosshair: bool,
    ) -> None:
        self.images = images
        self.plan = plan
        self.mirror = mirror
        self.background_color = background_color
        self.mark_color = mark_color
        self.mark_thickness = mark_thickness
        self.draw_crosshair = draw_crosshair

    def __len__(self) -> int:
        if not self.images:
            return 0
        return math.ceil(len(self.images) / self.plan.cards_per_page)

    def __iter__(self) -> Iterator[PagePlan]:
        for page_index in range(len(self)):
            yield self._compose_page(page_index)

    def __getitem__(self, page_index: int) -> PagePlan:
        if page_index < 0:
            page_index += len(self)
        if not 0 <= page_index < len(self):
            raise IndexError(f"page index out of range: {page_index}")
        return self._compose_page(page_index)

    @property
    def card_count(self) -> int:
        return len(self.images)

    def _compose_page(self, page_index: int) -> PagePlan:
        plan = self.plan
        per_page = plan.cards_per_page
        page_slice = self.images[page_index * per_page:(page_index + 1) * per_page]

        placements = []
        for i, image in enumerate(page_slice):
            col, row = grid_cell(i, plan.columns, mirror=self.mirror)
            position = card_position(plan, col, row)
            placements.append(PlacedCard(
                image=image,
                position=position,
                size=plan.card_size,
                bleed=plan.bleed,
                crop_marks=crop_marks(
                    position,
                    plan.card_size,
                    plan.bleed,
                    plan.mark_length,
                    color=self.mark_color,
                    thickness=self.mark_thickness,
                ),
            ))
            logger.debug(
                f"Page {page_index + 1}: {image.name} -> cell ({col}, {row}) "
                f"at ({position.x:.2f}, {position.y:.2f})pt"
            )

        registration = ()
        if self.draw_crosshair:
            registration = registration_crosshair(
                plan.page_size,
                plan.mark_length,
                keep_clear=[placed.bleed_box for placed in placements],
                color=self.mark_color,
                thickness=self.mark_thickness,
            )
            if not registration:
                logger.debug(f"Page {page_index + 1}: crosshair fully covered by cards, omitted")

        return PagePlan(
            index=page_index,
            page_size=plan.page_size,
            placements=tuple(placements),
            background_color=self.background_color,
            registration_marks=registration,
        )


def compose_pages(
    images: Sequence[CardImage],
    plan: SheetPlan,
    *,
    mirror: bool = False,
    background_color: Optional[RGBColor] = None,
    mark_color: Optional[RGBColor] = None,
    mark_thickness: float = 0.5,
    draw_crosshair: bool = False,
) -> PageSequence:
    """
    Lay out card images onto pages.

    Validation happens here, before any page is produced; the returned
    sequence composes pages on demand and cannot fail.

    Args:
        images: Cards in print order
        plan: Sheet geometry from planner.plan()
        mirror: Reverse column order within each row (back sheets)
        background_color: Full-page fill behind the cards
        mark_color: Crop mark color (black when unset)
        mark_thickness: Crop mark stroke width in points
        draw_crosshair: Add a registration crosshair at the page center

    Returns:
        PageSequence with ceil(len(images) / cards_per_page) pages

    Raises:
        ConfigurationError: If images are given but no card fits on a page
    """
    images = tuple(images)
    if images and plan.is_empty:
        raise ConfigurationError(
            f"Cannot place {len(images)} cards: the page holds "
            f"{plan.columns} columns x {plan.rows} rows. "
            "Reduce the card size, margin or spacing, or use a larger page."
        )

    pages = PageSequence(
        images,
        plan,
        mirror=mirror,
        background_color=background_color,
        mark_color=mark_color if mark_color is not None else BLACK,
        mark_thickness=mark_thickness,
        draw_crosshair=draw_crosshair,
    )
    logger.info(
        f"Composed {len(images)} cards onto {len(pages)} pages "
        f"({plan.cards_per_page} per page{', mirrored' if mirror else ''})"
    )
    return pages
