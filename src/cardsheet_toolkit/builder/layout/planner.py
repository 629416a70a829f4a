"""
Module: builder.layout.planner

Purpose:
    Derive sheet geometry from a LayoutConfig: how many columns and rows
    of cards fit on the page, and where the centered grid starts.

Key Functions:
    - plan(): LayoutConfig -> SheetPlan

Algorithm:
    1. Convert every length to points
    2. usable = page - 2*margin + spacing (spacing only counts between cards)
    3. columns/rows = floor(usable / (card + spacing)), clamped at 0
    4. Center the grid block on the page

Dependencies:
    - builder.layout.config: LayoutConfig, inch_to_pt
    - builder.layout.models: SheetPlan

Used By:
    - builder.controller: Once per run
    - cli: `plan` command
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache

from .config import LayoutConfig, inch_to_pt
from .models import Dimensions, Point, SheetPlan

logger = logging.getLogger(__name__)


@lru_cache(maxsize=32)
def plan(config: LayoutConfig) -> SheetPlan:
    """
    Compute the card grid for a layout configuration.

    Never fails: a card that does not fit yields a plan with zero
    columns or rows, which callers must treat as "nothing fits".

    Args:
        config: Layout configuration (inches)

    Returns:
        SheetPlan with all lengths in points

    Example:
        >>> sheet = plan(LayoutConfig(
        ...     card_size=Dimensions(2.5, 3.5),
        ...     page_size=Dimensions(8.5, 11),
        ...     margin=0.25, spacing=0.125, bleed=0.125,
        ... ))
        >>> (sheet.columns, sheet.rows)
        (3, 2)
    """
    page_w = inch_to_pt(config.page_size.width)
    page_h = inch_to_pt(config.page_size.height)
    card_w = inch_to_pt(config.card_size.width)
    card_h = inch_to_pt(config.card_size.height)
    margin = inch_to_pt(config.margin)
    spacing = inch_to_pt(config.spacing)
    bleed = inch_to_pt(config.bleed)
    mark_length = inch_to_pt(config.mark_length)

    # The first card in a row or column has no leading gap.
    # Changing this term shifts every existing printed layout.
    usable_w = page_w - 2 * margin + spacing
    usable_h = page_h - 2 * margin + spacing

    columns = max(0, math.floor(usable_w / (card_w + spacing)))
    rows = max(0, math.floor(usable_h / (card_h + spacing)))

    grid_w = columns * card_w + (columns - 1) * spacing
    grid_h = rows * card_h + (rows - 1) * spacing
    origin = Point((page_w - grid_w) / 2, (page_h - grid_h) / 2)

    if columns == 0 or rows == 0:
        logger.warning(
            f"No cards fit: {config.card_size.width}x{config.card_size.height}in card "
            f"on {config.page_size.width}x{config.page_size.height}in page "
            f"with {config.margin}in margin"
        )
    else:
        logger.debug(
            f"Planned {columns}x{rows} grid ({columns * rows} per page), "
            f"origin=({origin.x:.2f}, {origin.y:.2f})pt"
        )

    return SheetPlan(
        columns=columns,
        rows=rows,
        grid_origin=origin,
        page_size=Dimensions(page_w, page_h),
        card_size=Dimensions(card_w, card_h),
        spacing=spacing,
        bleed=bleed,
        mark_length=mark_length,
    )
