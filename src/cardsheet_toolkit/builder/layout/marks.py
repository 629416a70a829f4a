"""
Module: builder.layout.marks

Purpose:
    Crop and registration mark geometry.

Key Functions:
    - crop_marks(): Eight L-shaped corner strokes around a bleed box
    - registration_crosshair(): Centered crosshair kept out of card bleed boxes
"""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple

from .models import BLACK, Dimensions, LineSegment, Point, RGBColor


def crop_marks(
    position: Point,
    size: Dimensions,
    bleed: float,
    mark_length: float,
    *,
    color: RGBColor = BLACK,
    thickness: float = 0.5,
) -> Tuple[LineSegment, ...]:
    """
    Build the corner crop marks for one card.

    Each corner of the bleed box gets a horizontal and a vertical stroke
    that meet at the corner and extend away from the card, so no stroke
    enters the bleed box.

    Args:
        position: Bottom-left corner of the card
        size: Card size
        bleed: Bleed beyond each card edge
        mark_length: Length of each stroke
        color: Stroke color
        thickness: Stroke width in points

    Returns:
        Eight segments: top-left, top-right, bottom-left, bottom-right
        (horizontal stroke first at each corner)
    """
    left = position.x - bleed
    right = position.x + size.width + bleed
    bottom = position.y - bleed
    top = position.y + size.height + bleed

    def line(x1: float, y1: float, x2: float, y2: float) -> LineSegment:
        return LineSegment(Point(x1, y1), Point(x2, y2), color, thickness)

    return (
        # top-left
        line(left - mark_length, top, left, top),
        line(left, top, left, top + mark_length),
        # top-right
        line(right, top, right + mark_length, top),
        line(right, top, right, top + mark_length),
        # bottom-left
        line(left - mark_length, bottom, left, bottom),
        line(left, bottom - mark_length, left, bottom),
        # bottom-right
        line(right, bottom, right + mark_length, bottom),
        line(right, bottom - mark_length, right, bottom),
    )


def registration_crosshair(
    page_size: Dimensions,
    mark_length: float,
    *,
    keep_clear: Sequence[Tuple[Point, Point]] = (),
    color: RGBColor = BLACK,
    thickness: float = 0.5,
) -> Tuple[LineSegment, ...]:
    """
    Horizontal and vertical strokes crossing at the page center.

    Each arm extends mark_length either side of the center. Parts of an
    arm that fall inside a keep-clear box (the bleed boxes of the cards
    on the page) are cut away, so the crosshair only prints in gutters
    and margins. An arm that lies entirely over a card disappears.

    Args:
        page_size: Page size in points
        mark_length: Arm length on each side of the center
        keep_clear: (bottom-left, top-right) boxes the strokes must not enter
        color: Stroke color
        thickness: Stroke width in points

    Returns:
        Zero or more axis-aligned segments
    """
    cx = page_size.width / 2
    cy = page_size.height / 2
    arms = (
        (Point(cx - mark_length, cy), Point(cx + mark_length, cy)),
        (Point(cx, cy - mark_length), Point(cx, cy + mark_length)),
    )
    return tuple(
        LineSegment(start, end, color, thickness)
        for arm_start, arm_end in arms
        for start, end in _clear_spans(arm_start, arm_end, keep_clear)
    )


def _clear_spans(
    start: Point,
    end: Point,
    boxes: Sequence[Tuple[Point, Point]],
) -> Iterator[Tuple[Point, Point]]:
    """Pieces of an axis-aligned stroke lying outside every box (edges count as inside)."""
    horizontal = start.y == end.y
    fixed = start.y if horizontal else start.x
    spans = [(start.x, end.x) if horizontal else (start.y, end.y)]

    for lower, upper in boxes:
        if horizontal:
            if not lower.y <= fixed <= upper.y:
                continue
            cut_lo, cut_hi = lower.x, upper.x
        else:
            if not lower.x <= fixed <= upper.x:
                continue
            cut_lo, cut_hi = lower.y, upper.y

        remaining = []
        for lo, hi in spans:
            if cut_hi <= lo or cut_lo >= hi:
                remaining.append((lo, hi))
                continue
            if lo < cut_lo:
                remaining.append((lo, cut_lo))
            if cut_hi < hi:
                remaining.append((cut_hi, hi))
        spans = remaining

    for lo, hi in spans:
        if horizontal:
            yield Point(lo, fixed), Point(hi, fixed)
        else:
            yield Point(fixed, lo), Point(fixed, hi)
