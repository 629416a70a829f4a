"""
Module: builder.output.renderer

Purpose:
    Render composed pages to PDF using ReportLab.
    Each PagePlan becomes one PDF page; its draw operations are replayed
    in order (background, card image + crop marks per card, registration
    marks).

Key Functions:
    - render_to_pdf(): Write pages to a PDF file
    - render_to_bytes(): Render pages to in-memory PDF bytes

Dependencies:
    - reportlab: PDF generation
    - builder.layout.models: PagePlan and draw operations

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict, Iterable

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..errors import AssemblyError
from ..layout.models import (
    CardImage,
    Dimensions,
    FillRect,
    LineSegment,
    PagePlan,
    PlacedCard,
)

logger = logging.getLogger(__name__)


def render_to_pdf(
    pages: Iterable[PagePlan],
    page_size: Dimensions,
    output_path: Path,
) -> int:
    """
    Render pages to a PDF file.

    Args:
        pages: Page plans in print order
        page_size: Page size in points
        output_path: Path to write PDF (parent directories are created)

    Returns:
        Number of pages written

    Raises:
        AssemblyError: If a card cannot be embedded or the file cannot be written

    Example:
        >>> render_to_pdf(front_pages, sheet.page_size, Path("cards_fronts.pdf"))
        2
    """
    data, page_count = _render(pages, page_size)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as e:
        raise AssemblyError(f"Cannot write {output_path}: {e}") from e

    logger.info(f"Rendered {page_count} pages to {output_path}")
    return page_count


def render_to_bytes(pages: Iterable[PagePlan], page_size: Dimensions) -> bytes:
    """Render pages to PDF bytes without touching the filesystem."""
    data, _ = _render(pages, page_size)
    return data


def _render(pages: Iterable[PagePlan], page_size: Dimensions) -> tuple[bytes, int]:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(page_size.width, page_size.height))

    # One reader per card image so repeated cards are embedded once
    readers: Dict[CardImage, ImageReader] = {}
    page_count = 0

    for page in pages:
        _render_page(c, page, readers)
        c.showPage()
        page_count += 1

    if page_count == 0:
        logger.warning("No pages to render, creating empty PDF")

    c.save()
    return buf.getvalue(), page_count


def _render_page(
    c: canvas.Canvas,
    page: PagePlan,
    readers: Dict[CardImage, ImageReader],
) -> None:
    """
    Replay one page's draw operations on the canvas.

    Args:
        c: ReportLab canvas
        page: Page plan
        readers: ImageReader cache keyed by card image
    """
    for op in page.operations():
        if isinstance(op, FillRect):
            _draw_fill(c, op)
        elif isinstance(op, PlacedCard):
            _draw_card(c, op, page.index, readers)
        elif isinstance(op, LineSegment):
            _draw_line(c, op)
        else:
            raise AssemblyError(
                f"Unsupported draw operation {type(op).__name__} on page {page.index + 1}",
                page_index=page.index,
            )


def _draw_fill(c: canvas.Canvas, rect: FillRect) -> None:
    c.saveState()
    color = rect.color
    c.setFillColorRGB(color.red, color.green, color.blue)
    c.rect(rect.x, rect.y, rect.width, rect.height, stroke=0, fill=1)
    c.restoreState()


def _draw_line(c: canvas.Canvas, segment: LineSegment) -> None:
    c.saveState()
    color = segment.color
    c.setStrokeColorRGB(color.red, color.green, color.blue)
    c.setLineWidth(segment.thickness)
    c.line(segment.start.x, segment.start.y, segment.end.x, segment.end.y)
    c.restoreState()


def _draw_card(
    c: canvas.Canvas,
    placed: PlacedCard,
    page_index: int,
    readers: Dict[CardImage, ImageReader],
) -> None:
    """
    Draw a card image stretched to its slot.

    Transparent PNG regions are masked so the page background shows
    through.
    """
    image = placed.image
    try:
        reader = readers.get(image)
        if reader is None:
            reader = _image_reader(image)
            readers[image] = reader
        c.drawImage(
            reader,
            placed.position.x,
            placed.position.y,
            width=placed.size.width,
            height=placed.size.height,
            mask="auto",
        )
    except Exception as e:
        raise AssemblyError(
            f"Cannot embed {image.name} on page {page_index + 1}: {e}",
            page_index=page_index,
            source=image.source,
        ) from e


def _image_reader(image: CardImage) -> ImageReader:
    """
    Wrap encoded card bytes for ReportLab.

    Args:
        image: Card image with PNG or JPEG bytes

    Returns:
        ImageReader for use with canvas.drawImage
    """
    return ImageReader(io.BytesIO(image.data))
