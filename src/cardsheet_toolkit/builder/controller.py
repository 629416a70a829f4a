"""
Module: builder.controller

Purpose:
    Orchestrate the complete sheet building pipeline.
    Plan → Compose fronts → Compose backs (mirrored) → Render both

Key Functions:
    - build_sheets(): Build from already-loaded card images
    - build_from_directory(): Scan, load and build a card directory

Key Classes:
    - SheetBuildResult: Complete build result

Dependencies:
    - builder.images: Directory scan and image loading
    - builder.layout: Planning and composition
    - builder.output: PDF rendering

Used By:
    - cli: `build` command
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .config import SheetConfig
from .errors import BuildError, ConfigurationError
from .images import load_card_images, scan_card_directory
from .layout import CardImage, PageSequence, SheetPlan, compose_pages, plan
from .output import render_to_pdf

logger = logging.getLogger(__name__)

__all__ = [
    "BuildError",
    "SheetBuildResult",
    "build_from_directory",
    "build_sheets",
]


@dataclass(frozen=True)
class SheetBuildResult:
    """
    Complete build result (immutable).

    Attributes:
        front_pdf: Path to fronts PDF (None if there were no fronts)
        back_pdf: Path to backs PDF (None if there were no backs)
        plan: Sheet geometry used for both documents
        front_page_count: Pages in the fronts PDF
        back_page_count: Pages in the backs PDF
        front_card_count: Front cards placed
        back_card_count: Back cards placed
        warnings: Any warnings during build
        duration_seconds: Wall time for the build

    Example:
        >>> result = build_from_directory(Path("cards/silent"), config)
        >>> print(f"{result.front_page_count} front pages, {result.back_page_count} back pages")
    """
    front_pdf: Optional[Path]
    back_pdf: Optional[Path]
    plan: SheetPlan
    front_page_count: int
    back_page_count: int
    front_card_count: int
    back_card_count: int
    warnings: tuple[str, ...]
    duration_seconds: float


def build_sheets(
    config: SheetConfig,
    fronts: Sequence[CardImage],
    backs: Sequence[CardImage],
) -> SheetBuildResult:
    """
    Build front and back PDFs from loaded card images.

    Pipeline:
    1. Plan the sheet grid once
    2. Compose fronts (normal order) and backs (mirrored rows)
    3. Render each sequence to its own PDF

    Both sequences are composed before anything is written, so a layout
    that cannot hold a card fails without leaving partial output.

    Args:
        config: Build configuration
        fronts: Front images in print order
        backs: Back images, paired with fronts by position

    Returns:
        SheetBuildResult with paths and counts

    Raises:
        ConfigurationError: If the page cannot hold a single card
        AssemblyError: If a PDF cannot be assembled or written
    """
    warnings: List[str] = []
    start_time = time.perf_counter()

    sheet = plan(config.layout_config())
    logger.info(
        f"Sheet grid: {sheet.columns} columns x {sheet.rows} rows "
        f"({sheet.cards_per_page} cards per page)"
    )

    if backs and len(fronts) != len(backs):
        message = (
            f"{len(fronts)} fronts but {len(backs)} backs; "
            "cards after the shorter list will print without a partner"
        )
        logger.warning(message)
        warnings.append(message)

    front_pages = compose_pages(
        fronts,
        sheet,
        mirror=False,
        background_color=config.front_bg_color,
        mark_color=config.front_mark_color,
        mark_thickness=config.mark_thickness_pt,
        draw_crosshair=config.draw_crosshair,
    )
    back_pages = compose_pages(
        backs,
        sheet,
        mirror=config.mirror_backs,
        background_color=config.back_bg_color,
        mark_color=config.back_mark_color,
        mark_thickness=config.mark_thickness_pt,
        draw_crosshair=config.draw_crosshair,
    )

    front_pdf = _render_sheet("front", front_pages, sheet, config.output_front_path, warnings)
    back_pdf = _render_sheet("back", back_pages, sheet, config.output_back_path, warnings)

    duration = time.perf_counter() - start_time
    logger.info(f"Build completed in {duration:.2f}s")

    return SheetBuildResult(
        front_pdf=front_pdf,
        back_pdf=back_pdf,
        plan=sheet,
        front_page_count=len(front_pages),
        back_page_count=len(back_pages),
        front_card_count=front_pages.card_count,
        back_card_count=back_pages.card_count,
        warnings=tuple(warnings),
        duration_seconds=duration,
    )


def build_from_directory(directory: Path, config: SheetConfig) -> SheetBuildResult:
    """
    Build sheets from every card image in a directory.

    Images are split into fronts and backs by name (see
    images.scan_card_directory) and fully loaded before layout starts.

    Raises:
        IngestionError: If the directory or an image cannot be read
        ConfigurationError: If there are no cards, or none fit on a page
        AssemblyError: If a PDF cannot be assembled or written
    """
    sources = scan_card_directory(directory, back_marker=config.back_marker)
    if not sources.fronts and not sources.backs:
        raise ConfigurationError(f"No card images found in {directory}")

    fronts = load_card_images(sources.fronts, back_marker=config.back_marker)
    backs = load_card_images(sources.backs, back_marker=config.back_marker)
    logger.info(f"Loaded {len(fronts)} fronts and {len(backs)} backs")

    return build_sheets(config, fronts, backs)


def _render_sheet(
    side: str,
    pages: PageSequence,
    sheet: SheetPlan,
    output_path: Path,
    warnings: List[str],
) -> Optional[Path]:
    """Render one side, skipping the file when there are no cards."""
    if len(pages) == 0:
        message = f"No {side} cards; {output_path} not written"
        logger.warning(message)
        warnings.append(message)
        return None

    render_to_pdf(pages, sheet.page_size, output_path)
    return output_path
