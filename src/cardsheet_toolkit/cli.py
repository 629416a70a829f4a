"""
Command line interface for building card sheets.

Usage:
    cardsheets build cards/watcher --config watcher.json
    cardsheets build cards/silent --page-size 8.5 11 --margin 0.25 --back-bg "#3e5f38"
    cardsheets plan --card-size 2.5 3.5 --page-size 8.5 11
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .builder import BuildError, SheetConfig, build_from_directory, load_config
from .builder.colors import format_color
from .builder.layout import plan

logger = logging.getLogger("cardsheet_toolkit")


def _add_layout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", "-c", type=Path, help="JSON file of options (cardSizeIn, pageSizeIn, ...)")
    parser.add_argument("--card-size", nargs=2, type=float, metavar=("W", "H"), help="Card size in inches")
    parser.add_argument("--page-size", nargs=2, type=float, metavar=("W", "H"), help="Page size in inches")
    parser.add_argument("--margin", type=float, help="Page margin in inches")
    parser.add_argument("--spacing", type=float, help="Gap between cards in inches")
    parser.add_argument("--bleed", type=float, help="Bleed around each card in inches")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log per-card details")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cardsheets",
        description="Lay out card images onto duplex print sheets with crop marks",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build front and back PDFs from a card directory")
    build.add_argument("directory", type=Path, help="Directory of card images (backs end with '+')")
    _add_layout_arguments(build)
    build.add_argument("--front-out", type=Path, help="Fronts PDF path")
    build.add_argument("--back-out", type=Path, help="Backs PDF path")
    build.add_argument("--front-bg", help="Front page background color")
    build.add_argument("--back-bg", help="Back page background color")
    build.add_argument("--front-mark-color", help="Front crop mark color")
    build.add_argument("--back-mark-color", help="Back crop mark color")
    build.add_argument("--no-mirror", action="store_true", help="Keep back rows in front order")
    build.add_argument("--crosshair", action="store_true", help="Draw a registration crosshair at the page center")

    plan_cmd = subparsers.add_parser("plan", help="Show how many cards fit on a page")
    _add_layout_arguments(plan_cmd)

    return parser


def config_from_args(args: argparse.Namespace) -> SheetConfig:
    """Combine the optional config file with command line overrides."""
    config = load_config(args.config) if args.config else SheetConfig()

    overrides = {
        "card_size_in": args.card_size,
        "page_size_in": args.page_size,
        "margin_in": args.margin,
        "spacing_in": args.spacing,
        "bleed_in": args.bleed,
    }
    if args.command == "build":
        overrides.update(
            output_front_path=args.front_out,
            output_back_path=args.back_out,
            front_bg_color=args.front_bg,
            back_bg_color=args.back_bg,
            front_mark_color=args.front_mark_color,
            back_mark_color=args.back_mark_color,
        )
        if args.no_mirror:
            overrides["mirror_backs"] = False
        if args.crosshair:
            overrides["draw_crosshair"] = True
    return config.with_overrides(**overrides)


def _run_build(args: argparse.Namespace, config: SheetConfig) -> None:
    result = build_from_directory(args.directory, config)
    for path in (result.front_pdf, result.back_pdf):
        if path is not None:
            logger.info(f"Generated: {path}")
    for warning in result.warnings:
        logger.warning(f"Warning: {warning}")


def _run_plan(config: SheetConfig) -> None:
    sheet = plan(config.layout_config())
    print(f"Grid:          {sheet.columns} columns x {sheet.rows} rows")
    print(f"Cards/page:    {sheet.cards_per_page}")
    print(f"Grid origin:   ({sheet.grid_origin.x:.2f}, {sheet.grid_origin.y:.2f}) pt")
    print(f"Page size:     {sheet.page_size.width:.2f} x {sheet.page_size.height:.2f} pt")
    print(f"Front colors:  bg={format_color(config.front_bg_color)} marks={format_color(config.front_mark_color)}")
    print(f"Back colors:   bg={format_color(config.back_bg_color)} marks={format_color(config.back_mark_color)}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = config_from_args(args)
    except (OSError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        if args.command == "build":
            _run_build(args, config)
        else:
            _run_plan(config)
    except BuildError as e:
        logger.error(f"Build failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
