"""
Module: builder.config

Purpose:
    Run configuration for building card sheets. Immutable configuration
    with validation on construction, loadable from JSON options.

Key Classes:
    - SheetConfig: Main configuration for a build run

Key Functions:
    - load_config(): Read a SheetConfig from a JSON file

Dependencies:
    - dataclasses (std)
    - json (std)
    - builder.colors: Color option parsing

Used By:
    - builder.controller: Main build controller
    - cli: Command line options
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from os import PathLike
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .colors import parse_color
from .images.ingest import DEFAULT_BACK_MARKER
from .layout.config import DEFAULT_MARK_LENGTH_IN, LayoutConfig
from .layout.models import Dimensions, RGBColor

logger = logging.getLogger(__name__)


# JSON option name -> SheetConfig field
OPTION_NAMES: Dict[str, str] = {
    "cardSizeIn": "card_size_in",
    "pageSizeIn": "page_size_in",
    "marginIn": "margin_in",
    "spacingIn": "spacing_in",
    "bleedIn": "bleed_in",
    "markLengthIn": "mark_length_in",
    "markThicknessPt": "mark_thickness_pt",
    "frontBgColor": "front_bg_color",
    "backBgColor": "back_bg_color",
    "frontMarkColor": "front_mark_color",
    "backMarkColor": "back_mark_color",
    "outputFrontPath": "output_front_path",
    "outputBackPath": "output_back_path",
    "mirrorBacks": "mirror_backs",
    "drawCrosshair": "draw_crosshair",
    "backMarker": "back_marker",
}

_COLOR_FIELDS = ("front_bg_color", "back_bg_color", "front_mark_color", "back_mark_color")
_SIZE_FIELDS = ("card_size_in", "page_size_in")
_PATH_FIELDS = ("output_front_path", "output_back_path")
_NUMBER_FIELDS = ("margin_in", "spacing_in", "bleed_in", "mark_length_in", "mark_thickness_pt")
_BOOL_FIELDS = ("mirror_backs", "draw_crosshair")


@dataclass(frozen=True)
class SheetConfig:
    """
    Configuration for building card sheets (immutable).

    Geometric options are in inches and converted to points once, when
    the sheet is planned.

    Attributes:
        card_size_in: Card (width, height)
        page_size_in: Page (width, height)
        margin_in: Page margin on every side
        spacing_in: Gap between cards
        bleed_in: Bleed beyond each card edge
        mark_length_in: Crop mark stroke length
        mark_thickness_pt: Crop mark stroke width in points
        front_bg_color: Page fill behind front cards (None = no fill)
        back_bg_color: Page fill behind back cards (None = no fill)
        front_mark_color: Crop mark color on fronts (None = black)
        back_mark_color: Crop mark color on backs (None = black)
        output_front_path: Fronts PDF
        output_back_path: Backs PDF
        mirror_backs: Reverse each row on back sheets for duplex printing
        draw_crosshair: Add a page-center registration crosshair
        back_marker: File stem suffix that marks a back image

    Example:
        >>> config = SheetConfig(page_size_in=(8.5, 11), margin_in=0.25)
        >>> config.layout_config().page_size
        Dimensions(width=8.5, height=11.0)
    """

    # Geometry
    card_size_in: Tuple[float, float] = (2.5, 3.5)
    page_size_in: Tuple[float, float] = (12.0, 18.0)
    margin_in: float = 1.0
    spacing_in: float = 0.5
    bleed_in: float = 0.0
    mark_length_in: float = DEFAULT_MARK_LENGTH_IN
    mark_thickness_pt: float = 0.5

    # Colors
    front_bg_color: Optional[RGBColor] = None
    back_bg_color: Optional[RGBColor] = None
    front_mark_color: Optional[RGBColor] = None
    back_mark_color: Optional[RGBColor] = None

    # Output
    output_front_path: Path = Path("cards_fronts.pdf")
    output_back_path: Path = Path("cards_backs.pdf")

    # Behavior
    mirror_backs: bool = True
    draw_crosshair: bool = False
    back_marker: str = DEFAULT_BACK_MARKER

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in _SIZE_FIELDS:
            value = getattr(self, name)
            if len(value) != 2:
                raise ValueError(f"{name} must be (width, height): {value!r}")
        if self.mark_thickness_pt <= 0:
            raise ValueError(f"mark_thickness_pt must be positive: {self.mark_thickness_pt}")
        if not self.back_marker:
            raise ValueError("back_marker must not be empty")
        if Path(self.output_front_path) == Path(self.output_back_path):
            raise ValueError(f"Front and back outputs are the same file: {self.output_front_path}")
        # Raises ValueError for negative lengths
        self.layout_config()

    def layout_config(self) -> LayoutConfig:
        """Layout engine configuration for this run."""
        return LayoutConfig(
            card_size=Dimensions(float(self.card_size_in[0]), float(self.card_size_in[1])),
            page_size=Dimensions(float(self.page_size_in[0]), float(self.page_size_in[1])),
            margin=self.margin_in,
            spacing=self.spacing_in,
            bleed=self.bleed_in,
            mark_length=self.mark_length_in,
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any], *, base: Optional["SheetConfig"] = None) -> "SheetConfig":
        """
        Build a config from camelCase JSON options.

        Args:
            options: Mapping of option names (e.g. "cardSizeIn") to values
            base: Config supplying values for options that are absent

        Returns:
            New SheetConfig

        Raises:
            ValueError: If an option is unknown or has an invalid value
        """
        unknown = sorted(set(options) - set(OPTION_NAMES))
        if unknown:
            raise ValueError(f"Unknown configuration options: {', '.join(unknown)}")

        values = {OPTION_NAMES[key]: value for key, value in options.items()}
        return (base or cls()).with_overrides(**values)

    def with_overrides(self, **values: Any) -> "SheetConfig":
        """
        Copy with the given fields replaced; None values are ignored.

        Values are checked against the field type before replacing, so
        JSON such as `"mirrorBacks": "false"` or `"marginIn": "0.25"` is
        rejected rather than stored.

        Raises:
            ValueError: If a field is unknown or a value has the wrong type
        """
        known = {f.name for f in fields(self)}
        changes: Dict[str, Any] = {}
        for name, value in values.items():
            if name not in known:
                raise ValueError(f"Unknown configuration field: {name}")
            if value is None:
                continue
            changes[name] = _convert_field(name, value)
        return replace(self, **changes)


def _number(name: str, value: Any) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number: {value!r}")
    return float(value)


def _convert_field(name: str, value: Any) -> Any:
    """Convert an option value to its SheetConfig field type."""
    if name in _COLOR_FIELDS:
        return parse_color(value)
    if name in _SIZE_FIELDS:
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"{name} must be (width, height): {value!r}")
        return tuple(_number(name, v) for v in value)
    if name in _NUMBER_FIELDS:
        return _number(name, value)
    if name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be true or false: {value!r}")
        return value
    if name in _PATH_FIELDS:
        if not isinstance(value, (str, PathLike)):
            raise ValueError(f"{name} must be a file path: {value!r}")
        return Path(value)
    if name == "back_marker" and not isinstance(value, str):
        raise ValueError(f"back_marker must be a string: {value!r}")
    return value


def load_config(path: Path) -> SheetConfig:
    """
    Load a SheetConfig from a JSON file of camelCase options.

    Raises:
        ValueError: If the file is not valid JSON or holds invalid options
        OSError: If the file cannot be read
    """
    path = Path(path)
    try:
        options = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(options, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    config = SheetConfig.from_options(options)
    logger.info(f"Loaded configuration from {path}")
    return config
