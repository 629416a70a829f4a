"""
Color option parsing.

Accepts CSS names and hex strings (via ReportLab's color table), RGB
lists with components in 0..1, or {"r", "g", "b"} mappings.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from reportlab.lib import colors

from .layout.models import RGBColor


def parse_color(value: Any) -> Optional[RGBColor]:
    """
    Convert a color option to RGBColor.

    Args:
        value: None, "#6c0dbe", "white", [1, 1, 1] or {"r": 1, "g": 1, "b": 1}

    Returns:
        RGBColor, or None when value is None

    Raises:
        ValueError: If the value is not a recognisable color

    Example:
        >>> parse_color("#ffffff")
        RGBColor(red=1.0, green=1.0, blue=1.0)
    """
    if value is None or isinstance(value, RGBColor):
        return value

    if isinstance(value, str):
        try:
            color = colors.toColor(value.strip())
        except ValueError as e:
            raise ValueError(f"Unrecognised color: {value!r}") from e
        return RGBColor(float(color.red), float(color.green), float(color.blue))

    if isinstance(value, Mapping):
        try:
            components = [value["r"], value["g"], value["b"]]
        except KeyError as e:
            raise ValueError(f"Color mapping needs r, g and b keys: {value!r}") from e
    elif isinstance(value, (list, tuple)):
        components = list(value)
    else:
        raise ValueError(f"Unrecognised color: {value!r}")

    if len(components) != 3 or not all(
        isinstance(c, (int, float)) and not isinstance(c, bool) for c in components
    ):
        raise ValueError(f"Color needs three numeric components: {value!r}")
    return RGBColor(*(float(c) for c in components))


def format_color(color: Optional[RGBColor]) -> str:
    """Hex form of a color for logs and the plan command ("none" when unset)."""
    if color is None:
        return "none"
    return "#{:02x}{:02x}{:02x}".format(
        round(color.red * 255), round(color.green * 255), round(color.blue * 255)
    )
