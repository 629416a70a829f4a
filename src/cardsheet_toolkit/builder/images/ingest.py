"""
Module: builder.images.ingest

Purpose:
    Find card images in a directory and load them for layout.
    Classifies each file as front or back once, from its name:
    a back carries the marker right before the suffix ("card+.png").

Key Functions:
    - scan_card_directory(): List fronts and backs in a directory
    - is_back_name(): Naming convention check
    - load_card_image(): Read and verify one image
    - load_card_images(): Read many images, failing on the first bad one

Key Classes:
    - CardSources: Ordered front and back paths

Dependencies:
    - PIL: Decode check
    - builder.layout.models: CardImage, ImageFormat

Used By:
    - builder.controller: Directory builds
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from ..errors import IngestionError
from ..layout.models import CardImage, ImageFormat

logger = logging.getLogger(__name__)

DEFAULT_BACK_MARKER = "+"
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".png", ".jpg", ".jpeg")

# Pillow names multi-picture JPEGs (common from phone cameras) "MPO"
_DECODED_FORMATS = {
    ImageFormat.PNG: frozenset({"PNG"}),
    ImageFormat.JPEG: frozenset({"JPEG", "MPO"}),
}

_DIGITS = re.compile(r"(\d+)")


@dataclass(frozen=True)
class CardSources:
    """
    Card image paths found in a directory.

    Fronts and backs pair up by position: fronts[i] prints behind backs[i].
    """
    fronts: List[Path] = field(default_factory=list)
    backs: List[Path] = field(default_factory=list)


def natural_sort_key(name: str) -> list:
    """Sort key that orders embedded numbers numerically (card2 < card10)."""
    return [int(part) if part.isdigit() else part.casefold() for part in _DIGITS.split(name)]


def is_back_name(path: Path, back_marker: str = DEFAULT_BACK_MARKER) -> bool:
    """True if the file stem ends with the back marker."""
    return bool(back_marker) and path.stem.endswith(back_marker)


def scan_card_directory(
    directory: Path,
    *,
    back_marker: str = DEFAULT_BACK_MARKER,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> CardSources:
    """
    Split the image files of a directory into fronts and backs.

    Files are returned in natural filename order so pairing is the same
    on every platform. Subdirectories and non-image files are skipped.

    Args:
        directory: Directory to scan (not recursive)
        back_marker: Stem suffix marking a back image
        extensions: Accepted file suffixes (case-insensitive)

    Returns:
        CardSources with ordered fronts and backs

    Raises:
        IngestionError: If the directory does not exist

    Example:
        >>> sources = scan_card_directory(Path("cards/watcher"))
        >>> sources.fronts[0].name, sources.backs[0].name
        ('strike.png', 'strike+.png')
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise IngestionError(f"Card directory not found: {directory}", source=directory)

    accepted = {ext.lower() for ext in extensions}
    files = sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in accepted),
        key=lambda p: natural_sort_key(p.name),
    )

    sources = CardSources()
    for path in files:
        if is_back_name(path, back_marker):
            sources.backs.append(path)
        else:
            sources.fronts.append(path)

    logger.info(
        f"Found {len(sources.fronts)} fronts and {len(sources.backs)} backs in {directory}"
    )
    return sources


def load_card_image(path: Path, *, back_marker: str = DEFAULT_BACK_MARKER) -> CardImage:
    """
    Read one card image and check that it decodes.

    The format is taken from the suffix and must agree with what Pillow
    finds in the file.

    Args:
        path: Image file
        back_marker: Stem suffix marking a back image

    Returns:
        CardImage holding the encoded bytes

    Raises:
        IngestionError: If the file is missing, unreadable, not a
            supported format, or does not decode
    """
    path = Path(path)
    image_format = ImageFormat.from_suffix(path.suffix)
    if image_format is None:
        raise IngestionError(f"Unsupported image type {path.suffix!r}: {path}", source=path)

    try:
        data = path.read_bytes()
    except OSError as e:
        raise IngestionError(f"Cannot read card image {path}: {e}", source=path) from e

    try:
        with Image.open(io.BytesIO(data)) as img:
            detected = img.format
            pixel_size = img.size
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise IngestionError(f"Cannot decode card image {path}: {e}", source=path) from e

    if detected not in _DECODED_FORMATS[image_format]:
        raise IngestionError(
            f"{path} is named as {image_format.value} but contains {detected} data",
            source=path,
        )

    logger.debug(f"Loaded {path.name}: {image_format.value} {pixel_size[0]}x{pixel_size[1]}px")
    return CardImage(
        source=path,
        data=data,
        image_format=image_format,
        is_back=is_back_name(path, back_marker),
        pixel_size=pixel_size,
    )


def load_card_images(
    paths: Iterable[Path],
    *,
    back_marker: str = DEFAULT_BACK_MARKER,
) -> List[CardImage]:
    """Load images in order; the first failure aborts the whole batch."""
    return [load_card_image(p, back_marker=back_marker) for p in paths]
