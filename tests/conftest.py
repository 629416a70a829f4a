import pytest
import sys
from pathlib import Path
from PIL import Image, ImageColor, ImageDraw

# Add src to sys.path so we can import cardsheet_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from cardsheet_toolkit.builder.layout import (  # noqa: E402
    CardImage,
    Dimensions,
    ImageFormat,
    LayoutConfig,
)


def draw_placeholder_card(path: Path, label: str, hue: int, size=(250, 350)) -> Path:
    """Write a solid-color card with a centered label."""
    color = ImageColor.getrgb(f"hsl({hue % 360}, 60%, 60%)")
    img = Image.new("RGB", size, color=color)
    draw = ImageDraw.Draw(img)
    left, top, right, bottom = draw.textbbox((0, 0), label)
    draw.text(
        ((size[0] - (right - left)) / 2, (size[1] - (bottom - top)) / 2),
        label,
        fill="white",
    )
    fmt = "JPEG" if path.suffix.lower() in (".jpg", ".jpeg") else "PNG"
    img.save(path, format=fmt)
    return path


@pytest.fixture
def card_directory(tmp_path: Path):
    """Directory with 8 fronts (card_N.png) and 8 backs (card_N+.png)."""
    directory = tmp_path / "cards"
    directory.mkdir()
    for i in range(1, 9):
        draw_placeholder_card(directory / f"card_{i}.png", f"FRONT {i}", i * 45)
        draw_placeholder_card(directory / f"card_{i}+.png", f"BACK {i}", i * 45 + 180)
    return directory


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    return draw_placeholder_card(tmp_path / "sample.png", "SAMPLE", 0)


@pytest.fixture
def make_cards():
    """Factory for in-memory CardImages (no pixel data needed for layout)."""
    def _create(count: int, prefix: str = "front", is_back: bool = False):
        return [
            CardImage(
                source=f"{prefix}_{i + 1}",
                data=b"",
                image_format=ImageFormat.PNG,
                is_back=is_back,
            )
            for i in range(count)
        ]
    return _create


@pytest.fixture
def letter_config():
    """Poker cards on US Letter: a 3x2 grid."""
    return LayoutConfig(
        card_size=Dimensions(2.5, 3.5),
        page_size=Dimensions(8.5, 11),
        margin=0.25,
        spacing=0.125,
        bleed=0.125,
    )


@pytest.fixture
def draw_card():
    """The placeholder card writer, for tests that build their own directories."""
    return draw_placeholder_card
