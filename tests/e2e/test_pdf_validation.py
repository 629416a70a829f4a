"""
End-to-end PDF validation.

Builds front and back sheets from a placeholder card directory and checks
the printed geometry:
- Page size matches the configuration
- Every back lands behind its front after a flip about the vertical axis
- Crop marks stay outside each card's bleed box

Uses pypdf for page boxes and PyMuPDF for placed images and strokes.
"""

import fitz
import pytest
from pypdf import PdfReader

from cardsheet_toolkit.builder import SheetConfig, build_from_directory

TOLERANCE_PT = 0.01
BLEED_PT = 9.0


@pytest.fixture
def built_sheets(tmp_path, card_directory):
    config = SheetConfig(
        page_size_in=(8.5, 11),
        margin_in=0.25,
        spacing_in=0.125,
        bleed_in=BLEED_PT / 72,
        output_front_path=tmp_path / "cards_fronts.pdf",
        output_back_path=tmp_path / "cards_backs.pdf",
    ).with_overrides(
        front_bg_color=[0, 0, 0],
        back_bg_color=[108 / 255, 13 / 255, 190 / 255],
        front_mark_color="white",
        back_mark_color="white",
    )
    return build_from_directory(card_directory, config)


def _image_boxes(doc, page_index):
    return [fitz.Rect(info["bbox"]) for info in doc[page_index].get_image_info()]


def test_page_size_when_letter_then_612_by_792(built_sheets):
    for path in (built_sheets.front_pdf, built_sheets.back_pdf):
        reader = PdfReader(str(path))
        for page in reader.pages:
            assert float(page.mediabox.width) == pytest.approx(612.0, abs=TOLERANCE_PT)
            assert float(page.mediabox.height) == pytest.approx(792.0, abs=TOLERANCE_PT)


def test_duplex_when_back_flipped_then_aligned_with_front(built_sheets):
    with fitz.open(built_sheets.front_pdf) as fronts, fitz.open(built_sheets.back_pdf) as backs:
        assert fronts.page_count == backs.page_count == 2

        for page_index in range(fronts.page_count):
            front_boxes = _image_boxes(fronts, page_index)
            back_boxes = _image_boxes(backs, page_index)
            page_width = fronts[page_index].rect.width

            assert len(front_boxes) == len(back_boxes)
            for front, back in zip(front_boxes, back_boxes):
                assert page_width - back.x1 == pytest.approx(front.x0, abs=TOLERANCE_PT)
                assert back.y0 == pytest.approx(front.y0, abs=TOLERANCE_PT)


def test_crop_marks_when_rendered_then_outside_bleed_box(built_sheets):
    with fitz.open(built_sheets.front_pdf) as doc:
        page = doc[0]
        boxes = [box + (-BLEED_PT, -BLEED_PT, BLEED_PT, BLEED_PT) for box in _image_boxes(doc, 0)]
        lines = [
            (item[1], item[2])
            for drawing in page.get_drawings()
            if drawing.get("color") is not None
            for item in drawing["items"]
            if item[0] == "l"
        ]

        # Each card is followed by its own eight marks
        assert len(lines) == len(boxes) * 8
        for card_index, box in enumerate(boxes):
            inner = box + (TOLERANCE_PT, TOLERANCE_PT, -TOLERANCE_PT, -TOLERANCE_PT)
            for start, end in lines[card_index * 8:(card_index + 1) * 8]:
                midpoint = fitz.Point((start.x + end.x) / 2, (start.y + end.y) / 2)
                assert not inner.contains(start)
                assert not inner.contains(midpoint)
