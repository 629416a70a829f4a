"""
Module: builder.output

Purpose:
    PDF output for composed card sheets.

Key Functions:
    - render_to_pdf(): Write pages to a PDF file
    - render_to_bytes(): Render pages to PDF bytes
"""

from .renderer import render_to_bytes, render_to_pdf

__all__ = [
    "render_to_pdf",
    "render_to_bytes",
]
