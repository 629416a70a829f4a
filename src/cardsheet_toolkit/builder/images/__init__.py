"""
Module: builder.images

Purpose:
    Card image discovery and loading.

Key Functions:
    - scan_card_directory(): Split a directory into fronts and backs
    - load_card_image(), load_card_images(): Read and verify images
"""

from .ingest import (
    CardSources,
    DEFAULT_BACK_MARKER,
    DEFAULT_EXTENSIONS,
    is_back_name,
    load_card_image,
    load_card_images,
    natural_sort_key,
    scan_card_directory,
)

__all__ = [
    "CardSources",
    "DEFAULT_BACK_MARKER",
    "DEFAULT_EXTENSIONS",
    "is_back_name",
    "load_card_image",
    "load_card_images",
    "natural_sort_key",
    "scan_card_directory",
]
