"""
Module: builder

Purpose:
    Card sheet building pipeline.
    Loads card images, plans the page grid, composes front and mirrored
    back pages with crop marks, and renders them to PDF.

Key Functions:
    - build_sheets(): Build from loaded card images
    - build_from_directory(): Main entry point for a card directory
    - load_config(): Read options from JSON

Key Classes:
    - SheetConfig: Configuration for a build run
    - SheetBuildResult: Paths and counts of a finished build

Dependencies:
    - PIL: Image decode checks
    - reportlab: PDF generation

Used By:
    - cardsheet_toolkit.cli: Command line interface
"""

from .config import SheetConfig, load_config
from .errors import AssemblyError, BuildError, ConfigurationError, IngestionError
from .controller import SheetBuildResult, build_from_directory, build_sheets

__all__ = [
    # Config
    "SheetConfig",
    "load_config",
    # Errors
    "BuildError",
    "ConfigurationError",
    "IngestionError",
    "AssemblyError",
    # Controller
    "build_sheets",
    "build_from_directory",
    "SheetBuildResult",
]
