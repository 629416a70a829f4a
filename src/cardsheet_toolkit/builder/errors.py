"""
Module: builder.errors

Purpose:
    Exception hierarchy for the sheet build pipeline.

Key Classes:
    - BuildError: Base for all build failures
    - ConfigurationError: Plan cannot hold any card
    - IngestionError: Card image missing or undecodable
    - AssemblyError: PDF assembly rejected a draw operation
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class BuildError(Exception):
    """Error during sheet build pipeline."""
    pass


class ConfigurationError(BuildError):
    """Layout configuration leaves no room for a single card."""
    pass


class IngestionError(BuildError):
    """A declared card image cannot be located or decoded."""

    def __init__(self, message: str, source: Optional[Union[Path, str]] = None) -> None:
        super().__init__(message)
        self.source = source


class AssemblyError(BuildError):
    """The PDF writer rejected a page or card."""

    def __init__(
        self,
        message: str,
        *,
        page_index: Optional[int] = None,
        source: Optional[Union[Path, str]] = None,
    ) -> None:
        super().__init__(message)
        self.page_index = page_index
        self.source = source
