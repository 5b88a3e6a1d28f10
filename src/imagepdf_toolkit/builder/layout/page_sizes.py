"""
Module: builder.layout.page_sizes

Purpose:
    Standard paper sizes and orientations for the standard-page layout
    policy. Dimensions are portrait (width, height) in millimetres.

Key Classes:
    - PageSize: A4, A3, Letter, Legal
    - Orientation: portrait / landscape

Dependencies:
    - enum (std)

Used By:
    - builder.config: LayoutSettings
    - builder.layout.geometry: Page dimension lookup
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class Orientation(str, Enum):
    """Page orientation for standard page sizes."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class PageSize(str, Enum):
    """Supported standard page sizes."""

    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"
    LEGAL = "Legal"

    @property
    def portrait_mm(self) -> Tuple[float, float]:
        """(width, height) in millimetres, portrait."""
        return PAGE_SIZES_MM[self]

    def dimensions_mm(self, orientation: Orientation) -> Tuple[float, float]:
        """(width, height) in millimetres for ``orientation``."""
        width, height = self.portrait_mm
        if orientation is Orientation.LANDSCAPE:
            return height, width
        return width, height

    @classmethod
    def parse(cls, value: str) -> "PageSize":
        """Look up a page size by name, case-insensitively."""
        for size in cls:
            if size.value.lower() == value.strip().lower():
                return size
        raise ValueError(f"Unknown page size: {value!r}")


PAGE_SIZES_MM = {
    PageSize.A4: (210.0, 297.0),
    PageSize.A3: (297.0, 420.0),
    PageSize.LETTER: (215.9, 279.4),
    PageSize.LEGAL: (215.9, 355.6),
}
