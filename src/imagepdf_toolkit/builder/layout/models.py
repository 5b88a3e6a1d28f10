"""
Module: builder.layout.models

Purpose:
    Data models for page geometry. Immutable dataclasses describing the
    physical page and where the image sits on it. All lengths are in
    millimetres with the origin at the page's top-left corner.

Key Classes:
    - Placement: Image rectangle on a page
    - PageGeometry: Page size plus placement

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.geometry: Creates PageGeometry
    - builder.output.renderer: Draws pages from PageGeometry
"""

from __future__ import annotations

from dataclasses import dataclass

from .page_sizes import Orientation


@dataclass(frozen=True)
class Placement:
    """
    Image rectangle on a page (mm, top-left origin).

    Example:
        >>> Placement(10, 10, 190, 277).right
        200
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right edge (x + width)."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge (y + height)."""
        return self.y + self.height


@dataclass(frozen=True)
class PageGeometry:
    """
    Physical page size and image placement for one asset.

    Attributes:
        page_width: Page width in mm
        page_height: Page height in mm
        placement: Image rectangle on the page
    """

    page_width: float
    page_height: float
    placement: Placement

    @property
    def orientation(self) -> Orientation:
        """Orientation implied by the page's own dimensions."""
        if self.page_width > self.page_height:
            return Orientation.LANDSCAPE
        return Orientation.PORTRAIT

    @property
    def fills_page(self) -> bool:
        """True when the image covers the whole page."""
        p = self.placement
        return (p.x, p.y, p.width, p.height) == (0, 0, self.page_width, self.page_height)
