"""
Module: builder.layout

Purpose:
    Page geometry for document assembly.
    Converts an asset's effective pixel size into a physical page and
    image placement under the active layout policy.

Key Functions:
    - resolve_page(): Page size and placement for one image

Key Classes:
    - PageGeometry: Page size plus placement (mm)
    - Placement: Image rectangle (mm)
    - PageSize / Orientation: Standard page options

Used By:
    - builder.controller: Main assembly loop
"""

from .page_sizes import PageSize, Orientation, PAGE_SIZES_MM
from .models import PageGeometry, Placement
from .geometry import resolve_page, px_to_mm, PAGE_MARGIN_MM

__all__ = [
    # Page options
    "PageSize",
    "Orientation",
    "PAGE_SIZES_MM",
    # Models
    "PageGeometry",
    "Placement",
    # Functions
    "resolve_page",
    "px_to_mm",
    "PAGE_MARGIN_MM",
]
