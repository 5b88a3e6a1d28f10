"""
Module: builder.layout.geometry

Purpose:
    Resolve physical page dimensions and image placement for one asset
    under the active layout policy.

    Policies:
    - preserve size: page = image size converted at the configured DPI,
      image covers the whole page
    - standard page + fit: image scaled (up or down) to fit inside the
      margins, aspect ratio preserved, centered
    - standard page + fill: image stretched to the margin box, aspect
      ratio NOT preserved

Key Functions:
    - resolve_page(): Page geometry for an effective image size
    - px_to_mm(): Pixel to millimetre conversion

Dependencies:
    - builder.config: LayoutSettings
    - builder.layout.models: PageGeometry, Placement

Used By:
    - builder.controller: Per-asset page geometry
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import PageGeometry, Placement

if TYPE_CHECKING:
    from imagepdf_toolkit.builder.config import LayoutSettings

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
PAGE_MARGIN_MM = 10.0


def px_to_mm(px: float, dpi: int) -> float:
    """
    Convert pixels to millimetres.

    Example:
        >>> px_to_mm(1200, 300)
        101.6
    """
    return px * MM_PER_INCH / dpi


def resolve_page(width_px: int, height_px: int, settings: LayoutSettings) -> PageGeometry:
    """
    Compute page size and image placement.

    Args:
        width_px: Effective image width (rotation already applied)
        height_px: Effective image height (rotation already applied)
        settings: Active layout settings

    Returns:
        PageGeometry in millimetres

    Raises:
        ValueError: If either dimension is not positive

    Example:
        >>> geo = resolve_page(1200, 1800, LayoutSettings(dpi=300))
        >>> round(geo.page_width, 1), round(geo.page_height, 1)
        (101.6, 152.4)
    """
    if width_px <= 0 or height_px <= 0:
        raise ValueError(f"Image size must be positive: {width_px}x{height_px}")

    image_w_mm = px_to_mm(width_px, settings.dpi)
    image_h_mm = px_to_mm(height_px, settings.dpi)

    if settings.preserve_size:
        return PageGeometry(
            page_width=image_w_mm,
            page_height=image_h_mm,
            placement=Placement(0.0, 0.0, image_w_mm, image_h_mm),
        )

    page_w, page_h = settings.page_size.dimensions_mm(settings.orientation)
    avail_w = page_w - 2 * PAGE_MARGIN_MM
    avail_h = page_h - 2 * PAGE_MARGIN_MM

    if settings.fit_to_page:
        ratio = min(avail_w / image_w_mm, avail_h / image_h_mm)
        final_w = image_w_mm * ratio
        final_h = image_h_mm * ratio
        placement = Placement(
            x=(page_w - final_w) / 2,
            y=(page_h - final_h) / 2,
            width=final_w,
            height=final_h,
        )
        logger.debug(
            f"Fit {width_px}x{height_px}px onto {settings.page_size.value} "
            f"at ratio {ratio:.3f}"
        )
    else:
        # Stretch to the margin box regardless of aspect ratio
        placement = Placement(PAGE_MARGIN_MM, PAGE_MARGIN_MM, avail_w, avail_h)

    return PageGeometry(page_width=page_w, page_height=page_h, placement=placement)
