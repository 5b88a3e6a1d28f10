"""
Module: builder.output.renderer

Purpose:
    Append-only PDF writer using ReportLab. Each call to add_page()
    appends one page sized and populated from a PageGeometry; pages can
    never be reordered after they are appended.

Key Classes:
    - PdfPageWriter: Incremental in-memory PDF builder

Dependencies:
    - reportlab: PDF generation
    - builder.layout.models: PageGeometry

Used By:
    - builder.controller: Assembly loop
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from imagepdf_toolkit.builder.images.rotation import EncodedImage
from imagepdf_toolkit.builder.layout.models import PageGeometry

logger = logging.getLogger(__name__)

PRODUCER_NAME = "Image to PDF Toolkit"


def _get_creator() -> str:
    """Get creator string with current version number."""
    try:
        from imagepdf_toolkit import __version__
        version = __version__
    except ImportError:
        version = "unknown"
    return f"{PRODUCER_NAME} v{version}"


class PdfPageWriter:
    """
    Build a PDF in memory one page at a time.

    Page sizes are set per page, so a preserve-size document can mix
    portrait and landscape pages.

    Example:
        >>> writer = PdfPageWriter(title="scans")
        >>> writer.add_page(geometry, encoded)
        >>> pdf_bytes = writer.finish()
    """

    def __init__(self, *, title: Optional[str] = None) -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(self._buffer)
        self._canvas.setCreator(_get_creator())
        if title:
            self._canvas.setTitle(title)
        self._page_count = 0
        self._finished = False

    @property
    def page_count(self) -> int:
        """Number of pages appended so far."""
        return self._page_count

    def add_page(self, geometry: PageGeometry, image: EncodedImage) -> None:
        """
        Append a page and draw ``image`` at the geometry's placement.

        Args:
            geometry: Page size and placement in millimetres
            image: Encoded JPEG to draw

        Raises:
            RuntimeError: If the writer has already been finished
        """
        if self._finished:
            raise RuntimeError("Cannot add pages to a finished document")

        page_w_pt = geometry.page_width * mm
        page_h_pt = geometry.page_height * mm
        self._canvas.setPageSize((page_w_pt, page_h_pt))

        placement = geometry.placement
        x_pt = placement.x * mm
        y_pt = _transform_y(page_h_pt, placement.y * mm, placement.height * mm)

        self._canvas.drawImage(
            ImageReader(io.BytesIO(image.data)),
            x_pt,
            y_pt,
            width=placement.width * mm,
            height=placement.height * mm,
        )
        self._canvas.showPage()
        self._page_count += 1

        logger.debug(
            f"Appended page {self._page_count}: "
            f"{geometry.page_width:.1f}x{geometry.page_height:.1f}mm"
        )

    def finish(self) -> bytes:
        """Close the document and return the PDF bytes."""
        if not self._finished:
            self._canvas.save()
            self._finished = True
        return self._buffer.getvalue()


def _transform_y(page_height_pt: float, y_pt_top: float, height_pt: float) -> float:
    """
    Convert a top-down Y coordinate to ReportLab's bottom-up Y.

    Args:
        page_height_pt: Page height in points
        y_pt_top: Distance from the page top in points
        height_pt: Height of the element in points

    Returns:
        Y position of the element's bottom edge from the page bottom
    """
    return page_height_pt - y_pt_top - height_pt
