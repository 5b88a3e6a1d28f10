"""
Module: builder.config

Purpose:
    Configuration dataclass for one assembly run. Immutable configuration
    with validation on construction.

Key Classes:
    - LayoutSettings: Page sizing policy, quality and output naming

Dependencies:
    - dataclasses (std)
    - builder.layout.page_sizes: PageSize, Orientation

Used By:
    - builder.controller: assemble()
    - builder.layout.geometry: resolve_page()
    - cli: Built from command-line flags
"""

from __future__ import annotations

from dataclasses import dataclass

from imagepdf_toolkit.builder.layout.page_sizes import Orientation, PageSize

DEFAULT_DPI = 300
DEFAULT_QUALITY = 0.92
DEFAULT_FILENAME_BASE = "converted-images"
MIN_QUALITY = 0.1
MAX_QUALITY = 1.0


@dataclass(frozen=True)
class LayoutSettings:
    """
    Configuration for assembling a document (immutable).

    Attributes:
        preserve_size: Size each page to its (rotated) image when True,
            use page_size/orientation when False
        quality: JPEG re-encode quality in [0.1, 1.0]
        dpi: Pixels per inch used to convert pixels to millimetres
        page_size: Standard page size (standard-page policy only)
        orientation: Page orientation (standard-page policy only)
        fit_to_page: Scale-to-fit inside margins when True, stretch to
            the margin box when False (standard-page policy only)
        filename_base: Output file stem

    Example:
        >>> settings = LayoutSettings(preserve_size=False, fit_to_page=True)
        >>> settings.output_filename
        'converted-images.pdf'
    """

    preserve_size: bool = True
    quality: float = DEFAULT_QUALITY
    dpi: int = DEFAULT_DPI
    page_size: PageSize = PageSize.A4
    orientation: Orientation = Orientation.PORTRAIT
    fit_to_page: bool = False
    filename_base: str = DEFAULT_FILENAME_BASE

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not MIN_QUALITY <= self.quality <= MAX_QUALITY:
            raise ValueError(
                f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}: {self.quality}"
            )
        if isinstance(self.dpi, bool) or not isinstance(self.dpi, int) or self.dpi <= 0:
            raise ValueError(f"dpi must be a positive integer: {self.dpi!r}")
        if not isinstance(self.page_size, PageSize):
            raise ValueError(f"page_size must be a PageSize: {self.page_size!r}")
        if not isinstance(self.orientation, Orientation):
            raise ValueError(f"orientation must be an Orientation: {self.orientation!r}")
        if not self.filename_base or not self.filename_base.strip():
            raise ValueError("filename_base must not be empty")
        if "/" in self.filename_base or "\\" in self.filename_base:
            raise ValueError(f"filename_base must not contain path separators: {self.filename_base!r}")

    @property
    def output_filename(self) -> str:
        """Name of the generated PDF."""
        return f"{self.filename_base}.pdf"
