"""
Module: builder.output.preview

Purpose:
    Revocable in-memory handle for a document assembled in preview mode.
    A preview is never written to disk on its own; saving it later reuses
    the same bytes that were previewed.

Key Classes:
    - PreviewHandle: Addressable byte buffer with revoke()
    - PreviewRevokedError: Handle used after release

Dependencies:
    - fitz (PyMuPDF): Rasterize pages for a preview surface
    - PIL: Returned page images
    - builder.output.persist: Atomic save

Used By:
    - builder.controller: assemble(mode=PREVIEW)
    - cli: --preview
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

import fitz
from PIL import Image

from .persist import PersistedDocument, write_document

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_DPI = 72


class PreviewRevokedError(Exception):
    """Preview handle was used after revoke()."""
    pass


class PreviewHandle:
    """
    In-memory PDF produced by a preview run.

    The caller owns the buffer and must release it with revoke() (or by
    using the handle as a context manager) once the preview is dismissed.

    Attributes:
        filename: Name the document gets when saved
        page_count: Number of pages in the document

    Example:
        >>> with assemble(engine, settings, OutputMode.PREVIEW) as preview:
        ...     thumb = preview.render_page(0)
        ...     saved = preview.save(Path("out"))
    """

    def __init__(self, filename: str, data: bytes, page_count: int) -> None:
        self.filename = filename
        self.page_count = page_count
        self._data: Optional[bytes] = data

    @property
    def revoked(self) -> bool:
        """True once the buffer has been released."""
        return self._data is None

    @property
    def byte_size(self) -> int:
        return len(self._require())

    def read(self) -> bytes:
        """Return the previewed PDF bytes."""
        return self._require()

    def open_stream(self) -> io.BytesIO:
        """Return a fresh readable stream over the PDF bytes."""
        return io.BytesIO(self._require())

    def save(self, directory: Path) -> PersistedDocument:
        """
        Persist the previewed bytes as ``directory / filename``.

        Raises:
            PreviewRevokedError: If the handle was revoked
            OSError: If the file cannot be written
        """
        return write_document(self._require(), Path(directory) / self.filename, self.page_count)

    def render_page(self, index: int, dpi: int = DEFAULT_PREVIEW_DPI) -> Image.Image:
        """
        Rasterize one page for display.

        Args:
            index: 0-based page index
            dpi: Render resolution

        Returns:
            RGB PIL Image of the page

        Raises:
            IndexError: If index is out of range
            PreviewRevokedError: If the handle was revoked
        """
        data = self._require()
        if not 0 <= index < self.page_count:
            raise IndexError(f"Page {index} out of range (0..{self.page_count - 1})")

        with fitz.open(stream=data, filetype="pdf") as doc:
            pix = doc[index].get_pixmap(dpi=dpi)
            return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)

    def revoke(self) -> None:
        """Release the buffer. Safe to call more than once."""
        if self._data is not None:
            logger.debug(f"Revoked preview {self.filename}")
        self._data = None

    def _require(self) -> bytes:
        if self._data is None:
            raise PreviewRevokedError(f"Preview of {self.filename} has been revoked")
        return self._data

    def __enter__(self) -> "PreviewHandle":
        """Context manager entry."""
        return self

    def __exit__(self, *args) -> None:
        """Context manager exit - release buffer."""
        self.revoke()

    def __repr__(self) -> str:
        state = "revoked" if self.revoked else f"{len(self._data)} bytes"
        return f"PreviewHandle({self.filename!r}, pages={self.page_count}, {state})"
