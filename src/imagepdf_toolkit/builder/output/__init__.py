"""
Module: builder.output

Purpose:
    PDF writing and output handles for the assembly pipeline.
    Appends pages with ReportLab, then either persists the document
    atomically or hands back a revocable preview buffer.

Key Classes:
    - PdfPageWriter: Append-only page writer
    - PersistedDocument: File written by a persist run
    - PreviewHandle: Revocable preview buffer

Dependencies:
    - reportlab: PDF generation
    - fitz (PyMuPDF): Preview rasterization

Used By:
    - builder.controller: Pipeline orchestration
"""

from .renderer import PdfPageWriter
from .persist import PersistedDocument, write_document
from .preview import PreviewHandle, PreviewRevokedError

__all__ = [
    "PdfPageWriter",
    "PersistedDocument",
    "write_document",
    "PreviewHandle",
    "PreviewRevokedError",
]
