"""
Module: builder

Purpose:
    Document composition pipeline. Rotates and re-encodes each image,
    resolves its page geometry and appends it to a PDF in document
    order, reporting progress along the way.

Key Functions:
    - assemble(): Main entry point for building a document
    - resolve_page(): Page geometry for one image
    - rotate_and_encode(): Rotation transform
    - estimate_output_size(): Advisory size estimate

Key Classes:
    - LayoutSettings: Configuration for one run
    - OutputMode: PERSIST or PREVIEW
    - PreviewHandle / PersistedDocument: Run outputs
    - AssemblyError / DecodeError: Run failures

Dependencies:
    - PIL: Image manipulation
    - reportlab: PDF generation
    - fitz (PyMuPDF): Preview rendering

Used By:
    - cli: Command-line conversion
"""

from .config import LayoutSettings
from .errors import AssemblyError, DecodeError
from .layout import PageSize, Orientation, PageGeometry, Placement, resolve_page
from .images import rotate_and_encode, EncodedImage
from .estimate import estimate_output_size, format_size
from .output import PersistedDocument, PreviewHandle, PreviewRevokedError
from .controller import assemble, iter_assembly, AssemblyProgress, OutputMode, DocumentOutput

__all__ = [
    # Config
    "LayoutSettings",
    "PageSize",
    "Orientation",
    # Geometry
    "PageGeometry",
    "Placement",
    "resolve_page",
    # Transform
    "rotate_and_encode",
    "EncodedImage",
    # Estimate
    "estimate_output_size",
    "format_size",
    # Controller
    "assemble",
    "iter_assembly",
    "AssemblyProgress",
    "OutputMode",
    "DocumentOutput",
    "PersistedDocument",
    "PreviewHandle",
    "PreviewRevokedError",
    "AssemblyError",
    "DecodeError",
]
