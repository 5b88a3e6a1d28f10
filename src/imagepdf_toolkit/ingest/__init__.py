"""
Module: ingest

Purpose:
    Load image files and zip archives into ImageAssets.

Key Functions:
    - load_images(): Load a batch (natural order)
    - load_image_bytes(): Load one image from bytes

Key Classes:
    - IngestionError: Unreadable input (skipped per file)
"""

from .loader import (
    load_images,
    load_image_bytes,
    iter_archive_images,
    is_image_file,
    is_archive_file,
    mime_type_for,
    IngestionError,
    IMAGE_EXTENSIONS,
)

__all__ = [
    "load_images",
    "load_image_bytes",
    "iter_archive_images",
    "is_image_file",
    "is_archive_file",
    "mime_type_for",
    "IngestionError",
    "IMAGE_EXTENSIONS",
]
