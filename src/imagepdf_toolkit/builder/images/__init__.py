"""
Module: builder.images

Purpose:
    Raster transforms for the assembly pipeline.
    Rotates decoded images by quarter turns and re-encodes them at the
    requested quality.

Key Functions:
    - rotate_and_encode(): Rotate + JPEG re-encode
    - rotate_raster(): Lossless clockwise rotation

Key Classes:
    - EncodedImage: Encoded bytes with pixel dimensions

Dependencies:
    - PIL: Image manipulation

Used By:
    - builder.controller: Per-asset transform
"""

from .rotation import rotate_and_encode, rotate_raster, EncodedImage

__all__ = [
    "rotate_and_encode",
    "rotate_raster",
    "EncodedImage",
]
