"""
Module: builder.images.rotation

Purpose:
    Rotate a decoded raster by a multiple of 90 degrees and re-encode it
    as JPEG at a target quality. Quarter turns swap the output width and
    height.

Key Functions:
    - rotate_and_encode(): Rotate + re-encode one raster
    - rotate_raster(): Lossless clockwise rotation

Key Classes:
    - EncodedImage: Encoded bytes with their pixel dimensions

Dependencies:
    - PIL: Image rotation and JPEG encoding

Used By:
    - builder.controller: Per-asset transform
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image

from imagepdf_toolkit.builder.errors import AssemblyError, DecodeError
from imagepdf_toolkit.core.models.assets import VALID_ROTATIONS

logger = logging.getLogger(__name__)

# Clockwise rotation -> PIL transpose (PIL's ROTATE_* are counter-clockwise)
_TRANSPOSE_FOR_ROTATION = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

BACKGROUND_COLOR = (255, 255, 255)


@dataclass(frozen=True)
class EncodedImage:
    """
    Re-encoded raster ready to place on a page.

    Attributes:
        data: JPEG bytes
        width: Pixel width after rotation
        height: Pixel height after rotation
    """

    data: bytes
    width: int
    height: int

    @property
    def byte_size(self) -> int:
        return len(self.data)


def rotate_raster(raster: Image.Image, rotation: int) -> Image.Image:
    """
    Return a new image rotated clockwise by ``rotation`` degrees.

    Args:
        raster: Source image (not modified)
        rotation: 0, 90, 180 or 270

    Raises:
        ValueError: If rotation is not a quarter turn
    """
    if rotation not in VALID_ROTATIONS:
        raise ValueError(f"rotation must be one of {VALID_ROTATIONS}: {rotation}")
    if rotation == 0:
        return raster.copy()
    return raster.transpose(_TRANSPOSE_FOR_ROTATION[rotation])


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto white."""
    if img.mode == "RGB":
        return img
    if img.mode in ("P", "PA"):
        img = img.convert("RGBA")
    if img.mode in ("RGBA", "LA"):
        background = Image.new("RGB", img.size, BACKGROUND_COLOR)
        background.paste(img, mask=img.getchannel("A"))
        return background
    return img.convert("RGB")


def rotate_and_encode(raster: Image.Image, rotation: int, quality: float) -> EncodedImage:
    """
    Rotate a raster and re-encode it as JPEG.

    The rotated surface only lives for the duration of this call.

    Args:
        raster: Decoded raster handle
        rotation: Clockwise rotation in degrees (0/90/180/270)
        quality: Encode quality in [0.1, 1.0]

    Returns:
        EncodedImage with swapped dimensions for 90/270

    Raises:
        DecodeError: If the raster's pixel data cannot be loaded
        AssemblyError: If rotation or encoding fails

    Example:
        >>> encoded = rotate_and_encode(Image.new("RGB", (300, 200)), 90, 0.92)
        >>> (encoded.width, encoded.height)
        (200, 300)
    """
    try:
        raster.load()
    except (OSError, ValueError, SyntaxError) as e:
        raise DecodeError(f"Could not decode image: {e}") from e

    try:
        rotated = rotate_raster(raster, rotation)
    except ValueError as e:
        raise AssemblyError(str(e)) from e

    surface = rotated
    try:
        surface = _flatten(rotated)
        buf = io.BytesIO()
        surface.save(buf, format="JPEG", quality=int(round(quality * 100)))
        width, height = surface.size
    except (OSError, ValueError) as e:
        raise AssemblyError(f"Could not encode image: {e}") from e
    finally:
        if surface is not rotated:
            surface.close()
        rotated.close()

    logger.debug(f"Encoded {width}x{height}px at rotation {rotation}: {buf.tell()} bytes")
    return EncodedImage(data=buf.getvalue(), width=width, height=height)
