"""
Module: core.models.assets

Purpose:
    ImageAsset dataclass: one ingested image staged for inclusion in the
    output document. Immutable; rotation changes produce a new instance
    carrying the same id.

Key Classes:
    - ImageAsset: Ingested image with rotation state

Key Functions:
    - effective_size(): Pixel size after applying a rotation
    - new_asset_id(): Unique token for a freshly ingested asset

Dependencies:
    - PIL: Decoded raster handle type
    - dataclasses (std)

Used By:
    - ingest.loader: Creates assets
    - ordering.engine: Holds the ordered sequence
    - builder.controller: Reads assets during assembly
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Tuple

from PIL import Image

# Clockwise rotations an asset may carry
VALID_ROTATIONS = (0, 90, 180, 270)
ROTATION_STEP = 90


def new_asset_id() -> str:
    """Return a unique id for an asset created now."""
    return uuid.uuid4().hex


def effective_size(width: int, height: int, rotation: int) -> Tuple[int, int]:
    """
    Return (width, height) after applying a clockwise rotation.

    Quarter turns swap the axes, half turns do not.

    Example:
        >>> effective_size(1200, 1800, 90)
        (1800, 1200)
    """
    if rotation in (90, 270):
        return height, width
    return width, height


@dataclass(frozen=True)
class ImageAsset:
    """
    One ingested image (immutable).

    Attributes:
        id: Stable unique token for the asset's lifetime
        raster: Decoded raster handle (owned by ingestion, read-only here)
        original_width: Pixel width at decode time
        original_height: Pixel height at decode time
        display_name: Source filename, used for ordering and display
        source_byte_size: Byte length of the encoded source
        rotation: Clockwise rotation in degrees (0/90/180/270)

    Invariants:
        - original_width, original_height > 0
        - rotation in VALID_ROTATIONS

    Example:
        >>> asset = ImageAsset("a1", img, 1200, 1800, "scan.png", 5120)
        >>> asset.rotated().effective_size
        (1800, 1200)
    """

    id: str
    raster: Image.Image = field(compare=False, repr=False)
    original_width: int
    original_height: int
    display_name: str
    source_byte_size: int = 0
    rotation: int = 0

    def __post_init__(self) -> None:
        """Validate asset on construction."""
        if self.original_width <= 0 or self.original_height <= 0:
            raise ValueError(
                f"Image dimensions must be positive: "
                f"{self.original_width}x{self.original_height} ({self.display_name})"
            )
        if self.rotation not in VALID_ROTATIONS:
            raise ValueError(f"rotation must be one of {VALID_ROTATIONS}: {self.rotation}")
        if self.source_byte_size < 0:
            raise ValueError(f"source_byte_size must be non-negative: {self.source_byte_size}")

    @property
    def effective_size(self) -> Tuple[int, int]:
        """Pixel (width, height) with the current rotation applied."""
        return effective_size(self.original_width, self.original_height, self.rotation)

    @property
    def pixel_count(self) -> int:
        """Number of pixels in the decoded raster."""
        return self.original_width * self.original_height

    def rotated(self, degrees: int = ROTATION_STEP) -> "ImageAsset":
        """Return a copy rotated clockwise by ``degrees`` (mod 360)."""
        return replace(self, rotation=(self.rotation + degrees) % 360)
