"""
Module: builder.estimate

Purpose:
    Advisory output-size estimate for the current document and quality.
    A heuristic, not a prediction: each page contributes
    pixel_count * 0.5 * quality bytes plus a fixed page overhead, on top
    of a fixed document overhead.

Key Functions:
    - estimate_output_size(): Estimated PDF size in bytes
    - format_size(): Human-readable byte size

Used By:
    - ordering.engine: estimated_size()
    - cli: --estimate
"""

from __future__ import annotations

from typing import Iterable

from imagepdf_toolkit.core.models.assets import ImageAsset

BYTES_PER_PIXEL = 0.5
PAGE_OVERHEAD_BYTES = 1024
BASE_OVERHEAD_BYTES = 2048


def estimate_output_size(assets: Iterable[ImageAsset], quality: float) -> int:
    """
    Estimate the assembled PDF size.

    Args:
        assets: Assets in the document
        quality: Re-encode quality in [0.1, 1.0]

    Returns:
        Estimated size in bytes (BASE_OVERHEAD_BYTES for an empty document)

    Example:
        >>> estimate_output_size([], 0.92)
        2048
    """
    total = float(BASE_OVERHEAD_BYTES)
    for asset in assets:
        total += asset.pixel_count * BYTES_PER_PIXEL * quality + PAGE_OVERHEAD_BYTES
    return int(round(total))


def format_size(bytes_size: float) -> str:
    """Format bytes to human-readable string (e.g., '1.2 MB').

    Args:
        bytes_size: Size in bytes.

    Returns:
        Formatted string with appropriate unit.
    """
    for unit in ['B', 'KB', 'MB', 'GB']:
        if bytes_size < 1024.0:
            return f"{bytes_size:.1f} {unit}"
        bytes_size /= 1024.0
    return f"{bytes_size:.1f} TB"
