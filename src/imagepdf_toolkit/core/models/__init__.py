"""
Core Models Package

Immutable, validated data models shared by ingestion, ordering and
assembly.

All models in this package are frozen dataclasses. Changing an asset's
rotation or the selection produces a new instance; the ordering engine
is the only place that swaps instances into the live document.
"""

from .assets import ImageAsset, effective_size, new_asset_id, VALID_ROTATIONS
from .selection import Idle, Selecting, SelectionState, IDLE

__all__ = [
    "ImageAsset",
    "effective_size",
    "new_asset_id",
    "VALID_ROTATIONS",
    "Idle",
    "Selecting",
    "SelectionState",
    "IDLE",
]
