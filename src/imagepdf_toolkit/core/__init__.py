"""
Image to PDF Toolkit Core Package

Shared data models and utilities. These models are the single source of
truth for ingestion, ordering and assembly.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - Assets are frozen dataclasses; a rotation creates a new instance
     with the same id.

2. **Tagged Selection State**
   - `Idle | Selecting(ids)`: a selection outside selection mode
     cannot be represented.

3. **Natural Ordering**
   - New batches are ordered by filename with numeric-aware comparison
     before they join the document.
"""

from .models import ImageAsset, Idle, Selecting, SelectionState, effective_size
from .utils import natural_key, natural_sorted

__all__ = [
    "ImageAsset",
    "Idle",
    "Selecting",
    "SelectionState",
    "effective_size",
    "natural_key",
    "natural_sorted",
]
