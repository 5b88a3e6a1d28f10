"""
Module: ordering

Purpose:
    Ownership of the document order and bulk-edit selection, plus the
    input adapters (pointer drag, touch drag, keyboard move) that drive
    it.

Key Classes:
    - OrderingEngine: Document + selection state machine
    - DocumentSnapshot: Read-only, versioned copy for export
    - PointerDragSession / TouchDragSession: Drag adapters
    - Direction: Keyboard/button move direction

Used By:
    - builder.controller: Snapshots the engine during assemble()
    - cli: Builds the document from ingested files
"""

from .reorder import Direction, reorder, swap_adjacent
from .engine import OrderingEngine, DocumentSnapshot, DocumentLockedError
from .drag import PointerDragSession, TouchDragSession, TOUCH_HOLD_SECONDS

__all__ = [
    "Direction",
    "reorder",
    "swap_adjacent",
    "OrderingEngine",
    "DocumentSnapshot",
    "DocumentLockedError",
    "PointerDragSession",
    "TouchDragSession",
    "TOUCH_HOLD_SECONDS",
]
