"""
Module: ordering.drag

Purpose:
    Input adapters that turn drag gestures into OrderingEngine.reorder()
    calls. The reorder itself is independent of the input source.

    Pointer drag reorders continuously: whenever the pointer is over a
    different index the dragged asset moves there immediately, so the
    visible order always matches the pending drop position.

    Touch drag reorders once, on release, from the first index to the
    index under the release point. Drag semantics only engage after the
    contact has been held for TOUCH_HOLD_SECONDS; an earlier release is a
    tap and an earlier move is a scroll.

Key Classes:
    - PointerDragSession: Continuous pointer drag
    - TouchDragSession: Hold-to-drag touch gesture

Dependencies:
    - ordering.engine: OrderingEngine

Used By:
    - Visual surfaces wiring input events to the engine
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from .engine import OrderingEngine

logger = logging.getLogger(__name__)

TOUCH_HOLD_SECONDS = 0.5


class PointerDragSession:
    """
    Continuous drag-to-reorder for pointer input.

    Example:
        >>> drag = PointerDragSession(engine)
        >>> drag.start(0)
        >>> drag.over(2)   # page 1 is now page 3
        >>> drag.end()
    """

    def __init__(self, engine: OrderingEngine) -> None:
        self._engine = engine
        self._dragged_index: Optional[int] = None

    @property
    def dragged_index(self) -> Optional[int]:
        """Current index of the dragged asset, None when idle."""
        return self._dragged_index

    @property
    def active(self) -> bool:
        return self._dragged_index is not None

    def start(self, index: int) -> None:
        """
        Begin dragging the asset at ``index``.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self._engine):
            raise IndexError(f"Drag index {index} out of range for {len(self._engine)} items")
        self._dragged_index = index

    def over(self, index: int) -> bool:
        """
        Pointer is over ``index``; move the dragged asset there.

        Returns:
            True if the order changed
        """
        if self._dragged_index is None or index == self._dragged_index:
            return False
        changed = self._engine.reorder(self._dragged_index, index)
        self._dragged_index = index
        return changed

    def end(self) -> None:
        """Finish the drag. The order stays as last shown."""
        self._dragged_index = None


class TouchDragSession:
    """
    Hold-to-drag reorder for touch input.

    Timestamps are seconds from any monotonic clock; they default to
    time.monotonic().

    Example:
        >>> touch = TouchDragSession(engine)
        >>> touch.press(0, at=10.0)
        >>> touch.release(3, at=10.8)   # held 0.8s: page 1 moves to page 4
        True
    """

    def __init__(self, engine: OrderingEngine, hold_seconds: float = TOUCH_HOLD_SECONDS) -> None:
        self._engine = engine
        self._hold_seconds = hold_seconds
        self._start_index: Optional[int] = None
        self._pressed_at: Optional[float] = None
        self._activated = False

    @property
    def pressed(self) -> bool:
        return self._start_index is not None

    @property
    def activated(self) -> bool:
        """True once the hold duration has elapsed."""
        return self._activated

    def press(self, index: int, at: Optional[float] = None) -> None:
        """
        Contact starts on the asset at ``index``.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self._engine):
            raise IndexError(f"Touch index {index} out of range for {len(self._engine)} items")
        self._start_index = index
        self._pressed_at = _now(at)
        self._activated = False

    def move(self, at: Optional[float] = None) -> bool:
        """
        Contact moved.

        Movement before the hold elapsed is a scroll and cancels the
        gesture; after it, the drag stays engaged.

        Returns:
            True if the drag is engaged
        """
        if not self.pressed:
            return False
        if self._held_long_enough(_now(at)):
            self._activated = True
            return True
        logger.debug("Touch moved before hold elapsed, treating as scroll")
        self.cancel()
        return False

    def release(self, index: int, at: Optional[float] = None) -> bool:
        """
        Contact ends over ``index``.

        Returns:
            True if the order changed
        """
        if not self.pressed:
            return False
        start = self._start_index
        engaged = self._activated or self._held_long_enough(_now(at))
        self.cancel()
        if not engaged or start == index:
            return False
        return self._engine.reorder(start, index)

    def cancel(self) -> None:
        """Abandon the gesture without reordering."""
        self._start_index = None
        self._pressed_at = None
        self._activated = False

    def _held_long_enough(self, now: float) -> bool:
        return self._pressed_at is not None and now - self._pressed_at >= self._hold_seconds


def _now(at: Optional[float]) -> float:
    return time.monotonic() if at is None else at
