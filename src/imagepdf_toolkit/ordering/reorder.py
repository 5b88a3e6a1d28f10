"""
Module: ordering.reorder

Purpose:
    Pure sequence moves shared by pointer, touch and keyboard input.

Key Functions:
    - reorder(): Remove at one index, reinsert at another
    - swap_adjacent(): Swap with the neighbour in a direction

Used By:
    - ordering.engine: OrderingEngine mutations
"""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence, Tuple, TypeVar

T = TypeVar("T")


class Direction(IntEnum):
    """Keyboard/button move direction (index delta)."""

    UP = -1
    DOWN = 1


def _check_index(index: int, length: int, name: str) -> None:
    if not 0 <= index < length:
        raise IndexError(f"{name} {index} out of range for {length} items")


def reorder(items: Sequence[T], from_index: int, to_index: int) -> Tuple[T, ...]:
    """
    Move the item at ``from_index`` so it ends up at ``to_index``.

    Intervening items shift by one. The result is always a permutation
    of ``items``.

    Raises:
        IndexError: If either index is out of range

    Example:
        >>> reorder("abcd", 0, 2)
        ('b', 'c', 'a', 'd')
    """
    _check_index(from_index, len(items), "from_index")
    _check_index(to_index, len(items), "to_index")
    result = list(items)
    if from_index != to_index:
        moved = result.pop(from_index)
        result.insert(to_index, moved)
    return tuple(result)


def swap_adjacent(items: Sequence[T], index: int, direction: Direction) -> Tuple[T, ...]:
    """
    Swap the item at ``index`` with its neighbour in ``direction``.

    No-op when the neighbour would fall outside the sequence.

    Example:
        >>> swap_adjacent("abc", 0, Direction.DOWN)
        ('b', 'a', 'c')
    """
    _check_index(index, len(items), "index")
    target = index + int(direction)
    result = list(items)
    if 0 <= target < len(result):
        result[index], result[target] = result[target], result[index]
    return tuple(result)
