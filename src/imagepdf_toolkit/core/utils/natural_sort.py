"""
Module: core.utils.natural_sort

Purpose:
    Numeric-aware filename ordering. Embedded digit runs compare by
    value ("img2" before "img10"); text runs compare case-insensitively.

Key Functions:
    - natural_key(): Sort key for a display name
    - compare_natural(): Three-way comparison of two names
    - natural_sorted(): Sort any iterable by a name accessor

Dependencies:
    - re (std)

Used By:
    - ingest.loader: Orders a freshly ingested batch
    - ordering.engine: add_batch()
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

_DIGIT_RUN = re.compile(r"(\d+)")


def natural_key(name: str) -> Tuple[Tuple[Tuple[int, Union[int, str]], ...], str]:
    """
    Build a sort key for ``name``.

    Each segment becomes (0, number) for digit runs or (1, casefolded text)
    so numbers sort before letters at the same position. The raw name is
    appended as a tie-breaker ("img01" vs "img1") to keep the order total.

    Example:
        >>> sorted(["img10.png", "img2.png"], key=natural_key)
        ['img2.png', 'img10.png']
    """
    segments = []
    for chunk in _DIGIT_RUN.split(name):
        if not chunk:
            continue
        if chunk.isdigit():
            segments.append((0, int(chunk)))
        else:
            segments.append((1, chunk.casefold()))
    return tuple(segments), name


def compare_natural(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to or after ``b``."""
    key_a, key_b = natural_key(a), natural_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def natural_sorted(
    items: Iterable[T],
    key: Optional[Callable[[T], str]] = None,
) -> List[T]:
    """
    Sort ``items`` by natural filename order.

    Args:
        items: Names, or objects from which ``key`` extracts a name
        key: Accessor returning the name (identity when omitted)

    Returns:
        New sorted list (stable)
    """
    if key is None:
        return sorted(items, key=natural_key)  # type: ignore[arg-type]
    return sorted(items, key=lambda item: natural_key(key(item)))
