"""
Module: core.models.selection

Purpose:
    Tagged selection state for bulk editing. The ordering engine is
    either Idle (no selection mode, nothing selected) or Selecting a set
    of asset ids, so a selection cannot exist outside selection mode.

Key Classes:
    - Idle: Not in selection mode
    - Selecting: In selection mode with a (possibly empty) id set
    - SelectionState: Union of the two

Dependencies:
    - dataclasses (std)

Used By:
    - ordering.engine: Selection operations
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Union


@dataclass(frozen=True)
class Idle:
    """Selection mode is off."""

    @property
    def ids(self) -> FrozenSet[str]:
        return frozenset()

    @property
    def active(self) -> bool:
        return False


@dataclass(frozen=True)
class Selecting:
    """
    Selection mode is on.

    Attributes:
        ids: Asset ids currently marked

    Example:
        >>> state = Selecting(frozenset({"a"}))
        >>> state.toggled("b").ids == {"a", "b"}
        True
    """

    ids: FrozenSet[str] = frozenset()

    @property
    def active(self) -> bool:
        return True

    def toggled(self, asset_id: str) -> "Selecting":
        """Return a state with ``asset_id`` flipped in or out."""
        if asset_id in self.ids:
            return Selecting(self.ids - {asset_id})
        return Selecting(self.ids | {asset_id})

    def without(self, asset_ids: Iterable[str]) -> "Selecting":
        """Return a state with the given ids unmarked."""
        return Selecting(self.ids - frozenset(asset_ids))


SelectionState = Union[Idle, Selecting]

IDLE = Idle()
