"""
Module: ordering.engine

Purpose:
    Single owner of the document order and the bulk-edit selection.
    Every reorder, move, rotate, select and delete goes through here.
    Other components only ever see an immutable DocumentSnapshot.

Key Classes:
    - OrderingEngine: Document + selection state machine
    - DocumentSnapshot: Versioned, read-only copy of the order
    - DocumentLockedError: Mutation attempted during an export run

Invariants:
    - Only delete_selected() and remove_single() shrink the id set
    - No operation duplicates an id
    - Selected ids always belong to the document

Dependencies:
    - core.models: ImageAsset, SelectionState
    - core.utils.natural_sort: Batch ordering
    - ordering.reorder: Pure sequence moves

Used By:
    - builder.controller: assemble() snapshots and locks the engine
    - ordering.drag: Pointer and touch drag sessions
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Tuple

from imagepdf_toolkit.builder.estimate import estimate_output_size
from imagepdf_toolkit.core.models import IDLE, ImageAsset, Selecting, SelectionState
from imagepdf_toolkit.core.utils.natural_sort import natural_sorted

from .reorder import Direction, reorder, swap_adjacent

logger = logging.getLogger(__name__)


class DocumentLockedError(Exception):
    """Document mutated while an export run holds it."""
    pass


@dataclass(frozen=True)
class DocumentSnapshot:
    """
    Read-only copy of the document order.

    Attributes:
        assets: Assets in page order
        version: Engine version at the time of the snapshot
    """

    assets: Tuple[ImageAsset, ...]
    version: int

    def __len__(self) -> int:
        return len(self.assets)

    def __iter__(self) -> Iterator[ImageAsset]:
        return iter(self.assets)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(a.id for a in self.assets)


class OrderingEngine:
    """
    Ordered document of assets plus selection state.

    Example:
        >>> engine = OrderingEngine()
        >>> engine.add_batch(load_images([Path("scans.zip")]))
        >>> engine.reorder(3, 0)
        >>> engine.toggle_select(engine.assets[1].id)
        >>> engine.rotate_selected()
    """

    def __init__(self, assets: Iterable[ImageAsset] = ()) -> None:
        self._assets: List[ImageAsset] = []
        self._selection: SelectionState = IDLE
        self._version = 0
        self._locked = False
        initial = list(assets)
        if initial:
            self._append(initial)

    # ─────────────────────────────────────────────────────────────────────
    # Read access
    # ─────────────────────────────────────────────────────────────────────

    @property
    def assets(self) -> Tuple[ImageAsset, ...]:
        """Current order (copy)."""
        return tuple(self._assets)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(a.id for a in self._assets)

    @property
    def version(self) -> int:
        """Incremented on every change to the document."""
        return self._version

    @property
    def locked(self) -> bool:
        """True while an export run holds the document."""
        return self._locked

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[ImageAsset]:
        return iter(self.assets)

    def snapshot(self) -> DocumentSnapshot:
        """Immutable copy of the current order for one export run."""
        return DocumentSnapshot(tuple(self._assets), self._version)

    def index_of(self, asset_id: str) -> int:
        """
        Return the page index of ``asset_id``.

        Raises:
            KeyError: If no asset has that id
        """
        for index, asset in enumerate(self._assets):
            if asset.id == asset_id:
                return index
        raise KeyError(f"No asset with id {asset_id!r}")

    def get(self, asset_id: str) -> ImageAsset:
        return self._assets[self.index_of(asset_id)]

    def estimated_size(self, quality: float) -> int:
        """Advisory output size for the current document."""
        return estimate_output_size(self._assets, quality)

    # ─────────────────────────────────────────────────────────────────────
    # Ingestion and ordering
    # ─────────────────────────────────────────────────────────────────────

    def add_batch(self, assets: Iterable[ImageAsset]) -> Tuple[ImageAsset, ...]:
        """
        Append a newly ingested batch in natural filename order.

        Existing assets keep their current order; only the batch is
        sorted, and it always goes after them.

        Returns:
            The batch in the order it was appended

        Raises:
            ValueError: If an id is already present or repeated in the batch
        """
        self._check_unlocked()
        batch = natural_sorted(assets, key=lambda a: a.display_name)
        if not batch:
            return ()
        self._append(batch)
        logger.info(f"Added {len(batch)} images ({len(self._assets)} total)")
        return tuple(batch)

    def reorder(self, from_index: int, to_index: int) -> bool:
        """
        Move the asset at ``from_index`` to ``to_index``.

        Returns:
            True if the order changed

        Raises:
            IndexError: If either index is out of range
        """
        self._check_unlocked()
        reordered = reorder(self._assets, from_index, to_index)
        if from_index == to_index:
            return False
        self._assets = list(reordered)
        self._bump()
        logger.debug(f"Moved page {from_index + 1} to {to_index + 1}")
        return True

    def move(self, index: int, direction: Direction) -> bool:
        """
        Swap the asset at ``index`` with its neighbour.

        Returns:
            True if a swap happened (False at the sequence boundary)
        """
        self._check_unlocked()
        swapped = list(swap_adjacent(self._assets, index, Direction(direction)))
        if swapped == self._assets:
            return False
        self._assets = swapped
        self._bump()
        return True

    # ─────────────────────────────────────────────────────────────────────
    # Selection
    # ─────────────────────────────────────────────────────────────────────

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def selection_mode(self) -> bool:
        return self._selection.active

    @property
    def selected_ids(self) -> FrozenSet[str]:
        return self._selection.ids

    def is_selected(self, asset_id: str) -> bool:
        return asset_id in self._selection.ids

    def enter_selection_mode(self) -> None:
        self._check_unlocked()
        if not self._selection.active:
            self._selection = Selecting()

    def exit_selection_mode(self) -> None:
        """Leave selection mode, clearing the selection."""
        self._check_unlocked()
        self._selection = IDLE

    def toggle_select(self, asset_id: str) -> bool:
        """
        Flip ``asset_id`` in or out of the selection.

        Enters selection mode when idle.

        Returns:
            True if the asset is now selected

        Raises:
            KeyError: If no asset has that id
        """
        self._check_unlocked()
        self.index_of(asset_id)
        current = self._selection if isinstance(self._selection, Selecting) else Selecting()
        self._selection = current.toggled(asset_id)
        return asset_id in self._selection.ids

    def select_all(self) -> None:
        """Select every asset, or clear the selection if all are selected."""
        self._check_unlocked()
        all_ids = frozenset(self.ids)
        if self._selection.active and all_ids and self._selection.ids == all_ids:
            self._selection = Selecting()
        else:
            self._selection = Selecting(all_ids)

    def deselect_all(self) -> None:
        """Clear the selection, staying in selection mode."""
        self._check_unlocked()
        if self._selection.active:
            self._selection = Selecting()

    # ─────────────────────────────────────────────────────────────────────
    # Bulk and single edits
    # ─────────────────────────────────────────────────────────────────────

    def delete_selected(self) -> Tuple[ImageAsset, ...]:
        """
        Remove every selected asset, keeping survivors in order.

        Clears the selection and leaves selection mode.

        Returns:
            Removed assets in their former order
        """
        self._check_unlocked()
        selected = self._selection.ids
        removed = tuple(a for a in self._assets if a.id in selected)
        self._selection = IDLE
        if removed:
            self._assets = [a for a in self._assets if a.id not in selected]
            self._bump()
            logger.info(f"Deleted {len(removed)} images ({len(self._assets)} remaining)")
        return removed

    def rotate_selected(self) -> int:
        """
        Rotate every selected asset by +90 degrees.

        Order and selection are unchanged.

        Returns:
            Number of assets rotated
        """
        self._check_unlocked()
        selected = self._selection.ids
        if not selected:
            return 0
        self._assets = [a.rotated() if a.id in selected else a for a in self._assets]
        self._bump()
        return len(selected)

    def remove_single(self, asset_id: str) -> ImageAsset:
        """
        Remove one asset (and drop it from the selection).

        Raises:
            KeyError: If no asset has that id
        """
        self._check_unlocked()
        index = self.index_of(asset_id)
        removed = self._assets.pop(index)
        if isinstance(self._selection, Selecting):
            self._selection = self._selection.without([asset_id])
        self._bump()
        logger.debug(f"Removed {removed.display_name}")
        return removed

    def rotate_single(self, asset_id: str) -> ImageAsset:
        """
        Rotate one asset by +90 degrees.

        Returns:
            The rotated asset

        Raises:
            KeyError: If no asset has that id
        """
        self._check_unlocked()
        index = self.index_of(asset_id)
        rotated = self._assets[index].rotated()
        self._assets[index] = rotated
        self._bump()
        return rotated

    # ─────────────────────────────────────────────────────────────────────
    # Export lock
    # ─────────────────────────────────────────────────────────────────────

    @contextmanager
    def exporting(self) -> Iterator[DocumentSnapshot]:
        """
        Hold the document for an export run.

        Every mutation raises DocumentLockedError until the block exits.

        Raises:
            DocumentLockedError: If a run already holds the document
        """
        self._check_unlocked()
        self._locked = True
        try:
            yield self.snapshot()
        finally:
            self._locked = False

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _append(self, batch: List[ImageAsset]) -> None:
        seen: Dict[str, ImageAsset] = {a.id: a for a in self._assets}
        for asset in batch:
            if asset.id in seen:
                raise ValueError(f"Duplicate asset id {asset.id!r} ({asset.display_name})")
            seen[asset.id] = asset
        self._assets.extend(batch)
        self._bump()

    def _bump(self) -> None:
        self._version += 1

    def _check_unlocked(self) -> None:
        if self._locked:
            raise DocumentLockedError("Document is locked while an export is running")
