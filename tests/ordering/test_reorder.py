"""
Tests for ordering.reorder pure sequence moves.
"""

import pytest

from imagepdf_toolkit.ordering import Direction, reorder, swap_adjacent


class TestReorder:
    """Tests for reorder()."""

    def test_reorder_when_forward_then_intervening_items_shift_up(self):
        assert reorder("abcde", 1, 3) == ("a", "c", "d", "b", "e")

    def test_reorder_when_backward_then_intervening_items_shift_down(self):
        assert reorder("abcde", 4, 0) == ("e", "a", "b", "c", "d")

    def test_reorder_when_same_index_then_unchanged(self):
        assert reorder("abc", 1, 1) == ("a", "b", "c")

    def test_reorder_when_any_move_then_permutation(self):
        items = list(range(6))
        for src in range(6):
            for dst in range(6):
                assert sorted(reorder(items, src, dst)) == items

    @pytest.mark.parametrize("src, dst", [(-1, 0), (0, 3), (3, 0)])
    def test_reorder_when_index_out_of_range_then_raises_error(self, src, dst):
        with pytest.raises(IndexError):
            reorder("abc", src, dst)


class TestSwapAdjacent:
    """Tests for swap_adjacent()."""

    def test_swap_adjacent_when_down_then_swapped_with_next(self):
        assert swap_adjacent("abc", 0, Direction.DOWN) == ("b", "a", "c")

    def test_swap_adjacent_when_up_then_swapped_with_previous(self):
        assert swap_adjacent("abc", 2, Direction.UP) == ("a", "c", "b")

    def test_swap_adjacent_when_at_boundary_then_noop(self):
        assert swap_adjacent("abc", 0, Direction.UP) == ("a", "b", "c")
        assert swap_adjacent("abc", 2, Direction.DOWN) == ("a", "b", "c")
