# tests/test_movers.py
"""Tests for bulk-shift detection and true-mover classification."""

from unscramm.diff import AlignmentPair, bulk_shift, classify


def _pairs(*shifts):
    """Build pairs with the given shifts, source indices 0..n-1."""
    return [AlignmentPair(i, i + shift) for i, shift in enumerate(shifts)]


class TestBulkShift:
    """Tests for bulk_shift()."""

    def test_empty(self):
        assert bulk_shift([]) is None

    def test_most_common_shift_wins(self):
        assert bulk_shift(_pairs(1, 1, 1, -2)) == 1

    def test_tie_prefers_smallest_absolute_shift(self):
        assert bulk_shift(_pairs(3, 3, -1, -1)) == -1

    def test_tie_on_absolute_value_prefers_negative(self):
        """Equal counts and equal magnitude fall back to the signed value."""
        pairs = [AlignmentPair(2, 4), AlignmentPair(5, 3)]
        assert bulk_shift(pairs) == -2

    def test_independent_of_order(self):
        pairs = _pairs(2, 0, -2)
        assert bulk_shift(pairs) == bulk_shift(list(reversed(pairs))) == 0


class TestClassify:
    """Tests for classify()."""

    def test_single_deviator_is_highlighted(self):
        """Shifts [+1, +1, +1, -2] flag only the -2 pair."""
        assert classify(_pairs(1, 1, 1, -2)) == {3}

    def test_uniform_shift_flags_nothing(self):
        """A deleted prefix shifts every survivor alike."""
        assert classify(_pairs(-2, -2, -2)) == set()

    def test_empty(self):
        assert classify([]) == set()

    def test_accepts_iterators(self):
        assert classify(iter(_pairs(0, 0, 3))) == {2}
