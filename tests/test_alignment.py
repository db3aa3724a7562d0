# tests/test_alignment.py
"""Tests for the longest-common-subsequence alignment."""

from unscramm.diff import AlignmentPair, align


def _as_tuples(pairs):
    return [(pair.source_index, pair.target_index) for pair in pairs]


class TestAlign:
    """Tests for align()."""

    def test_identical_strings_align_fully(self):
        """Every position of identical strings is matched to itself."""
        assert _as_tuples(align("word", "word")) == [(0, 0), (1, 1), (2, 2), (3, 3)]

    def test_empty_inputs(self):
        """An empty side produces no pairs."""
        assert align("", "") == []
        assert align("", "word") == []
        assert align("word", "") == []

    def test_no_shared_characters(self):
        assert align("abc", "xyz") == []

    def test_pairs_strictly_increase(self):
        """Pairs are monotone in both coordinates."""
        pairs = align("recieve", "receive")
        for left, right in zip(pairs, pairs[1:]):
            assert left.source_index < right.source_index
            assert left.target_index < right.target_index

    def test_pairs_match_equal_characters(self):
        source, target = "misspeling", "misspelling"
        for pair in align(source, target):
            assert source[pair.source_index] == target[pair.target_index]

    def test_length_is_lcs_length(self):
        assert len(align("recieve", "receive")) == 6
        assert len(align("apple", "ape")) == 3
        assert len(align("bag", "gab")) == 1

    def test_target_advances_first_on_ties(self):
        """When both skips keep the optimum, the earlier source letter is kept."""
        assert _as_tuples(align("ab", "ba")) == [(0, 1)]
        assert _as_tuples(align("bag", "gab")) == [(0, 2)]
        assert _as_tuples(align("recieve", "receive")) == [
            (0, 0), (1, 1), (2, 2), (3, 4), (5, 5), (6, 6),
        ]

    def test_transposed_pair_keeps_first_source_letter(self):
        assert _as_tuples(align("teh", "the")) == [(0, 0), (1, 2)]

    def test_earliest_equal_characters_are_matched(self):
        """Diagonal steps are taken as soon as characters agree."""
        assert _as_tuples(align("apple", "ape")) == [(0, 0), (1, 1), (4, 2)]

    def test_deterministic(self):
        assert align("kitten", "sitting") == align("kitten", "sitting")


class TestAlignmentPair:
    """Tests for AlignmentPair."""

    def test_shift_is_signed(self):
        assert AlignmentPair(4, 2).shift == -2
        assert AlignmentPair(1, 3).shift == 2
        assert AlignmentPair(5, 5).shift == 0
