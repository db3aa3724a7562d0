# tests/test_plan.py
"""Tests for edit plan derivation and replay."""

import pytest

from unscramm.diff import (
    AlignmentPair,
    Insertion,
    Replacement,
    apply_plan,
    build_plan,
    inserted_letter_id,
    source_letter_id,
)

WORD_PAIRS = [
    ("", ""),
    ("", "word"),
    ("word", ""),
    ("word", "word"),
    ("apple", "ape"),
    ("cat", "chart"),
    ("bag", "gab"),
    ("recieve", "receive"),
    ("teh", "the"),
    ("definately", "definitely"),
    ("seperate", "separate"),
    ("occured", "occurred"),
    ("abc", "xyz"),
    ("aaab", "baaa"),
    ("listen", "silent"),
    ("mississippi", "misisipi"),
]


class TestPlanInvariants:
    """Properties that hold for every pair of strings."""

    @pytest.mark.parametrize(("source", "target"), WORD_PAIRS)
    def test_apply_plan_yields_target(self, source, target):
        """Deletions, then moves, then insertions turn source into target."""
        assert apply_plan(build_plan(source, target), source) == target

    @pytest.mark.parametrize(("source", "target"), WORD_PAIRS)
    def test_source_and_target_ranges_are_partitioned(self, source, target):
        plan = build_plan(source, target)
        pair_sources = [pair.source_index for pair in plan.pairs]
        pair_targets = [pair.target_index for pair in plan.pairs]
        insert_positions = [insertion.position for insertion in plan.insertions]

        assert sorted(list(plan.deletions) + pair_sources) == list(range(len(source)))
        assert sorted(insert_positions + pair_targets) == list(range(len(target)))

    @pytest.mark.parametrize(("source", "target"), WORD_PAIRS)
    def test_survivors_keep_their_character(self, source, target):
        for pair in build_plan(source, target).pairs:
            assert source[pair.source_index] == target[pair.target_index]

    @pytest.mark.parametrize(("source", "target"), WORD_PAIRS)
    def test_orderings(self, source, target):
        plan = build_plan(source, target)
        assert list(plan.deletions) == sorted(plan.deletions, reverse=True)
        positions = [insertion.position for insertion in plan.insertions]
        assert positions == sorted(positions)
        assert list(plan.highlight_indices) == sorted(plan.highlight_indices)

    @pytest.mark.parametrize(("source", "target"), WORD_PAIRS)
    def test_highlights_are_moves(self, source, target):
        plan = build_plan(source, target)
        moved = {move.source_index for move in plan.moves}
        assert set(plan.highlight_indices) <= moved

    def test_deterministic(self):
        assert build_plan("definately", "definitely") == build_plan("definately", "definitely")


class TestPlanExamples:
    """Plans for specific word pairs."""

    def test_identical_strings_give_empty_plan(self):
        plan = build_plan("word", "word")
        assert plan.deletions == ()
        assert plan.insertions == ()
        assert plan.moves == ()
        assert plan.highlight_indices == ()
        assert plan.is_noop

    def test_empty_source_inserts_everything(self):
        plan = build_plan("", "word")
        assert [(i.char, i.position) for i in plan.insertions] == [
            ("w", 0), ("o", 1), ("r", 2), ("d", 3),
        ]
        assert plan.deletions == ()
        assert plan.moves == ()

    def test_empty_target_deletes_everything(self):
        plan = build_plan("word", "")
        assert plan.deletions == (3, 2, 1, 0)
        assert plan.insertions == ()
        assert plan.moves == ()

    def test_apple_to_ape(self):
        """The doubled p and the l go; only the gap-closing e moves."""
        plan = build_plan("apple", "ape")
        assert plan.deletions == (3, 2)
        assert plan.insertions == ()
        assert plan.moves == (AlignmentPair(4, 2),)
        assert plan.highlight_indices == (4,)
        assert plan.relocated == ()

    def test_cat_to_chart(self):
        plan = build_plan("cat", "chart")
        assert plan.insertions == (Insertion("h", 1), Insertion("r", 3))
        assert plan.deletions == ()

    def test_bag_to_gab_moves_letters(self):
        """Swapped letters survive as moves instead of delete and insert."""
        plan = build_plan("bag", "gab")
        assert plan.deletions == ()
        assert plan.insertions == ()
        assert plan.moves == (AlignmentPair(2, 0), AlignmentPair(0, 2))
        # Shifts -2, 0, +2 tie; the bulk is 0 so both ends are highlighted
        assert plan.highlight_indices == (0, 2)
        assert set(plan.relocated) == {AlignmentPair(2, 0), AlignmentPair(1, 1)}

    def test_transposition(self):
        plan = build_plan("recieve", "receive")
        assert plan.deletions == ()
        assert plan.insertions == ()
        assert plan.moves == (AlignmentPair(4, 3), AlignmentPair(3, 4))
        assert plan.highlight_indices == (3, 4)
        assert plan.relocated == (AlignmentPair(4, 3),)

    def test_relocation_prefers_nearest_letter(self):
        plan = build_plan("aaab", "baaa")
        assert apply_plan(plan, "aaab") == "baaa"
        assert plan.deletions == ()
        assert plan.insertions == ()
        assert AlignmentPair(3, 0) in plan.moves


class TestReplacements:
    """Tests for deletions paired with insertions in the same slot."""

    def test_laber_to_labor(self):
        """The e gives way to an o at the same position."""
        plan = build_plan("laber", "labor")
        assert plan.deletions == (3,)
        assert plan.insertions == (Insertion("o", 3),)
        assert plan.replacements == (Replacement(3, 3, "e", "o"),)

    def test_doog_to_dog_is_a_pure_deletion(self):
        plan = build_plan("doog", "dog")
        assert len(plan.deletions) == 1
        assert plan.insertions == ()
        assert plan.replacements == ()

    def test_insert_only_and_delete_only(self):
        assert build_plan("", "word").replacements == ()
        assert build_plan("word", "").replacements == ()

    def test_frames_are_unchanged(self):
        """Replacements describe the plan; the deletions and insertions still play."""
        plan = build_plan("cat", "cut")
        assert plan.replacements == (Replacement(1, 1, "a", "u"),)
        assert plan.should_delete
        assert plan.should_insert
        assert apply_plan(plan, "cat") == "cut"

    @pytest.mark.parametrize(("source", "target"), WORD_PAIRS)
    def test_replacements_pair_planned_edits(self, source, target):
        plan = build_plan(source, target)
        insertions = {insertion.position: insertion.char for insertion in plan.insertions}
        sources = [replacement.source_index for replacement in plan.replacements]
        targets = [replacement.target_index for replacement in plan.replacements]
        assert sources == sorted(sources)
        assert len(set(targets)) == len(targets)
        for replacement in plan.replacements:
            assert replacement.source_index in plan.deletions
            assert source[replacement.source_index] == replacement.deleted_char
            assert insertions[replacement.target_index] == replacement.inserted_char


class TestPlanViews:
    """Tests for derived EditPlan views."""

    def test_target_to_source(self):
        plan = build_plan("apple", "ape")
        assert plan.target_to_source == {0: 0, 1: 1, 2: 4}

    def test_mover_ids(self):
        plan = build_plan("bag", "gab")
        assert plan.mover_ids == frozenset({"src-0", "src-2"})

    def test_phase_flags(self):
        plan = build_plan("cat", "chart")
        assert plan.should_insert
        assert plan.should_move
        assert not plan.should_delete

    def test_letter_ids(self):
        assert source_letter_id(3) == "src-3"
        assert inserted_letter_id(0) == "ins-0"
