"""Edit plan derivation.

Turn one alignment between a source and a target string into the edit
operations the animation plays: which letters are deleted, which survivors
move, which letters are inserted, and which movers deserve a highlight.
A deletion and an insertion that land in the same slot are also reported
as a replacement.
"""

from bisect import bisect_left
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from unscramm.diff.alignment import AlignmentPair, align
from unscramm.diff.movers import classify

SOURCE_ID_PREFIX = "src-"
INSERT_ID_PREFIX = "ins-"


def source_letter_id(index: int) -> str:
    """Stable id of the source letter at ``index``."""
    return f"{SOURCE_ID_PREFIX}{index}"


def inserted_letter_id(position: int) -> str:
    """Id of the letter inserted at target ``position``."""
    return f"{INSERT_ID_PREFIX}{position}"


@dataclass(frozen=True)
class Insertion:
    """A target character with no source counterpart."""

    char: str
    position: int


@dataclass(frozen=True)
class Replacement:
    """A deletion and an insertion that fill the same slot (`laber` -> `labor`)."""

    source_index: int
    target_index: int
    deleted_char: str
    inserted_char: str


@dataclass(frozen=True)
class EditPlan:
    """The complete edit plan between two strings.

    Attributes:
        deletions: Source indices to delete, descending so that removing
            them one by one never shifts an index still to be removed.
        insertions: Target characters to insert, ascending by position.
        moves: Surviving pairs whose source and target index differ,
            ordered by target index.
        highlight_indices: Source indices of moves that break formation
            with the bulk shift, ascending.
        pairs: Every surviving pair (aligned and relocated), ordered by
            target index.
        relocated: The subset of pairs recovered after the alignment,
            i.e. survivors that changed order.
        replacements: Deletions paired with the insertion landing in the
            slot they vacate, ascending by source index.

    """

    deletions: tuple[int, ...]
    insertions: tuple[Insertion, ...]
    moves: tuple[AlignmentPair, ...]
    highlight_indices: tuple[int, ...]
    pairs: tuple[AlignmentPair, ...]
    relocated: tuple[AlignmentPair, ...] = ()
    replacements: tuple[Replacement, ...] = ()

    @property
    def target_to_source(self) -> dict[int, int]:
        """Map each surviving target index to its source index."""
        return {pair.target_index: pair.source_index for pair in self.pairs}

    @property
    def mover_ids(self) -> frozenset[str]:
        """Letter ids highlighted during the moving phase."""
        ids = {source_letter_id(pair.source_index) for pair in self.moves}
        ids.update(source_letter_id(index) for index in self.highlight_indices)
        return frozenset(ids)

    @property
    def should_delete(self) -> bool:
        return bool(self.deletions)

    @property
    def should_move(self) -> bool:
        return bool(self.moves)

    @property
    def should_insert(self) -> bool:
        return bool(self.insertions)

    @property
    def is_noop(self) -> bool:
        """True when source and target are already identical."""
        return not (self.deletions or self.insertions or self.moves)


def _min_cost_matching(
    source_indices: list[int], target_indices: list[int]
) -> list[AlignmentPair]:
    """Greedily pair indices of one character, shortest distance first."""
    candidates = sorted(
        (abs(t - s), s, t) for s in source_indices for t in target_indices
    )
    used_source: set[int] = set()
    used_target: set[int] = set()
    pairs: list[AlignmentPair] = []
    for _, s, t in candidates:
        if s in used_source or t in used_target:
            continue
        used_source.add(s)
        used_target.add(t)
        pairs.append(AlignmentPair(s, t))
    return pairs


def _relocate(
    source: str, target: str, anchors: Iterable[AlignmentPair]
) -> list[AlignmentPair]:
    """Pair equal characters the alignment left unmatched.

    The alignment only keeps survivors that stay in order. A letter that
    swaps sides with others (``bag`` -> ``gab``) would otherwise be deleted
    and inserted again instead of moving.
    """
    anchors = list(anchors)
    matched_source = {pair.source_index for pair in anchors}
    matched_target = {pair.target_index for pair in anchors}

    free_source: dict[str, list[int]] = defaultdict(list)
    for index, char in enumerate(source):
        if index not in matched_source:
            free_source[char].append(index)

    free_target: dict[str, list[int]] = defaultdict(list)
    for index, char in enumerate(target):
        if index not in matched_target:
            free_target[char].append(index)

    relocated: list[AlignmentPair] = []
    for char, source_indices in free_source.items():
        target_indices = free_target.get(char)
        if target_indices:
            relocated.extend(_min_cost_matching(source_indices, target_indices))
    return relocated


def _replacements(
    source: str,
    pairs: Iterable[AlignmentPair],
    deletions: Iterable[int],
    insertions: Iterable[Insertion],
) -> list[Replacement]:
    """Pair each deletion with an insertion at the slot it leaves behind.

    The slot of a deleted letter is the number of survivors before it.
    Each insertion fills at most one slot.
    """
    survivor_sources = sorted(pair.source_index for pair in pairs)
    free = {insertion.position: insertion for insertion in insertions}
    replacements: list[Replacement] = []
    for index in sorted(deletions):
        slot = bisect_left(survivor_sources, index)
        insertion = free.pop(slot, None)
        if insertion is not None:
            replacements.append(Replacement(index, insertion.position, source[index], insertion.char))
    return replacements


def build_plan(source: str, target: str) -> EditPlan:
    """Compute the edit plan that turns ``source`` into ``target``.

    The alignment is computed once; deletions, insertions, moves, the
    survivor order and the target-to-source map all derive from it.

    Args:
        source: The string being transformed.
        target: The string it is transformed into.

    Returns:
        The EditPlan. Identical strings give an empty plan.

    """
    anchors = align(source, target)
    relocated = _relocate(source, target, anchors)
    pairs = sorted(anchors + relocated, key=lambda pair: pair.target_index)

    kept_source = {pair.source_index for pair in pairs}
    kept_target = {pair.target_index for pair in pairs}

    deletions = tuple(
        index for index in range(len(source) - 1, -1, -1) if index not in kept_source
    )
    insertions = tuple(
        Insertion(char, index) for index, char in enumerate(target) if index not in kept_target
    )
    moves = tuple(pair for pair in pairs if pair.source_index != pair.target_index)

    moved_sources = {pair.source_index for pair in moves}
    highlight_indices = tuple(sorted(classify(pairs) & moved_sources))

    return EditPlan(
        deletions=deletions,
        insertions=insertions,
        moves=moves,
        highlight_indices=highlight_indices,
        pairs=tuple(pairs),
        relocated=tuple(sorted(relocated, key=lambda pair: pair.target_index)),
        replacements=tuple(_replacements(source, pairs, deletions, insertions)),
    )


def apply_plan(plan: EditPlan, source: str) -> str:
    """Replay a plan on ``source``: deletions, then moves, then insertions.

    Args:
        plan: Plan built for ``source``.
        source: The string the plan was built from.

    Returns:
        The transformed string, equal to the plan's target.

    """
    letters = list(enumerate(source))
    for index in plan.deletions:
        del letters[index]

    source_to_target = {pair.source_index: pair.target_index for pair in plan.pairs}
    letters.sort(key=lambda item: source_to_target[item[0]])

    result = [char for _, char in letters]
    for insertion in plan.insertions:
        result.insert(insertion.position, insertion.char)
    return "".join(result)
