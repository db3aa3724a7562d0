"""True-mover classification.

When a prefix is deleted every survivor shifts left by the same amount, and
highlighting all of them as movers would be noise. Only pairs that deviate
from the most common ("bulk") shift are flagged.
"""

from collections import Counter
from collections.abc import Iterable

from unscramm.diff.alignment import AlignmentPair


def bulk_shift(pairs: Iterable[AlignmentPair]) -> int | None:
    """Return the most common shift among pairs.

    Ties go to the smallest absolute shift, then to the smallest signed
    shift, so that the answer never depends on iteration order.

    Args:
        pairs: Matched pairs to tally.

    Returns:
        The bulk shift, or None when there are no pairs.

    """
    counts = Counter(pair.shift for pair in pairs)
    if not counts:
        return None
    return min(counts, key=lambda shift: (-counts[shift], abs(shift), shift))


def classify(pairs: Iterable[AlignmentPair]) -> set[int]:
    """Return source indices of pairs whose shift differs from the bulk shift.

    Args:
        pairs: Every matched pair of the alignment, not only the moves.

    Returns:
        Source indices flagged as true movers. Empty for no pairs or when
        all pairs share one shift.

    """
    pairs = list(pairs)
    bulk = bulk_shift(pairs)
    if bulk is None:
        return set()
    return {pair.source_index for pair in pairs if pair.shift != bulk}
