"""Longest-common-subsequence alignment between two strings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AlignmentPair:
    """A source position matched, in order, to a target position."""

    source_index: int
    target_index: int

    @property
    def shift(self) -> int:
        """Signed displacement from source to target position."""
        return self.target_index - self.source_index


def _suffix_table(source: str, target: str) -> list[list[int]]:
    """Build the LCS length table over suffixes.

    ``table[i][j]`` is the LCS length of ``source[i:]`` and ``target[j:]``.
    Working over suffixes lets the trace walk forward, so the earliest
    equal characters are the ones that get matched.
    """
    rows, cols = len(source), len(target)
    table = [[0] * (cols + 1) for _ in range(rows + 1)]
    for i in range(rows - 1, -1, -1):
        row, below = table[i], table[i + 1]
        char = source[i]
        for j in range(cols - 1, -1, -1):
            if char == target[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])
    return table


def align(source: str, target: str) -> list[AlignmentPair]:
    """Align two strings by their longest common subsequence.

    Among several maximal alignments the result is fixed: equal characters
    are matched as soon as the trace reaches them (diagonal before skip),
    and when both skips keep the optimum the target index advances, so the
    earlier source character stays available for a match.

    Args:
        source: The string being transformed.
        target: The string it is transformed into.

    Returns:
        Matched pairs, strictly increasing in both coordinates. Empty when
        either string is empty or they share no character.

    """
    if not source or not target:
        return []

    table = _suffix_table(source, target)
    pairs: list[AlignmentPair] = []
    i = j = 0
    while i < len(source) and j < len(target):
        if source[i] == target[j]:
            pairs.append(AlignmentPair(i, j))
            i += 1
            j += 1
        elif table[i + 1][j] > table[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs
