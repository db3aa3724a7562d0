"""Diff engine: alignment, true-mover classification and edit plans.

Everything in this package is a pure function of the two input strings.
"""

from unscramm.diff.alignment import AlignmentPair, align
from unscramm.diff.movers import bulk_shift, classify
from unscramm.diff.plan import (
    EditPlan,
    Insertion,
    Replacement,
    apply_plan,
    build_plan,
    inserted_letter_id,
    source_letter_id,
)

__all__ = [
    # Alignment
    "AlignmentPair",
    "align",
    # Movers
    "bulk_shift",
    "classify",
    # Plan
    "EditPlan",
    "Insertion",
    "Replacement",
    "apply_plan",
    "build_plan",
    "inserted_letter_id",
    "source_letter_id",
]
