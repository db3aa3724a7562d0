"""Frame script construction.

Convert an edit plan into the ordered, timed snapshots the scheduler plays.
Phases are described by a table of PhaseStep entries consumed by a single
builder loop, so the phase sequence of any plan can be inspected without
running timers.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from unscramm.config import DELETION_HOLD_MS, Phase, PhaseDurations
from unscramm.diff.plan import (
    INSERT_ID_PREFIX,
    EditPlan,
    inserted_letter_id,
    source_letter_id,
)


@dataclass(frozen=True)
class LetterItem:
    """One rendered letter; the id is stable for a survivor across phases."""

    id: str
    char: str


@dataclass(frozen=True)
class AnimationFrame:
    """An immutable, timed snapshot of the letter sequence.

    Attributes:
        phase: Phase tag of the frame.
        letters: Letters in display order.
        duration_ms: Base hold time before the next frame, before speed scaling.
        deleting_ids: Ids marked for deletion, in source order.

    """

    phase: Phase
    letters: tuple[LetterItem, ...]
    duration_ms: float
    deleting_ids: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "".join(item.char for item in self.letters)


@dataclass(frozen=True)
class PlanLetters:
    """Letter snapshots derived once from a plan."""

    idle: tuple[LetterItem, ...]
    after_delete: tuple[LetterItem, ...]
    moving: tuple[LetterItem, ...]
    final: tuple[LetterItem, ...]
    deleting_ids: tuple[str, ...]


def plan_letters(plan: EditPlan, source: str, target: str) -> PlanLetters:
    """Derive the per-phase letter sequences of a plan."""
    deleted = set(plan.deletions)
    idle = tuple(LetterItem(source_letter_id(i), char) for i, char in enumerate(source))
    after_delete = tuple(item for i, item in enumerate(idle) if i not in deleted)
    moving = tuple(idle[pair.source_index] for pair in plan.pairs)

    target_to_source = plan.target_to_source
    final = tuple(
        LetterItem(source_letter_id(target_to_source[j]), char)
        if j in target_to_source
        else LetterItem(inserted_letter_id(j), char)
        for j, char in enumerate(target)
    )
    deleting_ids = tuple(source_letter_id(i) for i in sorted(deleted))
    return PlanLetters(idle, after_delete, moving, final, deleting_ids)


FrameFactory = Callable[[PlanLetters, PhaseDurations, float], tuple[AnimationFrame, ...]]


@dataclass(frozen=True)
class PhaseStep:
    """One entry of the phase table.

    Attributes:
        phase: Tag carried by every frame of the step.
        applies: Whether the step is structurally needed for a plan.
        frames: Builds the step's frames from letters, durations and hold.

    """

    phase: Phase
    applies: Callable[[EditPlan], bool]
    frames: FrameFactory


def _idle_frames(letters: PlanLetters, durations: PhaseDurations, hold_ms: float):
    return (AnimationFrame(Phase.IDLE, letters.idle, durations.idle),)


def _deleting_frames(letters: PlanLetters, durations: PhaseDurations, hold_ms: float):
    # Mark first so the highlight is seen, then remove and hold for the exit
    return (
        AnimationFrame(Phase.DELETING, letters.idle, durations.deleting, letters.deleting_ids),
        AnimationFrame(Phase.DELETING, letters.after_delete, hold_ms, letters.deleting_ids),
    )


def _moving_frames(letters: PlanLetters, durations: PhaseDurations, hold_ms: float):
    return (AnimationFrame(Phase.MOVING, letters.moving, durations.moving),)


def _inserting_frames(letters: PlanLetters, durations: PhaseDurations, hold_ms: float):
    return (AnimationFrame(Phase.INSERTING, letters.final, durations.inserting),)


PHASE_STEPS: tuple[PhaseStep, ...] = (
    PhaseStep(Phase.IDLE, lambda plan: True, _idle_frames),
    PhaseStep(Phase.DELETING, lambda plan: plan.should_delete, _deleting_frames),
    PhaseStep(Phase.MOVING, lambda plan: plan.should_move, _moving_frames),
    PhaseStep(Phase.INSERTING, lambda plan: plan.should_insert, _inserting_frames),
)


def phase_sequence(plan: EditPlan) -> list[Phase]:
    """Phases a plan plays through, final marker included."""
    return [step.phase for step in PHASE_STEPS if step.applies(plan)] + [Phase.FINAL]


def build_script(
    plan: EditPlan,
    source: str,
    target: str,
    durations: PhaseDurations | None = None,
    deletion_hold_ms: float = DELETION_HOLD_MS,
) -> list[AnimationFrame]:
    """Build the ordered frame list for a plan.

    Only structurally necessary phases are emitted. The idle frame always
    comes first and a zero-length final frame, repeating the letters of the
    last content frame, always comes last.

    Args:
        plan: Edit plan built from ``source`` and ``target``.
        source: The string being transformed.
        target: The string it is transformed into.
        durations: Base duration per phase; defaults apply when omitted.
        deletion_hold_ms: Hold after deleted letters are removed.

    Returns:
        Frames in playback order. Equal inputs give equal lists.

    """
    if durations is None:
        durations = PhaseDurations()

    letters = plan_letters(plan, source, target)
    frames: list[AnimationFrame] = []
    for step in PHASE_STEPS:
        if step.applies(plan):
            frames.extend(step.frames(letters, durations, deletion_hold_ms))

    frames.append(AnimationFrame(Phase.FINAL, frames[-1].letters, 0))
    return frames


class LetterRole(Enum):
    """Highlight a presentation layer applies to a letter."""

    NORMAL = "normal"
    DELETION = "deletion"
    MOVE = "move"
    INSERTION = "insertion"


def letter_role(
    phase: Phase,
    item: LetterItem,
    deleting_ids: tuple[str, ...] | frozenset[str],
    mover_ids: frozenset[str],
) -> LetterRole:
    """Return how a letter should be highlighted in the given phase."""
    if phase is Phase.DELETING:
        return LetterRole.DELETION if item.id in deleting_ids else LetterRole.NORMAL
    if phase is Phase.INSERTING:
        return LetterRole.INSERTION if item.id.startswith(INSERT_ID_PREFIX) else LetterRole.NORMAL
    if phase is Phase.MOVING:
        return LetterRole.MOVE if item.id in mover_ids else LetterRole.NORMAL
    return LetterRole.NORMAL
