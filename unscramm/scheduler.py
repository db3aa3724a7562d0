"""Phase scheduler: timed, cancellable playback of a frame script.

The scheduler is the only stateful piece of unscramm. It owns the plan and
frames of the current words, the visible AnimationState, and the run state
of at most one active playback: a re-entrancy flag and one RunToken.
Playback runs cooperatively on the host event loop through anyio and only
suspends at frame boundaries.

Events are plain dataclasses delivered through a single ``on_event``
callback; every committed visual state goes to ``on_state``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

import anyio
import anyio.lowlevel

from unscramm.config import AnimationConfig, Phase
from unscramm.diff.plan import EditPlan, build_plan
from unscramm.script import AnimationFrame, LetterItem, build_script

logger = logging.getLogger(__name__)


# =============================================================================
# Events
# =============================================================================


@dataclass
class RunStarted:
    """A run began playing."""

    generation: int


@dataclass
class PhaseChanged:
    """The run entered a new phase."""

    generation: int
    phase: Phase


@dataclass
class RunCompleted:
    """Final event of a run that played to the end."""

    generation: int


SchedulerEvent = RunStarted | PhaseChanged | RunCompleted


class RunOutcome(Enum):
    """How a call to PhaseScheduler.start() ended."""

    COMPLETED = "completed"
    # Cancelled or reset mid-run; no completion was delivered. Not a failure.
    ABORTED = "aborted"
    # Another run was already active; this request was dropped.
    SKIPPED = "skipped"


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True)
class AnimationState:
    """What the presentation layer shows right now."""

    phase: Phase
    letters: tuple[LetterItem, ...]
    deleting_ids: frozenset[str] = frozenset()

    @classmethod
    def from_frame(cls, frame: AnimationFrame) -> AnimationState:
        return cls(frame.phase, frame.letters, frozenset(frame.deleting_ids))

    @property
    def text(self) -> str:
        return "".join(item.char for item in self.letters)


@dataclass
class RunToken:
    """Cancellation token owned by exactly one run.

    Attributes:
        generation: Sequence number of the run within its scheduler.
        cancelled: Set once by cancel(); checked at every suspension point.
        scope: Cancel scope wrapping the run's waits.

    """

    generation: int
    cancelled: bool = False
    scope: anyio.CancelScope = field(default_factory=anyio.CancelScope)

    def cancel(self) -> None:
        self.cancelled = True
        self.scope.cancel()


# =============================================================================
# Scheduler
# =============================================================================


class PhaseScheduler:
    """Play the frame script of a (source, target) pair over time.

    Args:
        source: Initial source string.
        target: Initial target string.
        config: Timing configuration; defaults apply when omitted.
        on_event: Receives RunStarted, PhaseChanged and RunCompleted.
        on_state: Receives every committed AnimationState, reset included.
        tick: Awaited once after each commit so the host can draw the state
            before the timed wait starts. Defaults to an anyio checkpoint.
        sleep: Timed wait in seconds. Defaults to anyio.sleep.

    Usage:
        scheduler = PhaseScheduler("recieve", "receive", on_state=stage.update)
        outcome = await scheduler.start()

    """

    def __init__(
        self,
        source: str = "",
        target: str = "",
        config: AnimationConfig | None = None,
        *,
        on_event: Callable[[SchedulerEvent], None] | None = None,
        on_state: Callable[[AnimationState], None] | None = None,
        tick: Callable[[], Awaitable[None]] | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        self._config = config or AnimationConfig()
        self._on_event = on_event
        self._on_state = on_state
        self._tick = tick or anyio.lowlevel.checkpoint
        self._sleep = sleep or anyio.sleep

        self._generation = 0
        self._running = False
        self._token: RunToken | None = None

        self._source = source
        self._target = target
        self._plan, self._frames = self._compute(source, target)
        self._state = AnimationState.from_frame(self._frames[0])

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def source(self) -> str:
        return self._source

    @property
    def target(self) -> str:
        return self._target

    @property
    def config(self) -> AnimationConfig:
        return self._config

    @property
    def plan(self) -> EditPlan:
        return self._plan

    @property
    def frames(self) -> Sequence[AnimationFrame]:
        return tuple(self._frames)

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    # -------------------------------------------------------------------------
    # Controls
    # -------------------------------------------------------------------------

    async def start(self) -> RunOutcome:
        """Play the current frame script from the idle frame to the end.

        Returns:
            COMPLETED after the final frame, ABORTED when cancel() or
            reset() interrupted the run, SKIPPED when a run was already
            active.

        Raises:
            Exception: Anything raised by the tick or sleep primitives or by
                a callback propagates unchanged.

        """
        if self._running:
            logger.debug("start() ignored: run %d is still active", self._generation)
            return RunOutcome.SKIPPED

        self._running = True
        self._generation += 1
        token = RunToken(self._generation)
        self._token = token
        frames = list(self._frames)
        logger.debug(
            "Run %d starting: %r -> %r (%d frames)",
            token.generation, self._source, self._target, len(frames),
        )

        try:
            with token.scope:
                self._emit(RunStarted(token.generation))
                await self._play(token, frames)

            if token.cancelled:
                logger.debug("Run %d aborted", token.generation)
                return RunOutcome.ABORTED

            self._emit(RunCompleted(token.generation))
            logger.debug("Run %d completed", token.generation)
            return RunOutcome.COMPLETED
        finally:
            # A reset may already have handed the guard to a newer run
            if self._token is token:
                self._token = None
                self._running = False

    def cancel(self) -> None:
        """Stop the active run at its next suspension point, without completion."""
        if self._token is not None and not self._token.cancelled:
            logger.debug("Cancelling run %d", self._token.generation)
            self._token.cancel()

    def reset(self) -> None:
        """Cancel any run and show the idle frame immediately.

        Clears the re-entrancy guard and the token so that start() may be
        called again right away.
        """
        self.cancel()
        self._token = None
        self._running = False
        self._commit(self._frames[0])

    def set_words(self, source: str, target: str) -> None:
        """Replace the words: cancel, recompute plan and frames, show the new idle frame."""
        self.cancel()
        self._source = source
        self._target = target
        self._plan, self._frames = self._compute(source, target)
        self.reset()

    def set_config(self, config: AnimationConfig) -> None:
        """Replace the timing configuration; behaves like set_words."""
        self._config = config
        self.set_words(self._source, self._target)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _compute(self, source: str, target: str) -> tuple[EditPlan, list[AnimationFrame]]:
        plan = build_plan(source, target)
        frames = build_script(
            plan,
            source,
            target,
            self._config.durations,
            self._config.deletion_hold_ms,
        )
        return plan, frames

    async def _play(self, token: RunToken, frames: list[AnimationFrame]) -> None:
        current_phase: Phase | None = None
        for frame in frames:
            if token.cancelled:
                return
            self._commit(frame)
            # on_state may have cancelled or reset this run
            if token.cancelled:
                return
            if frame.phase is not current_phase:
                current_phase = frame.phase
                self._emit(PhaseChanged(token.generation, frame.phase))

            await self._tick()
            if token.cancelled:
                return
            await self._sleep(self._config.wait_seconds(frame.duration_ms))

    def _commit(self, frame: AnimationFrame) -> None:
        self._state = AnimationState.from_frame(frame)
        logger.debug("State -> %s %r", frame.phase.value, self._state.text)
        if self._on_state is not None:
            self._on_state(self._state)

    def _emit(self, event: SchedulerEvent) -> None:
        if self._on_event is not None:
            self._on_event(event)
