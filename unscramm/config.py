"""Configuration constants for unscramm.

Provide centralized configuration values used throughout the unscramm package.
This module contains the phase vocabulary, default phase timings, speed presets
and the AnimationConfig value that the scheduler reads its timings from.

Exports:
    Phase: Enum of animation phases, ordered by playback position.
    SpeedPreset: Enum for the named speed choices.
    SPEED_MULTIPLIERS: dict[SpeedPreset, float] - Multiplier per speed preset.
    DEFAULT_PHASE_DURATIONS: dict[Phase, int] - Base duration per phase in ms.
    DELETION_HOLD_MS: int - Hold after removed letters leave the sequence.
    REDUCED_MOTION_CEILING_MS: int - Longest wait allowed under reduced motion.
    PhaseDurations: Per-phase base durations.
    AnimationConfig: Timing bundle consumed by the scheduler.
"""

from dataclasses import dataclass, field
from enum import Enum


class Phase(Enum):
    """Animation phases in playback order."""

    IDLE = "idle"
    DELETING = "deleting"
    MOVING = "moving"
    INSERTING = "inserting"
    FINAL = "final"

    @property
    def order(self) -> int:
        return _PHASE_ORDER[self]

    def __lt__(self, other: "Phase") -> bool:
        if not isinstance(other, Phase):
            return NotImplemented
        return self.order < other.order


_PHASE_ORDER: dict[Phase, int] = {phase: index for index, phase in enumerate(Phase)}


class SpeedPreset(Enum):
    """Enum for the speed menu choices."""

    SNAIL = "snail"
    TURTLE = "turtle"
    RABBIT = "rabbit"


# Higher multiplier means slower playback
SPEED_MULTIPLIERS: dict[SpeedPreset, float] = {
    SpeedPreset.SNAIL: 4.0,
    SpeedPreset.TURTLE: 2.0,
    SpeedPreset.RABBIT: 1.0,
}

DEFAULT_SPEED = SpeedPreset.TURTLE

# Base phase durations in milliseconds, before the speed multiplier
DEFAULT_PHASE_DURATIONS: dict[Phase, int] = {
    Phase.IDLE: 0,
    Phase.DELETING: 400,
    Phase.MOVING: 1000,
    Phase.INSERTING: 300,
    Phase.FINAL: 0,
}

# Lets the exit animation of removed letters finish before the next phase
DELETION_HOLD_MS = 150

REDUCED_MOTION_CEILING_MS = 50

# Debug log filename prefix, completed with a timestamp by the runner
DEBUG_LOG_PREFIX = ".unscramm-debug-"


@dataclass(frozen=True)
class PhaseDurations:
    """Base duration of each content phase in milliseconds.

    The final phase is a terminal marker and always lasts zero.
    """

    idle: float = DEFAULT_PHASE_DURATIONS[Phase.IDLE]
    deleting: float = DEFAULT_PHASE_DURATIONS[Phase.DELETING]
    moving: float = DEFAULT_PHASE_DURATIONS[Phase.MOVING]
    inserting: float = DEFAULT_PHASE_DURATIONS[Phase.INSERTING]

    def __post_init__(self) -> None:
        for name in ("idle", "deleting", "moving", "inserting"):
            if getattr(self, name) < 0:
                raise ValueError(f"Duration for {name!r} must be >= 0, got {getattr(self, name)}")

    def for_phase(self, phase: Phase) -> float:
        """Return the base duration for a phase (0 for the final marker)."""
        if phase is Phase.FINAL:
            return 0
        return getattr(self, phase.value)


@dataclass(frozen=True)
class AnimationConfig:
    """Timing configuration for a playback run.

    Attributes:
        durations: Base duration of each phase in milliseconds.
        deletion_hold_ms: How long the post-removal deleting frame is held.
        speed_multiplier: Scales every wait; 2.0 plays twice as slow.
        reduced_motion: True when the host asks for reduced motion.
        reduced_motion_ceiling_ms: Upper bound on any wait under reduced motion.

    Raises:
        ValueError: If a duration is negative or the multiplier is not positive.

    """

    durations: PhaseDurations = field(default_factory=PhaseDurations)
    deletion_hold_ms: float = DELETION_HOLD_MS
    speed_multiplier: float = SPEED_MULTIPLIERS[DEFAULT_SPEED]
    reduced_motion: bool = False
    reduced_motion_ceiling_ms: float = REDUCED_MOTION_CEILING_MS

    def __post_init__(self) -> None:
        if self.deletion_hold_ms < 0:
            raise ValueError(f"deletion_hold_ms must be >= 0, got {self.deletion_hold_ms}")
        if self.speed_multiplier <= 0:
            raise ValueError(f"speed_multiplier must be > 0, got {self.speed_multiplier}")
        if self.reduced_motion_ceiling_ms < 0:
            raise ValueError(
                f"reduced_motion_ceiling_ms must be >= 0, got {self.reduced_motion_ceiling_ms}"
            )

    @classmethod
    def from_preset(cls, preset: SpeedPreset, reduced_motion: bool = False) -> "AnimationConfig":
        """Build a config using the multiplier of a named speed preset."""
        return cls(speed_multiplier=SPEED_MULTIPLIERS[preset], reduced_motion=reduced_motion)

    def wait_ms(self, duration_ms: float) -> float:
        """Apply the speed multiplier and the reduced-motion clamp to a duration."""
        wait = duration_ms * self.speed_multiplier
        if self.reduced_motion:
            wait = min(wait, self.reduced_motion_ceiling_ms)
        return wait

    def wait_seconds(self, duration_ms: float) -> float:
        """Same as wait_ms, in seconds for anyio.sleep()."""
        return self.wait_ms(duration_ms) / 1000
