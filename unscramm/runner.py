"""Main orchestration logic for a terminal run."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from unscramm.config import DEBUG_LOG_PREFIX, DEFAULT_SPEED, AnimationConfig, SpeedPreset
from unscramm.scheduler import PhaseScheduler, RunOutcome
from unscramm.ui import (
    LetterStage,
    SummaryData,
    create_console,
    print_ascii_header,
    print_info,
    print_plan_table,
    print_script_table,
    print_success,
    print_summary,
    print_warning,
)

console = create_console()

logger = logging.getLogger(__name__)


@dataclass
class RunConfig:
    """Configuration for an unscramm run.

    Attributes:
        source: The string to transform.
        target: The string to transform it into.
        speed: Named speed preset scaling the waits between frames.
        reduced_motion: Clamp every wait to the reduced-motion ceiling.
        script_only: Print the plan and frame script without playing them.
        banner: Print the ASCII art banner first.
        debug: Enable debug logging to a timestamped file in the current directory.

    """

    source: str = ""
    target: str = ""
    speed: SpeedPreset = DEFAULT_SPEED
    reduced_motion: bool = False
    script_only: bool = False
    banner: bool = True
    debug: bool = False

    def animation_config(self) -> AnimationConfig:
        """Build the timing configuration for this run."""
        return AnimationConfig.from_preset(self.speed, reduced_motion=self.reduced_motion)


def _start_debug_log(directory: Path) -> tuple[Path, logging.Handler]:
    """Attach a timestamped file handler to the package logger.

    Returns:
        The log file path and the handler to detach when the run ends.

    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    path = directory / f"{DEBUG_LOG_PREFIX}{timestamp}.log"
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    package_logger = logging.getLogger("unscramm")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return path, handler


def _stop_debug_log(handler: logging.Handler) -> None:
    package_logger = logging.getLogger("unscramm")
    package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    handler.close()


def _summary(scheduler: PhaseScheduler, outcome: RunOutcome | None) -> SummaryData:
    plan = scheduler.plan
    return SummaryData(
        source=scheduler.source,
        target=scheduler.target,
        deletions=len(plan.deletions),
        moves=len(plan.moves),
        insertions=len(plan.insertions),
        highlights=len(plan.highlight_indices),
        frames=len(scheduler.frames),
        outcome=outcome.value if outcome is not None else None,
    )


async def play(scheduler: PhaseScheduler, stage: LetterStage) -> RunOutcome:
    """Play a scheduler's frames on a live letter stage.

    Args:
        scheduler: Scheduler whose ``on_state`` callback is ``stage.update``.
        stage: Stage showing the scheduler's visible state.

    Returns:
        The outcome of the run.

    """
    stage.start(scheduler.state, scheduler.plan.mover_ids)
    try:
        return await scheduler.start()
    finally:
        stage.finish()


async def run(config: RunConfig | None = None) -> int:
    """Plan, preview and play the transformation of one word into another.

    Args:
        config: Run configuration. Defaults apply when omitted.

    Returns:
        Exit code: 0 when playback completed or only the script was shown,
        1 when playback did not complete.

    """
    if config is None:
        config = RunConfig()

    if config.banner:
        print_ascii_header(console, "unscramm")

    debug_log_path: Path | None = None
    debug_handler: logging.Handler | None = None
    if config.debug:
        debug_log_path, debug_handler = _start_debug_log(Path.cwd())
        print_info(console, f"Debug log: {debug_log_path}")

    try:
        stage = LetterStage(console)
        scheduler = PhaseScheduler(
            config.source,
            config.target,
            config.animation_config(),
            on_state=stage.update,
        )
        logger.debug(
            "Planned %r -> %r: %d deletions, %d moves, %d insertions",
            config.source,
            config.target,
            len(scheduler.plan.deletions),
            len(scheduler.plan.moves),
            len(scheduler.plan.insertions),
        )

        console.print()
        print_plan_table(console, scheduler.plan, config.source, config.target)

        if config.script_only:
            print_script_table(console, scheduler.frames, scheduler.config)
            print_summary(console, _summary(scheduler, None))
            return 0

        if scheduler.plan.is_noop:
            print_info(console, "Source and target are identical; nothing to animate")

        outcome = await play(scheduler, stage)
        print_summary(console, _summary(scheduler, outcome))

        if outcome is not RunOutcome.COMPLETED:
            print_warning(console, f"Playback {outcome.value}")
            return 1

        print_success(console, f"Unscrambled {config.source!r} into {config.target!r}")
        return 0

    finally:
        if debug_handler is not None:
            _stop_debug_log(debug_handler)
            print_info(console, f"Debug log saved: {debug_log_path}")
