"""unscramm - Animate the transformation of one word into another.

Compute a minimal edit plan between a source and a target string, turn it
into a script of timed frames (delete, move, insert) and play the script in
the terminal. The diff engine and the frame script builder are pure
functions; the phase scheduler is the only stateful piece and runs on anyio.

Exports:
    __version__: str - The current version of the unscramm package.

Submodules:
    cli: Command-line interface with entry point and signal handling.
    config: Phase vocabulary, timing constants and AnimationConfig.
    diff: Alignment, true-mover classification and edit plans.
    script: Frame script construction and letter roles.
    scheduler: Timed, cancellable playback of a frame script.
    runner: Main orchestration logic for a terminal run.
    ui: User interface utilities for terminal output.
"""

__version__ = "0.3.0"
