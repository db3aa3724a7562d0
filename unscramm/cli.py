"""CLI entry point for unscramm."""

import argparse
import signal
import sys

import anyio

from unscramm.config import DEFAULT_SPEED, SpeedPreset
from unscramm.runner import RunConfig, console, run
from unscramm.ui import print_dim, print_error


def _signal_handler(signum: int, frame: object) -> None:
    """Handle termination signals by interrupting playback."""
    raise KeyboardInterrupt


def _install_signal_handlers() -> None:
    """Install signal handlers for graceful shutdown."""
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)


def _parse_args(argv: list[str] | None = None) -> RunConfig:
    """Parse command line arguments and return a RunConfig.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        RunConfig: Configuration object populated from command line arguments.

    """
    parser = argparse.ArgumentParser(
        prog="unscramm",
        description="Watch a misspelled word un-scramble into its correction",
    )

    parser.add_argument("source", metavar="SOURCE", help="The string to transform")
    parser.add_argument("target", metavar="TARGET", help="The string to transform it into")

    parser.add_argument(
        "--speed",
        choices=[preset.value for preset in SpeedPreset],
        default=DEFAULT_SPEED.value,
        help=f"Playback speed (default: {DEFAULT_SPEED.value})",
    )

    parser.add_argument(
        "--reduced-motion",
        action="store_true",
        default=False,
        dest="reduced_motion",
        help="Cap every wait between frames to a few milliseconds",
    )

    parser.add_argument(
        "--script",
        action="store_true",
        default=False,
        dest="script_only",
        help="Print the edit plan and frame script without playing them",
    )

    parser.add_argument(
        "--no-banner",
        action="store_false",
        dest="banner",
        help="Skip the ASCII art banner",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Save debug log",
    )

    args = parser.parse_args(argv)

    return RunConfig(
        source=args.source,
        target=args.target,
        speed=SpeedPreset(args.speed),
        reduced_motion=args.reduced_motion,
        script_only=args.script_only,
        banner=args.banner,
        debug=args.debug,
    )


def main() -> None:
    """Run the CLI entry point.

    Returns:
        None: This function does not return; it exits via sys.exit().

    Raises:
        SystemExit: Always raised with the exit code of the run, 130 on
            keyboard interrupt, or 1 on fatal error.

    """
    _install_signal_handlers()
    config = _parse_args()
    try:
        exit_code = anyio.run(run, config)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        console.print()
        print_dim(console, "Aborted by user")
        sys.exit(130)
    except Exception as e:
        console.print()
        print_error(console, "Fatal Error", str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
