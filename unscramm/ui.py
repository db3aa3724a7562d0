"""Neon terminal UI components for unscramm.

Implements a 1980s neon terminal aesthetic using the Rich library,
with a Dracula-based color theme. The LetterStage panel is the terminal
presentation layer for the phase scheduler: it redraws the letters of every
committed AnimationState in place.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import pyfiglet
from rich import box
from rich.color import Color, blend_rgb
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from unscramm.config import AnimationConfig, Phase
from unscramm.diff.plan import EditPlan
from unscramm.scheduler import AnimationState
from unscramm.script import AnimationFrame, LetterRole, letter_role


# =============================================================================
# Color Theme (Dracula-based)
# =============================================================================

NEON_COLORS = {
    "background": "#282A36",
    "foreground": "#F8F8F2",
    "red": "#FF5555",
    "green": "#50FA7B",
    "yellow": "#F1FA8C",
    "purple": "#BD93F9",
    "pink": "#FF79C6",
    "cyan": "#8BE9FD",
    "orange": "#FFB86C",
}

NEON_THEME = Theme({
    "neon.fg": NEON_COLORS["foreground"],
    "neon.red": NEON_COLORS["red"],
    "neon.green": NEON_COLORS["green"],
    "neon.yellow": NEON_COLORS["yellow"],
    "neon.purple": NEON_COLORS["purple"],
    "neon.pink": NEON_COLORS["pink"],
    "neon.cyan": NEON_COLORS["cyan"],
    "neon.orange": NEON_COLORS["orange"],
    # Semantic styles
    "neon.error": f"bold {NEON_COLORS['red']}",
    "neon.success": f"bold {NEON_COLORS['green']}",
    "neon.warning": f"bold {NEON_COLORS['yellow']}",
    "neon.info": NEON_COLORS["cyan"],
    "neon.dim": f"dim {NEON_COLORS['foreground']}",
})

ROLE_COLORS: dict[LetterRole, str] = {
    LetterRole.NORMAL: NEON_COLORS["foreground"],
    LetterRole.DELETION: NEON_COLORS["red"],
    LetterRole.MOVE: NEON_COLORS["orange"],
    LetterRole.INSERTION: NEON_COLORS["green"],
}

PHASE_COLORS: dict[Phase, str] = {
    Phase.IDLE: NEON_COLORS["purple"],
    Phase.DELETING: NEON_COLORS["red"],
    Phase.MOVING: NEON_COLORS["orange"],
    Phase.INSERTING: NEON_COLORS["green"],
    Phase.FINAL: NEON_COLORS["cyan"],
}


def create_console() -> Console:
    """Create a Rich Console with neon theme applied.

    Returns:
        Console: A new Rich Console instance configured with the neon theme.

    """
    return Console(theme=NEON_THEME)


# =============================================================================
# Banner
# =============================================================================

# Left-to-right stops of the banner gradient
BANNER_STOPS = (NEON_COLORS["cyan"], NEON_COLORS["pink"], NEON_COLORS["purple"])

BANNER_FONTS = ("ansi_shadow", "standard")


def _banner_color(position: float) -> Color:
    """Blend the banner stops at ``position`` (0.0 left edge, 1.0 right edge)."""
    position = max(0.0, min(1.0, position))
    scaled = position * (len(BANNER_STOPS) - 1)
    low = min(int(scaled), len(BANNER_STOPS) - 2)
    start = Color.parse(BANNER_STOPS[low]).get_truecolor()
    end = Color.parse(BANNER_STOPS[low + 1]).get_truecolor()
    return Color.from_triplet(blend_rgb(start, end, scaled - low))


def _figlet(text: str) -> str:
    for font in BANNER_FONTS:
        try:
            return pyfiglet.figlet_format(text, font=font)
        except pyfiglet.FigletError:
            continue
    return text


def print_ascii_header(console: Console, text: str) -> None:
    """Print the banner: figlet art shaded by column, then the tagline.

    Args:
        console: Rich Console instance for output.
        text: The text to render as ASCII art.

    """
    rows = _figlet(text).rstrip("\n").split("\n")
    width = max((len(row) for row in rows), default=1) or 1

    art = Text()
    for number, row in enumerate(rows):
        if number:
            art.append("\n")
        for column, char in enumerate(row):
            style = None if char == " " else Style(color=_banner_color(column / width), bold=True)
            art.append(char, style=style)

    art.append("\n\n    ")
    art.append("~ ", style=Style(color=NEON_COLORS["purple"], dim=True))
    art.append("watch the letters ", style=Style(color=NEON_COLORS["pink"], dim=True))
    art.append("un-scramble", style=Style(color=NEON_COLORS["cyan"], dim=True))
    art.append(" ~", style=Style(color=NEON_COLORS["purple"], dim=True))

    console.print()
    console.print(Panel(
        art,
        box=box.DOUBLE_EDGE,
        border_style=Style(color=NEON_COLORS["purple"], dim=True),
        padding=(0, 2),
    ))


# =============================================================================
# Pill Badge Component
# =============================================================================


def pill(text: str, bg_color: str, fg_color: str) -> Text:
    """Create a pill-shaped badge with the given colors.

    Args:
        text: The text to display inside the pill.
        bg_color: Background color hex code.
        fg_color: Foreground (text) color hex code.

    Returns:
        Rich Text object containing the styled pill.

    """
    result = Text()
    result.append("▌", style=Style(color=bg_color))
    result.append(text, style=Style(color=fg_color, bgcolor=bg_color, bold=True))
    result.append("▐", style=Style(color=bg_color))
    return result


def phase_badge(phase: Phase) -> Text:
    """Pill badge naming a phase in its phase color."""
    return pill(f" {phase.value.upper()} ", PHASE_COLORS[phase], NEON_COLORS["background"])


# =============================================================================
# Letters Component
# =============================================================================


def render_letters(state: AnimationState, mover_ids: frozenset[str]) -> Text:
    """Render the letters of a state, colored by their role in the phase.

    Args:
        state: The visible animation state.
        mover_ids: Letter ids highlighted while moving.

    Returns:
        Rich Text with one spaced cell per letter.

    """
    text = Text()
    for index, item in enumerate(state.letters):
        role = letter_role(state.phase, item, state.deleting_ids, mover_ids)
        style = Style(color=ROLE_COLORS[role], bold=role is not LetterRole.NORMAL)
        if role is LetterRole.DELETION:
            style += Style(strike=True)
        if index:
            text.append(" ")
        text.append(item.char, style=style)
    return text


class LetterStage:
    """Live-updating panel that shows the scheduler's visible state.

    Pass ``update`` as the scheduler's ``on_state`` callback.

    Args:
        console: Rich Console instance for output.
        mover_ids: Letter ids highlighted while moving.

    Usage:
        stage = LetterStage(console)
        scheduler = PhaseScheduler(source, target, on_state=stage.update)
        stage.start(scheduler.state, scheduler.plan.mover_ids)
        await scheduler.start()
        stage.finish()

    """

    def __init__(self, console: Console, mover_ids: frozenset[str] = frozenset()) -> None:
        self._console = console
        self._mover_ids = mover_ids
        self._state: AnimationState | None = None
        self._live: Live | None = None

    @property
    def state(self) -> AnimationState | None:
        return self._state

    def _render_panel(self) -> Panel:
        """Render the current state as a Panel."""
        if self._state is None:
            return Panel(Text(""), box=box.ROUNDED)
        content = Text(justify="center")
        content.append_text(render_letters(self._state, self._mover_ids))
        return Panel(
            content,
            title=phase_badge(self._state.phase),
            title_align="left",
            box=box.ROUNDED,
            border_style=Style(color=PHASE_COLORS[self._state.phase]),
            padding=(1, 2),
        )

    def start(self, state: AnimationState, mover_ids: frozenset[str] | None = None) -> None:
        """Start the live panel showing an initial state.

        Args:
            state: State shown until the first update.
            mover_ids: Replaces the mover ids given at construction.

        """
        if mover_ids is not None:
            self._mover_ids = mover_ids
        self._state = state
        self._live = Live(
            self._render_panel(),
            console=self._console,
            refresh_per_second=30,
            transient=True,
        )
        self._live.start()

    def update(self, state: AnimationState) -> None:
        """Show a new state."""
        self._state = state
        if self._live is not None:
            self._live.update(self._render_panel(), refresh=True)

    def finish(self) -> None:
        """Stop the live context and print the last state once."""
        if self._live is not None:
            self._live.stop()
            self._live = None
        if self._state is not None:
            self._console.print(self._render_panel())


# =============================================================================
# Plan and Script Tables
# =============================================================================


def print_plan_table(console: Console, plan: EditPlan, source: str, target: str) -> None:
    """Print the edit operations of a plan.

    Args:
        console: Rich Console instance for output.
        plan: The plan to describe.
        source: Source string of the plan.
        target: Target string of the plan.

    """
    table = Table(
        title=f"✏️  {source!r} → {target!r}",
        title_style=Style(color=NEON_COLORS["cyan"], bold=True),
        box=box.ROUNDED,
        border_style=Style(color=NEON_COLORS["purple"]),
        header_style=Style(color=NEON_COLORS["pink"], bold=True),
    )
    table.add_column("Operation", style=Style(color=NEON_COLORS["cyan"]))
    table.add_column("Char", justify="center")
    table.add_column("From", justify="right", style=Style(color=NEON_COLORS["yellow"]))
    table.add_column("To", justify="right", style=Style(color=NEON_COLORS["yellow"]))

    highlighted = set(plan.highlight_indices)
    for index in plan.deletions:
        table.add_row("delete", Text(source[index], style=ROLE_COLORS[LetterRole.DELETION]), str(index), "")
    for move in plan.moves:
        label = "move ★" if move.source_index in highlighted else "move"
        table.add_row(
            label,
            Text(source[move.source_index], style=ROLE_COLORS[LetterRole.MOVE]),
            str(move.source_index),
            str(move.target_index),
        )
    for insertion in plan.insertions:
        table.add_row(
            "insert", Text(insertion.char, style=ROLE_COLORS[LetterRole.INSERTION]), "", str(insertion.position)
        )
    for replacement in plan.replacements:
        chars = Text()
        chars.append(replacement.deleted_char, style=ROLE_COLORS[LetterRole.DELETION])
        chars.append("→")
        chars.append(replacement.inserted_char, style=ROLE_COLORS[LetterRole.INSERTION])
        table.add_row(
            "replace", chars, str(replacement.source_index), str(replacement.target_index)
        )

    if not table.row_count:
        table.add_row("none", "", "", "")
    console.print(table)


def print_script_table(
    console: Console, frames: Sequence[AnimationFrame], config: AnimationConfig
) -> None:
    """Print every frame of a script with its effective wait.

    Args:
        console: Rich Console instance for output.
        frames: Frames in playback order.
        config: Timing configuration used to compute the waits.

    """
    table = Table(
        title="🎞  Frame Script",
        title_style=Style(color=NEON_COLORS["cyan"], bold=True),
        box=box.ROUNDED,
        border_style=Style(color=NEON_COLORS["purple"]),
        header_style=Style(color=NEON_COLORS["pink"], bold=True),
    )
    table.add_column("#", justify="right", style=Style(color=NEON_COLORS["cyan"]))
    table.add_column("Phase")
    table.add_column("Letters", style=Style(color=NEON_COLORS["foreground"]))
    table.add_column("Deleting", style=Style(color=NEON_COLORS["red"]))
    table.add_column("Wait (ms)", justify="right", style=Style(color=NEON_COLORS["yellow"]))

    for i, frame in enumerate(frames, 1):
        table.add_row(
            str(i),
            phase_badge(frame.phase),
            frame.text or "∅",
            ", ".join(frame.deleting_ids),
            f"{config.wait_ms(frame.duration_ms):g}",
        )
    console.print(table)


# =============================================================================
# Message Components
# =============================================================================


def print_error(console: Console, title: str, message: str) -> None:
    """Print an error panel with red styling.

    Args:
        console: Rich Console instance for output.
        title: Error title text.
        message: Detailed error message.

    """
    panel = Panel(
        Text(message, style=Style(color=NEON_COLORS["red"])),
        title=f"⚠️  {title}",
        title_align="left",
        box=box.DOUBLE_EDGE,
        border_style=Style(color=NEON_COLORS["red"]),
        padding=(0, 1),
    )
    console.print(panel)


def print_warning(console: Console, message: str) -> None:
    """Print a warning panel with yellow styling."""
    panel = Panel(
        Text(message, style=Style(color=NEON_COLORS["yellow"])),
        box=box.ROUNDED,
        border_style=Style(color=NEON_COLORS["yellow"]),
        padding=(0, 1),
    )
    console.print(panel)


def print_success(console: Console, message: str) -> None:
    """Print a success message with green styling."""
    console.print(f"[neon.success]✔[/] [neon.green]{message}[/]")


def print_info(console: Console, message: str) -> None:
    """Print an info message with cyan styling."""
    console.print(f"[neon.cyan]ℹ[/] [neon.fg]{message}[/]")


def print_dim(console: Console, message: str) -> None:
    """Print a dimmed message for secondary information."""
    console.print(f"[neon.dim]{message}[/]")


# =============================================================================
# Summary Component
# =============================================================================


@dataclass
class SummaryData:
    """Data class for summary information.

    Attributes:
        source: The string that was transformed.
        target: The string it was transformed into.
        deletions: Number of deleted letters.
        moves: Number of moved survivors.
        insertions: Number of inserted letters.
        highlights: Number of true movers.
        frames: Number of frames in the script.
        outcome: How playback ended ("completed", "aborted", "skipped"),
            or None when nothing was played.

    """

    source: str
    target: str
    deletions: int
    moves: int
    insertions: int
    highlights: int
    frames: int
    outcome: str | None = None


def print_summary(console: Console, data: SummaryData) -> None:
    """Print a summary table with neon styling.

    Args:
        console: Rich Console instance for output.
        data: SummaryData containing all summary fields.

    """
    table = Table(
        title="✨ Transform Summary",
        title_style=Style(color=NEON_COLORS["green"], bold=True),
        box=box.ROUNDED,
        border_style=Style(color=NEON_COLORS["purple"]),
        show_header=False,
        padding=(0, 1),
    )
    table.add_column("Field", style=Style(color=NEON_COLORS["cyan"]))
    table.add_column("Value", style=Style(color=NEON_COLORS["foreground"]))

    table.add_row("Source", repr(data.source))
    table.add_row("Target", repr(data.target))
    table.add_row("Deletions", str(data.deletions))
    table.add_row("Moves", f"{data.moves} ({data.highlights} highlighted)")
    table.add_row("Insertions", str(data.insertions))
    table.add_row("Frames", str(data.frames))

    if data.outcome is None:
        badge = pill(" SCRIPT ONLY ", NEON_COLORS["cyan"], NEON_COLORS["background"])
    elif data.outcome == "completed":
        badge = pill(" COMPLETED ", NEON_COLORS["green"], NEON_COLORS["background"])
    else:
        badge = pill(f" {data.outcome.upper()} ", NEON_COLORS["yellow"], NEON_COLORS["background"])
    table.add_row("Playback", badge)

    console.print(table)
