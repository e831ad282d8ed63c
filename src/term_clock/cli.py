"""Command-line interface for term-clock."""

import curses
import json
import locale
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table
from rich.text import Text

from term_clock.clock import ClockMode, ClockUnavailable, FixedSampler, GridSurface, Style
from term_clock.clock.sampler import TimeSampler, parse_wall_time
from term_clock.clock.service import ClockService, build_renderer, run_session
from term_clock.clock.surface import CursesSurface
from term_clock.config import get_settings
from term_clock.logging import configure_logging, get_logger

logger = get_logger(__name__)

app = typer.Typer(
    name="termclock",
    help="term-clock - analog and seven-segment clocks for the terminal",
    add_completion=False,
)

console = Console()

# rich styles for snapshot output
SNAPSHOT_STYLES = {
    Style.FACE: "face",
    Style.HAND: "hand",
    Style.MARK: "mark",
    Style.PIVOT: "mark",
    Style.DIGIT: "digit",
}


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode"),
) -> None:
    """term-clock CLI. Without a command, shows the mode menu."""
    settings = get_settings()
    # curses owns the terminal while a clock runs
    interactive = ctx.invoked_subcommand in (None, "analog", "digital")
    log_level = "DEBUG" if debug or settings.debug else settings.log_level
    configure_logging(log_level=log_level, log_file=settings.log_file, enable_console=not interactive)

    if ctx.invoked_subcommand is None:
        mode = None if settings.default_mode == "menu" else ClockMode(settings.default_mode)
        _run(mode)


@app.command("analog")
def analog() -> None:
    """Run the analog clock."""
    _run(ClockMode.ANALOG)


@app.command("digital")
def digital() -> None:
    """Run the seven-segment digital clock."""
    _run(ClockMode.DIGITAL)


def _run(mode: Optional[ClockMode]) -> None:
    """Run the clock under curses until the user quits."""
    settings = get_settings()
    try:
        # Segment glyphs need the user's (UTF-8) locale
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logger.warning(f"Could not set locale: {e}")

    def session(screen: "curses.window") -> None:
        surface = CursesSurface(screen, settings.palette())
        run_session(surface, settings, mode)

    try:
        curses.wrapper(session)
    except ClockUnavailable as e:
        logger.error(str(e))
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command("snapshot")
def snapshot(
    mode: ClockMode = typer.Option(ClockMode.ANALOG, "--mode", "-m", help="Display mode"),
    at: Optional[str] = typer.Option(None, "--at", help="Time to show (HH:MM[:SS]), default now"),
    rows: int = typer.Option(24, "--rows", min=1, help="Grid height"),
    cols: int = typer.Option(80, "--cols", min=1, help="Grid width"),
    plain: bool = typer.Option(False, "--plain", help="Print without colors"),
) -> None:
    """Render a single frame and print it."""
    settings = get_settings()

    if at:
        try:
            sampler = FixedSampler(parse_wall_time(at))
        except ValueError as e:
            rprint(f"[red]{e}[/red]")
            raise typer.Exit(1)
    else:
        sampler = TimeSampler()

    surface = GridSurface(rows, cols)
    service = ClockService(surface, build_renderer(mode, surface, settings), sampler=sampler)
    try:
        service.tick()
    except ClockUnavailable as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if plain:
        for line in surface.lines():
            typer.echo(line.rstrip())
        return

    palette = settings.palette()
    for runs in surface.styled_lines():
        text = Text()
        for chunk, style in runs:
            role = SNAPSHOT_STYLES.get(style)
            text.append(chunk, style=palette[role] if role else None)
        text.rstrip()
        console.print(text)


# Config commands
config_app = typer.Typer(help="Configuration management")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show current configuration."""
    settings = get_settings()

    if json_output:
        # Convert to dict, handling Path objects
        config_dict = {}
        for field_name in type(settings).model_fields:
            value = getattr(settings, field_name)
            config_dict[field_name] = str(value) if isinstance(value, Path) else value
        typer.echo(json.dumps(config_dict, indent=2))
    else:
        table = Table(title="term-clock Configuration", show_header=True)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        for field_name in type(settings).model_fields:
            table.add_row(field_name, str(getattr(settings, field_name)))

        console.print(table)


if __name__ == "__main__":
    app()
