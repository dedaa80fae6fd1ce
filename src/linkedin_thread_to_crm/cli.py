# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later
"""CLI interface for logging LinkedIn threads to a CRM."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import load_endpoint, save_endpoint
from .delivery import deliver
from .document import load_document
from .extractor import extract_conversation
from .models import ConversationSummary, ExtractionMode
from .record import LINES, NO_MESSAGES, build_record, render_messages, require_profile_url

LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    name="linkedin-thread-to-crm",
    help="Extract LinkedIn messaging threads from saved pages and log them to a CRM.",
    no_args_is_help=True,
)

console = Console()


class _WarningTracker(logging.Handler):
    """Handler to track if any warnings were logged."""

    def __init__(self) -> None:
        super().__init__()
        self.warnings_shown = False

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.WARNING:
            self.warnings_shown = True


# Global warning tracker, read by _fail
_warning_tracker = _WarningTracker()


def _parse_log_level(log_level_str: str) -> int:
    """Parse log level from string (name or integer).

    Args:
        log_level_str: Log level as string (name like 'DEBUG' or integer like '10')

    Returns:
        Log level as integer

    Raises:
        ValueError: If log level is invalid
    """
    # Integer levels first
    try:
        level_int = int(log_level_str)
    except ValueError:
        level_int = None
    if level_int is not None:
        if level_int < 0:
            raise ValueError("Log level must be non-negative")
        return level_int

    level_map = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
    }
    level_name = log_level_str.upper()
    if level_name in level_map:
        return level_map[level_name]

    raise ValueError(
        f"Invalid log level '{log_level_str}'. "
        f"Use log level names (CRITICAL, ERROR, WARNING, INFO, DEBUG) "
        f"or non-negative integers."
    )


def _setup_logging(verbose: int, quiet: int, log_level: str | None) -> int:
    """Configure the root logger from -v/-q counts or an explicit level.

    Args:
        verbose: Number of -v/--verbose flags (each lowers the level by 10)
        quiet: Number of -q/--quiet flags (each raises the level by 10)
        log_level: Explicit log level name or integer string, WARNING if None

    Returns:
        The final log level that was set
    """
    base_level = _parse_log_level(log_level) if log_level is not None else logging.WARNING
    level = max(0, base_level - (verbose - quiet) * 10)

    # force=True replaces handlers left by an earlier invocation
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)
    logging.getLogger().addHandler(_warning_tracker)

    LOGGER.info("Log level set to %d (%s)", level, logging.getLevelName(level))
    return level


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    if _warning_tracker.warnings_shown:
        console.print("For detailed diagnostics, rerun with -vv or -l DEBUG.")
    raise typer.Exit(1)


def _extract(file: Path, thread_url: Optional[str], mode: ExtractionMode) -> ConversationSummary:
    try:
        document = load_document(file, location=thread_url)
    except (FileNotFoundError, ValueError) as exc:
        LOGGER.debug("Could not load %s", file, exc_info=True)
        _fail(f"Error: {exc}")
    return extract_conversation(document, mode)


def _echo(text: str) -> None:
    """Print scraped text verbatim."""
    console.print(text, markup=False, emoji=False, highlight=False)


def _print_identity(summary: ConversationSummary) -> None:
    _echo(f"Thread:   {summary.thread_url or '-'}")
    _echo(f"Name:     {summary.other_party_name or '-'}")
    _echo(f"Profile:  {summary.profile_url or '-'}")


@app.callback()
def main(
    verbose: int = typer.Option(0, "-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG)."),
    quiet: int = typer.Option(0, "-q", "--quiet", count=True, help="Decrease verbosity (-q: ERROR, -qq: CRITICAL)."),
    log_level: Optional[str] = typer.Option(
        None, "-l", "--log-level", help="Log level name (CRITICAL, ERROR, WARNING, INFO, DEBUG) or non-negative integer."
    ),
) -> None:
    """Extract LinkedIn messaging threads from saved pages and log them to a CRM."""
    try:
        _setup_logging(verbose, quiet, log_level)
    except ValueError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)


@app.command()
def latest(
    file: Path = typer.Argument(..., help="Saved thread page (HTML or MHTML)"),
    thread_url: Optional[str] = typer.Option(None, "--thread-url", help="Thread URL if the snapshot lacks one"),
) -> None:
    """Show the latest message of a saved thread."""
    summary = _extract(file, thread_url, ExtractionMode.LATEST)
    _print_identity(summary)
    if summary.latest_message:
        _echo(summary.latest_message)
        console.print("[green]Latest message loaded[/green]")
    else:
        console.print("No message found")


@app.command()
def thread(
    file: Path = typer.Argument(..., help="Saved thread page (HTML or MHTML)"),
    thread_url: Optional[str] = typer.Option(None, "--thread-url", help="Thread URL if the snapshot lacks one"),
    style: str = typer.Option(LINES, "--format", "-f", help="Rendering: lines or blocks"),
    as_json: bool = typer.Option(False, "--json", help="Print messages as JSON"),
) -> None:
    """Extract all messages of a saved thread."""
    summary = _extract(file, thread_url, ExtractionMode.THREAD)
    if as_json:
        console.print_json(
            data={
                "threadUrl": summary.thread_url,
                "otherPartyName": summary.other_party_name,
                "profileUrl": summary.profile_url,
                "messages": [
                    {
                        "index": m.index,
                        "sender": m.sender,
                        "message": m.text,
                        "timestamp": m.timestamp or "",
                        "direction": m.direction.value,
                    }
                    for m in summary.messages
                ],
            }
        )
        return

    try:
        rendered = render_messages(summary.messages, style)
    except ValueError as exc:
        _fail(f"Error: {exc}")
    _print_identity(summary)
    _echo(rendered)
    if summary.messages:
        console.print(f"[green]Extracted {len(summary.messages)} messages[/green]")
    else:
        LOGGER.info(NO_MESSAGES)


@app.command()
def log(
    file: Path = typer.Argument(..., help="Saved thread page (HTML or MHTML)"),
    direction: str = typer.Option(..., "--direction", "-d", help="Direction recorded in the CRM"),
    person_type: str = typer.Option(..., "--person-type", "-p", help="Person type recorded in the CRM"),
    all_messages: bool = typer.Option(False, "--all", help="Send the whole thread instead of the latest message"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", "-e", help="CRM endpoint URL (saved for next time)"),
    thread_url: Optional[str] = typer.Option(None, "--thread-url", help="Thread URL if the snapshot lacks one"),
    name: Optional[str] = typer.Option(None, "--name", help="Override the detected other-party name"),
    profile_url: Optional[str] = typer.Option(None, "--profile-url", help="Override the detected profile URL"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Override the extracted message"),
) -> None:
    """Extract a thread and send it to the CRM endpoint."""
    endpoint_url = (endpoint or "").strip() or load_endpoint()
    if not endpoint_url:
        _fail("Please set your CRM web app URL first (--endpoint or the endpoint command).")
    if endpoint:
        save_endpoint(endpoint_url)

    mode = ExtractionMode.THREAD if all_messages else ExtractionMode.LATEST
    summary = _extract(file, thread_url, mode)
    if name:
        summary.other_party_name = name
    if profile_url:
        summary.profile_url = profile_url

    record = build_record(summary, direction, person_type, message=message, mode=mode)
    console.print_json(data=record.to_payload())

    try:
        require_profile_url(record)
    except ValueError as exc:
        _fail(str(exc))

    console.print("Sending to CRM...")
    try:
        deliver(record, endpoint_url)
    except (RuntimeError, ValueError) as exc:
        _fail(f"Error: {exc}")
    console.print("[green]Sent[/green]")


@app.command("endpoint")
def endpoint_command(
    url: Optional[str] = typer.Argument(None, help="New CRM endpoint URL; omit to show the current one"),
) -> None:
    """Show or set the CRM endpoint URL."""
    if url is None:
        current = load_endpoint()
        console.print(escape(current) if current else "No endpoint configured")
        return
    if not url.strip():
        _fail("Endpoint URL must not be empty")
    path = save_endpoint(url)
    console.print(f"[green]Saved endpoint to {escape(str(path))}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"linkedin-thread-to-crm {__version__}")


if __name__ == "__main__":
    app()
