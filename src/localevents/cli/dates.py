"""Date parsing CLI commands.

Lets developers check how scraped date strings resolve without running the
scraping pipeline.

Commands:
    localevents dates parse "tomorrow at 2pm" --reference 2024-01-15T12:00:00-06:00
    localevents dates best "Fri 8pm" "2024-02-20T19:30:00-06:00" --all --json
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from dateutil import parser as dateutil_parser
from dateutil import tz
from rich.console import Console
from rich.table import Table

from localevents.configuration.settings import DEFAULT_CONFIG_PATH, bootstrap_settings
from localevents.errors import InvalidReferenceTimeError, LocalEventsError, format_error_for_cli
from localevents.extraction.dates import EventDateParser, MultiCandidateSelector, ParsedDate

logger = logging.getLogger(__name__)

console = Console()
dates_app = typer.Typer(help="Parse scraped event date strings")


def _parse_reference(raw: str) -> datetime:
    try:
        return dateutil_parser.isoparse(raw)
    except ValueError as exc:
        raise InvalidReferenceTimeError(
            f"Could not parse reference time {raw!r}", details={"reference": raw}
        ) from exc


def _prepare(
    reference: Optional[str],
    timezone: Optional[str],
    config_path: Path,
) -> Tuple[EventDateParser, datetime, Optional[str]]:
    """Build a parser from settings and resolve the reference time.

    Without --reference the current time is used, read in the configured
    default zone unless --timezone is given.
    """
    settings = bootstrap_settings(path=config_path)
    parser = EventDateParser(settings.parsing)

    if reference is not None:
        return parser, _parse_reference(reference), timezone

    zone = timezone or settings.parsing.default_timezone
    return parser, datetime.now(tz.UTC), zone


def _render(results: List[ParsedDate], output_json: bool) -> None:
    if output_json:
        typer.echo(json.dumps({"results": [r.to_dict() for r in results], "total": len(results)}))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Source", style="cyan")
    table.add_column("When")
    table.add_column("All-day")
    table.add_column("Confidence", justify="right")
    table.add_column("Text", style="dim")

    for result in results:
        when = result.date.isoformat() if result.is_all_day else result.instant.isoformat()
        table.add_row(
            result.source,
            when,
            "yes" if result.is_all_day else "no",
            f"{result.confidence:.2f}",
            result.text,
        )
    console.print(table)


def _fail(error: LocalEventsError) -> None:
    typer.echo(format_error_for_cli(error), err=True)
    raise typer.Exit(2)


def _no_match(output_json: bool) -> None:
    if output_json:
        typer.echo(json.dumps({"results": [], "total": 0}))
    else:
        typer.echo("No date found")
    raise typer.Exit(1)


@dates_app.command("parse")
def parse_command(
    text: str = typer.Argument(..., help="Candidate date text"),
    reference: Optional[str] = typer.Option(
        None, "--reference", "-r", help="Reference 'now' as ISO 8601 (defaults to current time)"
    ),
    timezone: Optional[str] = typer.Option(None, "--timezone", "-z", help="IANA timezone name"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config-path", help="Settings file"),
) -> None:
    """Parse a single candidate string."""
    try:
        parser, reference_time, zone = _prepare(reference, timezone, config_path)
        result = parser.parse_event_date(text, reference_time, zone)
    except LocalEventsError as e:
        _fail(e)
        return

    if result is None:
        _no_match(output_json)
    _render([result], output_json)


@dates_app.command("best")
def best_command(
    texts: List[str] = typer.Argument(..., help="Candidate date texts from one listing"),
    reference: Optional[str] = typer.Option(
        None, "--reference", "-r", help="Reference 'now' as ISO 8601 (defaults to current time)"
    ),
    timezone: Optional[str] = typer.Option(None, "--timezone", "-z", help="IANA timezone name"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show the full ranking"),
    min_confidence: float = typer.Option(0.0, "--min-confidence", min=0.0, max=1.0),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config-path", help="Settings file"),
) -> None:
    """Rank several candidates and show the most confident parse."""
    try:
        parser, reference_time, zone = _prepare(reference, timezone, config_path)
        selector = MultiCandidateSelector(parser, min_confidence=min_confidence)
        ranked = selector.parse_multiple_dates(texts, reference_time, zone)
    except LocalEventsError as e:
        _fail(e)
        return

    if not ranked:
        _no_match(output_json)
    _render(ranked if show_all else ranked[:1], output_json)
