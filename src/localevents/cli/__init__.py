"""Command line entry points for localevents utilities."""

import logging

from typer import Option, Typer

from .dates import dates_app


cli = Typer(help="localevents command line tools")
cli.add_typer(dates_app, name="dates")


@cli.callback()
def main(verbose: bool = Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """Configure logging before running a subcommand."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = ["cli"]
