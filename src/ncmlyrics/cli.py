"""Command-line interface using Click."""

import sys
from pathlib import Path

import click

from . import __version__
from .config import LOG_FILE, LOG_LEVEL, validate_config
from .exceptions import NcmLyricsError
from .core.progress import StatusReporter
from .pipeline import run_pipeline
from .utils.logging import setup_logging
from .utils.validation import validate_roots


@click.command()
@click.version_option(version=__version__)
@click.argument("paths", nargs=-1, required=True, type=click.Path())
def cli(paths):
    """Find NetEase Cloud Music audio files and download their lyrics.

    PATHS are audio files or folders to search. Lyrics are saved as TTML next
    to each audio file. Per-file failures are reported but do not change the
    exit status.
    """
    try:
        validate_config()
    except NcmLyricsError as e:
        click.echo(f"❌ Invalid configuration: {e}", err=True)
        sys.exit(1)

    logger = setup_logging(
        level=LOG_LEVEL,
        log_file=Path(LOG_FILE) if LOG_FILE else None,
        verbose=LOG_LEVEL.upper() == "DEBUG",
    )

    try:
        roots = validate_roots(paths)
    except NcmLyricsError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    run_pipeline(roots, reporter=StatusReporter())


def main():
    cli()


if __name__ == "__main__":
    main()
