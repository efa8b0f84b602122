"""Logging configuration for ncm-lyrics."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

# Per-file status lines (see core.progress.StatusReporter) go to this logger.
STATUS_LOGGER = "ncmlyrics.status"


class ClickEchoHandler(logging.Handler):
    """Print records with ``click.echo``; errors go to stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=record.levelno >= logging.ERROR)
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str = "INFO", log_file: Optional[Path] = None, verbose: bool = False
) -> logging.Logger:
    """Set up logging configuration.

    Diagnostics go to stdout through the ``ncmlyrics`` logger with the usual
    level prefix. Status lines are echoed as-is and always shown, whatever the
    level. Both end up in ``log_file`` when one is given.
    """

    # Suppress noisy third-party library logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("mutagen").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger = logging.getLogger("ncmlyrics")
    logger.setLevel(getattr(logging, level.upper()))

    status_logger = logging.getLogger(STATUS_LOGGER)
    status_logger.setLevel(logging.INFO)
    status_logger.propagate = False

    # Clear existing handlers
    logger.handlers.clear()
    status_logger.handlers.clear()

    if verbose:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    # Console handlers
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    status_handler = ClickEchoHandler()
    status_handler.setFormatter(logging.Formatter("%(message)s"))
    status_logger.addHandler(status_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        status_logger.addHandler(file_handler)

    return logger
