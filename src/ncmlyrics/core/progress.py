"""Per-file status reporting for pipeline runs."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..utils.logging import STATUS_LOGGER


class ItemStatus(str, Enum):
    DONE = "done"
    FAILED = "failed"
    NO_LYRICS = "no_lyrics"


@dataclass(frozen=True)
class ItemOutcome:
    """Final status of one file."""

    path: Path
    stage: str
    status: ItemStatus
    message: str
    music_id: Optional[int] = None
    output_path: Optional[Path] = None


class StatusReporter:
    """Emits one status line per file on the ``ncmlyrics.status`` logger.

    ``setup_logging`` echoes these lines to the terminal. Without it they
    propagate like any other record.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(STATUS_LOGGER)

    def error(self, message: str) -> None:
        """Report a problem not tied to a single file."""
        self.logger.error(f"❌ {message}")

    def report(self, outcome: ItemOutcome) -> ItemOutcome:
        if outcome.status == ItemStatus.DONE:
            self.logger.info(f"✅ {outcome.path}: {outcome.message}")
        else:
            self.logger.warning(f"❌ {outcome.path}: {outcome.message}")
        return outcome

    def done(self, path: Path, stage: str, message: str, **kwargs) -> ItemOutcome:
        return self.report(ItemOutcome(path, stage, ItemStatus.DONE, message, **kwargs))

    def fail(self, path: Path, stage: str, message: str, **kwargs) -> ItemOutcome:
        return self.report(ItemOutcome(path, stage, ItemStatus.FAILED, message, **kwargs))

    def no_lyrics(self, path: Path, stage: str, message: str, **kwargs) -> ItemOutcome:
        return self.report(
            ItemOutcome(path, stage, ItemStatus.NO_LYRICS, message, **kwargs)
        )
