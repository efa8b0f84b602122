"""Items passed between pipeline stages."""

from dataclasses import dataclass
from pathlib import Path

# Marks the end of a stage's output.
CLOSED = object()


@dataclass(frozen=True)
class FetchJob:
    """A file whose catalog id is known."""

    path: Path
    music_id: int
