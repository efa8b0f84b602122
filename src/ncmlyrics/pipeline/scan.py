"""Scan stage: walk the given roots and queue audio files."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Sequence

from ..core.models import CandidateFile
from ..core.progress import StatusReporter
from .queues import CLOSED

logger = logging.getLogger(__name__)


def iter_candidate_files(
    roots: Iterable[Path],
    extensions: Sequence[str],
    on_error: Optional[Callable[[OSError], None]] = None,
) -> Iterator[CandidateFile]:
    """Yield audio files under ``roots`` whose extension is allowed.

    A root may itself be a file. Directory errors go to ``on_error`` and the
    walk continues with the remaining directories.
    """
    allowed = {ext.lower().lstrip(".") for ext in extensions}

    def _wanted(path: Path) -> bool:
        return path.suffix.lstrip(".").lower() in allowed and path.is_file()

    for root in roots:
        root = Path(root)
        if not root.is_dir():
            if _wanted(root):
                yield CandidateFile(root)
            continue
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames.sort()
            for name in sorted(filenames):
                path = Path(dirpath) / name
                if _wanted(path):
                    yield CandidateFile(path)


class Scanner:
    """Feeds candidate files into the extract queue."""

    def __init__(
        self,
        roots: Sequence[Path],
        extensions: Sequence[str],
        reporter: StatusReporter,
    ):
        self.roots = list(roots)
        self.extensions = tuple(extensions)
        self.reporter = reporter

    def _on_walk_error(self, err: OSError) -> None:
        self.reporter.error(f"Cannot scan {err.filename}: {err.strerror or err}")

    async def run(self, out_queue: asyncio.Queue) -> int:
        """Queue every candidate file, then close the queue. Returns the count."""
        files = iter_candidate_files(self.roots, self.extensions, self._on_walk_error)
        count = 0
        try:
            while True:
                # The directory walk blocks, so each step runs in a thread.
                candidate = await asyncio.to_thread(next, files, None)
                if candidate is None:
                    break
                logger.debug(f"Found audio file: {candidate.path}")
                await out_queue.put(candidate)
                count += 1
        finally:
            await out_queue.put(CLOSED)
        logger.info(f"Scan finished: {count} audio files")
        return count
