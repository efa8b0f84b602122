"""Extract stage: read each file's comment tag and decrypt its catalog id."""

import asyncio
import logging
from concurrent.futures import Executor
from pathlib import Path
from typing import Callable, List, Optional, Set

from ..core.models import AudioInfo
from ..core.ncm_key import parse_ncm_key
from ..core.progress import ItemOutcome, StatusReporter
from ..exceptions import NcmLyricsError
from .queues import CLOSED, FetchJob

logger = logging.getLogger(__name__)

STAGE = "extract"

MetadataReader = Callable[[Path], AudioInfo]


class Extractor:
    """Spawns one task per scanned file.

    Tasks are not limited here; the bounded output queue holds them back when
    the fetch stage falls behind. Tag reads run on ``executor``, which should
    not be shared with other blocking work.
    """

    def __init__(
        self,
        metadata_reader: MetadataReader,
        reporter: StatusReporter,
        executor: Optional[Executor] = None,
    ):
        self.metadata_reader = metadata_reader
        self.reporter = reporter
        self.executor = executor

    async def extract_one(
        self, path: Path, out_queue: asyncio.Queue
    ) -> Optional[ItemOutcome]:
        """Queue a fetch job for ``path``; return an outcome only on failure."""
        loop = asyncio.get_running_loop()
        try:
            audio_info = await loop.run_in_executor(
                self.executor, self.metadata_reader, path
            )
        except NcmLyricsError as e:
            return self.reporter.fail(path, STAGE, f"Failed to read audio metadata: {e}")
        except Exception as e:
            logger.debug(f"Unexpected error reading {path}", exc_info=True)
            return self.reporter.fail(path, STAGE, f"Failed to read audio metadata: {e}")

        try:
            music_info = parse_ncm_key(audio_info.comment)
        except NcmLyricsError as e:
            return self.reporter.fail(
                path, STAGE, f"Cannot parse NetEase metadata in comment: {e}"
            )
        except Exception as e:
            logger.debug(f"Unexpected error decoding key for {path}", exc_info=True)
            return self.reporter.fail(
                path, STAGE, f"Cannot parse NetEase metadata in comment: {e}"
            )

        logger.debug(
            f"Read metadata for {path}: {music_info.music_name or audio_info.name} "
            f"(id {music_info.music_id})"
        )
        await out_queue.put(FetchJob(path=path, music_id=music_info.music_id))
        return None

    async def run(
        self, in_queue: asyncio.Queue, out_queue: asyncio.Queue
    ) -> List[ItemOutcome]:
        tasks: Set[asyncio.Task] = set()
        try:
            while True:
                candidate = await in_queue.get()
                if candidate is CLOSED:
                    break
                tasks.add(asyncio.create_task(self.extract_one(candidate.path, out_queue)))
            results = await asyncio.gather(*tasks)
        finally:
            await out_queue.put(CLOSED)
        return [outcome for outcome in results if outcome is not None]
