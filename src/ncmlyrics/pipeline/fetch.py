"""Fetch/align/write stage: download lyrics, merge tracks and write TTML."""

import asyncio
import logging
from concurrent.futures import Executor
from pathlib import Path
from typing import Callable, List, Optional, Protocol, Set

from ..core.align import transform_lyric_to_document
from ..core.models import LyricTracks
from ..core.progress import ItemOutcome, StatusReporter
from ..core.ttml import stringify_ttml
from ..exceptions import NcmLyricsError
from .queues import CLOSED, FetchJob

logger = logging.getLogger(__name__)

STAGE = "fetch"

DocumentWriter = Callable[[Path, bytes], None]


class LyricClient(Protocol):
    def get_lyrics(self, music_id: int) -> LyricTracks: ...


def lyric_path_for(path: Path, extension: str) -> Path:
    """``song.flac`` -> ``song.<extension>`` in the same directory."""
    return path.with_suffix(f".{extension}")


class FetchAlignWriter:
    """Runs admitted jobs concurrently, each holding one permit."""

    def __init__(
        self,
        client: LyricClient,
        permits: asyncio.Semaphore,
        writer: DocumentWriter,
        reporter: StatusReporter,
        lyric_extension: str,
        executor: Optional[Executor] = None,
    ):
        self.client = client
        self.permits = permits
        self.writer = writer
        self.reporter = reporter
        self.lyric_extension = lyric_extension
        self.executor = executor

    async def _fetch(self, music_id: int) -> LyricTracks:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self.client.get_lyrics, music_id)

    async def _write(self, path: Path, data: bytes) -> None:
        # Same pool as the fetch, so a permit holder never waits behind tag reads.
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self.executor, self.writer, path, data)

    async def process(self, job: FetchJob) -> ItemOutcome:
        """Handle one job. The caller must already hold a permit."""
        path = job.path
        try:
            tracks = await self._fetch(job.music_id)
            document = transform_lyric_to_document(tracks)
            if document.is_empty():
                return self.reporter.no_lyrics(
                    path, STAGE, "No lyrics found for this song", music_id=job.music_id
                )
            document.metadata.append(("ncmMusicId", str(job.music_id)))

            data = stringify_ttml(document)
            output_path = lyric_path_for(path, self.lyric_extension)
            await self._write(output_path, data)
            return self.reporter.done(
                path,
                STAGE,
                f"Lyrics saved to {output_path.name}",
                music_id=job.music_id,
                output_path=output_path,
            )
        except NcmLyricsError as e:
            return self.reporter.fail(
                path, STAGE, f"Failed to download lyrics: {e}", music_id=job.music_id
            )
        except Exception as e:
            logger.debug(f"Unexpected error processing {path}", exc_info=True)
            return self.reporter.fail(
                path, STAGE, f"Unexpected error: {e}", music_id=job.music_id
            )
        finally:
            self.permits.release()

    async def run(self, in_queue: asyncio.Queue) -> List[ItemOutcome]:
        tasks: Set[asyncio.Task] = set()
        while True:
            job = await in_queue.get()
            if job is CLOSED:
                break
            await self.permits.acquire()
            logger.debug(f"Admitted {job.music_id}: {job.path}")
            tasks.add(asyncio.create_task(self.process(job)))
        return list(await asyncio.gather(*tasks))
