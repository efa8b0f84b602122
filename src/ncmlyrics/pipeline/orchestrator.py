"""Wire scan, extract and fetch/align/write into one concurrent pipeline.

::

    Scanner --(queue)--> Extractor --(queue)--> FetchAlignWriter
                                                   (permit pool)

Both queues are bounded, so a fast stage waits for the slower one after it.
Every stage closes its output queue when done, and ``LyricPipeline.run``
returns only after all three stages and the tasks they spawned finish.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..config import PipelineSettings
from ..core.audio_info import read_audio_info
from ..core.ncm_api import NcmLyricClient
from ..core.progress import ItemOutcome, ItemStatus, StatusReporter
from ..core.ttml import write_ttml
from .extract import Extractor, MetadataReader
from .fetch import DocumentWriter, FetchAlignWriter, LyricClient
from .scan import Scanner

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything the pipeline did, available once it has fully drained."""

    files_scanned: int = 0
    outcomes: List[ItemOutcome] = field(default_factory=list)

    def _with_status(self, status: ItemStatus) -> List[ItemOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> List[ItemOutcome]:
        return self._with_status(ItemStatus.DONE)

    @property
    def failed(self) -> List[ItemOutcome]:
        return self._with_status(ItemStatus.FAILED)

    @property
    def no_lyrics(self) -> List[ItemOutcome]:
        return self._with_status(ItemStatus.NO_LYRICS)


class LyricPipeline:
    """Finds NetEase audio files under some roots and writes their lyrics.

    Args:
        roots: Files or directories to scan.
        client: Lyric service client; a ``NcmLyricClient`` by default.
        reporter: Where per-file status lines go.
        settings: Queue sizes, permit count and extensions.
        metadata_reader: ``path -> AudioInfo``; runs on the metadata pool.
        writer: ``(path, bytes) -> None``; runs on the fetch pool.
        permits: Permit pool for the fetch stage. Built from ``settings`` when
            omitted. Pass one in to share or inspect it.
    """

    def __init__(
        self,
        roots: Sequence[Path],
        *,
        client: Optional[LyricClient] = None,
        reporter: Optional[StatusReporter] = None,
        settings: Optional[PipelineSettings] = None,
        metadata_reader: MetadataReader = read_audio_info,
        writer: DocumentWriter = write_ttml,
        permits: Optional[asyncio.Semaphore] = None,
    ):
        self.roots = [Path(r) for r in roots]
        self.settings = settings or PipelineSettings()
        self.settings.validate()
        self.client = client
        self.reporter = reporter or StatusReporter()
        self.metadata_reader = metadata_reader
        self.writer = writer
        self.permits = permits

    async def run(self) -> PipelineResult:
        settings = self.settings
        permits = self.permits or asyncio.Semaphore(settings.max_concurrent_fetches)
        owns_client = self.client is None
        client = self.client or NcmLyricClient()

        scan_queue: asyncio.Queue = asyncio.Queue(maxsize=settings.queue_size)
        fetch_queue: asyncio.Queue = asyncio.Queue(maxsize=settings.queue_size)

        scanner = Scanner(self.roots, settings.audio_extensions, self.reporter)

        # Tag reads get their own pool. The fetch pool has one thread per permit
        # and serves both the HTTP call and the write of each admitted job.
        with ThreadPoolExecutor(
            max_workers=settings.metadata_workers,
            thread_name_prefix="ncm-metadata",
        ) as metadata_executor, ThreadPoolExecutor(
            max_workers=settings.max_concurrent_fetches,
            thread_name_prefix="ncm-fetch",
        ) as executor:
            extractor = Extractor(
                self.metadata_reader, self.reporter, executor=metadata_executor
            )
            fetcher = FetchAlignWriter(
                client,
                permits,
                self.writer,
                self.reporter,
                settings.lyric_extension,
                executor=executor,
            )
            try:
                scanned, extract_failures, fetch_outcomes = await asyncio.gather(
                    scanner.run(scan_queue),
                    extractor.run(scan_queue, fetch_queue),
                    fetcher.run(fetch_queue),
                )
            finally:
                if owns_client:
                    client.close()

        result = PipelineResult(
            files_scanned=scanned,
            outcomes=list(extract_failures) + list(fetch_outcomes),
        )
        logger.info(
            f"Finished: {len(result.succeeded)} saved, "
            f"{len(result.no_lyrics)} without lyrics, {len(result.failed)} failed "
            f"({result.files_scanned} files scanned)"
        )
        return result


def run_pipeline(roots: Sequence[Path], **kwargs) -> PipelineResult:
    """Run a ``LyricPipeline`` to completion on a fresh event loop."""
    return asyncio.run(LyricPipeline(roots, **kwargs).run())
