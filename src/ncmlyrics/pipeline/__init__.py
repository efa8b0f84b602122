"""Concurrent scan -> extract -> fetch/align/write pipeline."""

from .extract import Extractor
from .fetch import FetchAlignWriter, lyric_path_for
from .orchestrator import LyricPipeline, PipelineResult, run_pipeline
from .queues import CLOSED, FetchJob
from .scan import Scanner, iter_candidate_files

__all__ = [
    "CLOSED",
    "Extractor",
    "FetchAlignWriter",
    "FetchJob",
    "LyricPipeline",
    "PipelineResult",
    "Scanner",
    "iter_candidate_files",
    "lyric_path_for",
    "run_pipeline",
]
