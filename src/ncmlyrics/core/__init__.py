"""Core lyric handling: key decryption, parsing, alignment and output."""

from .models import (
    MAX_TIME,
    AlignedDocument,
    AudioInfo,
    CandidateFile,
    LyricLine,
    LyricTracks,
    Word,
)
from .align import align_lines, pair_lyrics, transform_lyric_to_document
from .ncm_key import NcmMusicInfo, parse_music_id, parse_ncm_key

__all__ = [
    "MAX_TIME",
    "AlignedDocument",
    "AudioInfo",
    "CandidateFile",
    "LyricLine",
    "LyricTracks",
    "Word",
    "align_lines",
    "pair_lyrics",
    "transform_lyric_to_document",
    "NcmMusicInfo",
    "parse_music_id",
    "parse_ncm_key",
]
