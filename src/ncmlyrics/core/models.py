"""Data models for lyric lines, tracks and audio metadata."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

# End time used when a line's duration is unknown.
MAX_TIME = 2**64 - 1


@dataclass
class Word:
    """A single word with timing information, in milliseconds."""

    text: str
    start_time: int
    end_time: int


@dataclass
class LyricLine:
    """A line of lyrics with optional translation and romanization."""

    start_time: int = 0
    end_time: int = 0
    words: List[Word] = field(default_factory=list)
    translated_lyric: str = ""
    roman_lyric: str = ""

    def is_empty(self) -> bool:
        return not self.words

    @property
    def text(self) -> str:
        return "".join(w.text for w in self.words)


@dataclass
class LyricTracks:
    """Parsed lyric tracks returned by the lyric service.

    ``None`` means the service did not send that track at all.
    """

    lrc: Optional[List[LyricLine]] = None
    tlyric: Optional[List[LyricLine]] = None
    romalrc: Optional[List[LyricLine]] = None
    yrc: Optional[List[LyricLine]] = None
    ytlrc: Optional[List[LyricLine]] = None
    yromalrc: Optional[List[LyricLine]] = None


@dataclass
class AlignedDocument:
    """Merged lyric lines ready to be written out."""

    lines: List[LyricLine] = field(default_factory=list)
    word_synced: bool = False
    # (key, value) pairs written as amll:meta entries
    metadata: List[Tuple[str, str]] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True when there is no line with words to write."""
        return all(line.is_empty() for line in self.lines)


@dataclass
class AudioInfo:
    """Tags read from an audio file."""

    name: str = ""
    artist: str = ""
    album: str = ""
    lyric: str = ""
    comment: str = ""
    cover_media_type: str = ""
    cover: Optional[bytes] = None


@dataclass(frozen=True)
class CandidateFile:
    """An audio file found while scanning."""

    path: Path

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".").lower()
