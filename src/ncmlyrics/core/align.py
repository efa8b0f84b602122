"""Merge translation and romanization tracks onto the primary lyric lines.

Secondary lines are paired with primary lines by start time. The primary
list is scanned in order: the first exact start-time match wins, otherwise
the closest line seen so far is kept and only replaced by a strictly closer
one, so ties go to the earlier line.
"""

from enum import Enum
from typing import List, Optional, Sequence

from .models import MAX_TIME, AlignedDocument, LyricLine, LyricTracks


class PairType(str, Enum):
    TRANSLATED = "translated"
    ROMAN = "roman"


def find_pair_index(line: LyricLine, lines: Sequence[LyricLine]) -> Optional[int]:
    """Index of the primary line that ``line`` should be attached to."""
    nearest: Optional[int] = None
    for i, dst_line in enumerate(lines):
        if dst_line.is_empty():
            continue
        if dst_line.start_time == line.start_time:
            return i
        if nearest is None:
            nearest = i
        elif abs(lines[nearest].start_time - line.start_time) > abs(
            dst_line.start_time - line.start_time
        ):
            nearest = i
    return nearest


def pair_lyrics(line: LyricLine, lines: List[LyricLine], pair_type: PairType) -> None:
    """Copy the text of ``line`` onto its best-matching primary line."""
    if line.is_empty():
        return
    index = find_pair_index(line, lines)
    if index is None:
        return
    target = lines[index]
    if pair_type == PairType.TRANSLATED:
        target.translated_lyric = line.text
    else:
        target.roman_lyric = line.text


def align_lines(
    primary: List[LyricLine],
    translated: Sequence[LyricLine] = (),
    roman: Sequence[LyricLine] = (),
) -> List[LyricLine]:
    """Pair both secondary tracks onto ``primary`` in place and return it."""
    for line in translated:
        pair_lyrics(line, primary, PairType.TRANSLATED)
    for line in roman:
        pair_lyrics(line, primary, PairType.ROMAN)

    # Some formats leave the last line open-ended.
    if primary:
        last = primary[-1]
        last.end_time = last.words[-1].end_time if last.words else MAX_TIME
    return primary


def transform_lyric_to_document(tracks: LyricTracks) -> AlignedDocument:
    """Pick the primary track and merge the matching secondary tracks."""
    if tracks.yrc:
        primary = tracks.yrc
        translated = tracks.ytlrc or []
        roman = tracks.yromalrc or []
        word_synced = True
    else:
        primary = tracks.lrc or []
        translated = tracks.tlyric or []
        roman = tracks.romalrc or []
        word_synced = False

    lines = align_lines(primary, translated, roman)
    return AlignedDocument(lines=lines, word_synced=word_synced)
