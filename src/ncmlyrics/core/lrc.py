"""LRC parsing into timed lyric lines.

Each text line may carry one or more leading ``[mm:ss.xx]`` timestamps; every
timestamp produces its own line. Tag lines such as ``[ar:Artist]`` and the
JSON credit lines NetEase prepends are ignored.
"""

import re
from typing import List, Tuple

from .models import LyricLine, Word

# ----------------------
# LRC timestamp regex
# ----------------------
_LRC_TS_RE = re.compile(
    r"""
    \[                      # opening bracket
    (?P<min>\d+)            # minutes
    :
    (?P<sec>[0-5]?\d)       # seconds
    (?:[.:](?P<frac>\d{1,3}))?  # optional fractional seconds
    \]                      # closing bracket
    """,
    re.VERBOSE,
)


def parse_lrc_timestamp(ts: str) -> int | None:
    """Parse a single ``[mm:ss.xx]`` timestamp into milliseconds."""
    match = _LRC_TS_RE.fullmatch(ts.strip())
    if not match:
        return None
    return _match_to_ms(match)


def _match_to_ms(match: re.Match) -> int:
    minutes = int(match.group("min"))
    seconds = int(match.group("sec"))
    frac = match.group("frac") or ""
    millis = int(frac.ljust(3, "0")) if frac else 0
    return (minutes * 60 + seconds) * 1000 + millis


def _split_timestamps(raw_line: str) -> Tuple[List[int], str]:
    """Strip leading timestamps from a line and return them with the text."""
    times: List[int] = []
    pos = 0
    while True:
        match = _LRC_TS_RE.match(raw_line, pos)
        if not match:
            break
        times.append(_match_to_ms(match))
        pos = match.end()
    return times, raw_line[pos:]


def parse_lrc(text: str) -> List[LyricLine]:
    """Parse an LRC document into lines sorted by start time."""
    timed: List[Tuple[int, str]] = []
    for raw_line in text.splitlines():
        times, lyric = _split_timestamps(raw_line.strip())
        lyric = lyric.strip()
        for start in times:
            timed.append((start, lyric))

    timed.sort(key=lambda item: item[0])

    lines: List[LyricLine] = []
    for i, (start, lyric) in enumerate(timed):
        end = timed[i + 1][0] if i + 1 < len(timed) else start
        words = [Word(text=lyric, start_time=start, end_time=end)] if lyric else []
        lines.append(LyricLine(start_time=start, end_time=end, words=words))
    return lines
