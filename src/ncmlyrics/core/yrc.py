"""Parser for NetEase word-synced lyrics (YRC).

A YRC line looks like::

    [16210,3460](16210,670,0)Hello (16880,410,0)world

The bracket holds the line start and duration, each parenthesised group the
start and duration of the word that follows it. All times are absolute
milliseconds.
"""

import re
from typing import List, Optional

from .models import LyricLine, Word

_LINE_HEAD_RE = re.compile(r"^\[(?P<start>\d+),(?P<duration>\d+)\]")
_WORD_HEAD_RE = re.compile(r"\((?P<start>\d+),(?P<duration>\d+),\d+\)")


def parse_yrc_line(raw_line: str) -> Optional[LyricLine]:
    head = _LINE_HEAD_RE.match(raw_line)
    if not head:
        return None
    start = int(head.group("start"))
    end = start + int(head.group("duration"))

    body = raw_line[head.end():]
    markers = list(_WORD_HEAD_RE.finditer(body))
    words: List[Word] = []
    for i, marker in enumerate(markers):
        text_end = markers[i + 1].start() if i + 1 < len(markers) else len(body)
        text = body[marker.end():text_end]
        if not text:
            continue
        word_start = int(marker.group("start"))
        words.append(
            Word(
                text=text,
                start_time=word_start,
                end_time=word_start + int(marker.group("duration")),
            )
        )
    return LyricLine(start_time=start, end_time=end, words=words)


def parse_yrc(text: str) -> List[LyricLine]:
    """Parse a YRC document, skipping credit and malformed lines."""
    lines: List[LyricLine] = []
    for raw_line in text.splitlines():
        raw_line = raw_line.strip()
        # JSON credit lines: {"t":0,"c":[...]}
        if not raw_line or raw_line.startswith("{"):
            continue
        line = parse_yrc_line(raw_line)
        if line is not None:
            lines.append(line)
    return lines
