"""TTML serialization of merged lyric documents.

The output follows the Apple Music style lyric TTML that AMLL players read:
one ``<p>`` per line, one ``<span>`` per word for word-synced lyrics, and
translation / romanization as ``x-translation`` / ``x-roman`` role spans.
Document metadata goes into the head as ``amll:meta`` key/value entries.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from ..exceptions import LyricsIOError, SerializationError
from .models import MAX_TIME, AlignedDocument, LyricLine

logger = logging.getLogger(__name__)

TT_NS = "http://www.w3.org/ns/ttml"
TTM_NS = "http://www.w3.org/ns/ttml#metadata"
ITUNES_NS = "http://music.apple.com/lyric-ttml-internal"
AMLL_NS = "http://www.example.com/ns/amll"
XML_NS = "http://www.w3.org/XML/1998/namespace"

ET.register_namespace("", TT_NS)
ET.register_namespace("ttm", TTM_NS)
ET.register_namespace("itunes", ITUNES_NS)
ET.register_namespace("amll", AMLL_NS)


def _tt(tag: str) -> str:
    return f"{{{TT_NS}}}{tag}"


def format_time(ms: int) -> str:
    """Format milliseconds as ``mm:ss.mmm``."""
    minutes, rest = divmod(ms, 60_000)
    seconds, millis = divmod(rest, 1000)
    return f"{minutes:02d}:{seconds:02d}.{millis:03d}"


def _line_end(line: LyricLine) -> int:
    if line.end_time != MAX_TIME:
        return line.end_time
    ends = [w.end_time for w in line.words if w.end_time != MAX_TIME]
    return max(ends + [line.start_time])


def _append_text(parent: ET.Element, last: Optional[ET.Element], text: str) -> None:
    if last is None:
        parent.text = (parent.text or "") + text
    else:
        last.tail = (last.tail or "") + text


def _add_words(p: ET.Element, line: LyricLine) -> None:
    last: Optional[ET.Element] = None
    for word in line.words:
        stripped = word.text.strip()
        if not stripped:
            _append_text(p, last, " ")
            continue
        if word.text[0].isspace() and (last is not None or p.text):
            _append_text(p, last, " ")
        span = ET.SubElement(
            p,
            _tt("span"),
            {"begin": format_time(word.start_time), "end": format_time(word.end_time)},
        )
        span.text = stripped
        if word.text[-1].isspace():
            span.tail = " "
        last = span
    if last is not None and last.tail:
        last.tail = last.tail.rstrip() or None


def _add_role_span(p: ET.Element, role: str, text: str) -> None:
    span = ET.SubElement(p, _tt("span"), {f"{{{TTM_NS}}}role": role})
    if role == "x-translation":
        span.set(f"{{{XML_NS}}}lang", "zh-CN")
    span.text = text


def build_ttml(document: AlignedDocument) -> ET.Element:
    """Build the TTML element tree for a document."""
    timing = "Word" if document.word_synced else "Line"
    tt = ET.Element(_tt("tt"), {f"{{{ITUNES_NS}}}timing": timing})

    head = ET.SubElement(tt, _tt("head"))
    metadata = ET.SubElement(head, _tt("metadata"))
    ET.SubElement(
        metadata, f"{{{TTM_NS}}}agent", {"type": "person", f"{{{XML_NS}}}id": "v1"}
    )
    for key, value in document.metadata:
        ET.SubElement(metadata, f"{{{AMLL_NS}}}meta", {"key": key, "value": value})

    lines = [line for line in document.lines if not line.is_empty()]
    begin = lines[0].start_time if lines else 0
    end = max((_line_end(line) for line in lines), default=0)

    body = ET.SubElement(tt, _tt("body"), {"dur": format_time(end)})
    div = ET.SubElement(
        body, _tt("div"), {"begin": format_time(begin), "end": format_time(end)}
    )

    for key, line in enumerate(lines, start=1):
        p = ET.SubElement(
            div,
            _tt("p"),
            {
                "begin": format_time(line.start_time),
                "end": format_time(_line_end(line)),
                f"{{{TTM_NS}}}agent": "v1",
                f"{{{ITUNES_NS}}}key": f"L{key}",
            },
        )
        if document.word_synced:
            _add_words(p, line)
        else:
            p.text = line.text.strip()
        if line.translated_lyric:
            _add_role_span(p, "x-translation", line.translated_lyric)
        if line.roman_lyric:
            _add_role_span(p, "x-roman", line.roman_lyric)
    return tt


def stringify_ttml(document: AlignedDocument) -> bytes:
    """Serialize a document to UTF-8 TTML bytes."""
    try:
        return ET.tostring(build_ttml(document), encoding="utf-8", xml_declaration=True)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot convert lyrics to TTML: {e}")


def write_ttml(path: Path, data: bytes) -> None:
    """Write serialized TTML, replacing any existing file."""
    try:
        path.write_bytes(data)
    except OSError as e:
        raise LyricsIOError(f"Cannot write lyric file {path}: {e}")
    logger.debug(f"Wrote {len(data)} bytes to {path}")
