# core/audio_info.py
"""Read title, artist, album, comment, lyrics and cover from audio tags."""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Iterable, Optional

from mutagen import File as MutagenFile
from mutagen import MutagenError
from mutagen.flac import Picture
from mutagen.id3 import ID3, PictureType

from ..exceptions import LyricsIOError
from .models import AudioInfo
from .ncm_key import KEY_PREFIX

logger = logging.getLogger(__name__)

VORBIS_COMMENT_KEYS = ("comment", "description")
VORBIS_LYRICS_KEYS = ("lyrics", "unsyncedlyrics")
VORBIS_PICTURE_KEY = "metadata_block_picture"


def _pick_comment(values: Iterable[str]) -> Optional[str]:
    """Prefer a comment holding a 163 key; otherwise the last one wins."""
    chosen = None
    for value in values:
        if not value:
            continue
        if value.startswith(KEY_PREFIX):
            return value
        chosen = value
    return chosen


def _pick_cover(pictures: list) -> tuple[str, Optional[bytes]]:
    if len(pictures) == 1:
        return pictures[0].mime, bytes(pictures[0].data)
    mime, data = "", None
    for pic in pictures:
        if pic.type == PictureType.COVER_FRONT:
            mime, data = pic.mime, bytes(pic.data)
    return mime, data


def _read_id3(tags: ID3, info: AudioInfo) -> None:
    def _text(frame_id: str) -> Optional[str]:
        frames = tags.getall(frame_id)
        if not frames:
            return None
        return "/".join(str(t) for t in frames[-1].text) or None

    info.name = _text("TIT2") or info.name
    info.artist = _text("TPE1") or info.artist
    info.album = _text("TALB") or info.album

    comments = ["".join(str(t) for t in frame.text) for frame in tags.getall("COMM")]
    info.comment = _pick_comment(comments) or info.comment

    lyrics = tags.getall("USLT")
    if lyrics:
        info.lyric = str(lyrics[-1].text) or info.lyric

    info.cover_media_type, info.cover = _pick_cover(tags.getall("APIC"))


def _vorbis_pictures(tags) -> list:
    pictures = []
    for raw in tags.get(VORBIS_PICTURE_KEY, []):
        try:
            pictures.append(Picture(base64.b64decode(raw)))
        except (binascii.Error, ValueError, MutagenError) as e:
            logger.debug(f"Skipping unreadable embedded picture: {e}")
    return pictures


def _read_vorbis(audio, info: AudioInfo) -> None:
    tags = audio.tags

    def _first(key: str) -> Optional[str]:
        values = tags.get(key)
        return values[0] if values else None

    info.name = _first("title") or info.name
    info.artist = _first("artist") or info.artist
    info.album = _first("album") or info.album

    comments = [v for key in VORBIS_COMMENT_KEYS for v in tags.get(key, [])]
    info.comment = _pick_comment(comments) or info.comment

    for key in VORBIS_LYRICS_KEYS:
        value = _first(key)
        if value:
            info.lyric = value
            break

    pictures = list(getattr(audio, "pictures", [])) or _vorbis_pictures(tags)
    if pictures:
        info.cover_media_type, info.cover = _pick_cover(pictures)


def read_audio_info(path: str | Path) -> AudioInfo:
    """Read tags from an audio file.

    Raises:
        LyricsIOError: The file cannot be opened or is not a known audio format.
    """
    try:
        audio = MutagenFile(str(path))
    except (MutagenError, OSError) as e:
        raise LyricsIOError(f"Cannot read audio metadata: {e}")
    if audio is None:
        raise LyricsIOError(f"Unsupported or unrecognised audio file: {path}")

    info = AudioInfo()
    tags = audio.tags
    if tags is None:
        return info

    if isinstance(tags, ID3):
        _read_id3(tags, info)
    else:
        _read_vorbis(audio, info)
    return info
