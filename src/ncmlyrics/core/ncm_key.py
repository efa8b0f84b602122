"""Decryption of the "163 key" identifier stored in audio file comments.

NetEase Cloud Music writes an encrypted record into the comment tag of the
files it downloads::

    163 key(Don't modify):<base64 of AES-128-ECB("music:" + JSON)>

The JSON record holds the song's catalog id (``musicId``) along with a few
descriptive fields.
"""

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Dict

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..exceptions import CryptoError, CryptoErrorKind, FormatError, FormatErrorKind

KEY_PREFIX = "163 key(Don't modify):"
RECORD_PREFIX = b"music:"
NCM_KEY = b"#14ljk_!\\]&0U<'("

_MAX_MUSIC_ID = 2**128 - 1


@dataclass(frozen=True)
class NcmMusicInfo:
    """The decrypted record. Only ``music_id`` is used for lookups."""

    music_id: int
    music_name: str = ""
    album: str = ""
    album_id: int = 0
    album_pic: str = ""
    album_pic_doc_id: str = ""
    bitrate: int = 0
    duration: int = 0
    format: str = ""
    mp3_doc_id: str = ""


def _decrypt(encrypted: bytes) -> bytes:
    try:
        decryptor = Cipher(algorithms.AES(NCM_KEY), modes.ECB()).decryptor()
        padded = decryptor.update(encrypted) + decryptor.finalize()
        unpadder = padding.PKCS7(128).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        raise CryptoError(CryptoErrorKind.DECRYPTION_FAILED, f"Cannot decrypt key: {e}")


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    return default


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ("" if value is None else str(value))


def _music_info_from_record(record: Dict[str, Any]) -> NcmMusicInfo:
    music_id = record.get("musicId")
    if isinstance(music_id, bool) or not isinstance(music_id, int):
        raise FormatError(
            FormatErrorKind.INVALID_RECORD, f"Record has no numeric musicId: {music_id!r}"
        )
    if not 0 <= music_id <= _MAX_MUSIC_ID:
        raise FormatError(
            FormatErrorKind.INVALID_RECORD, f"musicId out of range: {music_id}"
        )

    return NcmMusicInfo(
        music_id=music_id,
        music_name=_as_str(record.get("musicName")),
        album=_as_str(record.get("album")),
        album_id=_as_int(record.get("albumId")),
        album_pic=_as_str(record.get("albumPic")),
        album_pic_doc_id=_as_str(record.get("albumPicDocId")),
        bitrate=_as_int(record.get("bitrate")),
        duration=_as_int(record.get("duration")),
        format=_as_str(record.get("format")),
        mp3_doc_id=_as_str(record.get("mp3DocId")),
    )


def parse_ncm_key(data: str) -> NcmMusicInfo:
    """Decode and decrypt a "163 key" comment.

    Raises:
        FormatError: The prefix, base64 payload or inner record is malformed.
        CryptoError: The payload cannot be decrypted or unpadded.
    """
    if not data.startswith(KEY_PREFIX):
        raise FormatError(FormatErrorKind.MISSING_PREFIX, "Key header not found")
    payload = data[len(KEY_PREFIX):]

    try:
        encrypted = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FormatError(FormatErrorKind.INVALID_BASE64, f"Invalid base64 key: {e}")

    decrypted = _decrypt(encrypted)

    if not decrypted.startswith(RECORD_PREFIX):
        raise FormatError(
            FormatErrorKind.MISSING_RECORD_PREFIX,
            "Decrypted key does not start with 'music:'",
        )

    try:
        record = json.loads(decrypted[len(RECORD_PREFIX):])
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise FormatError(FormatErrorKind.INVALID_RECORD, f"Invalid key record: {e}")
    if not isinstance(record, dict):
        raise FormatError(FormatErrorKind.INVALID_RECORD, "Key record is not an object")

    return _music_info_from_record(record)


def parse_music_id(data: str) -> int:
    """Return only the catalog id from a "163 key" comment."""
    return parse_ncm_key(data).music_id
