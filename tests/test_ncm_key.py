"""Tests for "163 key" decryption."""

import base64

import pytest

from conftest import aes_ecb_encrypt, make_key_blob
from ncmlyrics.core.ncm_key import KEY_PREFIX, parse_music_id, parse_ncm_key
from ncmlyrics.exceptions import (
    CryptoError,
    CryptoErrorKind,
    FormatError,
    FormatErrorKind,
    NcmLyricsError,
)


def _blob_from_ciphertext(data: bytes) -> str:
    return KEY_PREFIX + base64.b64encode(data).decode("ascii")


class TestParseNcmKey:
    def test_round_trip_music_id(self, key_blob):
        assert parse_music_id(key_blob(402073643)) == 402073643

    def test_record_fields(self):
        blob = make_key_blob(
            {
                "musicId": 1234,
                "musicName": "Hello",
                "album": "World",
                "albumId": 99,
                "bitrate": 320000,
                "duration": 215000,
                "format": "mp3",
                "mp3DocId": "abc",
                "unknownField": [1, 2, 3],
            }
        )
        info = parse_ncm_key(blob)
        assert info.music_id == 1234
        assert info.music_name == "Hello"
        assert info.album == "World"
        assert info.album_id == 99
        assert info.bitrate == 320000
        assert info.duration == 215000
        assert info.format == "mp3"
        assert info.mp3_doc_id == "abc"

    def test_accepts_full_128_bit_id(self, key_blob):
        big = 2**128 - 1
        assert parse_music_id(key_blob(big)) == big

    @pytest.mark.parametrize("text", ["", "music:123", "163 key:abc", " 163 key(Don't modify):"])
    def test_missing_prefix(self, text):
        with pytest.raises(FormatError) as exc:
            parse_ncm_key(text)
        assert exc.value.kind == FormatErrorKind.MISSING_PREFIX

    @pytest.mark.parametrize("payload", ["!!!not-base64!!!", "abc", "ab$d"])
    def test_invalid_base64(self, payload):
        with pytest.raises(FormatError) as exc:
            parse_ncm_key(KEY_PREFIX + payload)
        assert exc.value.kind == FormatErrorKind.INVALID_BASE64

    def test_ciphertext_not_block_aligned(self):
        with pytest.raises(CryptoError) as exc:
            parse_ncm_key(_blob_from_ciphertext(b"x" * 15))
        assert exc.value.kind == CryptoErrorKind.DECRYPTION_FAILED

    def test_empty_ciphertext(self):
        with pytest.raises(CryptoError):
            parse_ncm_key(KEY_PREFIX)

    def test_bad_padding(self):
        # A full block ending in 0x00 is never valid PKCS7.
        block = b"music:{}" + b"\x01" * 7 + b"\x00"
        encrypted = aes_ecb_encrypt(block, pad=False)
        with pytest.raises(CryptoError) as exc:
            parse_ncm_key(_blob_from_ciphertext(encrypted))
        assert exc.value.kind == CryptoErrorKind.DECRYPTION_FAILED

    def test_wrong_key_produces_no_id(self):
        blob = make_key_blob({"musicId": 402073643}, key=b"0123456789abcdef")
        # Garbage plaintext fails either at unpadding or at the record prefix.
        with pytest.raises((CryptoError, FormatError)):
            parse_ncm_key(blob)

    def test_missing_record_prefix(self):
        blob = make_key_blob(plaintext=b'song:{"musicId": 1}')
        with pytest.raises(FormatError) as exc:
            parse_ncm_key(blob)
        assert exc.value.kind == FormatErrorKind.MISSING_RECORD_PREFIX

    @pytest.mark.parametrize(
        "plaintext",
        [
            b"music:{not json",
            b"music:[1, 2]",
            b'music:{"musicName": "no id"}',
            b'music:{"musicId": "402073643"}',
            b'music:{"musicId": -1}',
            b'music:{"musicId": 1.5}',
            b'music:{"musicId": true}',
            b"music:\xff\xfe",
        ],
    )
    def test_invalid_record(self, plaintext):
        with pytest.raises(FormatError) as exc:
            parse_ncm_key(make_key_blob(plaintext=plaintext))
        assert exc.value.kind == FormatErrorKind.INVALID_RECORD

    def test_deeply_nested_record(self):
        blob = make_key_blob(plaintext=b"music:" + b"[" * 200_000)
        with pytest.raises(FormatError) as exc:
            parse_ncm_key(blob)
        assert exc.value.kind == FormatErrorKind.INVALID_RECORD

    def test_id_out_of_range(self, key_blob):
        with pytest.raises(FormatError) as exc:
            parse_ncm_key(key_blob(2**128))
        assert exc.value.kind == FormatErrorKind.INVALID_RECORD

    def test_errors_share_base_class(self):
        with pytest.raises(NcmLyricsError):
            parse_ncm_key("no key here")
