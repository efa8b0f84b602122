"""Test configuration and fixtures.

Provides reusable fixtures for:
- Temporary directories
- Building valid and broken "163 key" comment blobs
- Fake HTTP sessions and responses for the lyric client
- Small lyric line builders
"""

import base64
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ncmlyrics.core.models import LyricLine, Word
from ncmlyrics.core.ncm_key import KEY_PREFIX, NCM_KEY


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


# =============================================================================
# Basic Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# 163 key helpers
# =============================================================================


def aes_ecb_encrypt(data: bytes, key: bytes = NCM_KEY, pad: bool = True) -> bytes:
    if pad:
        padder = padding.PKCS7(128).padder()
        data = padder.update(data) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    return encryptor.update(data) + encryptor.finalize()


def make_key_blob(
    record=None,
    *,
    plaintext: Optional[bytes] = None,
    key: bytes = NCM_KEY,
) -> str:
    """Build a comment string the way NetEase writes it."""
    if plaintext is None:
        plaintext = b"music:" + json.dumps(record).encode("utf-8")
    encrypted = aes_ecb_encrypt(plaintext, key=key)
    return KEY_PREFIX + base64.b64encode(encrypted).decode("ascii")


@pytest.fixture
def key_blob():
    """Factory: ``key_blob(music_id, **extra_fields)`` -> comment string."""

    def _make(music_id: int, **fields) -> str:
        record = {"musicId": music_id, "musicName": "Song", "format": "flac"}
        record.update(fields)
        return make_key_blob(record)

    return _make


# =============================================================================
# HTTP fakes
# =============================================================================


class FakeResponse:
    def __init__(self, json_data=None, raise_error: Optional[Exception] = None):
        self._json_data = json_data
        self._raise_error = raise_error

    def raise_for_status(self):
        if self._raise_error:
            raise self._raise_error

    def json(self):
        if isinstance(self._json_data, Exception):
            raise self._json_data
        return self._json_data


class FakeSession:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers, timeout))
        if not self._responses:
            raise RuntimeError("no response")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    """Factory: ``fake_session(*responses)`` -> FakeSession."""

    def _make(*responses):
        return FakeSession(responses)

    return _make


# =============================================================================
# Lyric line builders
# =============================================================================


def lrc_line(start: int, text: str, end: Optional[int] = None) -> LyricLine:
    """A line-synced line; blank text gives an empty line."""
    end = start if end is None else end
    words = [Word(text=text, start_time=start, end_time=end)] if text else []
    return LyricLine(start_time=start, end_time=end, words=words)


def yrc_line(start: int, *words: str, word_ms: int = 100) -> LyricLine:
    """A word-synced line with back-to-back words of ``word_ms`` each."""
    built: List[Word] = []
    t = start
    for text in words:
        built.append(Word(text=text, start_time=t, end_time=t + word_ms))
        t += word_ms
    return LyricLine(start_time=start, end_time=t, words=built)


@pytest.fixture(autouse=True)
def reset_ncmlyrics_logger():
    """CLI runs attach handlers to streams that are closed afterwards."""
    yield
    for name in ("ncmlyrics", "ncmlyrics.status"):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
