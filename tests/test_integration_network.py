"""Live checks against the NetEase lyric service.

Skipped unless ``--run-network`` or ``RUN_INTEGRATION_TESTS=1`` is given.
"""

import pytest

from ncmlyrics.core.align import transform_lyric_to_document
from ncmlyrics.core.ncm_api import NcmLyricClient
from ncmlyrics.core.ttml import stringify_ttml

pytestmark = pytest.mark.network


def test_fetch_known_song():
    client = NcmLyricClient()
    try:
        tracks = client.get_lyrics(402073643)
    finally:
        client.close()

    assert tracks.lrc
    document = transform_lyric_to_document(tracks)
    assert not document.is_empty()
    assert stringify_ttml(document).startswith(b"<?xml")
