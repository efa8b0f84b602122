"""Client for the NetEase Cloud Music lyric endpoint.

The endpoint answers with a JSON object holding a status ``code`` and up to
six lyric tracks, each ``{"version": int, "lyric": str}``:

- ``lrc`` / ``tlyric`` / ``romalrc``: line-synced original, translation and
  romanization
- ``yrc`` / ``ytlrc`` / ``yromalrc``: word-synced original and the
  translation and romanization that go with it

Only ``yrc`` uses the word-level grammar; the others are plain LRC.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import requests  # type: ignore[import-untyped]

from ..config import HTTP_TIMEOUT, LYRIC_API_URL, USER_AGENT
from ..exceptions import NetworkError, RemoteError
from .lrc import parse_lrc
from .models import LyricLine, LyricTracks
from .yrc import parse_yrc

logger = logging.getLogger(__name__)

SUCCESS_CODE = 200

_TRACK_PARSERS: Dict[str, Callable[[str], List[LyricLine]]] = {
    "lrc": parse_lrc,
    "tlyric": parse_lrc,
    "romalrc": parse_lrc,
    "yrc": parse_yrc,
    "ytlrc": parse_lrc,
    "yromalrc": parse_lrc,
}


def parse_lyric_response(data: Any) -> LyricTracks:
    """Turn a decoded lyric response into parsed tracks.

    Raises:
        RemoteError: The response is not an object or its code is not 200.
    """
    if not isinstance(data, dict):
        raise RemoteError("Malformed lyric response")

    code = data.get("code")
    if code != SUCCESS_CODE:
        raise RemoteError(f"Request failed: {code}", code=code if isinstance(code, int) else None)

    tracks = LyricTracks()
    for name, parser in _TRACK_PARSERS.items():
        track = data.get(name)
        if not isinstance(track, dict):
            continue
        raw = track.get("lyric") or ""
        setattr(tracks, name, parser(raw) if isinstance(raw, str) else [])
    return tracks


class NcmLyricClient:
    """Fetches and parses lyric tracks for a catalog id."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        url_template: str = LYRIC_API_URL,
        timeout: float = HTTP_TIMEOUT,
        user_agent: str = USER_AGENT,
    ):
        self.session = session or requests.Session()
        self.url_template = url_template
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent}

    def lyric_url(self, music_id: int) -> str:
        return self.url_template.format(music_id=music_id)

    def get_lyrics(self, music_id: int) -> LyricTracks:
        """Download and parse all lyric tracks for ``music_id``.

        Raises:
            NetworkError: The request could not be completed.
            RemoteError: The service reported a failure or sent a bad body.
        """
        url = self.lyric_url(music_id)
        logger.debug(f"Fetching lyrics for {music_id}: {url}")
        try:
            resp = self.session.get(url, headers=self.headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Lyric download failed: {e}")

        try:
            data = resp.json()
        except ValueError as e:
            raise RemoteError(f"Lyric response is not valid JSON: {e}")

        return parse_lyric_response(data)

    def close(self) -> None:
        self.session.close()
