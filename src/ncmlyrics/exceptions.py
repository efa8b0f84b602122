"""Custom exceptions for ncm-lyrics."""

from enum import Enum


class NcmLyricsError(Exception):
    """Base exception for ncm-lyrics."""
    pass


class FormatErrorKind(str, Enum):
    """Which part of an identifier container was malformed."""

    MISSING_PREFIX = "missing_prefix"
    INVALID_BASE64 = "invalid_base64"
    MISSING_RECORD_PREFIX = "missing_record_prefix"
    INVALID_RECORD = "invalid_record"


class CryptoErrorKind(str, Enum):
    DECRYPTION_FAILED = "decryption_failed"


class FormatError(NcmLyricsError):
    """Malformed identifier container or inner record."""

    def __init__(self, kind: FormatErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class CryptoError(NcmLyricsError):
    """Decryption or padding failure."""

    def __init__(self, kind: CryptoErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class LyricsIOError(NcmLyricsError):
    """Error reading an audio file or writing a lyric file."""
    pass


class NetworkError(NcmLyricsError):
    """Transport failure talking to the lyric service."""
    pass


class RemoteError(NcmLyricsError):
    """The lyric service answered with a non-success status."""

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.code = code


class SerializationError(NcmLyricsError):
    """Error generating a lyric document."""
    pass


class ValidationError(NcmLyricsError):
    """Invalid input parameters."""
    pass


class ConfigError(NcmLyricsError):
    """Invalid configuration value."""
    pass
