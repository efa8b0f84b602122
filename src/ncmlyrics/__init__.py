"""ncm-lyrics: fetch NetEase Cloud Music lyrics for local audio files."""

__version__ = "0.1.0"
