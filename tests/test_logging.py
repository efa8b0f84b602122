"""Tests for logging setup and status line routing."""

import logging

from ncmlyrics.core.progress import ItemStatus, StatusReporter
from ncmlyrics.utils.logging import STATUS_LOGGER, setup_logging


def test_status_lines_are_echoed_without_level_prefix(temp_dir, capsys):
    setup_logging()
    reporter = StatusReporter()

    reporter.done(temp_dir / "a.mp3", "fetch", "Lyrics saved to a.ttml")
    reporter.fail(temp_dir / "b.mp3", "extract", "Cannot parse NetEase metadata")
    reporter.error("Cannot scan locked")

    out, err = capsys.readouterr()
    assert out.splitlines() == [
        f"✅ {temp_dir / 'a.mp3'}: Lyrics saved to a.ttml",
        f"❌ {temp_dir / 'b.mp3'}: Cannot parse NetEase metadata",
    ]
    assert err.strip() == "❌ Cannot scan locked"


def test_status_lines_shown_when_log_level_is_raised(temp_dir, capsys):
    setup_logging(level="ERROR")
    logging.getLogger("ncmlyrics.pipeline").info("hidden diagnostics")
    StatusReporter().no_lyrics(temp_dir / "a.mp3", "fetch", "No lyrics found")

    out, _ = capsys.readouterr()
    assert "hidden diagnostics" not in out
    assert "No lyrics found" in out


def test_status_lines_also_go_to_log_file(temp_dir, capsys):
    log_file = temp_dir / "logs" / "run.log"
    setup_logging(level="DEBUG", log_file=log_file, verbose=True)

    logging.getLogger("ncmlyrics.pipeline").debug("admitted 1")
    StatusReporter().done(temp_dir / "a.mp3", "fetch", "Lyrics saved to a.ttml")

    for handler in logging.getLogger("ncmlyrics").handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "admitted 1" in text
    assert "Lyrics saved to a.ttml" in text


def test_reporter_returns_outcomes_and_propagates_without_setup(temp_dir, caplog):
    with caplog.at_level(logging.INFO, logger=STATUS_LOGGER):
        outcome = StatusReporter().no_lyrics(
            temp_dir / "a.mp3", "fetch", "No lyrics found", music_id=7
        )

    assert outcome.status == ItemStatus.NO_LYRICS
    assert outcome.music_id == 7
    assert "No lyrics found" in caplog.text
