from rich.console import Console

from avim.config import DEBUG_LOG_LINES
from avim.editor.session import Session
from avim.models import Mode
from avim.ui import render
from avim.utils import format_timestamp
from conftest import FakeAudio, FakeClipboard


def _text(session: Session, height: int = 20) -> str:
    console = Console(record=True, width=100)
    console.print(render(session, height))
    return console.export_text()


def test_format_timestamp() -> None:
    assert format_timestamp(65.5) == "01:05.50"
    assert format_timestamp(3725.0) == "01:02:05.00"


def test_render_loading_screen() -> None:
    session = Session("/a.wav", audio=FakeAudio(), clipboard=FakeClipboard())
    session.fail("Could not get audio duration.")
    out = _text(session)
    assert "Loading" in out
    assert "ERROR: Could not get audio duration." in out


def test_render_transcript_and_status(session) -> None:
    session.store.current.comment = "check spelling"
    out = _text(session)
    assert "Transcript (3 clips)" in out
    assert "[Speaker 0] C D E" in out
    assert "// check spelling" in out
    assert "-- NORMAL --" in out


def test_render_command_line(session) -> None:
    session.mode = Mode.COMMAND
    session.command_buffer = "w out.avim"
    assert ":w out.avim" in _text(session)


def test_render_window_follows_cursor(session) -> None:
    session.store.current_index = 2
    out = _text(session, height=5)
    assert "F G H I" in out
    assert "A B" not in out


def test_render_debug_panel(session) -> None:
    session.debug = True
    session.debug_log.append("DEBUG avim: Discrepancy: 0.00s")
    assert "Debug Log" in _text(session)


def test_debug_log_keeps_only_recent_lines(session) -> None:
    for i in range(DEBUG_LOG_LINES + 50):
        session.debug_log.append(f"line {i}")
    assert len(session.debug_log) == DEBUG_LOG_LINES
    assert session.debug_log[0] == "line 50"
    session.debug = True
    assert f"line {DEBUG_LOG_LINES + 49}" in _text(session)
