"""Terminal rendering with rich and raw key input."""

import asyncio
import os
import sys
import termios
import tty
from typing import AsyncIterator

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .editor.session import Session
from .keys import split_keys
from .models import Loading, Mode
from .utils import format_timestamp

MODE_LABELS = {
    Mode.NORMAL: "-- NORMAL --",
    Mode.INSERT: "-- INSERT --",
    Mode.ADJUST: "-- ADJUST --",
    Mode.VISUAL: "-- VISUAL --",
}

CURRENT_STYLE = "black on bright_cyan"
SELECTED_WORD_STYLE = "black on yellow"


def _clip_text(session: Session, index: int) -> Text:
    clip = session.store[index]
    text = Text(f"{index + 1:>4} ")
    text.append(
        f"[{format_timestamp(clip.start_time)}-{format_timestamp(clip.end_time)}]"
        f" [{clip.speaker}] "
    )
    adjusting = (
        session.mode is Mode.ADJUST and index == session.store.current_index + 1
    )
    if adjusting:
        for word_idx, word in enumerate(clip.words):
            style = SELECTED_WORD_STYLE if word_idx <= session.adjust_word_index else ""
            text.append(f"{word} ", style=style)
        text.stylize("bold")
    else:
        text.append(clip.transcript)
    if clip.comment:
        text.append(f"\n     // {clip.comment}", style="green")
    if index == session.store.current_index:
        text.stylize(CURRENT_STYLE)
    return text


def _visible_range(session: Session, rows: int) -> range:
    total = len(session.store)
    rows = max(rows, 1)
    start = max(0, min(session.store.current_index - rows // 2, total - rows))
    return range(start, min(total, start + rows))


def render_transcript(session: Session, rows: int) -> RenderableType:
    if isinstance(session.state, Loading):
        return Panel(
            Text(session.state.message, style="yellow", justify="center"),
            title="Loading",
        )
    lines = [_clip_text(session, i) for i in _visible_range(session, rows)]
    return Panel(
        Group(*lines), title=f"Transcript ({len(session.store)} clips)"
    )


def render_status(session: Session) -> RenderableType:
    if session.mode is Mode.COMMAND:
        mode_text = f":{session.command_buffer}"
    else:
        mode_text = MODE_LABELS[session.mode]
    return Group(
        Text(mode_text, style="white on grey23"),
        Text(session.status_message),
    )


def render(session: Session, height: int = 40) -> RenderableType:
    # Panel borders and the two status lines
    rows = max(height - 4, 1)
    main = Group(render_transcript(session, rows), render_status(session))
    if not session.debug:
        return main
    grid = Table.grid(expand=True)
    grid.add_column(ratio=3)
    grid.add_column(ratio=2)
    log = Text("\n".join(list(session.debug_log)[-rows:]))
    grid.add_row(main, Panel(log, title="Debug Log"))
    return grid


class TerminalUI:
    """Full-screen rich display plus raw-mode keyboard input on stdin."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._live: Live | None = None
        self._fd = sys.stdin.fileno()
        self._saved_attrs: list | None = None

    def __enter__(self) -> "TerminalUI":
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)
        # Keep output post-processing so rich can still print newlines
        attrs = termios.tcgetattr(self._fd)
        attrs[1] |= termios.OPOST
        termios.tcsetattr(self._fd, termios.TCSADRAIN, attrs)
        self._live = Live(
            console=self.console, screen=True, auto_refresh=False
        )
        self._live.__enter__()
        return self

    def __exit__(self, *exc) -> None:
        if self._live is not None:
            self._live.__exit__(*exc)
        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)

    def draw(self, session: Session) -> None:
        assert self._live is not None
        self._live.update(render(session, self.console.size.height), refresh=True)

    async def keys(self) -> AsyncIterator[str]:
        loop = asyncio.get_running_loop()
        chunks: asyncio.Queue[bytes] = asyncio.Queue()
        loop.add_reader(self._fd, lambda: chunks.put_nowait(os.read(self._fd, 32)))
        try:
            while True:
                data = await chunks.get()
                for key in split_keys(data.decode("utf-8", errors="ignore")):
                    yield key
        finally:
            loop.remove_reader(self._fd)
