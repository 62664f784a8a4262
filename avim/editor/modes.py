"""Modal input handling: one handler per mode, all taking the session."""

import logging
from typing import Callable

from ..config import SUGGESTED_SAMPLES, TIME_NUDGE_SECONDS
from ..errors import AudioToolFailed
from ..models import Intent, KeyInput, Mode
from . import commands
from .session import Session

logger = logging.getLogger(__name__)

Action = Callable[[Session], None]

CHORD_INTENTS = {Intent.DELETE_CLIP, Intent.YANK_CLIP}


def handle_input(session: Session, key: KeyInput) -> None:
    if key.intent is Intent.QUIT:
        session.should_quit = True
        return
    if not session.ready:
        return
    MODE_HANDLERS[session.mode](session, key)


# ---------------------------------------------------------------------------
# Normal mode
# ---------------------------------------------------------------------------


def handle_normal(session: Session, key: KeyInput) -> None:
    if session.pending_chord is not None:
        pending, session.pending_chord = session.pending_chord, None
        if key.intent is pending:
            NORMAL_ACTIONS[pending](session)
        else:
            logger.debug("Cancelled pending %s chord", pending.value)
        return
    if key.intent in CHORD_INTENTS:
        session.pending_chord = key.intent
        return
    action = NORMAL_ACTIONS.get(key.intent)
    if action is not None:
        action(session)


def enter_command(session: Session) -> None:
    session.mode = Mode.COMMAND
    session.command_buffer = ""


def enter_insert(session: Session) -> None:
    session.mode = Mode.INSERT


def enter_adjust(session: Session) -> None:
    if session.store.on_last_clip():
        session.status_message = "Cannot adjust the last clip."
        return
    session.mode = Mode.ADJUST
    session.adjust_word_index = 0
    session.status_message = (
        "ADJUST MODE: select words with next/previous word, confirm or cancel."
    )


def next_clip(session: Session) -> None:
    session.store.move_cursor(1)


def previous_clip(session: Session) -> None:
    session.store.move_cursor(-1)


def delete_clip(session: Session) -> None:
    store = session.store
    if not store:
        session.status_message = "No clip to delete."
        return
    position = store.current_index + 1
    session.history.save_checkpoint()
    session.register = store.remove(store.current_index)
    session.status_message = f"Deleted clip {position}."


def yank_clip(session: Session) -> None:
    current = session.store.current
    if current is None:
        session.status_message = "No clip to yank."
        return
    session.register = current.model_copy(deep=True)
    session.status_message = f"Yanked clip {session.store.current_index + 1}."


def paste_clip(session: Session) -> None:
    if session.register is None:
        session.status_message = "Nothing to paste."
        return
    store = session.store
    session.history.save_checkpoint()
    clip = session.register.model_copy(deep=True, update={"id": store.next_id()})
    index = store.current_index + 1 if store else 0
    store.insert(index, clip)
    store.current_index = index
    session.status_message = f"Pasted clip {index + 1}."


def undo(session: Session) -> None:
    if session.history.undo():
        session.status_message = "Undo successful."
    else:
        session.status_message = "Nothing to undo."


def redo(session: Session) -> None:
    if session.history.redo():
        session.status_message = "Redo successful."
    else:
        session.status_message = "Nothing to redo."


def _play(session: Session, ranges: list[tuple[float, float]], label: str) -> None:
    try:
        session.playback = session.audio.play(session.audio_path, ranges)
    except AudioToolFailed as e:
        session.status_message = f"Playback failed: {e}"
        return
    session.status_message = label


def play_clip(session: Session) -> None:
    if session.stop_playback():
        session.status_message = "Playback stopped."
        return
    clip = session.store.current
    if clip is None:
        session.status_message = "No clip to play."
        return
    _play(
        session,
        [(clip.start_time, clip.end_time)],
        f"Playing clip {session.store.current_index + 1}...",
    )


def play_from_current(session: Session) -> None:
    if session.stop_playback():
        session.status_message = "Playback stopped."
        return
    clips = session.store.clips[session.store.current_index:]
    if not clips:
        session.status_message = "No clip to play."
        return
    ranges = [(clip.start_time, clip.end_time) for clip in clips]
    _play(session, ranges, "Playing all from current clip...")


def _nudge(session: Session, field: str, delta: float) -> None:
    clip = session.store.current
    if clip is None:
        return
    session.history.save_checkpoint()
    # Clamp against the other edge only while the clip is well ordered
    ordered = clip.start_time <= clip.end_time
    if field == "start_time":
        start = max(0.0, clip.start_time + delta)
        clip.start_time = min(start, clip.end_time) if ordered else start
    else:
        end = clip.end_time + delta
        clip.end_time = max(end, clip.start_time) if ordered else end
    session.status_message = (
        f"Clip {session.store.current_index + 1}: "
        f"{clip.start_time:.2f}s - {clip.end_time:.2f}s"
    )


NORMAL_ACTIONS: dict[Intent, Action] = {
    Intent.ENTER_COMMAND: enter_command,
    Intent.ENTER_INSERT: enter_insert,
    Intent.ENTER_ADJUST: enter_adjust,
    Intent.NEXT_CLIP: next_clip,
    Intent.PREVIOUS_CLIP: previous_clip,
    Intent.DELETE_CLIP: delete_clip,
    Intent.YANK_CLIP: yank_clip,
    Intent.PASTE: paste_clip,
    Intent.UNDO: undo,
    Intent.REDO: redo,
    Intent.PLAY_CLIP: play_clip,
    Intent.PLAY_FROM_CURRENT: play_from_current,
    Intent.NUDGE_START_EARLIER: lambda s: _nudge(s, "start_time", -TIME_NUDGE_SECONDS),
    Intent.NUDGE_START_LATER: lambda s: _nudge(s, "start_time", TIME_NUDGE_SECONDS),
    Intent.NUDGE_END_EARLIER: lambda s: _nudge(s, "end_time", -TIME_NUDGE_SECONDS),
    Intent.NUDGE_END_LATER: lambda s: _nudge(s, "end_time", TIME_NUDGE_SECONDS),
}


# ---------------------------------------------------------------------------
# Insert mode: edits the current clip's comment
# ---------------------------------------------------------------------------


def handle_insert(session: Session, key: KeyInput) -> None:
    if key.intent is Intent.EXIT:
        session.mode = Mode.NORMAL
        return
    clip = session.store.current
    if clip is None:
        return
    if key.intent is Intent.CHARACTER:
        clip.comment += key.char
    elif key.intent is Intent.BACKSPACE:
        clip.comment = clip.comment[:-1]


# ---------------------------------------------------------------------------
# Command mode
# ---------------------------------------------------------------------------


def handle_command(session: Session, key: KeyInput) -> None:
    if key.intent is Intent.CHARACTER:
        session.command_buffer += key.char
    elif key.intent is Intent.BACKSPACE:
        session.command_buffer = session.command_buffer[:-1]
    elif key.intent is Intent.EXIT:
        session.command_buffer = ""
        session.mode = Mode.NORMAL
    elif key.intent is Intent.SUBMIT:
        try:
            commands.execute(session, session.command_buffer)
        finally:
            session.command_buffer = ""
            session.mode = Mode.NORMAL


# ---------------------------------------------------------------------------
# Adjust mode: word cursor into the next clip
# ---------------------------------------------------------------------------


def handle_adjust(session: Session, key: KeyInput) -> None:
    if key.intent is Intent.CANCEL:
        session.mode = Mode.NORMAL
    elif key.intent is Intent.NEXT_WORD:
        following = session.store.next
        if following is not None:
            last = max(len(following.words) - 1, 0)
            session.adjust_word_index = min(session.adjust_word_index + 1, last)
    elif key.intent is Intent.PREVIOUS_WORD:
        session.adjust_word_index = max(session.adjust_word_index - 1, 0)
    elif key.intent is Intent.CONFIRM:
        confirm_adjustment(session)


def confirm_adjustment(session: Session) -> None:
    session.mode = Mode.NORMAL
    following = session.store.next
    if following is None or session.adjust_word_index >= len(following.words):
        return

    session.history.save_checkpoint()
    session.corrector.confirm(session.store, session.adjust_word_index)

    remaining = SUGGESTED_SAMPLES - len(session.corrector.samples)
    if remaining > 0:
        session.status_message = (
            f"Adjustment learned. Adjust {remaining} more to find a pattern."
        )
    else:
        session.status_message = "Pattern learned. You can now try :autofix"


def handle_visual(session: Session, key: KeyInput) -> None:
    if key.intent in (Intent.EXIT, Intent.CANCEL):
        session.mode = Mode.NORMAL


MODE_HANDLERS: dict[Mode, Callable[[Session, KeyInput], None]] = {
    Mode.NORMAL: handle_normal,
    Mode.INSERT: handle_insert,
    Mode.COMMAND: handle_command,
    Mode.ADJUST: handle_adjust,
    Mode.VISUAL: handle_visual,
}
