"""Command-line (``:``) commands."""

import logging
from pathlib import Path
from typing import Callable

from ..errors import (
    AudioToolFailed,
    AvimError,
    IoFailed,
    SerializationFailed,
    UnknownCommand,
)
from ..project import save_project
from .session import Session

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: :w, :export, :q, :autofix, :lasterror, :help"


def execute(session: Session, line: str) -> None:
    """Parse and run one command line, reporting the outcome in the status line."""
    parts = line.split()
    if not parts:
        return
    name, args = parts[0], parts[1:]
    logger.debug("Command: %s %s", name, args)
    try:
        command = COMMANDS.get(name)
        if command is None:
            raise UnknownCommand(line)
        command(session, args)
    except AvimError as e:
        session.status_message = str(e)


def write(session: Session, args: list[str]) -> None:
    if args:
        session.project_path = args[0]
    if not session.project_path:
        session.status_message = "No project file specified. Use :w <filename.avim>"
        return
    try:
        save_project(
            Path(session.project_path), session.audio_path, session.store.clips
        )
    except (SerializationFailed, IoFailed) as e:
        session.record_error(str(e), e)
        return
    session.status_message = f"Project saved to {session.project_path}"


def export(session: Session, args: list[str]) -> None:
    if not args:
        session.status_message = "Export error: No filename provided."
        return
    filename = args[0]
    ranges = [(clip.start_time, clip.end_time) for clip in session.store]
    try:
        session.audio.render_concatenated(session.audio_path, ranges, Path(filename))
    except AudioToolFailed as e:
        session.record_error(f"Export failed: {e}", e)
        return
    session.status_message = f"Successfully exported to {filename}."


def quit_editor(session: Session, args: list[str]) -> None:
    session.should_quit = True


def show_help(session: Session, args: list[str]) -> None:
    session.status_message = HELP_TEXT


def copy_last_error(session: Session, args: list[str]) -> None:
    if session.last_error is None:
        session.status_message = "No last error to copy."
        return
    session.clipboard(session.last_error)
    session.status_message = "Last error copied to clipboard."


def autofix(session: Session, args: list[str]) -> None:
    words = session.corrector.fit()
    session.history.save_checkpoint()
    report = session.corrector.apply(session.store, words)
    session.status_message = (
        f"Autofix complete. Moved approx {report.words_moved} words."
    )


COMMANDS: dict[str, Callable[[Session, list[str]], None]] = {
    "w": write,
    "export": export,
    "q": quit_editor,
    "q!": quit_editor,
    "help": show_help,
    "lasterror": copy_last_error,
    "autofix": autofix,
}
