"""Timestamps, clipboard and text helpers."""

import pyperclip

from .errors import ClipboardUnavailable
from .models import Clip


def format_timestamp(seconds: float) -> str:
    """Format seconds into HH:MM:SS.ss or MM:SS.ss."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:05.2f}"
    return f"{minutes:02d}:{secs:05.2f}"


def format_clip_line(clip: Clip) -> str:
    return (
        f"[{format_timestamp(clip.start_time)}-{format_timestamp(clip.end_time)}]"
        f" [{clip.speaker}] {clip.transcript}"
    )


def copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardUnavailable(f"Failed to copy to clipboard: {e}") from e
