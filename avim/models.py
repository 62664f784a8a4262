"""Pydantic models and editor state types for avim."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel


class Clip(BaseModel):
    id: int
    speaker: str
    transcript: str
    start_time: float
    end_time: float
    comment: str = ""
    is_manually_adjusted: bool = False

    @property
    def words(self) -> list[str]:
        return self.transcript.split()


class Mode(str, Enum):
    NORMAL = "normal"
    COMMAND = "command"
    INSERT = "insert"
    ADJUST = "adjust"
    # Defined for completeness; no transition enters it.
    VISUAL = "visual"


@dataclass(frozen=True)
class Loading:
    message: str
    failed: bool = False


@dataclass(frozen=True)
class Ready:
    pass


class Intent(str, Enum):
    """Named input intents, independent of physical keys."""

    CHARACTER = "character"
    BACKSPACE = "backspace"
    EXIT = "exit"
    SUBMIT = "submit"
    QUIT = "quit"

    ENTER_COMMAND = "enter_command"
    ENTER_INSERT = "enter_insert"
    ENTER_ADJUST = "enter_adjust"
    NEXT_CLIP = "next_clip"
    PREVIOUS_CLIP = "previous_clip"
    DELETE_CLIP = "delete_clip"
    YANK_CLIP = "yank_clip"
    PASTE = "paste"
    UNDO = "undo"
    REDO = "redo"
    PLAY_CLIP = "play_clip"
    PLAY_FROM_CURRENT = "play_from_current"
    NUDGE_START_EARLIER = "nudge_start_earlier"
    NUDGE_START_LATER = "nudge_start_later"
    NUDGE_END_EARLIER = "nudge_end_earlier"
    NUDGE_END_LATER = "nudge_end_later"

    NEXT_WORD = "next_word"
    PREVIOUS_WORD = "previous_word"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class KeyInput:
    intent: Intent
    char: str = ""


def char_input(char: str) -> KeyInput:
    return KeyInput(Intent.CHARACTER, char)
