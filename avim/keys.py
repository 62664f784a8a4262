"""Physical key bindings for each mode."""

from .models import Intent, KeyInput, Mode, char_input

CTRL_C = "\x03"
CTRL_R = "\x12"
ESCAPE = "\x1b"
ENTER = "\r"
BACKSPACE = "\x7f"

NORMAL_KEYS = {
    ":": Intent.ENTER_COMMAND,
    "i": Intent.ENTER_INSERT,
    "m": Intent.ENTER_ADJUST,
    "j": Intent.NEXT_CLIP,
    "k": Intent.PREVIOUS_CLIP,
    "d": Intent.DELETE_CLIP,
    "y": Intent.YANK_CLIP,
    "p": Intent.PASTE,
    "u": Intent.UNDO,
    CTRL_R: Intent.REDO,
    "q": Intent.QUIT,
    " ": Intent.PLAY_CLIP,
    "P": Intent.PLAY_FROM_CURRENT,
    "[": Intent.NUDGE_START_EARLIER,
    "]": Intent.NUDGE_START_LATER,
    "{": Intent.NUDGE_END_EARLIER,
    "}": Intent.NUDGE_END_LATER,
}

ADJUST_KEYS = {
    "w": Intent.NEXT_WORD,
    "b": Intent.PREVIOUS_WORD,
    ENTER: Intent.CONFIRM,
    "\n": Intent.CONFIRM,
    ESCAPE: Intent.CANCEL,
}

TEXT_KEYS = {
    ESCAPE: Intent.EXIT,
    BACKSPACE: Intent.BACKSPACE,
    "\b": Intent.BACKSPACE,
}


def split_keys(data: str) -> list[str]:
    """Split a chunk of terminal input into keys; CSI and SS3 sequences stay whole."""
    keys = []
    i = 0
    while i < len(data):
        end = i + 1
        if data[i] == ESCAPE and end < len(data) and data[end] in "[O":
            end += 1
            if data[end - 1] == "[":
                # Parameter bytes up to the final byte in @..~
                while end < len(data) and not "@" <= data[end] <= "~":
                    end += 1
            end = min(end + 1, len(data))
        keys.append(data[i:end])
        i = end
    return keys


def bind_key(key: str, mode: Mode, ready: bool = True) -> KeyInput | None:
    if key == CTRL_C:
        return KeyInput(Intent.QUIT)
    if not ready:
        return KeyInput(Intent.QUIT) if key == "q" else None

    if mode is Mode.NORMAL:
        intent = NORMAL_KEYS.get(key)
    elif mode is Mode.ADJUST:
        intent = ADJUST_KEYS.get(key)
    elif mode in (Mode.INSERT, Mode.COMMAND):
        if mode is Mode.COMMAND and key in (ENTER, "\n"):
            return KeyInput(Intent.SUBMIT)
        intent = TEXT_KEYS.get(key)
        if intent is None and len(key) == 1 and key.isprintable():
            return char_input(key)
    else:
        intent = Intent.EXIT if key == ESCAPE else None
    return KeyInput(intent) if intent is not None else None
