"""Ordered clip document with a cursor."""

from ..models import Clip


def join_words(*parts: str) -> str:
    """Join text fragments with single spaces, ignoring blank ones."""
    return " ".join(p for p in (part.strip() for part in parts) if p)


class ClipStore:
    """The transcript document: clips in chronological order plus a cursor.

    Index is the addressing scheme, not ``Clip.id``. Mutations never reorder
    surviving clips. Timestamps are not validated here.
    """

    def __init__(self, clips: list[Clip] | None = None) -> None:
        self.clips: list[Clip] = list(clips or [])
        self.current_index = 0

    def __len__(self) -> int:
        return len(self.clips)

    def __iter__(self):
        return iter(self.clips)

    def __getitem__(self, index: int) -> Clip:
        return self.clips[index]

    @property
    def current(self) -> Clip | None:
        if not self.clips:
            return None
        return self.clips[self.current_index]

    @property
    def next(self) -> Clip | None:
        if self.current_index + 1 < len(self.clips):
            return self.clips[self.current_index + 1]
        return None

    def on_last_clip(self) -> bool:
        return self.current_index >= len(self.clips) - 1

    def load(self, clips: list[Clip]) -> None:
        self.clips = list(clips)
        self.clamp_cursor()

    def clamp_cursor(self) -> None:
        self.current_index = max(0, min(self.current_index, len(self.clips) - 1))

    def move_cursor(self, delta: int) -> None:
        self.current_index += delta
        self.clamp_cursor()

    def insert(self, index: int, clip: Clip) -> None:
        self.clips.insert(index, clip)

    def remove(self, index: int) -> Clip | None:
        if not self.clips or not 0 <= index < len(self.clips):
            return None
        removed = self.clips.pop(index)
        self.clamp_cursor()
        return removed

    def replace(self, index: int, clip: Clip) -> None:
        self.clips[index] = clip

    def next_id(self) -> int:
        return max((c.id for c in self.clips), default=0) + 1

    def move_leading_words(self, index: int, count: int) -> int:
        """Move the first ``count`` words of clip ``index + 1`` onto clip ``index``.

        Returns the number of words actually moved.
        """
        if count <= 0 or index + 1 >= len(self.clips):
            return 0
        current, following = self.clips[index], self.clips[index + 1]
        words = following.words
        moved, remaining = words[:count], words[count:]
        if not moved:
            return 0
        current.transcript = join_words(current.transcript, " ".join(moved))
        following.transcript = " ".join(remaining)
        return len(moved)

    def prune_empty(self) -> int:
        """Drop clips whose transcript is blank. Returns how many were removed."""
        before = len(self.clips)
        self.clips = [c for c in self.clips if c.transcript.strip()]
        self.clamp_cursor()
        return before - len(self.clips)

    def snapshot(self) -> list[Clip]:
        return [clip.model_copy(deep=True) for clip in self.clips]
