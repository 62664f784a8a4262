"""Collaborator protocols consumed by the pipeline and the editor."""

import subprocess
from pathlib import Path
from typing import Protocol

from ..models import Clip

TimeRange = tuple[float, float]


class TranscriptionProvider(Protocol):
    """Abstract transcription provider for easy swapping.

    Returned clips are timed locally, starting from 0 for the given audio.
    """

    async def transcribe(self, data: bytes) -> list[Clip]: ...


class AudioBackend(Protocol):
    """Duration probing, window extraction, playback and rendering."""

    def probe_duration(self, path: str) -> float: ...

    def extract_window(self, path: str, start: float, duration: float) -> bytes: ...

    def play(self, path: str, ranges: list[TimeRange]) -> subprocess.Popen: ...

    def terminate(self, process: subprocess.Popen) -> None: ...

    def render_concatenated(
        self, path: str, ranges: list[TimeRange], output: Path
    ) -> None: ...
