"""Shared fixtures: fake audio, transcription and clipboard collaborators."""

from __future__ import annotations

from pathlib import Path

import pytest

from avim.editor.session import Session
from avim.errors import AudioToolFailed, DurationUnavailable
from avim.models import Clip


def make_clip(
    id: int,
    transcript: str,
    start: float = 0.0,
    end: float = 1.0,
    speaker: str = "Speaker 0",
    **extra,
) -> Clip:
    return Clip(
        id=id,
        speaker=speaker,
        transcript=transcript,
        start_time=start,
        end_time=end,
        **extra,
    )


def make_clips(*transcripts: str) -> list[Clip]:
    return [
        make_clip(i + 1, text, start=float(i), end=float(i + 1))
        for i, text in enumerate(transcripts)
    ]


class FakeProcess:
    def __init__(self, ranges):
        self.ranges = ranges
        self.killed = False


class FakeAudio:
    def __init__(self, duration: float | None = 10.0) -> None:
        self.duration = duration
        self.windows: list[tuple[float, float]] = []
        self.played: list[list[tuple[float, float]]] = []
        self.terminated: list[FakeProcess] = []
        self.rendered: list[tuple[list[tuple[float, float]], Path]] = []
        self.fail_extract_at: int | None = None
        self.fail_render = False
        self.fail_play = False
        self.probe_error: Exception | None = None

    def probe_duration(self, path: str) -> float:
        if self.probe_error is not None:
            raise self.probe_error
        if not self.duration:
            raise DurationUnavailable(path)
        return self.duration

    def extract_window(self, path: str, start: float, duration: float) -> bytes:
        if self.fail_extract_at == len(self.windows):
            raise AudioToolFailed("ffmpeg failed: boom")
        self.windows.append((start, duration))
        return f"{start}:{duration}".encode()

    def play(self, path, ranges):
        if self.fail_play:
            raise AudioToolFailed("ffplay not found.")
        self.played.append(list(ranges))
        return FakeProcess(ranges)

    def terminate(self, process) -> None:
        process.killed = True
        self.terminated.append(process)

    def render_concatenated(self, path, ranges, output) -> None:
        if self.fail_render:
            raise AudioToolFailed("ffmpeg failed: disk full")
        self.rendered.append((list(ranges), output))


class FakeProvider:
    """Returns one scripted response per call; exceptions are raised."""

    def __init__(self, responses) -> None:
        self.responses = list(responses)
        self.calls: list[bytes] = []

    async def transcribe(self, data: bytes) -> list[Clip]:
        self.calls.append(data)
        response = self.responses[len(self.calls) - 1]
        if isinstance(response, Exception):
            raise response
        return [clip.model_copy(deep=True) for clip in response]


class FakeClipboard:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.text: str | None = None

    def __call__(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.text = text


@pytest.fixture
def audio() -> FakeAudio:
    return FakeAudio()


@pytest.fixture
def clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def session(audio, clipboard) -> Session:
    """A ready session holding three short clips."""
    s = Session("/audio/talk.wav", audio=audio, clipboard=clipboard)
    s.load_clips(make_clips("A B", "C D E", "F G H I"), 3.0)
    return s
