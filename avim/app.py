"""Event loop: render, wait for one event, handle it, repeat.

Ingestion and terminal input run as background tasks that only talk to the
loop by putting events on one queue. The session is touched exclusively by
the loop.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Callable

from .cache import TranscriptCache
from .config import DEFAULT_CHUNK_SECONDS
from .editor.modes import handle_input
from .editor.session import Session
from .errors import AvimError, DurationUnavailable
from .keys import bind_key
from .models import Clip
from .project import load_project
from .transcription.base import AudioBackend, TranscriptionProvider
from .transcription.pipeline import ingest, probe_duration

logger = logging.getLogger(__name__)


@dataclass
class StatusUpdate:
    message: str


@dataclass
class TranscriptionSuccess:
    clips: list[Clip]
    duration: float | None


@dataclass
class TranscriptionFailure:
    message: str


@dataclass
class InputReceived:
    """One raw terminal key; bound to an intent against the mode at handling time."""

    key: str


Event = StatusUpdate | TranscriptionSuccess | TranscriptionFailure | InputReceived


def handle_event(session: Session, event: Event) -> None:
    if isinstance(event, InputReceived):
        key = bind_key(event.key, session.mode, session.ready)
        if key is not None:
            handle_input(session, key)
    elif isinstance(event, TranscriptionSuccess):
        session.load_clips(event.clips, event.duration)
    elif isinstance(event, TranscriptionFailure):
        session.fail(event.message)
    elif isinstance(event, StatusUpdate):
        session.status_message = event.message


async def run_ingestion(
    queue: "asyncio.Queue[Event]",
    audio_path: str,
    *,
    provider: TranscriptionProvider,
    audio: AudioBackend,
    cache: TranscriptCache | None,
    use_cache: bool = True,
    chunk_seconds: float = DEFAULT_CHUNK_SECONDS,
) -> None:
    try:
        result = await ingest(
            audio_path,
            provider=provider,
            audio=audio,
            cache=cache,
            use_cache=use_cache,
            chunk_seconds=chunk_seconds,
            on_status=lambda message: queue.put_nowait(StatusUpdate(message)),
        )
    except AvimError as e:
        logger.error("Ingestion failed: %s", e)
        await queue.put(TranscriptionFailure(str(e)))
        return
    except Exception as e:
        logger.exception("Unexpected ingestion failure")
        await queue.put(TranscriptionFailure(f"Unexpected error: {e}"))
        return
    await queue.put(TranscriptionSuccess(result.clips, result.duration))


async def open_project(
    queue: "asyncio.Queue[Event]", project_path: Path, audio: AudioBackend
) -> str:
    """Load a saved project and queue it as a successful load. Returns its audio path."""
    audio_path, clips = load_project(project_path)
    try:
        duration = await probe_duration(audio, audio_path)
    except DurationUnavailable:
        logger.warning("Could not probe duration of %s", audio_path)
        duration = None
    await queue.put(TranscriptionSuccess(clips, duration))
    return audio_path


async def pump_input(queue: "asyncio.Queue[Event]", keys: AsyncIterator[str]) -> None:
    async for key in keys:
        await queue.put(InputReceived(key))


async def run(
    session: Session,
    queue: "asyncio.Queue[Event]",
    render: Callable[[Session], None],
    tasks: list[asyncio.Task] | None = None,
) -> None:
    """Drive the session until it asks to quit."""
    tasks = tasks or []
    try:
        while not session.should_quit:
            render(session)
            event = await queue.get()
            handle_event(session, event)
    finally:
        session.stop_playback()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
