"""Chunked ingestion: split audio, transcribe each window, stitch the results."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Callable

from ..cache import TranscriptCache
from ..config import DEFAULT_CHUNK_SECONDS
from ..errors import (
    AvimError,
    ChunkExtractionFailed,
    DurationUnavailable,
    TranscriptionFailed,
)
from ..models import Clip
from .base import AudioBackend, TranscriptionProvider

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


@dataclass
class IngestResult:
    clips: list[Clip]
    # None when the clips came from cache and the probe failed
    duration: float | None
    from_cache: bool = False


def chunk_windows(duration: float, chunk_seconds: float) -> list[tuple[float, float]]:
    """Return ``(start, length)`` for each window covering ``[0, duration)``."""
    num_chunks = math.ceil(duration / chunk_seconds)
    windows = []
    for i in range(num_chunks):
        start = i * chunk_seconds
        windows.append((start, min(chunk_seconds, duration - start)))
    return windows


async def probe_duration(audio: AudioBackend, audio_path: str) -> float:
    """Probe the audio length; any tool failure surfaces as DurationUnavailable."""
    try:
        duration = await asyncio.to_thread(audio.probe_duration, audio_path)
    except DurationUnavailable:
        raise
    except (AvimError, OSError) as e:
        raise DurationUnavailable(audio_path) from e
    if not duration:
        raise DurationUnavailable(audio_path)
    return duration


def discrepancy(clips: list[Clip], duration: float) -> float:
    """How far the transcript runs past the end of the audio, in seconds."""
    transcript_end = clips[-1].end_time if clips else 0.0
    return transcript_end - duration


def sanitize_clips(clips: list[Clip], duration: float) -> list[Clip]:
    """Drop clips starting at or past the end of the audio, clamp end times."""
    sanitized = []
    for clip in clips:
        if clip.start_time >= duration:
            continue
        if clip.end_time > duration:
            clip = clip.model_copy(update={"end_time": duration})
        sanitized.append(clip)
    return sanitized


async def ingest(
    audio_path: str,
    *,
    provider: TranscriptionProvider,
    audio: AudioBackend,
    cache: TranscriptCache | None = None,
    use_cache: bool = True,
    chunk_seconds: float = DEFAULT_CHUNK_SECONDS,
    on_status: StatusCallback | None = None,
) -> IngestResult:
    """Produce the initial clip list for ``audio_path``.

    Chunks are transcribed one after another; any failure aborts the whole
    ingestion and nothing partial is returned. Results are written to
    ``cache`` when one is given, even if lookup was skipped.
    """

    if chunk_seconds <= 0:
        raise ValueError(f"chunk_seconds must be positive, got {chunk_seconds}")

    def status(message: str) -> None:
        logger.info(message)
        if on_status:
            on_status(message)

    if cache is not None and use_cache:
        cached = await asyncio.to_thread(cache.load, audio_path)
        if cached is not None:
            try:
                duration = await probe_duration(audio, audio_path)
            except DurationUnavailable:
                logger.warning("Could not probe duration of cached %s", audio_path)
                duration = None
            return IngestResult(cached, duration, from_cache=True)

    total_duration = await probe_duration(audio, audio_path)

    windows = chunk_windows(total_duration, chunk_seconds)
    all_clips: list[Clip] = []

    for i, (start, length) in enumerate(windows):
        status(f"Transcribing chunk {i + 1} of {len(windows)}...")
        try:
            data = await asyncio.to_thread(
                audio.extract_window, audio_path, start, length
            )
        except (AvimError, OSError) as e:
            raise ChunkExtractionFailed(i, str(e)) from e

        try:
            chunk_clips = await provider.transcribe(data)
        except Exception as e:
            raise TranscriptionFailed(i, str(e)) from e

        for clip in chunk_clips:
            all_clips.append(
                clip.model_copy(
                    update={
                        "id": len(all_clips) + 1,
                        "start_time": clip.start_time + start,
                        "end_time": clip.end_time + start,
                    }
                )
            )
        logger.debug("Chunk %d: %d clips at offset %.1fs", i, len(chunk_clips), start)

    clips = sanitize_clips(all_clips, total_duration)
    if len(clips) != len(all_clips):
        logger.debug("Dropped %d clips past end of audio", len(all_clips) - len(clips))

    if cache is not None:
        try:
            await asyncio.to_thread(cache.save, audio_path, clips)
        except OSError as e:
            logger.warning("Failed to write transcript cache: %s", e)

    return IngestResult(clips, total_duration)
