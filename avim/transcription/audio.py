"""Audio probing, trimming, playback and export via ffmpeg."""

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from ..errors import AudioToolFailed, DurationUnavailable
from .base import TimeRange

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = {".mp4", ".mov", ".mkv", ".webm", ".avi"}
AUDIO_EXTENSIONS = {".m4a", ".mp3", ".wav", ".ogg", ".flac", ".aac", ".wma"}


def is_media_file(path: Path) -> bool:
    suffix = path.suffix.lower()
    return suffix in AUDIO_EXTENSIONS or suffix in VIDEO_EXTENSIONS


def _require(tool: str) -> str:
    found = shutil.which(tool)
    if not found:
        raise AudioToolFailed(f"{tool} not found. Install ffmpeg to work with audio.")
    return found


def build_concat_filter(ranges: list[TimeRange]) -> str:
    """Build an ffmpeg filtergraph that cuts each range and joins them in order."""
    parts = [
        f"[0:a]atrim=start={start:.3f}:end={end:.3f},asetpts=PTS-STARTPTS[a{i}]"
        for i, (start, end) in enumerate(ranges)
    ]
    inputs = "".join(f"[a{i}]" for i in range(len(ranges)))
    parts.append(f"{inputs}concat=n={len(ranges)}:v=0:a=1[out]")
    return ";".join(parts)


class FfmpegAudio:
    """AudioBackend backed by the ffprobe, ffmpeg and ffplay binaries."""

    def probe_duration(self, path: str) -> float:
        try:
            result = subprocess.run(
                [
                    _require("ffprobe"), "-v", "error",
                    "-show_entries", "format=duration",
                    "-of", "default=noprint_wrappers=1:nokey=1",
                    path,
                ],
                capture_output=True,
                text=True,
            )
        except (AudioToolFailed, OSError) as e:
            logger.warning("ffprobe unavailable: %s", e)
            raise DurationUnavailable(path) from e
        try:
            duration = float(result.stdout.strip())
        except ValueError:
            raise DurationUnavailable(path) from None
        if result.returncode != 0 or duration <= 0:
            raise DurationUnavailable(path)
        return duration

    def extract_window(self, path: str, start: float, duration: float) -> bytes:
        """Cut ``[start, start + duration)`` to 16 kHz mono WAV and return its bytes."""
        temp_dir = tempfile.mkdtemp(prefix="avim_")
        output_path = Path(temp_dir) / "chunk.wav"
        try:
            result = subprocess.run(
                [
                    _require("ffmpeg"),
                    "-ss", f"{start:.3f}",
                    "-t", f"{duration:.3f}",
                    "-i", path,
                    "-vn",                  # no video
                    "-acodec", "pcm_s16le", # WAV format
                    "-ar", "16000",         # 16kHz sample rate (good for speech)
                    "-ac", "1",             # mono
                    "-y",                   # overwrite
                    str(output_path),
                ],
                capture_output=True,
                text=True,
            )
            if result.returncode != 0:
                raise AudioToolFailed(f"ffmpeg failed: {result.stderr}")
            return output_path.read_bytes()
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    def play(self, path: str, ranges: list[TimeRange]) -> subprocess.Popen:
        if not ranges:
            raise AudioToolFailed("No clips to play.")
        ffplay = _require("ffplay")
        if len(ranges) == 1:
            start, end = ranges[0]
            args = [
                ffplay, "-nodisp", "-autoexit", "-loglevel", "quiet",
                "-ss", f"{start:.3f}", "-t", f"{max(end - start, 0.0):.3f}",
                path,
            ]
        else:
            playlist = Path(tempfile.gettempdir()) / "avim_playlist.wav"
            self.render_concatenated(path, ranges, playlist)
            args = [ffplay, "-nodisp", "-autoexit", "-loglevel", "quiet", str(playlist)]
        logger.debug("Starting playback of %d range(s)", len(ranges))
        try:
            return subprocess.Popen(
                args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
            )
        except OSError as e:
            raise AudioToolFailed(str(e)) from e

    def terminate(self, process: subprocess.Popen) -> None:
        process.kill()
        process.wait()

    def render_concatenated(
        self, path: str, ranges: list[TimeRange], output: Path
    ) -> None:
        if not ranges:
            raise AudioToolFailed("No clips to export.")
        result = subprocess.run(
            [
                _require("ffmpeg"), "-i", path,
                "-filter_complex", build_concat_filter(ranges),
                "-map", "[out]",
                "-y",
                str(output),
            ],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise AudioToolFailed(f"ffmpeg failed: {result.stderr}")
