"""Content-addressed transcript cache under the user cache directory."""

import hashlib
import logging
from pathlib import Path

from platformdirs import user_cache_path
from pydantic import TypeAdapter, ValidationError

from .config import CACHE_APP_NAME
from .models import Clip

logger = logging.getLogger(__name__)

_clip_list = TypeAdapter(list[Clip])


def cache_key(audio_path: str) -> str:
    """SHA-256 hex digest of the canonical absolute path of ``audio_path``."""
    canonical = Path(audio_path).resolve(strict=True)
    return hashlib.sha256(str(canonical).encode("utf-8")).hexdigest()


class TranscriptCache:
    """One JSON clip list per audio file. Entries are never invalidated."""

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory or user_cache_path(CACHE_APP_NAME)

    def path_for(self, audio_path: str) -> Path:
        return self.directory / f"{cache_key(audio_path)}.json"

    def load(self, audio_path: str) -> list[Clip] | None:
        try:
            cache_file = self.path_for(audio_path)
            if not cache_file.exists():
                return None
            clips = _clip_list.validate_json(cache_file.read_bytes())
        except (OSError, ValidationError) as e:
            logger.debug("Cache miss for %s: %s", audio_path, e)
            return None
        logger.info("Loaded %d clips from cache %s", len(clips), cache_file.name)
        return clips

    def save(self, audio_path: str, clips: list[Clip]) -> Path:
        cache_file = self.path_for(audio_path)
        self.directory.mkdir(parents=True, exist_ok=True)
        cache_file.write_bytes(_clip_list.dump_json(clips, indent=2))
        return cache_file
