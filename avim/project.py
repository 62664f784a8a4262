"""Project files: an ``[audio_path, clips]`` pair stored as JSON."""

from pathlib import Path

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import IoFailed, ProjectLoadMalformed, SerializationFailed
from .models import Clip

_project = TypeAdapter(tuple[str, list[Clip]])


def load_project(path: Path) -> tuple[str, list[Clip]]:
    """Read a project file. Any structural mismatch fails the whole load."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise IoFailed(f"Failed to read project: {e}") from e
    try:
        audio_path, clips = _project.validate_json(raw)
    except ValidationError as e:
        raise ProjectLoadMalformed(f"Malformed project file {path}: {e}") from e
    return audio_path, clips


def save_project(path: Path, audio_path: str, clips: list[Clip]) -> None:
    try:
        data = _project.dump_json((audio_path, clips), indent=2)
    except PydanticSerializationError as e:
        raise SerializationFailed(f"Failed to serialize project data: {e}") from e
    try:
        path.write_bytes(data)
    except OSError as e:
        raise IoFailed(f"Failed to save project: {e}") from e
