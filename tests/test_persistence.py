import json

import pytest

from avim.cache import TranscriptCache, cache_key
from avim.errors import IoFailed, ProjectLoadMalformed
from avim.project import load_project, save_project
from conftest import make_clip, make_clips


def test_cache_round_trip(tmp_path) -> None:
    audio = tmp_path / "talk.wav"
    audio.write_bytes(b"RIFF")
    cache = TranscriptCache(tmp_path / "cache")
    clips = make_clips("one", "two")
    clips[0].comment = "check name"

    cache.save(str(audio), clips)

    assert cache.load(str(audio)) == clips


def test_cache_key_uses_canonical_path(tmp_path, monkeypatch) -> None:
    audio = tmp_path / "talk.wav"
    audio.write_bytes(b"RIFF")
    monkeypatch.chdir(tmp_path)
    assert cache_key("talk.wav") == cache_key(str(audio))
    assert cache_key("./talk.wav") == cache_key(str(audio))


def test_cache_miss_for_unknown_or_missing_file(tmp_path) -> None:
    cache = TranscriptCache(tmp_path / "cache")
    audio = tmp_path / "talk.wav"
    audio.write_bytes(b"RIFF")
    assert cache.load(str(audio)) is None
    assert cache.load(str(tmp_path / "missing.wav")) is None


def test_corrupt_cache_entry_is_a_miss(tmp_path) -> None:
    audio = tmp_path / "talk.wav"
    audio.write_bytes(b"RIFF")
    cache = TranscriptCache(tmp_path / "cache")
    cache.directory.mkdir()
    cache.path_for(str(audio)).write_text("{not json")
    assert cache.load(str(audio)) is None


def test_project_round_trip(tmp_path) -> None:
    path = tmp_path / "talk.avim"
    clips = make_clips("one", "two")
    clips[1].is_manually_adjusted = True

    save_project(path, "/audio/talk.wav", clips)

    data = json.loads(path.read_text())
    assert data[0] == "/audio/talk.wav"
    assert load_project(path) == ("/audio/talk.wav", clips)


def test_project_optional_fields_default(tmp_path) -> None:
    path = tmp_path / "old.avim"
    path.write_text(
        json.dumps(
            [
                "/audio/talk.wav",
                [{"id": 1, "speaker": "A", "transcript": "hi",
                  "start_time": 0.0, "end_time": 1.0}],
            ]
        )
    )
    _, clips = load_project(path)
    assert clips == [make_clip(1, "hi", speaker="A")]


@pytest.mark.parametrize(
    "payload",
    [
        {"audio": "/audio/talk.wav", "clips": []},
        ["/audio/talk.wav"],
        ["/audio/talk.wav", [{"id": 1, "speaker": "A"}]],
        "not json at all",
    ],
)
def test_malformed_project_fails_whole_load(tmp_path, payload) -> None:
    path = tmp_path / "bad.avim"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    with pytest.raises(ProjectLoadMalformed):
        load_project(path)


def test_missing_project_is_io_failure(tmp_path) -> None:
    with pytest.raises(IoFailed):
        load_project(tmp_path / "missing.avim")


def test_save_project_io_failure(tmp_path) -> None:
    with pytest.raises(IoFailed):
        save_project(tmp_path / "no" / "such" / "dir.avim", "/a.wav", make_clips("x"))
