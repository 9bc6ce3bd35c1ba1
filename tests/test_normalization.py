from __future__ import annotations

import json

from beatmap_ingest.container import RawContainer
from beatmap_ingest.domain.policies import IngestPolicy
from beatmap_ingest.manifest import read_manifest
from beatmap_ingest.normalization import normalize_audio_member, renamed_audio_path


def _submission(manifest_data: dict, media, song_filename: str, audio: bytes) -> RawContainer:
    manifest_data["_songFilename"] = song_filename
    return RawContainer({"info.dat": media.manifest(manifest_data), song_filename: audio, "cover.png": b"cover"})


def test_renamed_audio_path_only_matches_declared_suffix() -> None:
    assert renamed_audio_path("song.ogg") == "song.egg"
    assert renamed_audio_path("audio/track.v2.ogg") == "track.v2.egg"
    assert renamed_audio_path("song.OGG") is None
    assert renamed_audio_path("song.wav") is None
    assert renamed_audio_path("song.egg") is None
    assert renamed_audio_path("ogg") is None


def test_ogg_audio_is_renamed_in_container_and_manifest(manifest_data, media) -> None:
    audio = media.ogg()
    container = _submission(manifest_data, media, "song.ogg", audio)
    manifest = read_manifest(container)

    normalized = normalize_audio_member(container, manifest)

    assert normalized.was_renamed
    assert normalized.renamed_from == "song.ogg"
    assert "song.ogg" not in normalized.container
    assert normalized.container["song.egg"] == audio
    assert normalized.manifest.info.song_filename == "song.egg"
    assert json.loads(normalized.container["info.dat"])["_songFilename"] == "song.egg"
    assert normalized.container["info.dat"] == normalized.manifest.manifest_bytes
    assert normalized.container["cover.png"] == b"cover"


def test_rename_leaves_inputs_untouched(manifest_data, media) -> None:
    container = _submission(manifest_data, media, "song.ogg", media.ogg())
    manifest = read_manifest(container)
    original_manifest_bytes = container["info.dat"]

    normalize_audio_member(container, manifest)

    assert "song.ogg" in container
    assert container["info.dat"] == original_manifest_bytes
    assert manifest.info.song_filename == "song.ogg"


def test_non_ogg_audio_passes_through(manifest_data, media) -> None:
    container = _submission(manifest_data, media, "song.wav", media.wav())
    manifest = read_manifest(container)

    normalized = normalize_audio_member(container, manifest)

    assert not normalized.was_renamed
    assert normalized.container is container
    assert normalized.manifest is manifest


def test_wav_bytes_named_ogg_are_still_renamed(manifest_data, media) -> None:
    wav = media.wav()
    container = _submission(manifest_data, media, "song.ogg", wav)

    normalized = normalize_audio_member(container, read_manifest(container))

    assert normalized.container["song.egg"] == wav


def test_nested_audio_is_moved_to_archive_root(manifest_data, media) -> None:
    audio = media.ogg()
    container = _submission(manifest_data, media, "audio/song.ogg", audio)

    normalized = normalize_audio_member(container, read_manifest(container))

    assert normalized.container["song.egg"] == audio
    assert "audio/song.ogg" not in normalized.container
    assert "audio/song.egg" not in normalized.container
    assert normalized.manifest.info.song_filename == "song.egg"


def test_rename_suffixes_follow_policy(manifest_data, media) -> None:
    container = _submission(manifest_data, media, "song.wav", media.wav())
    policy = IngestPolicy(policy_id="wav-rename", rename_from_suffix=".wav", rename_to_suffix=".wave")

    normalized = normalize_audio_member(container, read_manifest(container), policy)

    assert normalized.manifest.info.song_filename == "song.wave"
    assert "song.wave" in normalized.container
