from __future__ import annotations

import json

import pytest

from beatmap_ingest.container import RawContainer
from beatmap_ingest.domain.policies import IngestPolicy
from beatmap_ingest.errors import UploadError, UploadErrorKind
from beatmap_ingest.manifest import parse_manifest_text
from beatmap_ingest.media import MediaKind, sniff_media, validate_audio, validate_cover


def _info(manifest_data: dict, **overrides):
    manifest_data.update(overrides)
    return parse_manifest_text(json.dumps(manifest_data)).info


def test_sniff_recognizes_real_headers(media) -> None:
    assert sniff_media(media.png(16, 16)) is MediaKind.PNG
    assert sniff_media(media.jpeg(16, 16)) is MediaKind.JPEG
    assert sniff_media(media.ogg()) is MediaKind.OGG_VORBIS
    assert sniff_media(media.wav()) is MediaKind.WAV


@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"\x89PN",
        b"GIF89a" + b"\x00" * 32,
        b"ID3\x04\x00\x00" + b"\x00" * 32,
        b"RIFF\x00\x00\x00\x00AVI " + b"\x00" * 16,
        b"OggS" + b"\x00" * 24 + b"OpusHead" + b"\x00" * 16,
        b"OggS" + b"\x00" * 24 + b"\x80theora" + b"\x00" * 16,
        b"fLaC" + b"\x00" * 40,
    ],
)
def test_sniff_rejects_unknown_or_unsupported_signatures(payload: bytes) -> None:
    assert sniff_media(payload) is None


def test_sniff_ignores_names_entirely(media) -> None:
    container = RawContainer({"cover.jpg": media.png(256, 256)})

    assert sniff_media(container["cover.jpg"]) is MediaKind.PNG


def test_validate_cover_accepts_256_png(manifest_data, media) -> None:
    info = _info(manifest_data)
    data = media.png(256, 256)

    cover = validate_cover(RawContainer({"cover.png": data}), info)

    assert cover.kind is MediaKind.PNG
    assert cover.extension == ".png"
    assert (cover.width, cover.height) == (256, 256)
    assert cover.data == data


def test_validate_cover_extension_comes_from_bytes(manifest_data, media) -> None:
    info = _info(manifest_data, _coverImageFilename="cover.png")

    cover = validate_cover(RawContainer({"cover.png": media.jpeg(512, 512)}), info)

    assert cover.kind is MediaKind.JPEG
    assert cover.extension == ".jpg"


@pytest.mark.parametrize(
    ("width", "height", "kind"),
    [
        (128, 128, UploadErrorKind.COVER_TOO_SMALL),
        (255, 255, UploadErrorKind.COVER_TOO_SMALL),
        (300, 200, UploadErrorKind.COVER_NOT_SQUARE),
        (100, 50, UploadErrorKind.COVER_NOT_SQUARE),
    ],
)
def test_validate_cover_enforces_square_and_size(manifest_data, media, width, height, kind) -> None:
    info = _info(manifest_data)

    with pytest.raises(UploadError) as exc:
        validate_cover(RawContainer({"cover.png": media.png(width, height)}), info)

    assert exc.value.kind is kind


def test_validate_cover_respects_policy_minimum(manifest_data, media) -> None:
    info = _info(manifest_data)
    policy = IngestPolicy(policy_id="small-covers", min_cover_edge_px=64)

    cover = validate_cover(RawContainer({"cover.png": media.png(128, 128)}), info, policy)

    assert cover.width == 128


def test_validate_cover_missing_reports_filename(manifest_data, media) -> None:
    info = _info(manifest_data, _coverImageFilename="art/Cover.png")

    with pytest.raises(UploadError) as exc:
        validate_cover(RawContainer({"art/cover.png": media.png()}), info)

    assert exc.value.kind is UploadErrorKind.COVER_MISSING
    assert exc.value.filename == "art/Cover.png"


@pytest.mark.parametrize(
    "payload",
    [
        b"GIF89a" + b"\x00" * 64,
        b"\x89PNG\r\n\x1a\n",
        b"\x89PNG\r\n\x1a\n" + b"\x00" * 8,
        b"\xff\xd8\xff",
    ],
)
def test_validate_cover_rejects_unreadable_images(manifest_data, payload: bytes) -> None:
    info = _info(manifest_data)

    with pytest.raises(UploadError) as exc:
        validate_cover(RawContainer({"cover.png": payload}), info)

    assert exc.value.kind is UploadErrorKind.COVER_FORMAT_INVALID


@pytest.mark.parametrize(("filename", "factory"), [("song.wav", "wav"), ("song.ogg", "ogg")])
def test_validate_audio_accepts_wav_and_ogg_vorbis(manifest_data, media, filename, factory) -> None:
    info = _info(manifest_data, _songFilename=filename)
    data = getattr(media, factory)()

    audio = validate_audio(RawContainer({filename: data}), info)

    assert audio.filename == filename
    assert audio.data == data


def test_validate_audio_sniffs_wav_behind_ogg_name(manifest_data, media) -> None:
    info = _info(manifest_data, _songFilename="song.ogg")

    audio = validate_audio(RawContainer({"song.ogg": media.wav()}), info)

    assert audio.kind is MediaKind.WAV


def test_validate_audio_missing_reports_filename(manifest_data, media) -> None:
    info = _info(manifest_data, _songFilename="song.egg")

    with pytest.raises(UploadError) as exc:
        validate_audio(RawContainer({"song.ogg": media.ogg()}), info)

    assert exc.value.kind is UploadErrorKind.AUDIO_MISSING
    assert exc.value.filename == "song.egg"


def test_validate_audio_rejects_unsupported_format(manifest_data) -> None:
    info = _info(manifest_data, _songFilename="song.wav")

    with pytest.raises(UploadError) as exc:
        validate_audio(RawContainer({"song.wav": b"ID3\x04\x00\x00" + b"\x00" * 64}), info)

    assert exc.value.kind is UploadErrorKind.AUDIO_FORMAT_INVALID
