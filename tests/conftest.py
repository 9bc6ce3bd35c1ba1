from __future__ import annotations

import copy
import io
import json
import wave
import zipfile

import pytest
from PIL import Image

DEFAULT_MANIFEST = {
    "_version": "2.0.0",
    "_songName": "Reality Check Through The Skull",
    "_songSubName": "",
    "_songAuthorName": "DM DOKURO",
    "_levelAuthorName": "mapper",
    "_beatsPerMinute": 150,
    "_songTimeOffset": 0,
    "_shuffle": 0,
    "_shufflePeriod": 0.5,
    "_previewStartTime": 12,
    "_previewDuration": 10,
    "_songFilename": "song.wav",
    "_coverImageFilename": "cover.png",
    "_environmentName": "DefaultEnvironment",
    "_difficultyBeatmapSets": [
        {
            "_beatmapCharacteristicName": "Standard",
            "_difficultyBeatmaps": [
                {
                    "_difficulty": "Easy",
                    "_difficultyRank": 1,
                    "_beatmapFilename": "Easy.dat",
                    "_noteJumpMovementSpeed": 10,
                    "_noteJumpStartBeatOffset": 0,
                },
                {
                    "_difficulty": "Expert",
                    "_difficultyRank": 7,
                    "_beatmapFilename": "Expert.dat",
                    "_noteJumpMovementSpeed": 16,
                    "_noteJumpStartBeatOffset": 0,
                },
            ],
        },
        {
            "_beatmapCharacteristicName": "OneSaber",
            "_difficultyBeatmaps": [
                {
                    "_difficulty": "Hard",
                    "_difficultyRank": 5,
                    "_beatmapFilename": "OneSaberHard.dat",
                    "_noteJumpMovementSpeed": 12,
                    "_noteJumpStartBeatOffset": 0,
                },
            ],
        },
    ],
}


def make_png_bytes(width: int = 256, height: int = 256) -> bytes:
    with io.BytesIO() as buffer:
        Image.new("RGB", (width, height), color=(30, 60, 90)).save(buffer, format="PNG")
        return buffer.getvalue()


def make_jpeg_bytes(width: int = 256, height: int = 256) -> bytes:
    with io.BytesIO() as buffer:
        Image.new("RGB", (width, height), color=(200, 10, 10)).save(buffer, format="JPEG")
        return buffer.getvalue()


def make_wav_bytes(*, duration_seconds: float = 0.05, sample_rate: int = 44_100, channels: int = 2) -> bytes:
    frames = int(duration_seconds * sample_rate)
    with io.BytesIO() as buffer:
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(channels)
            wav.setsampwidth(2)
            wav.setframerate(sample_rate)
            wav.writeframes(b"\x00\x00" * channels * frames)
        return buffer.getvalue()


def make_ogg_vorbis_bytes() -> bytes:
    # First page header (27 bytes) + one lacing value, then the Vorbis identification packet.
    page_header = b"OggS" + b"\x00\x02" + b"\x00" * 20 + b"\x01" + b"\x1e"
    identification = b"\x01vorbis" + b"\x00\x00\x00\x00\x02\x44\xac\x00\x00" + b"\x00" * 14
    return page_header + identification + b"\x00" * 64


def make_difficulty_bytes(label: str) -> bytes:
    payload = {"_version": "2.0.0", "_notes": [{"_time": 1, "_lineIndex": 1, "_type": 0, "_label": label}]}
    return json.dumps(payload).encode("utf-8")


def encode_manifest(data: dict) -> bytes:
    return json.dumps(data, indent=2).encode("utf-8")


def build_archive(members: dict[str, bytes], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    with io.BytesIO() as buffer:
        with zipfile.ZipFile(buffer, "w", compression=compression) as archive:
            for name, data in members.items():
                archive.writestr(name, data)
        return buffer.getvalue()


@pytest.fixture
def manifest_data() -> dict:
    return copy.deepcopy(DEFAULT_MANIFEST)


@pytest.fixture
def beatmap_members(manifest_data) -> dict[str, bytes]:
    return {
        "info.dat": encode_manifest(manifest_data),
        "cover.png": make_png_bytes(),
        "song.wav": make_wav_bytes(),
        "Easy.dat": make_difficulty_bytes("easy"),
        "Expert.dat": make_difficulty_bytes("expert"),
        "OneSaberHard.dat": make_difficulty_bytes("one-saber-hard"),
    }


@pytest.fixture
def media():
    """Byte builders for covers, audio and difficulty files."""

    class _Media:
        png = staticmethod(make_png_bytes)
        jpeg = staticmethod(make_jpeg_bytes)
        wav = staticmethod(make_wav_bytes)
        ogg = staticmethod(make_ogg_vorbis_bytes)
        difficulty = staticmethod(make_difficulty_bytes)
        manifest = staticmethod(encode_manifest)
        archive = staticmethod(build_archive)

    return _Media
