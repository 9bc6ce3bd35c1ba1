"""Cover image and audio validation.

Formats are detected from leading byte signatures, never from filenames. The
signature table is closed and checked in declaration order.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum

from PIL import Image, UnidentifiedImageError

from beatmap_ingest.container import RawContainer
from beatmap_ingest.domain.policies import DEFAULT_INGEST_POLICY, IngestPolicy
from beatmap_ingest.errors import (
    audio_format_invalid,
    audio_missing,
    cover_format_invalid,
    cover_missing,
    cover_not_square,
    cover_too_small,
)
from beatmap_ingest.manifest import InfoManifest


class MediaKind(str, Enum):
    """Media formats the sniffer can recognize."""

    PNG = "png"
    JPEG = "jpeg"
    OGG_VORBIS = "ogg-vorbis"
    WAV = "wav"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]


_EXTENSIONS: dict[MediaKind, str] = {
    MediaKind.PNG: ".png",
    MediaKind.JPEG: ".jpg",
    MediaKind.OGG_VORBIS: ".ogg",
    MediaKind.WAV: ".wav",
}


@dataclass(frozen=True, slots=True)
class Signature:
    kind: MediaKind
    parts: tuple[tuple[int, bytes], ...]

    def matches(self, data: bytes) -> bool:
        return all(data[offset : offset + len(pattern)] == pattern for offset, pattern in self.parts)


SIGNATURES: tuple[Signature, ...] = (
    Signature(MediaKind.PNG, ((0, b"\x89PNG\r\n\x1a\n"),)),
    Signature(MediaKind.JPEG, ((0, b"\xff\xd8\xff"),)),
    # First Ogg page must carry the Vorbis identification header.
    Signature(MediaKind.OGG_VORBIS, ((0, b"OggS"), (28, b"\x01vorbis"))),
    Signature(MediaKind.WAV, ((0, b"RIFF"), (8, b"WAVE"))),
)

COVER_KINDS: frozenset[MediaKind] = frozenset({MediaKind.PNG, MediaKind.JPEG})
AUDIO_KINDS: frozenset[MediaKind] = frozenset({MediaKind.OGG_VORBIS, MediaKind.WAV})

_PILLOW_FORMATS: dict[MediaKind, str] = {
    MediaKind.PNG: "PNG",
    MediaKind.JPEG: "JPEG",
}


def sniff_media(data: bytes) -> MediaKind | None:
    """Return the first signature matching ``data``, or ``None``."""

    for signature in SIGNATURES:
        if signature.matches(data):
            return signature.kind
    return None


@dataclass(frozen=True, slots=True)
class ValidatedCover:
    filename: str
    kind: MediaKind
    data: bytes
    width: int
    height: int

    @property
    def extension(self) -> str:
        return self.kind.extension


@dataclass(frozen=True, slots=True)
class ValidatedAudio:
    filename: str
    kind: MediaKind
    data: bytes


def read_image_size(data: bytes, kind: MediaKind) -> tuple[int, int]:
    """Read width and height from the image header without decoding pixels."""

    with Image.open(io.BytesIO(data), formats=[_PILLOW_FORMATS[kind]]) as image:
        return image.size


def validate_cover(
    container: RawContainer,
    info: InfoManifest,
    policy: IngestPolicy = DEFAULT_INGEST_POLICY,
) -> ValidatedCover:
    filename = info.cover_image_filename
    data = container.get(filename)
    if data is None:
        raise cover_missing(filename)

    kind = sniff_media(data)
    if kind not in COVER_KINDS:
        raise cover_format_invalid(filename)

    try:
        width, height = read_image_size(data, kind)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise cover_format_invalid(filename) from exc

    if width != height:
        raise cover_not_square(filename)
    if width < policy.min_cover_edge_px or height < policy.min_cover_edge_px:
        raise cover_too_small(filename)

    return ValidatedCover(filename=filename, kind=kind, data=data, width=width, height=height)


def validate_audio(container: RawContainer, info: InfoManifest) -> ValidatedAudio:
    filename = info.song_filename
    data = container.get(filename)
    if data is None:
        raise audio_missing(filename)

    kind = sniff_media(data)
    if kind not in AUDIO_KINDS:
        raise audio_format_invalid(filename)

    return ValidatedAudio(filename=filename, kind=kind, data=data)
