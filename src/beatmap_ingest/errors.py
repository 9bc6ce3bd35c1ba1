"""Upload error taxonomy.

Every pipeline failure is terminal and surfaces as an :class:`UploadError`.
External clients key on ``code`` and ``numeric_code``, so the mapping from
``UploadErrorKind`` to both values must stay stable across releases.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UploadErrorKind(str, Enum):
    """Stable error kinds, valued by their external error code."""

    CONTAINER_CORRUPT = "ERR_BEATMAP_NOT_ZIP"
    MANIFEST_MISSING = "ERR_BEATMAP_INFO_NOT_FOUND"
    MANIFEST_INVALID = "ERR_BEATMAP_INFO_INVALID"
    DIFFICULTY_MISSING = "ERR_BEATMAP_DIFF_NOT_FOUND"
    COVER_MISSING = "ERR_BEATMAP_COVER_NOT_FOUND"
    COVER_FORMAT_INVALID = "ERR_BEATMAP_COVER_INVALID"
    COVER_NOT_SQUARE = "ERR_BEATMAP_COVER_NOT_SQUARE"
    COVER_TOO_SMALL = "ERR_BEATMAP_COVER_TOO_SMOL"
    AUDIO_MISSING = "ERR_BEATMAP_AUDIO_NOT_FOUND"
    AUDIO_FORMAT_INVALID = "ERR_BEATMAP_AUDIO_INVALID"


NUMERIC_CODES: dict[UploadErrorKind, int] = {
    UploadErrorKind.CONTAINER_CORRUPT: 0x30003,
    UploadErrorKind.MANIFEST_MISSING: 0x30006,
    UploadErrorKind.MANIFEST_INVALID: 0x30007,
    UploadErrorKind.DIFFICULTY_MISSING: 0x30008,
    UploadErrorKind.COVER_MISSING: 0x30009,
    UploadErrorKind.COVER_FORMAT_INVALID: 0x3000A,
    UploadErrorKind.COVER_NOT_SQUARE: 0x3000B,
    UploadErrorKind.COVER_TOO_SMALL: 0x3000C,
    UploadErrorKind.AUDIO_MISSING: 0x3000D,
    UploadErrorKind.AUDIO_FORMAT_INVALID: 0x3000E,
}

# Every kind is a client error today.
HTTP_STATUSES: dict[UploadErrorKind, int] = {kind: 400 for kind in UploadErrorKind}


# Not frozen: context managers assign __traceback__ on exceptions passing through.
@dataclass(slots=True, eq=False)
class UploadError(ValueError):
    kind: UploadErrorKind
    message: str
    filename: str | None = None

    def __str__(self) -> str:
        return self.message

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def numeric_code(self) -> int:
        return NUMERIC_CODES[self.kind]

    @property
    def http_status(self) -> int:
        return HTTP_STATUSES[self.kind]

    def as_dict(self) -> dict[str, str | int]:
        payload: dict[str, str | int] = {
            "code": self.code,
            "numericCode": self.numeric_code,
            "message": self.message,
        }
        if self.filename is not None:
            payload["filename"] = self.filename
        return payload


def container_corrupt(detail: str | None = None) -> UploadError:
    message = "beatmap is not a zip"
    if detail:
        message = f"{message}: {detail}"
    return UploadError(UploadErrorKind.CONTAINER_CORRUPT, message)


def manifest_missing(member: str = "info.dat") -> UploadError:
    return UploadError(UploadErrorKind.MANIFEST_MISSING, f"{member} not found", filename=member)


def manifest_invalid(detail: str | None = None) -> UploadError:
    message = "invalid info.dat"
    if detail:
        message = f"{message}: {detail}"
    return UploadError(UploadErrorKind.MANIFEST_INVALID, message)


def difficulty_missing(filename: str) -> UploadError:
    return UploadError(UploadErrorKind.DIFFICULTY_MISSING, f"{filename} not found", filename=filename)


def cover_missing(filename: str) -> UploadError:
    return UploadError(UploadErrorKind.COVER_MISSING, f"{filename} not found", filename=filename)


def cover_format_invalid(filename: str | None = None) -> UploadError:
    return UploadError(UploadErrorKind.COVER_FORMAT_INVALID, "beatmap cover image invalid", filename=filename)


def cover_not_square(filename: str | None = None) -> UploadError:
    return UploadError(UploadErrorKind.COVER_NOT_SQUARE, "beatmap cover image not a square", filename=filename)


def cover_too_small(filename: str | None = None) -> UploadError:
    return UploadError(UploadErrorKind.COVER_TOO_SMALL, "beatmap cover image is too smol", filename=filename)


def audio_missing(filename: str) -> UploadError:
    return UploadError(UploadErrorKind.AUDIO_MISSING, f"{filename} not found", filename=filename)


def audio_format_invalid(filename: str | None = None) -> UploadError:
    return UploadError(UploadErrorKind.AUDIO_FORMAT_INVALID, "beatmap audio file invalid", filename=filename)
