"""Manifest (``info.dat``) decoding.

The manifest is read in two steps. :func:`read_manifest` only checks that the
member exists and holds a JSON object. Typed access through
:attr:`ManifestDocument.info` validates the fields the pipeline uses and maps
any absence or type mismatch to ``ManifestInvalid``.
"""

from __future__ import annotations

import copy
import json
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from functools import cached_property
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, ValidationError, field_validator

from beatmap_ingest.container import RawContainer
from beatmap_ingest.errors import manifest_invalid, manifest_missing

MANIFEST_MEMBER = "info.dat"

_MAX_SAFE_INTEGER = 2**53
_MAX_ARRAY_INDEX = 2**32 - 2
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


class DifficultyRank(IntEnum):
    """Recognized difficulty ranks; other values may appear in manifests."""

    EASY = 1
    NORMAL = 3
    HARD = 5
    EXPERT = 7
    EXPERT_PLUS = 9


class _ManifestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class DifficultyBeatmap(_ManifestModel):
    beatmap_filename: str = Field(alias="_beatmapFilename")
    # Integral floats such as 7.0 still compare equal to the recognized ranks.
    difficulty_rank: StrictInt | StrictFloat = Field(alias="_difficultyRank")


class DifficultyBeatmapSet(_ManifestModel):
    characteristic_name: str = Field(alias="_beatmapCharacteristicName")
    difficulties: tuple[DifficultyBeatmap, ...] = Field(alias="_difficultyBeatmaps")


class InfoManifest(_ManifestModel):
    song_name: str = Field(alias="_songName")
    song_sub_name: str = Field(alias="_songSubName")
    song_author_name: str = Field(alias="_songAuthorName")
    level_author_name: str = Field(alias="_levelAuthorName")
    beats_per_minute: StrictInt | StrictFloat = Field(alias="_beatsPerMinute")
    song_filename: str = Field(alias="_songFilename")
    cover_image_filename: str = Field(alias="_coverImageFilename")
    difficulty_beatmap_sets: tuple[DifficultyBeatmapSet, ...] = Field(alias="_difficultyBeatmapSets")

    @field_validator("beats_per_minute")
    @classmethod
    def _validate_positive_finite(cls, value: int | float) -> int | float:
        if (isinstance(value, float) and not math.isfinite(value)) or value <= 0:
            raise ValueError("_beatsPerMinute must be a positive finite number.")
        return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant {name!r}.")


@dataclass(frozen=True)
class ManifestDocument:
    """Decoded manifest: original text, generic JSON object, typed view on demand."""

    text: str
    data: dict[str, Any]
    member: str = MANIFEST_MEMBER

    @property
    def manifest_bytes(self) -> bytes:
        return self.text.encode("utf-8")

    @cached_property
    def info(self) -> InfoManifest:
        try:
            return InfoManifest.model_validate(self.data)
        except ValidationError as exc:
            fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
            raise manifest_invalid(f"bad or missing fields: {', '.join(fields)}") from exc

    def with_field(self, key: str, value: Any) -> ManifestDocument:
        """Return a re-serialized document with one top-level field replaced."""

        data = copy.deepcopy(self.data)
        data[key] = value
        return ManifestDocument(text=serialize_manifest(data), data=data, member=self.member)


def parse_manifest_text(text: str, member: str = MANIFEST_MEMBER) -> ManifestDocument:
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise manifest_invalid(str(exc)) from exc
    if not isinstance(data, dict):
        raise manifest_invalid("top-level value must be an object")
    return ManifestDocument(text=text, data=data, member=member)


def read_manifest(container: RawContainer, member: str = MANIFEST_MEMBER) -> ManifestDocument:
    """Locate ``member`` in ``container`` and decode it as a JSON object."""

    raw = container.get(member)
    if raw is None:
        raise manifest_missing(member)
    return parse_manifest_text(raw.decode("utf-8", errors="replace"), member=member)


def serialize_manifest(data: dict[str, Any]) -> str:
    """Render ``data`` byte-for-byte as ``JSON.stringify(data, null, 2)`` plus a newline.

    Rewritten manifests are fingerprinted, so numbers, key order and string
    escapes follow the JavaScript serializer the platform tooling uses rather
    than :func:`json.dumps`.
    """

    return _render_json(data, "") + "\n"


def format_js_number(value: int | float) -> str:
    """Format a JSON number the way JavaScript's ``Number#toString`` does."""

    if isinstance(value, int) and abs(value) <= _MAX_SAFE_INTEGER:
        return str(value)
    try:
        number = float(value)
    except OverflowError:
        return "null"
    if not math.isfinite(number):
        return "null"
    if number == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(number)).as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    # value == 0.<digits> * 10**point
    point = len(digits) + exponent
    digits = digits.rstrip("0")
    count = len(digits)

    if count <= point <= 21:
        text = digits + "0" * (point - count)
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        power = point - 1
        mantissa = digits if count == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"
    return f"-{text}" if sign else text


def _render_json(value: Any, indent: str) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return format_js_number(value)
    if isinstance(value, str):
        return _render_string(value)

    inner = indent + "  "
    if isinstance(value, dict):
        if not value:
            return "{}"
        members = [f"{inner}{_render_string(key)}: {_render_json(value[key], inner)}" for key in _js_key_order(value)]
        return "{\n" + ",\n".join(members) + "\n" + indent + "}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [inner + _render_json(item, inner) for item in value]
        return "[\n" + ",\n".join(items) + "\n" + indent + "]"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _render_string(text: str) -> str:
    rendered = json.dumps(text, ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda match: f"\\u{ord(match.group()):04x}", rendered)


def _is_array_index(key: str) -> bool:
    if not key.isascii() or not key.isdigit():
        return False
    if len(key) > 1 and key[0] == "0":
        return False
    return int(key) <= _MAX_ARRAY_INDEX


def _js_key_order(obj: dict[str, Any]) -> list[str]:
    # JavaScript objects list integer-like keys first, ascending.
    index_keys = sorted((key for key in obj if _is_array_index(key)), key=int)
    return index_keys + [key for key in obj if not _is_array_index(key)]
