"""Domain models produced by the submission pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class DifficultyFlags:
    """Which recognized difficulty tiers a map provides."""

    easy: bool
    normal: bool
    hard: bool
    expert: bool
    expert_plus: bool

    def as_dict(self) -> dict[str, bool]:
        return {
            "easy": self.easy,
            "normal": self.normal,
            "hard": self.hard,
            "expert": self.expert,
            "expertPlus": self.expert_plus,
        }


@dataclass(frozen=True, slots=True)
class BeatmapMetadata:
    """Normalized metadata projected from the manifest."""

    song_name: str
    song_sub_name: str
    song_author_name: str
    level_author_name: str
    bpm: int | float
    difficulties: DifficultyFlags
    characteristics: tuple[str, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "songName": self.song_name,
            "songSubName": self.song_sub_name,
            "songAuthorName": self.song_author_name,
            "levelAuthorName": self.level_author_name,
            "bpm": self.bpm,
            "difficulties": self.difficulties.as_dict(),
            "characteristics": list(self.characteristics),
        }


@dataclass(frozen=True, slots=True)
class ParsedBeatmap:
    """Fingerprint, metadata and sniffed cover extension of an accepted map."""

    hash: str
    metadata: BeatmapMetadata
    cover_extension: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "hash": self.hash,
            "metadata": self.metadata.as_dict(),
            "coverExt": self.cover_extension,
        }


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    """Everything the persistence collaborator receives for an accepted map."""

    parsed: ParsedBeatmap
    cover_bytes: bytes
    archive_bytes: bytes
