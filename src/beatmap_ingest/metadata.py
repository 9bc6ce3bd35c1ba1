"""Projection of the manifest into the platform metadata shape."""

from __future__ import annotations

from typing import Sequence

from beatmap_ingest.difficulties import flatten_difficulties
from beatmap_ingest.domain.models import BeatmapMetadata, DifficultyFlags
from beatmap_ingest.manifest import DifficultyBeatmap, DifficultyRank, InfoManifest


def difficulty_flags(difficulties: Sequence[DifficultyBeatmap]) -> DifficultyFlags:
    ranks = {difficulty.difficulty_rank for difficulty in difficulties}
    return DifficultyFlags(
        easy=DifficultyRank.EASY in ranks,
        normal=DifficultyRank.NORMAL in ranks,
        hard=DifficultyRank.HARD in ranks,
        expert=DifficultyRank.EXPERT in ranks,
        expert_plus=DifficultyRank.EXPERT_PLUS in ranks,
    )


def extract_metadata(info: InfoManifest) -> BeatmapMetadata:
    """Copy author and title fields verbatim and derive tier flags and characteristics."""

    return BeatmapMetadata(
        song_name=info.song_name,
        song_sub_name=info.song_sub_name,
        song_author_name=info.song_author_name,
        level_author_name=info.level_author_name,
        bpm=info.beats_per_minute,
        difficulties=difficulty_flags(flatten_difficulties(info)),
        characteristics=tuple(beatmap_set.characteristic_name for beatmap_set in info.difficulty_beatmap_sets),
    )
