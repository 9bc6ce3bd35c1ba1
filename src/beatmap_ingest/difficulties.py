"""Difficulty reference resolution."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from beatmap_ingest.container import RawContainer
from beatmap_ingest.errors import difficulty_missing
from beatmap_ingest.manifest import DifficultyBeatmap, InfoManifest


@dataclass(frozen=True, slots=True)
class ResolvedDifficulty:
    beatmap: DifficultyBeatmap
    data: bytes


def flatten_difficulties(info: InfoManifest) -> tuple[DifficultyBeatmap, ...]:
    """Flatten all sets into one sequence in set order, then within-set order."""

    return tuple(
        difficulty
        for beatmap_set in info.difficulty_beatmap_sets
        for difficulty in beatmap_set.difficulties
    )


def resolve_difficulties(
    container: RawContainer,
    info: InfoManifest,
    max_workers: int = 4,
) -> tuple[ResolvedDifficulty, ...]:
    """Check every declared difficulty exists, then read all of them.

    The first dangling reference aborts resolution. Reads are fanned out over a
    bounded pool; ``executor.map`` keeps results in declaration order regardless
    of completion order.
    """

    difficulties = flatten_difficulties(info)
    for difficulty in difficulties:
        if difficulty.beatmap_filename not in container:
            raise difficulty_missing(difficulty.beatmap_filename)

    if not difficulties:
        return ()

    def _read(difficulty: DifficultyBeatmap) -> ResolvedDifficulty:
        return ResolvedDifficulty(beatmap=difficulty, data=container[difficulty.beatmap_filename])

    safe_workers = max(1, min(max_workers, len(difficulties)))
    with ThreadPoolExecutor(max_workers=safe_workers) as executor:
        return tuple(executor.map(_read, difficulties))
