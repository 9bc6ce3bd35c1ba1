"""Domain value objects describing stable ingest policies."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IngestPolicy:
    """Limits and naming rules applied to every submission."""

    policy_id: str
    policy_version: str = "v1"
    manifest_member: str = "info.dat"
    min_cover_edge_px: int = 256
    # The target runtime rejects ".ogg" names; audio is re-filed under ".egg".
    rename_from_suffix: str = ".ogg"
    rename_to_suffix: str = ".egg"
    max_read_workers: int = 4
    repackage_compression: str = "stored"


DEFAULT_INGEST_POLICY = IngestPolicy(policy_id="beatmap-ingest-default", policy_version="v1")
