from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from beatmap_ingest.domain.policies import DEFAULT_INGEST_POLICY, IngestPolicy

CONFIG_ENV_VAR = "BEATMAP_INGEST_CONFIG"


class IngestConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    policy_id: str = DEFAULT_INGEST_POLICY.policy_id
    policy_version: str = DEFAULT_INGEST_POLICY.policy_version
    manifest_member: str = Field(DEFAULT_INGEST_POLICY.manifest_member, min_length=1)
    min_cover_edge_px: int = Field(DEFAULT_INGEST_POLICY.min_cover_edge_px, ge=1)
    rename_from_suffix: str = DEFAULT_INGEST_POLICY.rename_from_suffix
    rename_to_suffix: str = DEFAULT_INGEST_POLICY.rename_to_suffix
    max_read_workers: int = Field(DEFAULT_INGEST_POLICY.max_read_workers, ge=1, le=64)
    repackage_compression: Literal["stored", "deflated"] = "stored"

    @field_validator("rename_from_suffix", "rename_to_suffix")
    @classmethod
    def _validate_suffix(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("suffixes must start with '.' followed by at least one character.")
        return value

    def to_policy(self) -> IngestPolicy:
        return IngestPolicy(**self.model_dump())


def load_ingest_config(path: Path) -> IngestConfig:
    data = _load_config_data(path)
    return IngestConfig.model_validate(data)


@lru_cache(maxsize=1)
def resolve_ingest_policy() -> IngestPolicy:
    """Policy for long-running entry points, read from ``BEATMAP_INGEST_CONFIG`` when set."""

    config_path = os.getenv(CONFIG_ENV_VAR)
    if not config_path:
        return DEFAULT_INGEST_POLICY
    return load_ingest_config(Path(config_path)).to_policy()


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:
            raise ImportError("PyYAML is required to load YAML configs.") from exc

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
