"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from beatmap_ingest.application.submission_service import ProcessSubmission
from beatmap_ingest.application.submission_sink import object_keys
from beatmap_ingest.domain.models import SubmissionResult
from beatmap_ingest.domain.policies import DEFAULT_INGEST_POLICY, IngestPolicy
from beatmap_ingest.infrastructure.logging_event_publisher import LoggingEventPublisher
from beatmap_ingest.utils.config import load_ingest_config

_event_publisher = LoggingEventPublisher()


@dataclass(frozen=True, slots=True)
class WrittenSubmission:
    result: SubmissionResult
    archive_path: Path
    cover_path: Path
    metadata_path: Path


def resolve_policy(config_path: Path | None) -> IngestPolicy:
    if config_path is None:
        return DEFAULT_INGEST_POLICY
    return load_ingest_config(config_path).to_policy()


def process_archive_file(
    archive: Path,
    policy: IngestPolicy = DEFAULT_INGEST_POLICY,
    correlation_id: str | None = None,
) -> SubmissionResult:
    service = ProcessSubmission(policy=policy, event_publisher=_event_publisher)
    return service.run(archive.read_bytes(), correlation_id=correlation_id or str(uuid4()))


def write_submission(result: SubmissionResult, output_dir: Path) -> WrittenSubmission:
    """Write archive, cover and metadata JSON named after the fingerprint."""

    output_dir.mkdir(parents=True, exist_ok=True)
    archive_key, cover_key = object_keys(result)

    archive_path = output_dir / archive_key
    cover_path = output_dir / cover_key
    metadata_path = output_dir / f"{result.parsed.hash}.json"

    archive_path.write_bytes(result.archive_bytes)
    cover_path.write_bytes(result.cover_bytes)
    metadata_path.write_text(json.dumps(result.parsed.as_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    return WrittenSubmission(
        result=result,
        archive_path=archive_path,
        cover_path=cover_path,
        metadata_path=metadata_path,
    )


def process_archive_to_dir(
    archive: Path,
    output_dir: Path,
    config_path: Path | None = None,
    correlation_id: str | None = None,
) -> WrittenSubmission:
    result = process_archive_file(archive, policy=resolve_policy(config_path), correlation_id=correlation_id)
    return write_submission(result, output_dir)
