"""Submission sink that records the handoff in logs only."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from beatmap_ingest.application.submission_sink import SubmissionHandoff, object_keys
from beatmap_ingest.domain.models import SubmissionResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoggingSubmissionSink:
    """Adapter used when no persistence collaborator is wired in."""

    queue_name: str = "accepted-beatmaps"

    def accept(self, result: SubmissionResult) -> SubmissionHandoff:
        archive_key, cover_key = object_keys(result)
        logger.info(
            "Queued accepted beatmap for persistence",
            extra={
                "queue_name": self.queue_name,
                "fingerprint": result.parsed.hash,
                "archive_key": archive_key,
                "cover_key": cover_key,
                "archive_size": len(result.archive_bytes),
                "cover_size": len(result.cover_bytes),
            },
        )
        return SubmissionHandoff(status="deferred", archive_key=archive_key, cover_key=cover_key)
