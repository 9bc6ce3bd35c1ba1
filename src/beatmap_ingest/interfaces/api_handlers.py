"""API-facing handlers that delegate to application services."""

from __future__ import annotations

from beatmap_ingest.application.submission_service import ProcessSubmission
from beatmap_ingest.domain.models import SubmissionResult
from beatmap_ingest.errors import UploadError
from beatmap_ingest.infrastructure.logging_event_publisher import LoggingEventPublisher
from beatmap_ingest.infrastructure.logging_submission_sink import LoggingSubmissionSink
from beatmap_ingest.utils.config import resolve_ingest_policy

_event_publisher = LoggingEventPublisher()
submission_sink = LoggingSubmissionSink()


def process_uploaded_bytes(raw_archive_bytes: bytes, correlation_id: str) -> SubmissionResult:
    service = ProcessSubmission(policy=resolve_ingest_policy(), event_publisher=_event_publisher)
    return service.run(raw_archive_bytes, correlation_id=correlation_id)


__all__ = ["UploadError", "process_uploaded_bytes", "submission_sink"]
