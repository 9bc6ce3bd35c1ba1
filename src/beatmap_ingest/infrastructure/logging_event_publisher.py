"""Logging-backed publisher for submission pipeline events."""

from __future__ import annotations

import logging

from beatmap_ingest.domain.events import DomainEvent, SubmissionRejected

LOGGER = logging.getLogger("beatmap_ingest.events")


class LoggingEventPublisher:
    """Emit one structured record per submission event.

    Rejections are logged at WARNING with the failing stage and error code;
    every other event is INFO. Accepted submissions carry their fingerprint.
    """

    def publish(self, event: DomainEvent) -> None:
        summary = event.payload_summary
        extra = {
            "event_name": type(event).__name__,
            "correlation_id": event.correlation_id,
            "payload_summary": summary,
            "occurred_at": event.occurred_at.isoformat(),
        }
        if isinstance(event, SubmissionRejected):
            extra["stage"] = summary.get("stage")
            extra["error_code"] = summary.get("code")
            LOGGER.warning("submission_rejected", extra=extra)
            return

        if "hash" in summary:
            extra["fingerprint"] = summary["hash"]
        LOGGER.info("submission_event", extra=extra)
