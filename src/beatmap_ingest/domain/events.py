"""Domain event contracts for submission processing."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class ContainerLoaded(DomainEvent):
    """The submitted archive decoded into a working container."""


@dataclass(frozen=True, slots=True)
class MediaValidated(DomainEvent):
    """Cover image and audio track passed signature and size checks."""


@dataclass(frozen=True, slots=True)
class AudioRenamed(DomainEvent):
    """The audio member was re-filed under the platform audio suffix."""


@dataclass(frozen=True, slots=True)
class SubmissionFingerprinted(DomainEvent):
    """The content fingerprint was computed for an accepted submission."""


@dataclass(frozen=True, slots=True)
class SubmissionRejected(DomainEvent):
    """A stage failed and the whole submission was rejected."""
