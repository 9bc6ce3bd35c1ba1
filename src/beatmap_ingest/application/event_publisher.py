"""Application-level event publishing contracts."""

from __future__ import annotations

from typing import Protocol

from beatmap_ingest.domain.events import DomainEvent


class EventPublisher(Protocol):
    """Port for publishing submission events."""

    def publish(self, event: DomainEvent) -> None:
        """Publish a single event."""


class NullEventPublisher:
    """Drops every event; the default for library callers."""

    def publish(self, event: DomainEvent) -> None:  # noqa: ARG002
        return
