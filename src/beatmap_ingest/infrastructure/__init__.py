"""Infrastructure adapters for events and submission handoff."""

from .logging_event_publisher import LoggingEventPublisher
from .logging_submission_sink import LoggingSubmissionSink

__all__ = ["LoggingEventPublisher", "LoggingSubmissionSink"]
