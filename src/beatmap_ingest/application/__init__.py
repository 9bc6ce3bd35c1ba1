"""DDD application layer."""

from .event_publisher import EventPublisher, NullEventPublisher
from .submission_service import ProcessSubmission, process_submission
from .submission_sink import SubmissionHandoff, SubmissionSink

__all__ = [
    "EventPublisher",
    "NullEventPublisher",
    "ProcessSubmission",
    "process_submission",
    "SubmissionHandoff",
    "SubmissionSink",
]
