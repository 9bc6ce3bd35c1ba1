"""DDD domain layer."""

from .events import AudioRenamed, ContainerLoaded, DomainEvent, MediaValidated, SubmissionFingerprinted, SubmissionRejected
from .models import BeatmapMetadata, DifficultyFlags, ParsedBeatmap, SubmissionResult
from .policies import DEFAULT_INGEST_POLICY, IngestPolicy

__all__ = [
    "DomainEvent",
    "ContainerLoaded",
    "MediaValidated",
    "AudioRenamed",
    "SubmissionFingerprinted",
    "SubmissionRejected",
    "BeatmapMetadata",
    "DifficultyFlags",
    "ParsedBeatmap",
    "SubmissionResult",
    "IngestPolicy",
    "DEFAULT_INGEST_POLICY",
]
