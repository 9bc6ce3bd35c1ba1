"""Public package exports for beatmap_ingest with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ParsedBeatmap",
    "BeatmapMetadata",
    "SubmissionResult",
    "IngestPolicy",
    "ProcessSubmission",
    "process_submission",
    "UploadError",
    "UploadErrorKind",
    "RawContainer",
    "load_container",
    "repackage",
    "sniff_media",
    "MediaKind",
]

_EXPORT_MODULES: dict[str, str] = {
    "ParsedBeatmap": "beatmap_ingest.domain.models",
    "BeatmapMetadata": "beatmap_ingest.domain.models",
    "SubmissionResult": "beatmap_ingest.domain.models",
    "IngestPolicy": "beatmap_ingest.domain.policies",
    "ProcessSubmission": "beatmap_ingest.application.submission_service",
    "process_submission": "beatmap_ingest.application.submission_service",
    "UploadError": "beatmap_ingest.errors",
    "UploadErrorKind": "beatmap_ingest.errors",
    "RawContainer": "beatmap_ingest.container",
    "load_container": "beatmap_ingest.container",
    "repackage": "beatmap_ingest.container",
    "sniff_media": "beatmap_ingest.media",
    "MediaKind": "beatmap_ingest.media",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'beatmap_ingest' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
