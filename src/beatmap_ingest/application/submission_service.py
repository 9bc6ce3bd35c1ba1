"""Application service orchestrating the submission pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar
from uuid import uuid4

from beatmap_ingest.application.event_publisher import EventPublisher, NullEventPublisher
from beatmap_ingest.container import RawContainer, load_container, repackage
from beatmap_ingest.difficulties import resolve_difficulties
from beatmap_ingest.domain.events import (
    AudioRenamed,
    ContainerLoaded,
    MediaValidated,
    SubmissionFingerprinted,
    SubmissionRejected,
)
from beatmap_ingest.domain.models import ParsedBeatmap, SubmissionResult
from beatmap_ingest.domain.policies import DEFAULT_INGEST_POLICY, IngestPolicy
from beatmap_ingest.errors import UploadError
from beatmap_ingest.fingerprint import compute_fingerprint
from beatmap_ingest.manifest import ManifestDocument, read_manifest
from beatmap_ingest.media import ValidatedAudio, ValidatedCover, validate_audio, validate_cover
from beatmap_ingest.metadata import extract_metadata
from beatmap_ingest.normalization import normalize_audio_member

T = TypeVar("T")


@dataclass(slots=True)
class ProcessSubmission:
    """Use case that validates a submitted archive and prepares it for persistence.

    Stages run strictly in order and the first failure rejects the whole
    submission. The container is passed forward as a value; no stage mutates
    what an earlier stage returned.
    """

    policy: IngestPolicy = DEFAULT_INGEST_POLICY
    event_publisher: EventPublisher = NullEventPublisher()

    def run(self, raw_archive_bytes: bytes, correlation_id: str | None = None) -> SubmissionResult:
        run_correlation_id = correlation_id or str(uuid4())

        container = self._run_stage("container", run_correlation_id, load_container, raw_archive_bytes)
        self.event_publisher.publish(
            ContainerLoaded(
                correlation_id=run_correlation_id,
                payload_summary={"archive_size": len(raw_archive_bytes), "member_count": len(container)},
            )
        )

        manifest = self._run_stage(
            "manifest", run_correlation_id, read_manifest, container, self.policy.manifest_member
        )

        cover, audio = self._run_stage("media", run_correlation_id, self._validate_media, container, manifest)
        self.event_publisher.publish(
            MediaValidated(
                correlation_id=run_correlation_id,
                payload_summary={
                    "cover": cover.filename,
                    "cover_kind": cover.kind.value,
                    "cover_size": [cover.width, cover.height],
                    "audio": audio.filename,
                    "audio_kind": audio.kind.value,
                },
            )
        )

        normalized = self._run_stage(
            "normalization", run_correlation_id, normalize_audio_member, container, manifest, self.policy
        )
        if normalized.was_renamed:
            self.event_publisher.publish(
                AudioRenamed(
                    correlation_id=run_correlation_id,
                    payload_summary={
                        "from": normalized.renamed_from,
                        "to": normalized.manifest.info.song_filename,
                    },
                )
            )

        info = normalized.manifest.info
        resolved = self._run_stage(
            "difficulties",
            run_correlation_id,
            resolve_difficulties,
            normalized.container,
            info,
            self.policy.max_read_workers,
        )
        fingerprint = compute_fingerprint(
            normalized.manifest.manifest_bytes, (difficulty.data for difficulty in resolved)
        )
        metadata = extract_metadata(info)
        archive_bytes = self._run_stage(
            "repackage", run_correlation_id, repackage, normalized.container, self.policy.repackage_compression
        )

        self.event_publisher.publish(
            SubmissionFingerprinted(
                correlation_id=run_correlation_id,
                payload_summary={
                    "hash": fingerprint,
                    "difficulty_count": len(resolved),
                    "archive_size": len(archive_bytes),
                    "policy_id": self.policy.policy_id,
                },
            )
        )
        return SubmissionResult(
            parsed=ParsedBeatmap(hash=fingerprint, metadata=metadata, cover_extension=cover.extension),
            cover_bytes=cover.data,
            archive_bytes=archive_bytes,
        )

    def _validate_media(
        self, container: RawContainer, manifest: ManifestDocument
    ) -> tuple[ValidatedCover, ValidatedAudio]:
        info = manifest.info
        cover = validate_cover(container, info, self.policy)
        audio = validate_audio(container, info)
        return cover, audio

    def _run_stage(self, stage: str, correlation_id: str, func: Callable[..., T], *args) -> T:
        try:
            return func(*args)
        except UploadError as error:
            self.event_publisher.publish(
                SubmissionRejected(
                    correlation_id=correlation_id,
                    payload_summary={"stage": stage, "code": error.code, "error": error.message},
                )
            )
            raise


def process_submission(
    raw_archive_bytes: bytes,
    *,
    policy: IngestPolicy | None = None,
    correlation_id: str | None = None,
    event_publisher: EventPublisher | None = None,
) -> SubmissionResult:
    """Validate, fingerprint and repackage one submitted beatmap archive."""

    service = ProcessSubmission(
        policy=policy or DEFAULT_INGEST_POLICY,
        event_publisher=event_publisher or NullEventPublisher(),
    )
    return service.run(raw_archive_bytes, correlation_id=correlation_id)
