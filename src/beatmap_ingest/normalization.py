"""Audio filename normalization.

The target runtime does not load ``.ogg`` names directly, so such audio is
re-filed under the platform suffix. Only the member path and the manifest's
``_songFilename`` change; audio bytes are never re-encoded.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass

from beatmap_ingest.container import RawContainer
from beatmap_ingest.domain.policies import DEFAULT_INGEST_POLICY, IngestPolicy
from beatmap_ingest.manifest import ManifestDocument

logger = logging.getLogger(__name__)

SONG_FILENAME_FIELD = "_songFilename"


@dataclass(frozen=True, slots=True)
class NormalizedSubmission:
    container: RawContainer
    manifest: ManifestDocument
    renamed_from: str | None = None

    @property
    def was_renamed(self) -> bool:
        return self.renamed_from is not None


def renamed_audio_path(filename: str, policy: IngestPolicy = DEFAULT_INGEST_POLICY) -> str | None:
    """Return the normalized path for ``filename``, or ``None`` when no rename applies.

    Renamed audio is filed at the archive root: only the base name is kept.
    """

    stem, suffix = posixpath.splitext(filename)
    if suffix != policy.rename_from_suffix:
        return None
    return f"{posixpath.basename(stem)}{policy.rename_to_suffix}"


def normalize_audio_member(
    container: RawContainer,
    manifest: ManifestDocument,
    policy: IngestPolicy = DEFAULT_INGEST_POLICY,
) -> NormalizedSubmission:
    song_filename = manifest.info.song_filename
    new_filename = renamed_audio_path(song_filename, policy)
    if new_filename is None:
        return NormalizedSubmission(container=container, manifest=manifest)

    rewritten = manifest.with_field(SONG_FILENAME_FIELD, new_filename)
    renamed = container.renamed(song_filename, new_filename).with_member(
        manifest.member, rewritten.manifest_bytes
    )
    logger.debug("Renamed audio member %s -> %s", song_filename, new_filename)
    return NormalizedSubmission(container=renamed, manifest=rewritten, renamed_from=song_filename)
