"""Application port handing accepted submissions to persistence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from beatmap_ingest.domain.models import SubmissionResult


@dataclass(frozen=True, slots=True)
class SubmissionHandoff:
    """Where the persistence collaborator will file an accepted submission."""

    status: str
    archive_key: str
    cover_key: str


def object_keys(result: SubmissionResult) -> tuple[str, str]:
    """Archive and cover object keys, both derived from the fingerprint."""

    parsed = result.parsed
    return f"{parsed.hash}.zip", f"{parsed.hash}{parsed.cover_extension}"


class SubmissionSink(Protocol):
    """Port implemented by adapters that receive accepted submissions.

    Implementations own fingerprint uniqueness, object storage and record
    persistence.
    """

    def accept(self, result: SubmissionResult) -> SubmissionHandoff:
        """Take ownership of ``result`` and report where it will be stored."""
