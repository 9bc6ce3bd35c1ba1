"""Content fingerprint used as the platform-wide duplicate key."""

from __future__ import annotations

import hashlib
from typing import Iterable


def compute_fingerprint(manifest_bytes: bytes, difficulty_bytes: Iterable[bytes]) -> str:
    """SHA-1 over the manifest followed by each difficulty file, in order."""

    digest = hashlib.sha1()
    digest.update(manifest_bytes)
    for payload in difficulty_bytes:
        digest.update(payload)
    return digest.hexdigest()
