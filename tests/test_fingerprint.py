from __future__ import annotations

import hashlib

from beatmap_ingest.fingerprint import compute_fingerprint


def test_fingerprint_is_lowercase_sha1_hex() -> None:
    assert compute_fingerprint(b"abc", []) == "a9993e364706816aba3e25717850c26c9cd0d89d"


def test_fingerprint_feeds_manifest_then_difficulties_in_order() -> None:
    expected = hashlib.sha1(b"manifest" + b"easy" + b"expert").hexdigest()

    assert compute_fingerprint(b"manifest", [b"easy", b"expert"]) == expected
    assert compute_fingerprint(b"manifest", [b"expert", b"easy"]) != expected
    assert len(expected) == 40
