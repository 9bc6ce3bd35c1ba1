"""Zip container loading and repackaging.

The loaded archive is held as a :class:`RawContainer`, an in-memory mapping of
member path to bytes. Containers are values: every change produces a new
container so each stage hands an owned copy to the next one.
"""

from __future__ import annotations

import io
import zipfile
import zlib
from typing import Iterator, Mapping

from beatmap_ingest.errors import container_corrupt

# Fixed member timestamp so identical containers repackage to identical bytes.
_REPACKAGE_DATE_TIME = (1980, 1, 1, 0, 0, 0)

COMPRESSION_METHODS: dict[str, int] = {
    "stored": zipfile.ZIP_STORED,
    "deflated": zipfile.ZIP_DEFLATED,
}


class RawContainer(Mapping[str, bytes]):
    """Immutable view over archive members keyed by exact, case-sensitive path."""

    __slots__ = ("_members",)

    def __init__(self, members: Mapping[str, bytes] | None = None) -> None:
        self._members: dict[str, bytes] = dict(members or {})

    def __getitem__(self, path: str) -> bytes:
        return self._members[path]

    def __contains__(self, path: object) -> bool:
        return path in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"RawContainer({list(self._members)!r})"

    def with_member(self, path: str, data: bytes) -> RawContainer:
        members = dict(self._members)
        members[path] = data
        return RawContainer(members)

    def without_member(self, path: str) -> RawContainer:
        members = dict(self._members)
        members.pop(path, None)
        return RawContainer(members)

    def renamed(self, old_path: str, new_path: str) -> RawContainer:
        """Move ``old_path`` to ``new_path`` keeping the bytes untouched."""

        data = self._members[old_path]
        return self.without_member(old_path).with_member(new_path, data)


_UTF8_NAME_FLAG = 0x800


def member_name(info: zipfile.ZipInfo) -> str:
    """Decode a member name as UTF-8 even when the archiver left the UTF-8 flag unset.

    ``zipfile`` falls back to cp437 for unflagged names; names that are not
    valid UTF-8 keep that reading.
    """

    if info.flag_bits & _UTF8_NAME_FLAG:
        return info.filename
    try:
        return info.filename.encode("cp437").decode("utf-8")
    except UnicodeError:
        return info.filename


def load_container(raw_bytes: bytes) -> RawContainer:
    """Decode ``raw_bytes`` as a zip archive, reading every file member."""

    if not raw_bytes:
        raise container_corrupt("archive is empty")

    members: dict[str, bytes] = {}
    try:
        with zipfile.ZipFile(io.BytesIO(raw_bytes), "r") as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                members[member_name(info)] = archive.read(info)
    except zipfile.BadZipFile as exc:
        raise container_corrupt(str(exc)) from exc
    except NotImplementedError as exc:
        # Unsupported compression method.
        raise container_corrupt(str(exc)) from exc
    except RuntimeError as exc:
        # Encrypted members without a password.
        raise container_corrupt(str(exc)) from exc
    except (zlib.error, EOFError, ValueError) as exc:
        raise container_corrupt(str(exc)) from exc

    return RawContainer(members)


def repackage(container: RawContainer, compression: str = "stored") -> bytes:
    """Serialize ``container`` back into a single zip buffer."""

    try:
        method = COMPRESSION_METHODS[compression]
    except KeyError as exc:
        allowed = ", ".join(COMPRESSION_METHODS)
        raise ValueError(f"Unsupported compression '{compression}'. Allowed values: {allowed}.") from exc

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=method) as archive:
        for path, data in container.items():
            info = zipfile.ZipInfo(path, date_time=_REPACKAGE_DATE_TIME)
            info.compress_type = method
            info.external_attr = 0o644 << 16
            archive.writestr(info, data)
    return buffer.getvalue()
