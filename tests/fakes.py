import struct
from typing import Iterable, Optional

from remote_zip_lister.parser import CD_SIGNATURE
from remote_zip_lister.transport import HTTPRangeTransport

EOCD_SIGNATURE = 0x06054B50


def cd_record(name: str, extra: bytes = b"", comment: bytes = b"", signature: int = CD_SIGNATURE) -> bytes:
    raw = name.encode("utf-8")
    return (
        struct.pack("<I", signature)
        + bytes(24)
        + struct.pack("<HHH", len(raw), len(extra), len(comment))
        + bytes(12)
        + raw
        + extra
        + comment
    )


def central_directory(names: Iterable[str]) -> bytes:
    return b"".join(cd_record(n) for n in names)


def eocd_record(cd_size: int, cd_offset: int, entries: int = 0) -> bytes:
    return struct.pack("<IHHHHIIH", EOCD_SIGNATURE, 0, 0, entries, entries, cd_size, cd_offset, 0)


def archive(cd: bytes, payload_size: int = 100) -> bytes:
    """Filler standing in for local entries, then ``cd``, then the EOCD record."""
    return bytes(payload_size) + cd + eocd_record(len(cd), payload_size)


class FakeRangeTransport(HTTPRangeTransport):
    """Subclass that fakes network I/O using an in-memory bytes object."""

    def __init__(self, data: bytes, size: Optional[int] = None, honor_ranges: bool = True):
        # Bypass parent init; close() only reads _external_session
        self._external_session = True
        self._data = data
        self.size = len(data) if size is None else size
        self.honor_ranges = honor_ranges
        self.calls = []

    def content_length(self, url: str) -> int:
        self.calls.append(("HEAD", url))
        return self.size

    def fetch_range(self, url: str, start: int, end: int) -> bytes:
        # emulate 206 inclusive range
        self.calls.append(("GET", start, end))
        if not self.honor_ranges:
            return self._data
        return self._data[start:end + 1]
