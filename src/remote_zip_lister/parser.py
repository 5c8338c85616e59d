import struct
from typing import List

from .errors import InvalidFormatError

CD_HEADER_SIZE = 46
CD_SIGNATURE = 0x02014B50

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


class ByteCursor:
    """
    Bounds-checked little-endian reader over an immutable byte buffer.

    Every read checks the remaining length first and raises
    ``InvalidFormatError`` instead of running past the end.
    """

    def __init__(self, data: bytes) -> None:
        self._buf = memoryview(data)
        self.pos = 0

    def remaining(self) -> int:
        return len(self._buf) - self.pos

    def _take(self, n: int) -> memoryview:
        if n < 0:
            raise ValueError("n must be >= 0")
        if n > self.remaining():
            raise InvalidFormatError(
                f"truncated Central Directory: need {n} bytes at offset {self.pos}, "
                f"{self.remaining()} left"
            )
        view = self._buf[self.pos:self.pos + n]
        self.pos += n
        return view

    def read(self, n: int) -> bytes:
        return self._take(n).tobytes()

    def skip(self, n: int) -> None:
        self._take(n)

    def read_u16(self) -> int:
        return _U16.unpack(self._take(_U16.size))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]


def parse_file_list(cd: bytes) -> List[str]:
    """
    Walk the Central Directory records and return the file names in record order.

    Names ending in ``/`` are directory entries and are left out. Fewer than
    46 trailing bytes (e.g. a digital signature record) are ignored.
    """
    cur = ByteCursor(cd)
    names: List[str] = []
    while cur.remaining() >= CD_HEADER_SIZE:
        signature = cur.read_u32()
        if signature != CD_SIGNATURE:
            raise InvalidFormatError(
                f"invalid Central Directory signature 0x{signature:08x} at offset {cur.pos - 4}"
            )
        # version made by / needed, flags, method, time, date, crc, sizes
        cur.skip(24)
        name_len = cur.read_u16()
        extra_len = cur.read_u16()
        comment_len = cur.read_u16()
        # disk number, internal/external attributes, local header offset
        cur.skip(12)
        name = cur.read(name_len).decode("utf-8", errors="replace")
        if not name.endswith("/"):
            names.append(name)
        cur.skip(extra_len + comment_len)
    return names
