"""
Locate the Central Directory of a remote ZIP archive.

The End Of Central Directory record is assumed to occupy exactly the last
22 bytes of the object, i.e. the archive carries no trailing comment.
"""
import struct
from dataclasses import dataclass

from .errors import InvalidFormatError
from .remote import RemoteObjectRef

EOCD_SIZE = 22

# cdSize and cdOffset, little-endian unsigned 32-bit, at offset 12 of the record
_EOCD_DIRECTORY = struct.Struct("<II")
_EOCD_DIRECTORY_OFFSET = 12


@dataclass(frozen=True)
class EOCDRecord:
    cd_size: int
    cd_offset: int

    @classmethod
    def from_bytes(cls, blob: bytes) -> "EOCDRecord":
        if len(blob) != EOCD_SIZE:
            raise InvalidFormatError(
                f"End of Central Directory record must be {EOCD_SIZE} bytes, got {len(blob)}"
            )
        cd_size, cd_offset = _EOCD_DIRECTORY.unpack_from(blob, _EOCD_DIRECTORY_OFFSET)
        return cls(cd_size=cd_size, cd_offset=cd_offset)

    @property
    def cd_end(self) -> int:
        """Inclusive last byte of the Central Directory."""
        return self.cd_offset + self.cd_size - 1


def fetch_size(ref: RemoteObjectRef) -> int:
    return ref.size()


def fetch_eocd(ref: RemoteObjectRef, size: int) -> bytes:
    if size < EOCD_SIZE:
        raise InvalidFormatError(f"object of {size} bytes is too small to be a ZIP archive")
    return ref.read_range(size - EOCD_SIZE, size - 1, step="eocd")


def fetch_central_directory(ref: RemoteObjectRef, eocd: EOCDRecord, size: int) -> bytes:
    """
    Fetch ``[cd_offset, cd_offset + cd_size - 1]``.

    An empty directory needs no request. A directory that would overlap the
    EOCD record (or run past the object) is rejected; saturated ZIP64 fields
    land here too.
    """
    if eocd.cd_size == 0:
        return b""
    if eocd.cd_offset + eocd.cd_size > size - EOCD_SIZE:
        raise InvalidFormatError(
            f"Central Directory {eocd.cd_offset}+{eocd.cd_size} runs past the "
            f"archive end ({size} bytes)"
        )
    return ref.read_range(eocd.cd_offset, eocd.cd_end, step="central directory")
