from typing import List, Optional

from .locator import EOCDRecord, fetch_central_directory, fetch_eocd, fetch_size
from .parser import parse_file_list
from .remote import RemoteObjectRef
from .transport import HTTPRangeTransport


class RemoteZipLister:
    """
    List the files of a remote ZIP archive from its Central Directory alone.

    Three network round trips per archive: size probe, EOCD tail, Central
    Directory. Nothing is cached between calls.
    """

    def __init__(self, transport) -> None:
        self.transport = transport

    def list_files(self, url: str) -> List[str]:
        ref = RemoteObjectRef(url, self.transport)
        size = fetch_size(ref)
        eocd = EOCDRecord.from_bytes(fetch_eocd(ref, size))
        cd = fetch_central_directory(ref, eocd, size)
        return parse_file_list(cd)


def list_remote_zip(url: str, transport: Optional[object] = None) -> List[str]:
    """One-shot helper; builds (and closes) an ``HTTPRangeTransport`` if none is given."""
    if transport is not None:
        return RemoteZipLister(transport).list_files(url)
    with HTTPRangeTransport() as t:
        return RemoteZipLister(t).list_files(url)
