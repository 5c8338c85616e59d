from .errors import (
    InvalidFormatError,
    InvalidInputError,
    NotFoundError,
    RangeUnsupportedError,
    RemoteZipError,
    TransportError,
)
from .lister import RemoteZipLister, list_remote_zip
from .parser import parse_file_list
from .remote import RemoteObjectRef
from .transport import HTTPRangeTransport

__version__ = "1.0.0"

__all__ = [
    "HTTPRangeTransport",
    "InvalidFormatError",
    "InvalidInputError",
    "NotFoundError",
    "RangeUnsupportedError",
    "RemoteObjectRef",
    "RemoteZipError",
    "RemoteZipLister",
    "TransportError",
    "list_remote_zip",
    "parse_file_list",
]
