from typing import Optional


class RemoteZipError(Exception):
    """Base class for every failure raised while listing a remote archive."""


class InvalidInputError(RemoteZipError, ValueError):
    """The archive location is not a well-formed ``<URL>.zip``."""


class NotFoundError(RemoteZipError):
    """The remote object does not exist or does not expose its size."""


class TransportError(RemoteZipError):
    """Network-level failure at one of the fetch steps."""

    def __init__(self, message: str, step: Optional[str] = None) -> None:
        super().__init__(message)
        self.step = step

    def __str__(self) -> str:
        msg = super().__str__()
        if self.step:
            return f"{self.step}: {msg}"
        return msg


class RangeUnsupportedError(TransportError):
    """The server did not honor the requested byte range."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        expected: Optional[int] = None,
        received: Optional[int] = None,
    ) -> None:
        super().__init__(message, step)
        self.expected = expected
        self.received = received


class InvalidFormatError(RemoteZipError, ValueError):
    """Structural violation in the EOCD record or the Central Directory."""
