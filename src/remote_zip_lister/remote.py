from dataclasses import dataclass
from typing import Any

from .errors import RangeUnsupportedError, TransportError


@dataclass(frozen=True)
class RemoteObjectRef:
    """A remote byte-addressable object: its URL and the transport that reaches it."""

    url: str
    transport: Any

    def size(self) -> int:
        return self._call("size", self.transport.content_length, self.url)

    def read_range(self, start: int, end: int, step: str = "range") -> bytes:
        """Return the inclusive span ``[start, end]``, exactly ``end - start + 1`` bytes."""
        blob = self._call(step, self.transport.fetch_range, self.url, start, end)
        expected = end - start + 1
        if len(blob) != expected:
            raise RangeUnsupportedError(
                f"expected {expected} bytes, received {len(blob)}",
                step=step,
                expected=expected,
                received=len(blob),
            )
        return blob

    @staticmethod
    def _call(step: str, fn, *args):
        try:
            return fn(*args)
        except TransportError as exc:
            if exc.step is None:
                exc.step = step
            raise
