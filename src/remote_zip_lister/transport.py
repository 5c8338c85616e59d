import logging
import re
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import NotFoundError, RangeUnsupportedError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "RemoteZipLister/1.0"

_CONTENT_RANGE = re.compile(r"bytes\s+(\d+)-(\d+)/(\d+|\*)")


class HTTPRangeTransport:
    """
    Minimal HTTP client for size probes and inclusive byte-range GETs.

      • HEAD for the object size (Content-Length)
      • GET with ``Range: bytes=<start>-<end>``, validated against the request
      • Optional retries + connection pooling (requests.Session)

    Any object with ``content_length(url)`` and ``fetch_range(url, start, end)``
    can stand in for this class.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        max_retries: int = 0,
        backoff: float = 0.5,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")

        self.timeout = timeout

        # Session & retries
        self._external_session = session is not None
        self.s = session or requests.Session()
        adapter = HTTPAdapter(
            max_retries=Retry(
                total=max_retries,
                connect=max_retries,
                read=max_retries,
                backoff_factor=backoff,
                status_forcelist=(500, 502, 503, 504),
                allowed_methods=("HEAD", "GET"),
                raise_on_status=False,
            )
        )
        self.s.mount("http://", adapter)
        self.s.mount("https://", adapter)
        self._base_headers = {"User-Agent": user_agent}

    def __enter__(self) -> "HTTPRangeTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if not self._external_session:
            self.s.close()

    def content_length(self, url: str) -> int:
        try:
            h = self.s.head(
                url,
                headers=self._base_headers,
                timeout=self.timeout,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc
        logger.debug("HEAD %s -> %s", url, h.status_code)

        if h.status_code in (404, 410):
            raise NotFoundError("ZIP file not found or is not accessible.")
        self._raise_for_status(h)

        cl = h.headers.get("Content-Length")
        if not cl:
            raise NotFoundError("ZIP file not found or is not accessible.")
        try:
            size = int(cl)
        except ValueError:
            raise NotFoundError(f"unusable Content-Length header: {cl!r}") from None
        if size < 0:
            raise NotFoundError(f"unusable Content-Length header: {cl!r}")
        return size

    def fetch_range(self, url: str, start: int, end: int) -> bytes:
        if start < 0 or end < start:
            raise ValueError(f"invalid byte range {start}-{end}")
        expected = end - start + 1

        try:
            r = self.s.get(
                url,
                headers=self._headers_for_range(start, end),
                timeout=self.timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc
        logger.debug("GET %s bytes=%d-%d -> %s", url, start, end, r.status_code)

        # decide on status and headers before any body is pulled off the wire
        with r:
            self._check_partial(r, start, end, expected)
            try:
                body = r.content
            except requests.RequestException as exc:
                raise TransportError(str(exc)) from exc

        if len(body) != expected:
            raise RangeUnsupportedError(
                f"expected {expected} bytes, received {len(body)}",
                expected=expected,
                received=len(body),
            )
        return body

    # internals
    def _check_partial(self, r: requests.Response, start: int, end: int, expected: int) -> None:
        if r.status_code == 416:
            raise RangeUnsupportedError(
                f"range {start}-{end} not satisfiable", expected=expected, received=0
            )
        self._raise_for_status(r)
        if r.status_code != 206:
            raise RangeUnsupportedError(
                f"server ignored the Range header (status {r.status_code})",
                expected=expected,
                received=self._declared_length(r),
            )

        cr = r.headers.get("Content-Range")
        if cr:
            m = _CONTENT_RANGE.match(cr)
            if m is None or (int(m.group(1)), int(m.group(2))) != (start, end):
                raise RangeUnsupportedError(
                    f"Content-Range {cr!r} does not match requested bytes {start}-{end}",
                    expected=expected,
                    received=self._declared_length(r),
                )

    @staticmethod
    def _declared_length(r: requests.Response) -> Optional[int]:
        try:
            return int(r.headers.get("Content-Length", ""))
        except ValueError:
            return None

    def _headers_for_range(self, start: int, end: int) -> dict:
        return {**self._base_headers, "Range": f"bytes={start}-{end}"}

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise TransportError(str(exc)) from exc
