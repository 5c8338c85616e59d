"""List the files of a remote ZIP archive without downloading it."""
import argparse
import logging
import re
import sys
import unicodedata
from typing import List, Optional, Sequence
from urllib.parse import urlsplit

from .errors import InvalidInputError, RemoteZipError
from .lister import RemoteZipLister
from .transport import DEFAULT_USER_AGENT, HTTPRangeTransport

logger = logging.getLogger(__name__)

INPUT_MESSAGE = "incorrect input, use valid <URL>.zip"

# RFC 3986 unreserved + reserved characters, percent escapes, and non-ASCII
_URI_CHARS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%\u0080-\U0010ffff]+\Z")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def validate_input(args: Sequence[str]) -> str:
    """Return the single archive URL in ``args`` or raise ``InvalidInputError``."""
    if len(args) != 1:
        raise InvalidInputError(INPUT_MESSAGE)
    url = args[0]
    if not _URI_CHARS.match(url) or _BAD_ESCAPE.search(url) or _has_space_or_control(url):
        raise InvalidInputError(INPUT_MESSAGE)
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        raise InvalidInputError(INPUT_MESSAGE) from None
    if parts.scheme.lower() not in ("http", "https") or not host or not parts.netloc.isascii():
        raise InvalidInputError(INPUT_MESSAGE)
    if not parts.path.endswith(".zip"):
        raise InvalidInputError(INPUT_MESSAGE)
    return url


def _has_space_or_control(url: str) -> bool:
    return any(ch.isspace() or unicodedata.category(ch) == "Cc" for ch in url)


def print_file_list(names: List[str], out=None) -> None:
    out = out or sys.stdout
    print(file=out)
    for name in names:
        print(name, file=out)
    print(f"\nTotal files in archive: {len(names)}", file=out)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="remote-zip-lister", description=__doc__)
    ap.add_argument("url", nargs="*", help="<URL>.zip of the archive to list")
    ap.add_argument("--timeout", type=float, default=10.0, help="per-request timeout in seconds")
    ap.add_argument("--retries", type=int, default=0, help="retries for failed requests")
    ap.add_argument("--user-agent", default=DEFAULT_USER_AGENT)
    ap.add_argument("-v", "--verbose", action="store_true", help="log HTTP requests")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        url = validate_input(args.url)
        with HTTPRangeTransport(
            timeout=args.timeout,
            max_retries=max(args.retries, 0),
            user_agent=args.user_agent,
        ) as transport:
            names = RemoteZipLister(transport).list_files(url)
    except KeyboardInterrupt:
        print("Error: operation was interrupted")
        return 130
    except RemoteZipError as exc:
        logger.debug("listing failed", exc_info=True)
        print(f"Error: {exc}")
        return 1

    print_file_list(names)
    return 0


if __name__ == "__main__":
    sys.exit(main())
