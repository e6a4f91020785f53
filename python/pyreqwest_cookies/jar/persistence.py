"""Newline-delimited JSON encoding of persistent cookies."""

import logging
import os
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

import orjson

from pyreqwest_cookies.cookie import StoredCookie

logger = logging.getLogger(__name__)


def dump_cookies(cookies: Iterable[StoredCookie]) -> bytes:
    """One JSON object per line, in the given order."""
    return b"".join(orjson.dumps(cookie.to_dict(), option=orjson.OPT_APPEND_NEWLINE) for cookie in cookies)


def load_cookies(data: bytes | str) -> Iterator[StoredCookie]:
    """Decode dump_cookies output. Malformed lines are logged and skipped."""
    if isinstance(data, str):
        data = data.encode()
    for lineno, line in enumerate(data.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            yield StoredCookie.from_dict(orjson.loads(line))
        except (orjson.JSONDecodeError, KeyError, TypeError, ValueError, OverflowError, AttributeError) as e:
            logger.warning("Skipping malformed cookie on line %d: %r", lineno, e)


def write_atomic(path: Path, data: bytes) -> None:
    """Write data to a unique temporary file beside path, then rename it over path."""
    with tempfile.NamedTemporaryFile(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False) as tmp:
        tmp_path = Path(tmp.name)
    try:
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)
