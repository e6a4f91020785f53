"""Thread-safe RFC 6265 cookie jar."""

import itertools
import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal, Self

from pyreqwest_cookies.cookie import CookieKey, StoredCookie, domain_match, parse_set_cookie, path_match
from pyreqwest_cookies.exceptions import CookieRejected
from pyreqwest_cookies.jar.persistence import dump_cookies, load_cookies, write_atomic
from pyreqwest_cookies.types import UrlType
from pyreqwest_cookies.url import RequestTarget

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
StoreAction = Literal["inserted", "updated", "deleted", "expired"]


def utc_now() -> datetime:
    return datetime.now(UTC)


class CookieJar:
    """Cookie store keyed by (domain, path, name).

    All reads and writes go through a single lock, so one jar can be shared between concurrently running requests,
    clients and threads. A write is visible to every read that starts after it returns.

    The jar also implements pyreqwest's CookieProvider protocol and can be passed to
    `ClientBuilder().cookie_provider(jar)` instead of using the middleware.
    """

    def __init__(self, cookies: Iterable[StoredCookie] = (), *, clock: Clock | None = None) -> None:
        """Create a jar, optionally pre-seeded with cookies (for example loaded from a previous run).

        Args:
            cookies: Initial cookies, stored in the given order
            clock: Returns the current aware UTC time. Defaults to the system clock.
        """
        self._clock = clock or utc_now
        self._lock = threading.RLock()
        self._save_lock = threading.Lock()
        self._cookies: dict[CookieKey, StoredCookie] = {}
        self._sequence = itertools.count()
        for cookie in cookies:
            self.store(cookie)

    @classmethod
    def loads(cls, data: bytes | str, *, clock: Clock | None = None) -> Self:
        """Create a jar from newline-delimited JSON produced by dumps. Expired entries are dropped."""
        return cls(load_cookies(data), clock=clock)

    @classmethod
    def load(cls, path: Path | str, *, clock: Clock | None = None) -> Self:
        """Create a jar from a file written by save. A missing file gives an empty jar."""
        try:
            data = Path(path).read_bytes()
        except FileNotFoundError:
            logger.debug("Cookie file %s does not exist, starting with an empty jar", path)
            return cls(clock=clock)
        return cls.loads(data, clock=clock)

    def dumps(self) -> bytes:
        """Serialize persistent unexpired cookies as newline-delimited JSON, in insertion order."""
        return dump_cookies(cookie for cookie in self.get_all_unexpired() if cookie.persistent)

    def save(self, path: Path | str) -> None:
        """Atomically write dumps() to path. Session cookies are not written."""
        with self._save_lock:
            write_atomic(Path(path), self.dumps())

    def store(self, cookie: StoredCookie) -> StoreAction:
        """Insert or replace a cookie. A cookie already expired deletes any stored cookie with the same key.

        A replaced cookie keeps its original creation time and position.
        """
        now = self._clock()
        with self._lock:
            existing = self._cookies.get(cookie.key)
            if cookie.is_expired(now):
                if existing is None:
                    return "expired"
                del self._cookies[cookie.key]
                return "deleted"

            if existing is not None:
                self._cookies[cookie.key] = cookie.with_order(existing.created, existing.sequence)
                return "updated"

            self._cookies[cookie.key] = cookie.with_order(cookie.created, next(self._sequence))
            return "inserted"

    def store_response_cookies(self, set_cookie_headers: Iterable[str], url: UrlType | RequestTarget) -> int:
        """Fold the Set-Cookie header values of a response to url into the jar.

        Values that fail to parse, or whose Domain attribute is foreign or a public suffix, are dropped.

        Returns:
            Number of values applied to the jar.

        Raises:
            InvalidUrlError: url cannot be resolved.
        """
        target = url if isinstance(url, RequestTarget) else RequestTarget.from_url(url)
        applied = 0
        for header in set_cookie_headers:
            try:
                cookie = parse_set_cookie(header, target, self._clock())
            except CookieRejected as e:
                logger.debug("Dropping cookie from %s: %s", target.host, e.reason)
                continue
            action = self.store(cookie)
            logger.debug("Cookie %s for %s%s %s", cookie.name, cookie.domain, cookie.path, action)
            applied += 1
        return applied

    def matches(self, url: UrlType | RequestTarget) -> list[StoredCookie]:
        """Unexpired cookies to send with a request to url.

        Ordered by path length, longest first, then by insertion order.

        Raises:
            InvalidUrlError: url cannot be resolved.
        """
        target = url if isinstance(url, RequestTarget) else RequestTarget.from_url(url)
        now = self._clock()
        with self._lock:
            candidates = list(self._cookies.values())
        selected = [cookie for cookie in candidates if self._applies(cookie, target, now)]
        selected.sort(key=lambda cookie: (-len(cookie.path), cookie.sequence))
        return selected

    def cookie_header(self, url: UrlType | RequestTarget) -> str | None:
        """Cookie header value for a request to url, or None when no cookie matches."""
        if matching := self.matches(url):
            return "; ".join(cookie.pair() for cookie in matching)
        return None

    def set_cookies(self, cookie_headers: list[str], url: str) -> None:
        """CookieProvider protocol: store the Set-Cookie headers received from url."""
        self.store_response_cookies(cookie_headers, url)

    def cookies(self, url: str) -> str | None:
        """CookieProvider protocol: Cookie header value for url."""
        return self.cookie_header(url)

    def get(self, domain: str, path: str, name: str) -> StoredCookie | None:
        """Return the unexpired cookie stored under the key, if any."""
        with self._lock:
            cookie = self._cookies.get((domain.lower(), path, name))
        if cookie is None or cookie.is_expired(self._clock()):
            return None
        return cookie

    def contains(self, domain: str, path: str, name: str) -> bool:
        """Whether an unexpired cookie is stored under the key."""
        return self.get(domain, path, name) is not None

    def remove(self, domain: str, path: str, name: str) -> StoredCookie | None:
        """Remove the cookie stored under the key, returning it if it was present."""
        with self._lock:
            return self._cookies.pop((domain.lower(), path, name), None)

    def remove_expired(self) -> int:
        """Evict cookies whose expiry has passed. Returns the number evicted."""
        now = self._clock()
        with self._lock:
            expired = [key for key, cookie in self._cookies.items() if cookie.is_expired(now)]
            for key in expired:
                del self._cookies[key]
        return len(expired)

    def clear_session_cookies(self) -> int:
        """Evict cookies without an expiry, as at the end of a session. Returns the number evicted."""
        with self._lock:
            session = [key for key, cookie in self._cookies.items() if not cookie.persistent]
            for key in session:
                del self._cookies[key]
        return len(session)

    def clear(self) -> None:
        """Remove every cookie."""
        with self._lock:
            self._cookies.clear()

    def get_all_unexpired(self) -> list[StoredCookie]:
        """All unexpired cookies in insertion order."""
        now = self._clock()
        with self._lock:
            cookies = list(self._cookies.values())
        return sorted((cookie for cookie in cookies if not cookie.is_expired(now)), key=lambda c: c.sequence)

    def __iter__(self) -> Iterator[StoredCookie]:
        return iter(self.get_all_unexpired())

    def __len__(self) -> int:
        return len(self.get_all_unexpired())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} cookies)"

    @staticmethod
    def _applies(cookie: StoredCookie, target: RequestTarget, now: datetime) -> bool:
        if cookie.is_expired(now):
            return False
        if cookie.secure and not target.secure:
            return False
        if cookie.host_only:
            if target.host != cookie.domain:
                return False
        elif not domain_match(target.host, cookie.domain):
            return False
        return path_match(target.path, cookie.path)
