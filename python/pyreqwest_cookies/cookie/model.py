"""Stored cookie record."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any, Self

from pyreqwest_cookies.types import SameSite

CookieKey = tuple[str, str, str]


@dataclass(frozen=True, slots=True)
class StoredCookie:
    """A cookie as held by the jar, with its scope already resolved against the URL that set it."""

    name: str
    value: str
    domain: str
    """Lower-case domain without a leading dot. For host-only cookies, the host that set the cookie."""
    path: str = "/"
    host_only: bool = True
    """Only sent to exactly `domain`, never to its subdomains."""
    secure: bool = False
    http_only: bool = False
    same_site: SameSite | None = None
    expires: datetime | None = None
    """Aware UTC expiry. None for session cookies, which are never persisted."""
    created: datetime = field(default_factory=lambda: datetime.now(UTC), compare=False)
    sequence: int = field(default=0, compare=False)
    """Jar insertion order, used to order cookies of equal path length."""

    @property
    def key(self) -> CookieKey:
        """Jar key: (domain, path, name)."""
        return self.domain, self.path, self.name

    @property
    def persistent(self) -> bool:
        """Whether the cookie has an expiry and outlives the session."""
        return self.expires is not None

    def is_expired(self, now: datetime) -> bool:
        """Whether the expiry is at or before now. Session cookies never expire."""
        return self.expires is not None and self.expires <= now

    def pair(self) -> str:
        """Return the 'name=value' pair sent in the Cookie header."""
        return f"{self.name}={self.value}"

    def with_order(self, created: datetime, sequence: int) -> Self:
        """Copy with the creation time and insertion position replaced."""
        return replace(self, created=created, sequence=sequence)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible mapping, times as POSIX timestamps. Inverse of from_dict."""
        return {
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path,
            "host_only": self.host_only,
            "secure": self.secure,
            "http_only": self.http_only,
            "same_site": self.same_site,
            "expires": self.expires.timestamp() if self.expires is not None else None,
            "created": self.created.timestamp(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Inverse of to_dict. Raises KeyError, TypeError or ValueError on malformed data."""
        expires = data.get("expires")
        created = data.get("created")
        same_site = data.get("same_site")
        if same_site not in (None, "Strict", "Lax", "None"):
            raise ValueError(f"Invalid same_site: {same_site!r}")
        return cls(
            name=str(data["name"]),
            value=str(data["value"]),
            domain=str(data["domain"]),
            path=str(data.get("path") or "/"),
            host_only=bool(data.get("host_only", True)),
            secure=bool(data.get("secure", False)),
            http_only=bool(data.get("http_only", False)),
            same_site=same_site,
            expires=datetime.fromtimestamp(float(expires), UTC) if expires is not None else None,
            created=datetime.fromtimestamp(float(created), UTC) if created is not None else datetime.now(UTC),
        )

    def __str__(self) -> str:
        parts = [self.pair(), f"Path={self.path}"]
        if not self.host_only:
            parts.append(f"Domain={self.domain}")
        if self.expires is not None:
            parts.append(f"Expires={self.expires.strftime('%a, %d %b %Y %H:%M:%S GMT')}")
        if self.secure:
            parts.append("Secure")
        if self.http_only:
            parts.append("HttpOnly")
        if self.same_site is not None:
            parts.append(f"SameSite={self.same_site}")
        return "; ".join(parts)
