"""Resolution of request URLs into the parts cookie matching works on."""

from dataclasses import dataclass
from typing import Self
from urllib.parse import urlsplit

from pyreqwest_cookies.exceptions import InvalidUrlError
from pyreqwest_cookies.types import UrlType

HTTP_SCHEMES = frozenset({"http", "https", "ws", "wss"})
SECURE_SCHEMES = frozenset({"https", "wss"})


def canonical_host(host: str) -> str:
    """Lower-case host name without a trailing dot."""
    return host.lower().rstrip(".")


@dataclass(frozen=True, slots=True)
class RequestTarget:
    """Scheme, canonical host and path of a request URL. Port, query and fragment play no part in cookie scoping."""

    scheme: str
    host: str
    path: str

    @classmethod
    def from_url(cls, url: UrlType) -> Self:
        """Resolve a pyreqwest Url or URL string.

        Raises:
            InvalidUrlError: The URL has no usable host, or its scheme is not an HTTP(S)/WS(S) scheme.
        """
        raw = str(url)
        try:
            parts = urlsplit(raw)
            hostname = parts.hostname
        except ValueError as e:
            raise InvalidUrlError("Unparsable request URL", raw) from e

        scheme = parts.scheme.lower()
        if scheme not in HTTP_SCHEMES:
            raise InvalidUrlError("Unsupported URL scheme for cookies", raw)
        if not hostname:
            raise InvalidUrlError("Request URL has no host", raw)

        return cls(scheme=scheme, host=canonical_host(hostname), path=parts.path or "/")

    @property
    def secure(self) -> bool:
        """Whether the request travels over an encrypted channel."""
        return self.scheme in SECURE_SCHEMES
