"""pyreqwest-cookies - Cookie jar middleware for the pyreqwest HTTP client.

Stores cookies received in `Set-Cookie` response headers and attaches the matching ones to later requests,
following RFC 6265 storage and retrieval rules:
- Domain and host-only scoping, with public suffix protection
- Path scoping and stable `Cookie` header ordering
- `Secure` cookies only sent over encrypted connections
- `Max-Age` / `Expires` expiry, including deletion via expired cookies
- Thread-safe jar shareable between clients and between the async and blocking middlewares
- Optional persistence of the jar as newline-delimited JSON
"""

from pyreqwest_cookies.cookie import StoredCookie
from pyreqwest_cookies.exceptions import CookieError, InvalidUrlError
from pyreqwest_cookies.jar import CookieJar
from pyreqwest_cookies.middleware import BlockingCookieMiddleware, CookieMiddleware

__all__ = [
    "BlockingCookieMiddleware",
    "CookieError",
    "CookieJar",
    "CookieMiddleware",
    "InvalidUrlError",
    "StoredCookie",
]
