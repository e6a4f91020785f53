"""Cookie record, RFC 6265 matching rules and Set-Cookie parsing."""

from pyreqwest_cookies.cookie.matching import default_path, domain_match, is_public_suffix, path_match
from pyreqwest_cookies.cookie.model import CookieKey, StoredCookie
from pyreqwest_cookies.cookie.parse import parse_set_cookie

__all__ = [
    "CookieKey",
    "StoredCookie",
    "default_path",
    "domain_match",
    "is_public_suffix",
    "parse_set_cookie",
    "path_match",
]
