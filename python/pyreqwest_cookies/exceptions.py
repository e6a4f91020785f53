"""Exceptions raised by pyreqwest-cookies."""


class CookieError(Exception):
    """Base class for all pyreqwest-cookies errors."""


class InvalidUrlError(CookieError, ValueError):
    """Request URL cannot be resolved into a scheme, host and path usable for cookies."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(f"{message}: {url!r}")
        self.url = url


class CookieRejected(CookieError):
    """A Set-Cookie value was refused. Never escapes the jar, which drops such values."""

    def __init__(self, reason: str, header: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.header = header
