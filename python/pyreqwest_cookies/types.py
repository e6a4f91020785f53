"""Common types and interfaces used in the library."""

from typing import Literal, Protocol

from pyreqwest.http import Url

UrlType = Url | str
SameSite = Literal["Strict", "Lax", "None"]


class Headers(Protocol):
    """Header collection as exposed by pyreqwest's HeaderMap."""

    def __contains__(self, key: object, /) -> bool: ...
    def __setitem__(self, key: str, value: str, /) -> None: ...
    def getall(self, key: str) -> list[str]: ...


class MiddlewareRequest(Protocol):
    """The parts of an outgoing request the middleware reads and modifies."""

    @property
    def url(self) -> UrlType: ...

    @property
    def headers(self) -> Headers: ...


class MiddlewareResponse(Protocol):
    """The parts of a response the middleware reads."""

    @property
    def headers(self) -> Headers: ...


class NextHandler[RequestT, ResponseT](Protocol):
    """Continuation of an async middleware chain."""

    async def run(self, request: RequestT) -> ResponseT:
        """Send the request through the rest of the chain and return the eventual response."""
        ...


class BlockingNextHandler[RequestT, ResponseT](Protocol):
    """Continuation of a blocking middleware chain."""

    def run(self, request: RequestT) -> ResponseT:
        """Send the request through the rest of the chain and return the eventual response."""
        ...
