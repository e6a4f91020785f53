"""Middlewares attaching jar cookies to requests and storing response cookies in the jar."""

import asyncio
import logging
from pathlib import Path
from typing import Self

from pyreqwest_cookies.jar import CookieJar
from pyreqwest_cookies.types import (
    BlockingNextHandler,
    MiddlewareRequest,
    MiddlewareResponse,
    NextHandler,
)
from pyreqwest_cookies.url import RequestTarget

logger = logging.getLogger(__name__)

COOKIE = "cookie"
SET_COOKIE = "set-cookie"


class _BaseCookieMiddleware:
    def __init__(self, jar: CookieJar | None = None, *, path: Path | str | None = None) -> None:
        """Initialize the middleware.

        Args:
            jar: Jar to read and update. Share one jar between middlewares to share cookies. Defaults to a new
                empty jar owned by this middleware.
            path: When given, the jar is saved to this file after every response that changed it.
        """
        self._jar = jar if jar is not None else CookieJar()
        self._path = Path(path) if path is not None else None

    @classmethod
    def from_path(cls, path: Path | str) -> Self:
        """Load the jar from a file written by a previous session and keep it saved there."""
        return cls(CookieJar.load(path), path=path)

    @property
    def jar(self) -> CookieJar:
        return self._jar

    @property
    def path(self) -> Path | None:
        return self._path

    def _attach_cookies(self, request: MiddlewareRequest) -> RequestTarget:
        target = RequestTarget.from_url(request.url)
        if COOKIE in request.headers:
            logger.debug("Request to %s has an explicit Cookie header, not attaching jar cookies", target.host)
            return target
        if (header := self._jar.cookie_header(target)) is not None:
            request.headers[COOKIE] = header
        return target

    def _store_cookies(self, target: RequestTarget, response: MiddlewareResponse) -> bool:
        set_cookies = response.headers.getall(SET_COOKIE)
        if not set_cookies:
            return False
        return self._jar.store_response_cookies(set_cookies, target) > 0


class CookieMiddleware(_BaseCookieMiddleware):
    """Cookie jar middleware for the async pyreqwest client.

    Usage:
        client = ClientBuilder().with_middleware(CookieMiddleware()).build()
    """

    async def __call__[RequestT: MiddlewareRequest, ResponseT: MiddlewareResponse](
        self, request: RequestT, next_handler: NextHandler[RequestT, ResponseT]
    ) -> ResponseT:
        """Attach matching cookies, send the request, then store the response's cookies.

        Raises:
            InvalidUrlError: The request URL cannot be used for cookies. Raised before the request is sent.
        """
        target = self._attach_cookies(request)
        response = await next_handler.run(request)
        if self._store_cookies(target, response) and self._path is not None:
            await asyncio.to_thread(self._jar.save, self._path)
        return response


class BlockingCookieMiddleware(_BaseCookieMiddleware):
    """Cookie jar middleware for the blocking pyreqwest client. Register it with the blocking client builder's
    `with_middleware`. May share its jar with a CookieMiddleware.
    """

    def __call__[RequestT: MiddlewareRequest, ResponseT: MiddlewareResponse](
        self, request: RequestT, next_handler: BlockingNextHandler[RequestT, ResponseT]
    ) -> ResponseT:
        """Attach matching cookies, send the request, then store the response's cookies.

        Raises:
            InvalidUrlError: The request URL cannot be used for cookies. Raised before the request is sent.
        """
        target = self._attach_cookies(request)
        response = next_handler.run(request)
        if self._store_cookies(target, response) and self._path is not None:
            self._jar.save(self._path)
        return response
