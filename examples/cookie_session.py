"""Cookie middleware usage examples.

Run directly:
    uv run python -m examples.cookie_session

Set HTTPBIN env var to point elsewhere if needed.
"""

import asyncio
import os
import tempfile
from pathlib import Path

from pyreqwest.client import ClientBuilder
from pyreqwest.http import Url

from pyreqwest_cookies import CookieJar, CookieMiddleware

HTTPBIN = Url(os.environ.get("HTTPBIN", "https://httpbin.org"))


async def example_session_cookies() -> None:
    """Example 1: Cookies set by one response are sent with the next request"""
    middleware = CookieMiddleware()
    async with ClientBuilder().with_middleware(middleware).error_for_status(True).build() as client:
        set_url = (HTTPBIN / "response-headers").with_query({"Set-Cookie": "USER_ID=10; Path=/"})
        await client.get(set_url).build().send()

        resp = await client.get(HTTPBIN / "cookies").build().send()
        data = await resp.json()
        print({"example": "session_cookies", "cookies": data.get("cookies"), "jar": [str(c) for c in middleware.jar]})


async def example_shared_jar() -> None:
    """Example 2: Two clients sharing one jar"""
    jar = CookieJar()
    async with (
        ClientBuilder().with_middleware(CookieMiddleware(jar)).build() as first,
        ClientBuilder().with_middleware(CookieMiddleware(jar)).build() as second,
    ):
        set_url = (HTTPBIN / "response-headers").with_query({"Set-Cookie": "SHARED=1; Path=/"})
        await first.get(set_url).build().send()

        resp = await second.get(HTTPBIN / "cookies").build().send()
        data = await resp.json()
        print({"example": "shared_jar", "cookies": data.get("cookies")})


async def example_persisted() -> None:
    """Example 3: Jar persisted to a file between sessions, no state shared in memory"""
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "cookies.ndjson"

        async with ClientBuilder().with_middleware(CookieMiddleware.from_path(path)).build() as client:
            set_url = (HTTPBIN / "response-headers").with_query({"Set-Cookie": "USER_ID=10; Max-Age=1000"})
            await client.get(set_url).build().send()

        async with ClientBuilder().with_middleware(CookieMiddleware.from_path(path)).build() as client:
            resp = await client.get(HTTPBIN / "cookies").build().send()
            data = await resp.json()
            print({"example": "persisted", "cookies": data.get("cookies")})


async def main() -> None:
    for example in (example_session_cookies, example_shared_jar, example_persisted):
        print(f"\n# running: {example.__name__}")
        await example()


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(main())
