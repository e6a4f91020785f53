from datetime import timedelta

import pytest

from pyreqwest_cookies import BlockingCookieMiddleware, CookieJar, CookieMiddleware, InvalidUrlError

from tests.utils import AsyncStubNext, BlockingStubNext, FakeClock, request, response


async def test_attach_after_store():
    middleware = CookieMiddleware()
    next_handler = AsyncStubNext(response("sid=abc123; Path=/; HttpOnly"))

    await middleware(request("https://example.com/"), next_handler)
    assert next_handler.sent_cookie() is None

    await middleware(request("https://example.com/dashboard"), next_handler)
    assert next_handler.sent_cookie() == "sid=abc123"
    assert middleware.jar.contains("example.com", "/", "sid")


async def test_cookie_exchange_sequence():
    middleware = CookieMiddleware()
    next_handler = AsyncStubNext(
        response("CUSTOMER=WILE_E_COYOTE; Path=/"),
        response("PART_NUMBER=ROCKET_LAUNCHER_0001; Path=/"),
        response("SHIPPING=FEDEX; Path=/foo"),
    )

    for _ in range(4):
        await middleware(request("http://example.com/"), next_handler)
    await middleware(request("http://example.com/foo"), next_handler)

    assert [next_handler.sent_cookie(i) for i in range(5)] == [
        None,
        "CUSTOMER=WILE_E_COYOTE",
        "CUSTOMER=WILE_E_COYOTE; PART_NUMBER=ROCKET_LAUNCHER_0001",
        "CUSTOMER=WILE_E_COYOTE; PART_NUMBER=ROCKET_LAUNCHER_0001",
        "SHIPPING=FEDEX; CUSTOMER=WILE_E_COYOTE; PART_NUMBER=ROCKET_LAUNCHER_0001",
    ]


async def test_response_passed_through():
    middleware = CookieMiddleware()
    resp = response("=broken", "a=1; Domain=evil.com", "ok=1")
    next_handler = AsyncStubNext(resp)

    assert await middleware(request("https://example.com/"), next_handler) is resp
    assert resp.headers.getall("set-cookie") == ["=broken", "a=1; Domain=evil.com", "ok=1"]
    assert [c.name for c in middleware.jar] == ["ok"]


async def test_invalid_url_aborts_before_dispatch():
    middleware = CookieMiddleware()
    next_handler = AsyncStubNext()

    with pytest.raises(InvalidUrlError):
        await middleware(request("file:///etc/hosts"), next_handler)
    assert next_handler.requests == []


async def test_explicit_cookie_header_kept():
    jar = CookieJar()
    jar.store_response_cookies(["a=1"], "https://example.com/")
    next_handler = AsyncStubNext()

    await CookieMiddleware(jar)(request("https://example.com/", Cookie="manual=1"), next_handler)
    assert next_handler.sent_cookie() == "manual=1"


async def test_secure_and_expiry_through_middleware():
    clock = FakeClock()
    middleware = CookieMiddleware(CookieJar(clock=clock))
    next_handler = AsyncStubNext(response("s=1; Secure; Max-Age=60", "p=1"))

    await middleware(request("https://example.com/"), next_handler)
    await middleware(request("http://example.com/"), next_handler)
    await middleware(request("https://example.com/"), next_handler)
    assert next_handler.sent_cookie(1) == "p=1"
    assert next_handler.sent_cookie(2) == "s=1; p=1"

    clock.advance(timedelta(seconds=61))
    await middleware(request("https://example.com/"), next_handler)
    assert next_handler.sent_cookie() == "p=1"


async def test_max_age_zero_removes_through_middleware():
    middleware = CookieMiddleware()
    next_handler = AsyncStubNext(response("x=1", "y=2"), response("x=1; Max-Age=0"))

    await middleware(request("https://example.com/"), next_handler)
    await middleware(request("https://example.com/"), next_handler)
    await middleware(request("https://example.com/"), next_handler)
    assert next_handler.sent_cookie() == "y=2"


async def test_huge_max_age_through_middleware():
    middleware = CookieMiddleware()
    resp = response("big=1; Max-Age=300000000000", "bigger=1; Max-Age=99999999999999999999")
    next_handler = AsyncStubNext(resp)

    assert await middleware(request("https://example.com/"), next_handler) is resp
    await middleware(request("https://example.com/"), next_handler)
    assert next_handler.sent_cookie() == "big=1; bigger=1"


async def test_separate_middlewares_separate_jars():
    first, second = CookieMiddleware(), CookieMiddleware()
    next_handler = AsyncStubNext(response("a=1"))

    await first(request("https://example.com/"), next_handler)
    await second(request("https://example.com/"), next_handler)
    assert next_handler.sent_cookie() is None


def test_blocking_middleware():
    middleware = BlockingCookieMiddleware()
    next_handler = BlockingStubNext(response("sid=abc123; Path=/; HttpOnly"))

    middleware(request("https://example.com/"), next_handler)
    middleware(request("https://example.com/dashboard"), next_handler)
    assert next_handler.sent_cookie() == "sid=abc123"

    with pytest.raises(InvalidUrlError):
        middleware(request("file:///etc/hosts"), next_handler)
    assert len(next_handler.requests) == 2


async def test_shared_jar_between_async_and_blocking():
    jar = CookieJar()
    async_middleware = CookieMiddleware(jar)
    blocking_middleware = BlockingCookieMiddleware(jar)
    assert async_middleware.jar is blocking_middleware.jar

    blocking_next = BlockingStubNext(response("from_blocking=1"))
    blocking_middleware(request("https://example.com/"), blocking_next)

    async_next = AsyncStubNext(response("from_async=1"))
    await async_middleware(request("https://example.com/"), async_next)
    assert async_next.sent_cookie() == "from_blocking=1"

    blocking_middleware(request("https://example.com/"), blocking_next)
    assert blocking_next.sent_cookie() == "from_blocking=1; from_async=1"
