from collections.abc import AsyncGenerator

import pytest

from pyreqwest_cookies import CookieJar

from tests.servers.cookie_server import CookieServer
from tests.utils import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def jar(clock: FakeClock) -> CookieJar:
    return CookieJar(clock=clock)


@pytest.fixture
async def cookie_server() -> AsyncGenerator[CookieServer]:
    async with CookieServer().serve_context() as server:
        yield server
