from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from pyreqwest.http import HeaderMap, Url

EPOCH = datetime(2026, 1, 1, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime = EPOCH) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@dataclass
class StubRequest:
    url: Url
    headers: HeaderMap = field(default_factory=HeaderMap)


@dataclass
class StubResponse:
    headers: HeaderMap = field(default_factory=HeaderMap)


def request(url: str, **headers: str) -> StubRequest:
    req = StubRequest(Url(url))
    for name, value in headers.items():
        req.headers[name] = value
    return req


def response(*set_cookies: str) -> StubResponse:
    resp = StubResponse()
    for value in set_cookies:
        resp.headers.append("set-cookie", value)
    return resp


class StubNext:
    """Terminal handler answering each request with the next queued response."""

    def __init__(self, *responses: StubResponse) -> None:
        self.responses = list(responses)
        self.requests: list[StubRequest] = []

    def _respond(self, request: StubRequest) -> StubResponse:
        self.requests.append(request)
        return self.responses.pop(0) if self.responses else StubResponse()

    def sent_cookie(self, index: int = -1) -> str | None:
        return self.requests[index].headers.get("cookie")


class AsyncStubNext(StubNext):
    async def run(self, request: StubRequest) -> StubResponse:
        return self._respond(request)


class BlockingStubNext(StubNext):
    def run(self, request: StubRequest) -> StubResponse:
        return self._respond(request)
