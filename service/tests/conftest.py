"""
Shared fixtures.

Outbound HTTP is served by `httpx.MockTransport`, so no test touches the network.
"""

import json
from typing import Callable

import httpx
import pytest

from tenbot.bot import Bot

WEBHOOK = "https://qyapi.weixin.qq.com/cgi-bin/webhook/send?key=test-key"


class MockPlatform:
    """Records every request and answers with `responder(request)`."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def ok_platform() -> MockPlatform:
    return MockPlatform(lambda request: httpx.Response(200, json={"errcode": 0, "errmsg": "ok"}))


@pytest.fixture
def make_bot():
    """Build a bot whose HTTP client talks to a MockPlatform."""

    def _make(platform: MockPlatform, name: str = "test-bot", webhook: str = WEBHOOK) -> Bot:
        http = httpx.AsyncClient(transport=httpx.MockTransport(platform))
        return Bot(name, webhook, http=http)

    return _make
