"""
Shared fixtures: a scripted httpx transport and a client wired to it.

ScriptedTransport hands out the queued responses in order and records every
request it saw, so tests can assert on both the outcome and what was sent.
"""

from __future__ import annotations

import base64
import json

import httpx
import pytest

from rbx_economy.config import Settings
from rbx_economy.economy_client import EconomyClient

COOKIE = "_|WARNING:-DO-NOT-SHARE-THIS.--test-cookie"

TEST_SETTINGS = Settings(
    economy_api_base="https://economy.test",
    users_api_base="https://users.test",
    auth_api_base="https://auth.test",
    request_timeout=5.0,
    user_agent="rbx-economy-tests",
    roblosecurity="",
)


class ScriptedTransport(httpx.MockTransport):
    def __init__(self, *steps: httpx.Response | Exception):
        self.steps = list(steps)
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.steps:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        step = self.steps.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


def json_response(status: int, body: object, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(body).encode("utf-8"), headers=headers)


def errors_body(code: int, message: str) -> dict:
    return {"errors": [{"code": code, "message": message}]}


def challenge_metadata_header(challenge_id: str) -> str:
    metadata = {
        "userId": "12345",
        "challengeId": challenge_id,
        "shouldShowRememberDeviceCheckbox": False,
        "rememberDevice": False,
        "sessionCookie": "",
        "verificationToken": "",
        "actionType": "Generic",
        "requestPath": "/v1/purchases/products/1",
        "requestMethod": "POST",
    }
    return base64.b64encode(json.dumps(metadata).encode("utf-8")).decode("ascii")


def stale_token_response(token: str) -> httpx.Response:
    return httpx.Response(403, content=b"", headers={"x-csrf-token": token})


@pytest.fixture
def make_client():
    def _make(*steps: httpx.Response | Exception) -> tuple[EconomyClient, ScriptedTransport]:
        transport = ScriptedTransport(*steps)
        client = EconomyClient(COOKIE, settings=TEST_SETTINGS, transport=transport)
        return client, transport

    return _make
