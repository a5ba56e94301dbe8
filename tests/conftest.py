"""Shared fixtures: a scripted control-plane server and a fake script invoker."""

import json

import httpx
import pytest

from premiere.client import PremiereClient


class FakeControlPlane:
    """Answers control-plane requests from a path -> response table.

    Values may be a dict (served as JSON with status 200), an
    ``httpx.Response``, or a callable taking the request. Every request is
    recorded for inspection.
    """

    def __init__(self, routes=None, default=None):
        self.routes = dict(routes or {})
        self.default = default
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self.routes.get(request.url.path, self.default)
        if answer is None:
            return httpx.Response(404, json={"detail": "not found"})
        if callable(answer):
            answer = answer(request)
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self) -> PremiereClient:
        return PremiereClient(base_url="http://localhost:3001", transport=httpx.MockTransport(self.handler))


class FakeInvoker:
    """Records invocations and returns a canned reply."""

    def __init__(self, reply=None):
        self.reply = {"success": True} if reply is None else reply
        self.calls: list[tuple[str, list]] = []

    async def invoke(self, function_name, args):
        self.calls.append((function_name, list(args)))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def control_plane():
    return FakeControlPlane()


@pytest.fixture
def invoker():
    return FakeInvoker()
