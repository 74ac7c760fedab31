import json

import httpx
import pytest

from coggle import CoggleApi


class StubServer:
    """Answers requests from canned routes and remembers every request seen."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, payload=None, status=200):
        self.routes[(method, path)] = (status, payload)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, payload = self.routes.get(
            (request.method, request.url.path),
            (404, {"error": "not found"})
        )
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def server():
    return StubServer()


@pytest.fixture
def api(server):
    client = CoggleApi(token="T", base_url="https://coggle.it", transport=httpx.MockTransport(server))
    yield client
    client.close()


@pytest.fixture
def diagram(api):
    return api.diagram("d1", title="Plan")
