# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Pytest configuration and fixtures."""

import json
from typing import Any, Callable, Union

import httpx
import pytest

from beeswax_client.clients.beeswax_client import BeeswaxClient

API_ROOT = "https://stinger.ut.api.beeswax.com"

Route = Union[tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeBeeswaxAPI:
    """In-memory stand-in for the Beeswax API, served through httpx.MockTransport.

    Routes are keyed by method and path. Each route holds a queue of
    responses; the last one is repeated once the others are used up. A
    response is either a ``(status, json_body)`` tuple or a callable taking
    the request.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list[Route]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *responses: Route) -> None:
        self.routes.setdefault((method.upper(), path), []).extend(responses)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"success": False, "message": "no route"})

        route = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[Any]:
        """Decoded JSON bodies of the requests sent to one route."""
        return [
            json.loads(r.content) if r.content else None
            for r in self.requests
            if r.method == method.upper() and r.url.path == path
        ]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def creds() -> dict:
    """Test credentials."""
    return {"email": "foo@bar.com", "password": "very good password"}


@pytest.fixture
def fake_api() -> FakeBeeswaxAPI:
    """Empty fake API; tests register the routes they need."""
    return FakeBeeswaxAPI()


@pytest.fixture
def client(creds, fake_api) -> BeeswaxClient:
    """Client wired to the fake API."""
    return BeeswaxClient(creds=creds, api_root=API_ROOT, transport=fake_api.transport)


@pytest.fixture
def sample_campaign() -> dict:
    """Sample campaign as returned by Beeswax."""
    return {
        "campaign_id": 9886,
        "advertiser_id": 1234,
        "campaign_name": "Test Campaign",
        "campaign_budget": 50000,
        "start_date": "2025-02-01 00:00:00",
        "active": True,
    }
