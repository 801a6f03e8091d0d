"""Pytest configuration and fixtures."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from codereview_frontend.api.deps import get_api_client
from codereview_frontend.config import Settings
from codereview_frontend.main import create_app
from codereview_frontend.services.api_client import CodeReviewApiClient

API_BASE_URL = "http://api.test"


class FakeApi:
    """In-memory stand-in for the code review REST API.

    Register responses with ``on(method, path, ...)``; every request the
    frontend makes is recorded in ``requests``.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, object] | Exception] = {}
        self.requests: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body=None,
        error: Exception | None = None,
    ) -> None:
        key = (method.upper(), f"/api/v1{path}")
        if error is not None:
            self.routes[key] = error
        else:
            self.routes[key] = (status_code, json_body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.routes.get((request.method, request.url.path))
        if result is None:
            return httpx.Response(404, json={"message": "Not found"})
        if isinstance(result, Exception):
            raise result
        status_code, json_body = result
        return httpx.Response(status_code, json=json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method.upper() and r.url.path == f"/api/v1{path}"
        ]

    def last_json(self, method: str, path: str):
        return json.loads(self.calls(method, path)[-1].content)


def make_review(review_id="review-1", status="pending", **overrides) -> dict:
    """An API code review document."""
    review = {
        "_id": review_id,
        "repository_url": "https://github.com/example/repo",
        "status": status,
        "created_at": "2024-03-05T13:05:00.000Z",
        "updated_at": "2024-03-05T14:30:00.000Z",
        "compliance_reports": [],
    }
    review.update(overrides)
    return review


@pytest.fixture
def review_factory():
    return make_review


@pytest.fixture
def settings():
    """Settings pointing at the fake API."""
    return Settings(api_base_url=API_BASE_URL, status_poll_interval_seconds=10)


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def api_client(fake_api):
    """Unopened API client backed by the fake API."""
    return CodeReviewApiClient(API_BASE_URL, transport=fake_api.transport)


def _app_for(settings, fake_api):
    app = create_app(settings)

    async def override_api_client():
        async with CodeReviewApiClient(API_BASE_URL, transport=fake_api.transport) as api:
            yield api

    app.dependency_overrides[get_api_client] = override_api_client
    return app


@pytest.fixture
def client(settings, fake_api):
    """TestClient for the app, with API calls routed to ``fake_api``."""
    with TestClient(_app_for(settings, fake_api), follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture
def lenient_client(settings, fake_api):
    """Like ``client`` but returns the app's 500 response instead of raising."""
    app = _app_for(settings, fake_api)
    with TestClient(app, follow_redirects=False, raise_server_exceptions=False) as test_client:
        yield test_client
