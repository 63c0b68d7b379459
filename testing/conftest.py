"""
Pytest configuration for image enrichment tests.

Providers talk to fake upstreams through httpx.MockTransport; no test touches
the network. Run with:

    pytest testing/
"""

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from enrichment.images import ImageConfig
from enrichment.logging import end_run, start_run

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def logging_run(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Start a logging run per test so run-scoped logging state is isolated."""
    test_path = request.node.nodeid.split("::")[0]
    test_name = test_path.replace("/", "-").replace(".py", "")
    start_run(f"test-{test_name}")
    yield
    end_run()


class FakeUpstream:
    """Callable for httpx.MockTransport that routes by method and URL.

    Routes match on scheme, host and path; query strings are ignored. Every
    request is recorded so tests can assert on call counts and payloads.
    Unrouted requests get a 404.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        url: str,
        status: int = 200,
        json: Any = None,
        handler: Handler | None = None,
    ) -> None:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status, json=json)

        self._routes[(method.upper(), url)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, f"{request.url.scheme}://{request.url.host}{request.url.path}")
        handler = self._routes.get(key)
        if handler is None:
            return httpx.Response(404, json={"error": f"no route for {key}"})
        return handler(request)

    def calls(self, url: str, method: str | None = None) -> list[httpx.Request]:
        """Recorded requests for a URL (without query string)."""
        return [
            r
            for r in self.requests
            if f"{r.url.scheme}://{r.url.host}{r.url.path}" == url
            and (method is None or r.method == method.upper())
        ]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def client(upstream: FakeUpstream) -> httpx.AsyncClient:
    """HTTP client whose transport is the fake upstream."""
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def offline_requests() -> list[httpx.Request]:
    """Requests attempted through offline_client (should usually stay empty)."""
    return []


@pytest.fixture
def offline_client(offline_requests: list[httpx.Request]) -> httpx.AsyncClient:
    """HTTP client that fails every request with a connection error."""

    def refuse(request: httpx.Request) -> httpx.Response:
        offline_requests.append(request)
        raise httpx.ConnectError("network disabled in tests", request=request)

    return httpx.AsyncClient(transport=httpx.MockTransport(refuse))


def make_config(**overrides: Any) -> ImageConfig:
    """ImageConfig with every credential unset unless overridden.

    Explicit values keep developer environment variables out of tests.
    """
    values: dict[str, Any] = {
        "tmdb_api_key": None,
        "igdb_client_id": None,
        "igdb_client_secret": None,
        "spotify_client_id": None,
        "spotify_client_secret": None,
        "google_books_api_key": None,
        "google_places_api_key": None,
        "unsplash_access_key": None,
        "timeout": 5.0,
        "validation_timeout": 2.0,
        "places_photo_max_width": 800,
    }
    values.update(overrides)
    return ImageConfig(**values)


@pytest.fixture
def config_factory() -> Callable[..., ImageConfig]:
    return make_config


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests requiring real API credentials",
    )
