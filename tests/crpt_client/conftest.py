"""tests/conftest.py

Common fixtures for the entire test suite.
"""

import logging
import os

import httpx
import pytest
from typer.testing import CliRunner

from crpt_client.infra.rate_limiter import FixedWindowRateLimiter

# Long enough that the background replenisher never fires during a test;
# tests that need a tick call replenisher.tick() directly.
NEVER_TICKS = 3600.0


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CRPT_CLIENT_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("CRPT_CLIENT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def package_logger():
    """Package logger, restored after the test so CLI log setup does not leak."""
    logger = logging.getLogger("crpt_client")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def make_limiter():
    """Factory for rate limiters that are closed at teardown."""
    created: list[FixedWindowRateLimiter] = []

    def _make(request_limit: int, window_seconds: float = NEVER_TICKS) -> FixedWindowRateLimiter:
        limiter = FixedWindowRateLimiter(window_seconds=window_seconds, request_limit=request_limit)
        created.append(limiter)
        return limiter

    yield _make
    for limiter in created:
        limiter.close()


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    Every request seen is appended to ``add_response.requests``.
    """
    responses = {}
    requests_log: list[httpx.Request] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "POST",
        status_code: int = 200,
        json_payload: dict | None = None,
        error: Exception | None = None,
    ):
        """Register a mock response (or an exception to raise) for a given URL and method."""
        responses[(method.upper(), url)] = (status_code, json_payload, error)

    def mock_transport(request: httpx.Request) -> httpx.Response:
        requests_log.append(request)
        key = (request.method, str(request.url))
        if key in responses:
            status, payload, error = responses[key]
            if error is not None:
                raise error
            return httpx.Response(status, json=payload if payload is not None else {})

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.requests = requests_log  # type: ignore[attr-defined]
    return add_response
