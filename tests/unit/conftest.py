"""Unit test fixtures (mock transports and stubs).

Provides fixtures for testing without external dependencies.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from box_image_service.backend.http_backend import HttpInferenceBackend


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_http_backend(recorded_requests):
    """Factory for HttpInferenceBackend over httpx.MockTransport.

    Usage:
        backend = make_http_backend(lambda request: httpx.Response(200, json={...}))
    """

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> HttpInferenceBackend:
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return handler(request)

        kwargs.setdefault("base_url", "http://backend.test:8000")
        kwargs.setdefault("model_name", "box_image")
        return HttpInferenceBackend(transport=httpx.MockTransport(_record), **kwargs)

    return _make


@pytest.fixture
def request_json() -> Callable[[httpx.Request], Any]:
    """Decode the JSON body of a recorded request."""

    def _decode(request: httpx.Request) -> Any:
        return json.loads(request.content)

    return _decode
