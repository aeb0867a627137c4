"""Integration test fixtures (service checks and prerequisites).

Provides fixtures for checking if external services are available.
Live-backend tests are skipped if no inference server is running.
"""

import os

import httpx
import pytest

LIVE_BACKEND_URL = os.environ.get("LIVE_BACKEND_URL", "http://localhost:8000")


@pytest.fixture(scope="session")
def check_backend():
    """Check if a KServe v2 inference server is ready at LIVE_BACKEND_URL.

    Skips tests if the server is not reachable.
    """
    try:
        response = httpx.get(f"{LIVE_BACKEND_URL}/v2/health/ready", timeout=5)
        if response.status_code != 200:
            pytest.skip("Inference server not ready (non-200 status)")
    except httpx.HTTPError as e:
        pytest.skip(f"Inference server not available: {e}")
    return LIVE_BACKEND_URL
