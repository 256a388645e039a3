"""
Fixtures for the offline harness tests.
"""

from collections.abc import Callable
import json
from typing import Any

import httpx
import pytest

from api_conformance.http_client import ApiResponse
from api_conformance.settings import ConformanceSettings

BASE_URL = "http://api.test"


@pytest.fixture
def unit_settings() -> ConformanceSettings:
    """Settings pointing at a fake service."""
    return ConformanceSettings(base_url=BASE_URL, auth_token="secret-token")


@pytest.fixture
def make_response() -> Callable[..., ApiResponse]:
    """Factory for ApiResponse objects with a JSON body."""

    def _make(
        status_code: int = 200,
        body: Any = None,
        content_type: str | None = "application/json",
        text: str | None = None,
    ) -> ApiResponse:
        headers = {"content-type": content_type} if content_type else {}
        if text is None:
            text = json.dumps(body) if body is not None else ""
        try:
            is_json = bool(text) and json.loads(text) == body
        except json.JSONDecodeError:
            is_json = False
        return ApiResponse(
            status_code=status_code, headers=headers, body=body, text=text, is_json=is_json
        )

    return _make


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def json_transport(recorded_requests) -> Callable[..., httpx.MockTransport]:
    """Factory for a mock transport answering every request with one JSON response."""

    def _make(status_code: int = 200, body: Any = None) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return httpx.Response(status_code, json=body if body is not None else {})

        return httpx.MockTransport(handler)

    return _make
