"""
Fixtures for the live conformance tests.

Every test in this directory is skipped when no service is configured or the
configured service does not answer.
"""

from collections.abc import Generator
import logging

import pytest

from api_conformance.config import TIMEOUT_CONSTANTS
from api_conformance.http_client import AuthMode, HTTPClient, create_http_client
from api_conformance.settings import ConformanceSettings

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session")
def live_settings(settings: ConformanceSettings) -> ConformanceSettings:
    """Settings of a configured and reachable service, or skip."""
    if not settings.is_configured:
        pytest.skip("No service configured (use --api-base-url or API_BASE_URL)")

    check_settings = settings.model_copy(
        update={"timeout": TIMEOUT_CONSTANTS["reachability_check"]}
    )
    with create_http_client(check_settings, AuthMode.MISSING) as client:
        if not client.is_reachable():
            pytest.skip(f"Service not reachable at {settings.base_url}")

    logger.info(f"Running conformance tests against {settings.base_url}")
    return settings


@pytest.fixture(scope="session")
def api_client(live_settings: ConformanceSettings) -> Generator[HTTPClient, None, None]:
    """Client sending the configured bearer token."""
    with create_http_client(live_settings, AuthMode.VALID) as client:
        yield client


@pytest.fixture(scope="session")
def unauthenticated_client(
    live_settings: ConformanceSettings,
) -> Generator[HTTPClient, None, None]:
    """Client sending no Authorization header."""
    with create_http_client(live_settings, AuthMode.MISSING) as client:
        yield client


@pytest.fixture(scope="session")
def invalid_token_client(live_settings: ConformanceSettings) -> Generator[HTTPClient, None, None]:
    """Client sending a bearer token the service must reject."""
    with create_http_client(live_settings, AuthMode.INVALID) as client:
        yield client
