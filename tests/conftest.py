"""
Pytest configuration and shared fixtures for the API conformance tests.
"""

import os
from pathlib import Path

import pytest

from api_conformance.settings import ConformanceSettings, FixtureIds, SettingsError, load_settings

CASES_DIR = Path(__file__).parent / "conformance" / "cases"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the options that point the suite at a service."""
    group = parser.getgroup("api-conformance")
    group.addoption(
        "--api-base-url",
        default=os.environ.get("API_BASE_URL"),
        help="Root URL of the service under test (default: $API_BASE_URL)",
    )
    group.addoption(
        "--api-auth-token",
        default=os.environ.get("API_AUTH_TOKEN"),
        help="Bearer token for authorised requests (default: $API_AUTH_TOKEN)",
    )
    group.addoption(
        "--api-config",
        default=None,
        help="YAML or JSON settings file with base URL, token and fixture ids",
    )


@pytest.fixture(scope="session")
def settings(pytestconfig: pytest.Config) -> ConformanceSettings:
    """Conformance settings from the settings file and command-line options."""
    try:
        return load_settings(
            pytestconfig.getoption("--api-config"),
            base_url=pytestconfig.getoption("--api-base-url"),
            auth_token=pytestconfig.getoption("--api-auth-token"),
        )
    except SettingsError as e:
        pytest.exit(f"Invalid conformance settings: {e}", returncode=4)


@pytest.fixture(scope="session")
def fixture_ids(settings: ConformanceSettings) -> FixtureIds:
    """Identifiers of the server-side resources the tests rely on."""
    return settings.fixtures


@pytest.fixture
def cases_dir() -> Path:
    """Directory of the declarative conformance cases."""
    return CASES_DIR
