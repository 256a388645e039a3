"""
Authorization conformance: every endpoint rejects missing and invalid tokens.

The cases live in cases/*.yaml and run through the declarative case runner.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from api_conformance.cases import CaseLoader, ConformanceCase
from api_conformance.runner import CaseRunner
from api_conformance.settings import ConformanceSettings

pytestmark = pytest.mark.conformance

CASES = CaseLoader().load_directory(Path(__file__).parent / "cases")


@pytest.fixture(scope="module")
def case_runner(live_settings: ConformanceSettings) -> Generator[CaseRunner, None, None]:
    """Case runner bound to the live service."""
    with CaseRunner(live_settings) as runner:
        yield runner


class TestAuthRejected:
    """Requests without valid credentials are refused with 401 or 403."""

    @pytest.mark.parametrize("case", CASES, ids=lambda case: case.name)
    def test_case(self, case_runner: CaseRunner, case: ConformanceCase):
        """Run one declarative authorization case."""
        result = case_runner.run_case(case)
        assert result.success, f"{result}\n" + "\n".join(result.details.get("check_results", []))
