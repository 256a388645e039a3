"""
Executes declarative conformance cases against the configured service.
"""

from collections.abc import Callable
import logging
import time
from typing import Any

from api_conformance.cases import ConformanceCase, substitute_templates
from api_conformance.endpoints import EndpointError, get_endpoint
from api_conformance.http_client import AuthMode, HTTPClient, HTTPClientError, create_http_client
from api_conformance.settings import ConformanceSettings
from api_conformance.validators import ValidationRunner

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ConformanceSettings, AuthMode], HTTPClient]


class CaseResult:
    """Result of a single case execution."""

    def __init__(
        self,
        name: str,
        success: bool,
        duration: float,
        error: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize case result.

        Args:
            name: Name of the case
            success: Whether every check passed
            duration: Execution time in seconds
            error: Error message if the case failed
            details: Additional details such as the status and check messages
        """
        self.name = name
        self.success = success
        self.duration = duration
        self.error = error
        self.details = details or {}

    def __str__(self) -> str:
        """String representation of case result."""
        status = "PASS" if self.success else "FAIL"
        text = f"[{status}] {self.name} ({self.duration:.2f}s)"
        if self.error:
            text += f": {self.error}"
        return text


class CaseRunner:
    """Runs declarative cases, one HTTP client per authorization mode."""

    def __init__(
        self,
        settings: ConformanceSettings,
        client_factory: ClientFactory = create_http_client,
        validation_runner: ValidationRunner | None = None,
    ):
        """Initialize case runner.

        Args:
            settings: Conformance settings
            client_factory: Callable building a client for (settings, auth mode)
            validation_runner: Runner for the case checks
        """
        self.settings = settings
        self.client_factory = client_factory
        self.validation_runner = validation_runner or ValidationRunner()
        self.templates = settings.fixtures.as_templates()
        self._clients: dict[AuthMode, HTTPClient] = {}

    def get_client(self, auth: AuthMode) -> HTTPClient:
        """Get the client of an authorization mode, creating it on first use."""
        auth = AuthMode(auth)
        if auth not in self._clients:
            self._clients[auth] = self.client_factory(self.settings, auth)
        return self._clients[auth]

    def run_case(self, case: ConformanceCase) -> CaseResult:
        """Run a single case.

        Args:
            case: Case to run

        Returns:
            Case result; endpoint, request-building and transport errors give a
            failed result
        """
        logger.info(f"Running case: {case.name}")
        start_time = time.time()

        request = case.request
        try:
            endpoint = get_endpoint(request.endpoint)
            path = endpoint.path(**substitute_templates(request.path_params, self.templates))
            client = self.get_client(request.auth)
            response = client.request(
                endpoint.method,
                path,
                params=substitute_templates(request.query, self.templates) or None,
                json=substitute_templates(request.json_body, self.templates),
                content=substitute_templates(request.raw_body, self.templates),
                headers=substitute_templates(request.headers, self.templates) or None,
            )
        except (EndpointError, HTTPClientError, ValueError) as e:
            duration = time.time() - start_time
            logger.warning(f"Case {case.name} failed: {e}")
            return CaseResult(case.name, False, duration, str(e))

        checks = [
            {"type": check.type, **substitute_templates(check.params, self.templates)}
            for check in case.checks
        ]
        check_results = self.validation_runner.run_all_validations(response, checks)
        duration = time.time() - start_time

        details = {
            "request": f"{endpoint.method} {path}",
            "status_code": response.status_code,
            "check_results": [str(r) for r in check_results],
        }
        failed = next((r for r in check_results if not r.success), None)
        if failed is not None:
            logger.warning(f"Case {case.name} failed: {failed.message}")
            return CaseResult(
                case.name, False, duration, f"Check failed: {failed.message}", details
            )

        logger.info(f"Case {case.name} passed ({duration:.2f}s)")
        return CaseResult(case.name, True, duration, details=details)

    def run_cases(self, cases: list[ConformanceCase]) -> list[CaseResult]:
        """Run several cases in order.

        Args:
            cases: Cases to run

        Returns:
            List of case results
        """
        return [self.run_case(case) for case in cases]

    def close(self) -> None:
        """Close every client created by the runner."""
        for client in self._clients.values():
            client.close()
        self._clients.clear()

    def __enter__(self) -> "CaseRunner":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit closing the clients."""
        self.close()
