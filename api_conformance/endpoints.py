"""
Catalogue of the REST endpoints covered by the conformance suites.
"""

from dataclasses import dataclass
import re
from urllib.parse import quote

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class EndpointError(Exception):
    """Raised for unknown endpoints or bad path parameters."""

    pass


@dataclass(frozen=True)
class Endpoint:
    """A single method + path template of the API."""

    name: str
    method: str
    template: str
    summary: str = ""

    @property
    def placeholders(self) -> list[str]:
        """Path parameter names in template order."""
        return _PLACEHOLDER.findall(self.template)

    def path(self, **params: str) -> str:
        """Fill the path template.

        Values are URL-quoted with no safe characters, so "/", "?" and "#"
        stay inside their segment. Empty strings yield empty segments, which
        the validation tests send on purpose.

        Args:
            **params: Value for every placeholder of the template

        Returns:
            Request path

        Raises:
            EndpointError: If a placeholder is missing or an unknown parameter is given
        """
        expected = set(self.placeholders)
        missing = expected - params.keys()
        if missing:
            raise EndpointError(f"{self.name}: missing path parameters {sorted(missing)}")
        unexpected = params.keys() - expected
        if unexpected:
            raise EndpointError(f"{self.name}: unexpected path parameters {sorted(unexpected)}")

        return _PLACEHOLDER.sub(lambda m: quote(str(params[m.group(1)]), safe=""), self.template)

    def __str__(self) -> str:
        """String representation of the endpoint."""
        return f"{self.method} {self.template}"


_ENDPOINT_LIST = [
    # Environment variables
    Endpoint(
        "list_envvars",
        "GET",
        "/api/v1/projects/{projectRef}/envvars/{env}",
        "List environment variables",
    ),
    Endpoint(
        "create_envvar",
        "POST",
        "/api/v1/projects/{projectRef}/envvars/{env}",
        "Create environment variable",
    ),
    Endpoint(
        "retrieve_envvar",
        "GET",
        "/api/v1/projects/{projectRef}/envvars/{env}/{name}",
        "Retrieve environment variable",
    ),
    Endpoint(
        "update_envvar",
        "PUT",
        "/api/v1/projects/{projectRef}/envvars/{env}/{name}",
        "Update environment variable",
    ),
    Endpoint(
        "delete_envvar",
        "DELETE",
        "/api/v1/projects/{projectRef}/envvars/{env}/{name}",
        "Delete environment variable",
    ),
    Endpoint(
        "import_envvars",
        "POST",
        "/api/v1/projects/{projectRef}/envvars/{env}/import",
        "Upload environment variables",
    ),
    # Runs
    Endpoint("list_project_runs", "GET", "/api/v1/projects/{projectRef}/runs", "List project runs"),
    Endpoint("list_runs", "GET", "/api/v1/runs", "List runs"),
    Endpoint("retrieve_run", "GET", "/api/v3/runs/{runId}", "Retrieve run"),
    Endpoint("replay_run", "POST", "/api/v1/runs/{runId}/replay", "Replay run"),
    Endpoint("reschedule_run", "POST", "/api/v1/runs/{runId}/reschedule", "Reschedule delayed run"),
    Endpoint("update_run_metadata", "PUT", "/api/v1/runs/{runId}/metadata", "Update run metadata"),
    Endpoint("cancel_run", "POST", "/api/v2/runs/{runId}/cancel", "Cancel run"),
    # Schedules
    Endpoint("list_schedules", "GET", "/api/v1/schedules", "List schedules"),
    Endpoint("create_schedule", "POST", "/api/v1/schedules", "Create schedule"),
    Endpoint("retrieve_schedule", "GET", "/api/v1/schedules/{schedule_id}", "Retrieve schedule"),
    Endpoint("update_schedule", "PUT", "/api/v1/schedules/{schedule_id}", "Update schedule"),
    Endpoint("delete_schedule", "DELETE", "/api/v1/schedules/{schedule_id}", "Delete schedule"),
    Endpoint(
        "activate_schedule",
        "POST",
        "/api/v1/schedules/{schedule_id}/activate",
        "Activate schedule",
    ),
    Endpoint(
        "deactivate_schedule",
        "POST",
        "/api/v1/schedules/{schedule_id}/deactivate",
        "Deactivate schedule",
    ),
    Endpoint("list_timezones", "GET", "/api/v1/timezones", "Get all supported timezones"),
    # Tasks
    Endpoint("batch_trigger_tasks", "POST", "/api/v1/tasks/batch", "Batch trigger tasks"),
    Endpoint("trigger_task", "POST", "/api/v1/tasks/{taskIdentifier}/trigger", "Trigger task"),
]

ENDPOINTS: dict[str, Endpoint] = {endpoint.name: endpoint for endpoint in _ENDPOINT_LIST}


def get_endpoint(name: str) -> Endpoint:
    """Look up an endpoint by name.

    Args:
        name: Catalogue name, e.g. "cancel_run"

    Returns:
        The endpoint definition

    Raises:
        EndpointError: If the name is not in the catalogue
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise EndpointError(f"Unknown endpoint: {name}") from None
