"""
Request-body builders for the conformance suites.

Every builder returns a fresh object so tests can mutate their copy.
"""

from typing import Any

from api_conformance.config import LIMITS


def large_string(size: int = LIMITS["large_value"], char: str = "x") -> str:
    """Build a string of the given length."""
    return char * size


# Environment variables


def envvar_create_body(name: str = "MY_VARIABLE", value: str = "someValue") -> dict[str, Any]:
    """Body for creating an environment variable."""
    return {"name": name, "value": value}


def envvar_update_body(value: str = "UPDATED_VALUE") -> dict[str, Any]:
    """Body for updating an environment variable."""
    return {"value": value}


def envvar_import_body(
    count: int = 2, prefix: str = "IMPORTED_VAR", override: bool | None = None
) -> dict[str, Any]:
    """Body for importing environment variables.

    Args:
        count: Number of variables to upload
        prefix: Name prefix, variables are numbered from 1
        override: Optional flag asking the service to overwrite existing values

    Returns:
        Import request body
    """
    body: dict[str, Any] = {
        "variables": [
            {"name": f"{prefix}_{index}", "value": f"value_{index}"}
            for index in range(1, count + 1)
        ]
    }
    if override is not None:
        body["override"] = override
    return body


# Schedules


def schedule_create_body(
    task: str = "scheduled-task",
    cron: str = "0 0 * * *",
    deduplication_key: str = "conformance-schedule",
    timezone: str | None = "UTC",
    external_id: str | None = None,
) -> dict[str, Any]:
    """Body for creating an IMPERATIVE schedule.

    Args:
        task: Identifier of the scheduled task
        cron: Cron expression
        deduplication_key: Key that makes repeated creation idempotent
        timezone: Optional IANA timezone
        external_id: Optional caller-side identifier

    Returns:
        Create request body
    """
    body: dict[str, Any] = {
        "task": task,
        "cron": cron,
        "deduplicationKey": deduplication_key,
    }
    if timezone is not None:
        body["timezone"] = timezone
    if external_id is not None:
        body["externalId"] = external_id
    return body


def schedule_update_body(
    task: str = "scheduled-task",
    cron: str = "30 6 * * 1",
    timezone: str | None = "UTC",
    external_id: str | None = None,
) -> dict[str, Any]:
    """Body for updating a schedule."""
    body: dict[str, Any] = {"task": task, "cron": cron}
    if timezone is not None:
        body["timezone"] = timezone
    if external_id is not None:
        body["externalId"] = external_id
    return body


# Tasks


def trigger_task_body(payload: Any = None, **options: Any) -> dict[str, Any]:
    """Body for triggering a task.

    Args:
        payload: Task payload, an empty object when omitted
        **options: Trigger options such as delay or ttl

    Returns:
        Trigger request body
    """
    body: dict[str, Any] = {"payload": {} if payload is None else payload}
    if options:
        body["options"] = dict(options)
    return body


def batch_trigger_body(count: int = 2, task_identifier: str = "validTask123") -> dict[str, Any]:
    """Body for a batch trigger of ``count`` runs of the same task."""
    return {
        "tasks": [
            {"task": task_identifier, "payload": {"index": index}} for index in range(count)
        ]
    }


# Runs


def reschedule_body(delay: str | int = "5m") -> dict[str, Any]:
    """Body for rescheduling a delayed run."""
    return {"delay": delay}


def metadata_body(metadata: Any = None) -> dict[str, Any]:
    """Body for replacing the metadata of a run."""
    if metadata is None:
        metadata = {"key1": "value1", "key2": 2}
    return {"metadata": metadata}
