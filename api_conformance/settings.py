"""
Settings for the conformance suites.

Handles the YAML/JSON settings file format and command-line overrides.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
import yaml

from api_conformance.config import DEFAULT_FIXTURE_IDS, INVALID_TOKEN, TIMEOUT_CONSTANTS


class SettingsError(Exception):
    """Raised when the conformance settings cannot be loaded."""

    pass


class FixtureIds(BaseModel):
    """Identifiers of server-side resources the success-path tests rely on."""

    project_ref: str = Field(DEFAULT_FIXTURE_IDS["project_ref"], description="Existing project")
    env: str = Field(DEFAULT_FIXTURE_IDS["env"], description="Existing environment slug")
    envvar_name: str = Field(DEFAULT_FIXTURE_IDS["envvar_name"], description="Existing envvar")
    envvar_value: str = Field(DEFAULT_FIXTURE_IDS["envvar_value"], description="Value to write")
    deletable_envvar_name: str = Field(
        DEFAULT_FIXTURE_IDS["deletable_envvar_name"],
        description="Envvar the delete tests may remove",
    )
    missing_project_ref: str = Field(DEFAULT_FIXTURE_IDS["missing_project_ref"])
    missing_env: str = Field(DEFAULT_FIXTURE_IDS["missing_env"])
    missing_envvar_name: str = Field(DEFAULT_FIXTURE_IDS["missing_envvar_name"])
    schedule_id: str = Field(
        DEFAULT_FIXTURE_IDS["schedule_id"], description="Existing IMPERATIVE schedule"
    )
    deletable_schedule_id: str = Field(
        DEFAULT_FIXTURE_IDS["deletable_schedule_id"],
        description="IMPERATIVE schedule the delete tests may remove",
    )
    missing_schedule_id: str = Field(DEFAULT_FIXTURE_IDS["missing_schedule_id"])
    run_id: str = Field(DEFAULT_FIXTURE_IDS["run_id"], description="Existing run")
    delayed_run_id: str = Field(
        DEFAULT_FIXTURE_IDS["delayed_run_id"], description="Run in the DELAYED state"
    )
    missing_run_id: str = Field(DEFAULT_FIXTURE_IDS["missing_run_id"])
    task_identifier: str = Field(DEFAULT_FIXTURE_IDS["task_identifier"], description="Known task")
    missing_task_identifier: str = Field(DEFAULT_FIXTURE_IDS["missing_task_identifier"])

    def as_templates(self) -> dict[str, str]:
        """Return the identifiers keyed by field name for template substitution.

        Returns:
            Mapping of identifier name to value
        """
        return self.model_dump()


class ConformanceSettings(BaseModel):
    """Complete settings of a conformance run."""

    base_url: str | None = Field(None, description="Root URL of the service under test")
    auth_token: str = Field("", description="Bearer token for authorised requests")
    invalid_token: str = Field(INVALID_TOKEN, description="Token used by invalid-auth checks")
    timeout: float = Field(
        TIMEOUT_CONSTANTS["request_default"], gt=0, description="Request timeout in seconds"
    )
    fixtures: FixtureIds = Field(default_factory=FixtureIds)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None

    @property
    def is_configured(self) -> bool:
        """Whether a service URL is available to run live tests against."""
        return self.base_url is not None


def _read_settings_file(config_path: Path) -> dict[str, Any]:
    """Parse a YAML or JSON settings document."""
    if not config_path.exists():
        raise SettingsError(f"Settings file not found: {config_path}")

    suffix = config_path.suffix.lower()
    try:
        with config_path.open("r") as f:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise SettingsError(f"Unsupported settings file type: {config_path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SettingsError(f"Invalid settings file {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {config_path} must contain a mapping")
    return data


def load_settings(config_path: str | Path | None = None, **overrides: Any) -> ConformanceSettings:
    """Load conformance settings.

    Values from the settings file are applied first, then every override
    whose value is not None.

    Args:
        config_path: Optional path to a YAML or JSON settings file
        **overrides: Top-level settings such as base_url or auth_token

    Returns:
        Validated settings

    Raises:
        SettingsError: If the file is missing or unreadable, or the values are invalid
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        data = _read_settings_file(Path(config_path))

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ConformanceSettings(**data)
    except ValidationError as e:
        source = f" in {config_path}" if config_path is not None else ""
        raise SettingsError(f"Invalid conformance settings{source}: {e}") from e
