"""
Declarative conformance cases.

A case names an endpoint, describes the request to send and lists the checks
to run on the response. Cases are written in YAML or JSON files and may use
{fixture_name} templates that are filled from the configured fixture ids.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import yaml

from api_conformance.endpoints import ENDPOINTS
from api_conformance.http_client import AuthMode

logger = logging.getLogger(__name__)

CASE_FILE_SUFFIXES = (".json", ".yaml", ".yml")


class CaseConfigError(Exception):
    """Raised when a case file cannot be loaded."""

    pass


class RequestSpec(BaseModel):
    """The request a case sends."""

    endpoint: str = Field(..., description="Catalogue name of the endpoint")
    path_params: dict[str, str] = Field(
        default_factory=dict, description="Values for the path placeholders"
    )
    query: dict[str, Any] = Field(default_factory=dict, description="Query parameters")
    json_body: Any = Field(None, description="JSON request body")
    raw_body: str | None = Field(None, description="Raw request body, e.g. malformed JSON")
    headers: dict[str, str] = Field(default_factory=dict, description="Additional headers")
    auth: AuthMode = Field(AuthMode.VALID, description="Authorization mode")


class CheckConfig(BaseModel):
    """A single check; extra keys are passed to the validator."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="Name of the validator to run")

    @property
    def params(self) -> dict[str, Any]:
        """Validator parameters."""
        return dict(self.model_extra or {})


class ConformanceCase(BaseModel):
    """Complete declarative case."""

    name: str = Field(..., description="Unique name of the case")
    description: str = Field("", description="Human-readable case description")
    request: RequestSpec
    checks: list[CheckConfig] = Field(default_factory=list, description="Checks to run")
    tags: list[str] = Field(default_factory=list, description="Free-form labels")


def substitute_templates(data: Any, templates: dict[str, str]) -> Any:
    """Recursively substitute {name} templates.

    Args:
        data: String, list or dictionary containing templates
        templates: Mapping of template name to value

    Returns:
        Data with every known template replaced; non-string values are kept
    """
    if isinstance(data, dict):
        return {key: substitute_templates(value, templates) for key, value in data.items()}
    elif isinstance(data, list):
        return [substitute_templates(item, templates) for item in data]
    elif isinstance(data, str):
        for name, value in templates.items():
            data = data.replace(f"{{{name}}}", str(value))
        return data
    else:
        return data


def _read_case_file(case_path: Path) -> Any:
    suffix = case_path.suffix.lower()
    if suffix not in CASE_FILE_SUFFIXES:
        raise CaseConfigError(f"Unsupported case file type: {case_path.suffix}")

    try:
        with case_path.open("r") as f:
            if suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise CaseConfigError(f"Invalid case file {case_path}: {e}") from e


class CaseLoader:
    """Loads and validates declarative cases from JSON or YAML files."""

    def __init__(self):
        """Initialize case loader."""
        self.loaded_cases: dict[str, ConformanceCase] = {}

    def load_file(self, case_path: str | Path) -> list[ConformanceCase]:
        """Load the cases of one file.

        A file holds either a single case or a document with a "cases" list.

        Args:
            case_path: Path to a .json, .yaml or .yml file

        Returns:
            Parsed cases in file order

        Raises:
            CaseConfigError: If the file is missing, unparsable or invalid,
                or a case name was already loaded
        """
        case_path = Path(case_path)
        if not case_path.exists():
            raise CaseConfigError(f"Case file not found: {case_path}")

        data = _read_case_file(case_path)
        if isinstance(data, dict) and "cases" in data:
            entries = data["cases"]
        else:
            entries = [data]
        if not isinstance(entries, list):
            raise CaseConfigError(f"'cases' in {case_path} must be a list")

        cases = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise CaseConfigError(f"Case #{index} in {case_path} must be a mapping")
            try:
                case = ConformanceCase(**entry)
            except ValidationError as e:
                raise CaseConfigError(f"Invalid case #{index} in {case_path}: {e}") from e

            if case.name in self.loaded_cases or any(c.name == case.name for c in cases):
                raise CaseConfigError(f"Duplicate case name '{case.name}' in {case_path}")
            cases.append(case)

        for case in cases:
            self.loaded_cases[case.name] = case
        logger.debug(f"Loaded {len(cases)} cases from {case_path}")
        return cases

    def load_directory(self, case_dir: str | Path) -> list[ConformanceCase]:
        """Load all case files of a directory in file-name order.

        Args:
            case_dir: Directory containing case files

        Returns:
            All cases, file by file

        Raises:
            CaseConfigError: If the directory is missing or any file is invalid
        """
        case_dir = Path(case_dir)
        if not case_dir.is_dir():
            raise CaseConfigError(f"Case directory not found: {case_dir}")

        cases = []
        for case_file in sorted(case_dir.iterdir()):
            if case_file.suffix.lower() in CASE_FILE_SUFFIXES:
                cases.extend(self.load_file(case_file))
        return cases

    def validate_case(self, case: ConformanceCase) -> list[str]:
        """Check a case for common mistakes.

        Args:
            case: Case to check

        Returns:
            List of warnings, empty when the case looks sound
        """
        issues = []
        request = case.request

        endpoint = ENDPOINTS.get(request.endpoint)
        if endpoint is None:
            issues.append(f"Unknown endpoint '{request.endpoint}'")
        else:
            missing = [p for p in endpoint.placeholders if p not in request.path_params]
            if missing:
                issues.append(f"Path parameters not provided: {missing}")

        if not any(check.type == "status" for check in case.checks):
            issues.append("No status check specified")

        if request.json_body is not None and request.raw_body is not None:
            issues.append("Both json_body and raw_body are set")

        return issues

    def get_case(self, name: str) -> ConformanceCase | None:
        """Get a loaded case by name."""
        return self.loaded_cases.get(name)
