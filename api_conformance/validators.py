"""
Response validation framework for the API conformance suites.

Provides validators for the status, header and body-shape expectations
every endpoint test makes.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
import re
from typing import Any

from api_conformance.config import JSON_CONTENT_TYPE
from api_conformance.http_client import ApiResponse

# JSON type names accepted in field specifications
JSON_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list,),
    "null": (type(None),),
}


def json_type_name(value: Any) -> str:
    """Name the JSON type of a decoded value."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    for name in ("string", "object", "array", "null"):
        if isinstance(value, JSON_TYPES[name]):
            return name
    return type(value).__name__


def matches_json_type(value: Any, expected: str | Iterable[str]) -> bool:
    """Check a decoded value against one or several JSON type names.

    Args:
        value: Decoded JSON value
        expected: Type name or names; "any" matches everything

    Returns:
        True if the value has one of the expected types

    Raises:
        ValueError: If a type name is unknown
    """
    names = [expected] if isinstance(expected, str) else list(expected)
    for name in names:
        if name == "any":
            return True
        if name not in JSON_TYPES:
            raise ValueError(f"Unknown JSON type: {name}")
        # bool is an int subclass but never a JSON number
        if isinstance(value, bool) and name != "boolean":
            continue
        if isinstance(value, JSON_TYPES[name]):
            return True
    return False


@dataclass
class ValidationResult:
    """Outcome of one check against one response.

    ValidationRunner fills in ``check`` and ``status_code`` so that listings
    of several results name the check and the response it looked at.
    """

    success: bool
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    check: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        """String representation of result."""
        outcome = "PASS" if self.success else "FAIL"
        if self.check is None:
            return f"[{outcome}] {self.message}"
        where = f" on HTTP {self.status_code}" if self.status_code is not None else ""
        return f"[{outcome}] {self.check}{where}: {self.message}"

    def __bool__(self) -> bool:
        """Boolean representation (True if validation passed)."""
        return self.success


class Validator(ABC):
    """Abstract base class for response validators."""

    @abstractmethod
    def validate(self, response: ApiResponse, **kwargs: Any) -> ValidationResult:
        """Validate an aspect of a response.

        Args:
            response: Response to validate
            **kwargs: Additional validation parameters

        Returns:
            Validation result
        """
        pass


class StatusValidator(Validator):
    """Validates that the status code is in an acceptable set."""

    def validate(
        self, response: ApiResponse, expected: Iterable[int] = (200,), **kwargs: Any
    ) -> ValidationResult:
        """Check the status code."""
        accepted = sorted(set(expected))
        details = {"actual": response.status_code, "expected": accepted}
        if response.status_code in accepted:
            return ValidationResult(True, f"Status {response.status_code} accepted", details)
        return ValidationResult(
            False, f"Status {response.status_code} not in {accepted}", details
        )


class ContentTypeValidator(Validator):
    """Validates the content-type header."""

    def validate(
        self,
        response: ApiResponse,
        pattern: str | re.Pattern[str] = JSON_CONTENT_TYPE,
        **kwargs: Any,
    ) -> ValidationResult:
        """Check the content-type header against a pattern.

        Args:
            response: Response to validate
            pattern: Regular expression searched case-insensitively
            **kwargs: Additional parameters

        Returns:
            Validation result
        """
        regex = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, re.IGNORECASE)
        content_type = response.content_type
        if not content_type:
            return ValidationResult(False, "Missing content-type header")
        if regex.search(content_type):
            return ValidationResult(True, f"Content-type matches: {content_type}")
        return ValidationResult(
            False,
            f"Content-type {content_type!r} does not match {regex.pattern!r}",
            {"actual": content_type},
        )


class BodyTypeValidator(Validator):
    """Validates the JSON type of the whole body."""

    def validate(
        self, response: ApiResponse, expected: str | list[str] = "object", **kwargs: Any
    ) -> ValidationResult:
        """Check the decoded body type."""
        if not response.is_json:
            return ValidationResult(False, "Response body is not JSON")
        actual = json_type_name(response.body)
        if matches_json_type(response.body, expected):
            return ValidationResult(True, f"Body is {actual}")
        return ValidationResult(False, f"Body is {actual}, expected {expected}")


class FieldsValidator(Validator):
    """Validates presence and JSON type of top-level body fields."""

    def validate(
        self,
        response: ApiResponse,
        fields: dict[str, str | list[str]] | None = None,
        **kwargs: Any,
    ) -> ValidationResult:
        """Check that every field exists with the expected type.

        Args:
            response: Response to validate
            fields: Mapping of field name to JSON type name(s)
            **kwargs: Additional parameters

        Returns:
            Validation result listing every missing or mistyped field
        """
        body = response.body
        if not isinstance(body, dict):
            return ValidationResult(False, f"Body is {json_type_name(body)}, expected object")

        problems = []
        for name, expected in (fields or {}).items():
            if name not in body:
                problems.append(f"missing '{name}'")
            elif not matches_json_type(body[name], expected):
                problems.append(f"'{name}' is {json_type_name(body[name])}, expected {expected}")

        if problems:
            return ValidationResult(
                False, f"Body fields invalid: {', '.join(problems)}", {"problems": problems}
            )
        return ValidationResult(True, f"Body fields present: {sorted(fields or {})}")


class FieldEqualsValidator(Validator):
    """Validates the value of a single top-level body field."""

    def validate(
        self, response: ApiResponse, field: str = "", expected: Any = None, **kwargs: Any
    ) -> ValidationResult:
        """Check a field value."""
        body = response.body
        if not isinstance(body, dict) or field not in body:
            return ValidationResult(False, f"Body has no field '{field}'")
        actual = body[field]
        if actual == expected:
            return ValidationResult(True, f"'{field}' equals {expected!r}")
        return ValidationResult(
            False,
            f"'{field}' is {actual!r}, expected {expected!r}",
            {"actual": actual, "expected": expected},
        )


class ListFieldValidator(Validator):
    """Validates that the body carries a list under one of several field names."""

    def validate(
        self,
        response: ApiResponse,
        fields: list[str] | str = "data",
        length: int | None = None,
        max_length: int | None = None,
        **kwargs: Any,
    ) -> ValidationResult:
        """Check the first present field among the alternatives.

        Args:
            response: Response to validate
            fields: Field name, or alternatives tried in order
            length: Optional exact length
            max_length: Optional maximum length
            **kwargs: Additional parameters

        Returns:
            Validation result, with the field name and length in details
        """
        names = [fields] if isinstance(fields, str) else list(fields)
        body = response.body
        if not isinstance(body, dict):
            return ValidationResult(False, f"Body is {json_type_name(body)}, expected object")

        name = next((candidate for candidate in names if candidate in body), None)
        if name is None:
            return ValidationResult(False, f"Body has none of the fields {names}")

        value = body[name]
        if not isinstance(value, list):
            return ValidationResult(False, f"'{name}' is {json_type_name(value)}, expected array")

        details = {"field": name, "length": len(value)}
        if length is not None and len(value) != length:
            return ValidationResult(
                False, f"'{name}' has {len(value)} items, expected {length}", details
            )
        if max_length is not None and len(value) > max_length:
            return ValidationResult(
                False, f"'{name}' has {len(value)} items, expected at most {max_length}", details
            )
        return ValidationResult(True, f"'{name}' is a list of {len(value)} items", details)


class ErrorBodyValidator(Validator):
    """Validates the error body shape: an object with a string 'error' field."""

    def validate(
        self,
        response: ApiResponse,
        message: str | None = None,
        pattern: str | None = None,
        **kwargs: Any,
    ) -> ValidationResult:
        """Check the error field.

        Args:
            response: Response to validate
            message: Optional exact error message
            pattern: Optional regular expression the message must match
            **kwargs: Additional parameters

        Returns:
            Validation result
        """
        body = response.body
        if not isinstance(body, dict) or "error" not in body:
            return ValidationResult(False, "Body has no 'error' field")

        error = body["error"]
        if not isinstance(error, str):
            return ValidationResult(False, f"'error' is {json_type_name(error)}, expected string")
        if message is not None and error != message:
            return ValidationResult(False, f"Error {error!r} is not {message!r}")
        if pattern is not None and not re.search(pattern, error):
            return ValidationResult(False, f"Error {error!r} does not match {pattern!r}")
        return ValidationResult(True, f"Error body: {error}")


class ValidationRunner:
    """Runs named validators and collects results."""

    def __init__(self):
        """Initialize validation runner."""
        self.validators: dict[str, Validator] = {
            "status": StatusValidator(),
            "content_type": ContentTypeValidator(),
            "body_type": BodyTypeValidator(),
            "fields": FieldsValidator(),
            "field_equals": FieldEqualsValidator(),
            "list_field": ListFieldValidator(),
            "error_body": ErrorBodyValidator(),
        }

    def run_validation(
        self, validation_type: str, response: ApiResponse, **params: Any
    ) -> ValidationResult:
        """Run a single validation.

        Args:
            validation_type: Name of the validator
            response: Response to validate
            **params: Validator parameters

        Returns:
            Validation result labelled with the check name and response status
        """
        if validation_type not in self.validators:
            result = ValidationResult(False, f"Unknown validation type: {validation_type}")
        else:
            validator = self.validators[validation_type]
            try:
                result = validator.validate(response, **params)
            except (TypeError, ValueError, re.error) as e:
                result = ValidationResult(False, f"Invalid {validation_type} parameters: {e}")

        result.check = validation_type
        result.status_code = response.status_code
        return result

    def run_all_validations(
        self, response: ApiResponse, validations: list[dict[str, Any]]
    ) -> list[ValidationResult]:
        """Run multiple validations against one response.

        Args:
            response: Response to validate
            validations: List of {"type": name, **params} dictionaries

        Returns:
            List of validation results
        """
        results = []
        for validation in validations:
            validation_type = validation.get("type")
            if not validation_type:
                results.append(
                    ValidationResult(False, "Invalid validation configuration: missing type")
                )
                continue

            params = {k: v for k, v in validation.items() if k != "type"}
            results.append(self.run_validation(validation_type, response, **params))

        return results
