"""
Assertion helpers for the conformance test modules.

Each helper runs the matching validator and raises AssertionError with the
validator message and an excerpt of the response body, so a failing test
shows what the service actually answered.
"""

from collections.abc import Iterable
import re
from typing import Any

from api_conformance.config import BODY_EXCERPT_LIMIT, JSON_CONTENT_TYPE
from api_conformance.http_client import ApiResponse
from api_conformance.validators import (
    ContentTypeValidator,
    ErrorBodyValidator,
    FieldEqualsValidator,
    FieldsValidator,
    ListFieldValidator,
    StatusValidator,
    ValidationResult,
)


def body_excerpt(response: ApiResponse, limit: int = BODY_EXCERPT_LIMIT) -> str:
    """Shorten a response body for assertion messages."""
    text = response.text or ""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"


def _check(result: ValidationResult, response: ApiResponse) -> None:
    if not result:
        raise AssertionError(f"{result.message}\nResponse body: {body_excerpt(response)}")


def assert_status(response: ApiResponse, expected: int | Iterable[int]) -> None:
    """Assert the status code is one of the accepted codes.

    Args:
        response: Response under test
        expected: A status code or a set of acceptable codes
    """
    accepted = [expected] if isinstance(expected, int) else list(expected)
    _check(StatusValidator().validate(response, expected=accepted), response)


def assert_json_content_type(
    response: ApiResponse, pattern: str | re.Pattern[str] = JSON_CONTENT_TYPE
) -> None:
    """Assert the response declares a JSON content type."""
    _check(ContentTypeValidator().validate(response, pattern=pattern), response)


def assert_fields(response: ApiResponse, fields: dict[str, str | list[str]]) -> dict[str, Any]:
    """Assert the body is an object carrying typed fields.

    Args:
        response: Response under test
        fields: Mapping of field name to JSON type name(s)

    Returns:
        The decoded body
    """
    _check(FieldsValidator().validate(response, fields=fields), response)
    return response.body


def assert_field_equals(response: ApiResponse, field: str, expected: Any) -> None:
    """Assert a top-level body field has the expected value."""
    _check(FieldEqualsValidator().validate(response, field=field, expected=expected), response)


def assert_list_field(
    response: ApiResponse,
    fields: str | list[str],
    length: int | None = None,
    max_length: int | None = None,
) -> list[Any]:
    """Assert the body carries a list under one of the given names.

    Args:
        response: Response under test
        fields: Field name, or alternatives tried in order
        length: Optional exact length
        max_length: Optional maximum length

    Returns:
        The list found in the body
    """
    result = ListFieldValidator().validate(
        response, fields=fields, length=length, max_length=max_length
    )
    _check(result, response)
    return response.body[result.details["field"]]


def assert_error_body(
    response: ApiResponse, message: str | None = None, pattern: str | None = None
) -> str:
    """Assert the body is an error object and return its message."""
    _check(ErrorBodyValidator().validate(response, message=message, pattern=pattern), response)
    return response.body["error"]


def assert_response(
    response: ApiResponse,
    status: int | Iterable[int],
    json: bool = True,
    fields: dict[str, str | list[str]] | None = None,
    error: bool = False,
) -> ApiResponse:
    """Assert the common expectations of a conformance test in one call.

    Args:
        response: Response under test
        status: A status code or a set of acceptable codes
        json: Whether the response must declare a JSON content type
        fields: Optional typed fields the body must carry
        error: Whether the body must be an error object

    Returns:
        The response, for further checks
    """
    assert_status(response, status)
    if json:
        assert_json_content_type(response)
    if fields:
        assert_fields(response, fields)
    if error:
        assert_error_body(response)
    return response
