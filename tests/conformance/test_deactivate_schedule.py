"""
Conformance tests for POST /api/v1/schedules/{schedule_id}/deactivate.
"""

import pytest

from api_conformance.assertions import assert_field_equals, assert_fields, assert_response
from api_conformance.config import LIMITS, NOT_FOUND, OK, VALIDATION
from api_conformance.endpoints import get_endpoint
from api_conformance.payloads import large_string

pytestmark = pytest.mark.conformance

ENDPOINT = get_endpoint("deactivate_schedule")


class TestDeactivateScheduleSuccess:
    """Deactivating an existing schedule."""

    @pytest.mark.mutating
    def test_deactivates_schedule(self, api_client, fixture_ids):
        """Test that the schedule is returned with its type and state."""
        path = ENDPOINT.path(schedule_id=fixture_ids.schedule_id)
        response = assert_response(api_client.post(path), OK)
        assert_fields(response, {"id": "string", "type": "string"})
        assert_field_equals(response, "id", fixture_ids.schedule_id)


class TestDeactivateScheduleValidation:
    """Malformed schedule ids."""

    @pytest.mark.parametrize("schedule_id", ["!!!", "   "], ids=["punctuation", "whitespace"])
    def test_invalid_id(self, api_client, schedule_id):
        """Test that ids without a usable character are rejected."""
        response = api_client.post(ENDPOINT.path(schedule_id=schedule_id))
        assert_response(response, VALIDATION | NOT_FOUND)

    def test_empty_id(self, api_client):
        """Test that an empty id segment is rejected."""
        response = api_client.post(ENDPOINT.path(schedule_id=""))
        assert_response(response, VALIDATION | NOT_FOUND)

    def test_very_long_id(self, api_client):
        """Test that an oversized id is rejected or not found."""
        path = ENDPOINT.path(schedule_id=large_string(LIMITS["long_identifier"], "s"))
        assert_response(api_client.post(path), VALIDATION | NOT_FOUND)


class TestDeactivateScheduleNotFound:
    """Deactivating a schedule that does not exist."""

    def test_unknown_schedule(self, api_client, fixture_ids):
        """Test that a missing schedule yields 404."""
        path = ENDPOINT.path(schedule_id=fixture_ids.missing_schedule_id)
        assert_response(api_client.post(path), NOT_FOUND)
