"""
Conformance tests for POST /api/v1/runs/{runId}/replay.
"""

import pytest

from api_conformance.assertions import assert_fields, assert_response
from api_conformance.config import LIMITS, NOT_FOUND, OK, VALIDATION
from api_conformance.endpoints import get_endpoint
from api_conformance.payloads import large_string

pytestmark = pytest.mark.conformance

ENDPOINT = get_endpoint("replay_run")


class TestReplayRunSuccess:
    """Replaying an existing run."""

    @pytest.mark.mutating
    def test_replays_run(self, api_client, fixture_ids):
        """Test that replay answers with the id of the new run."""
        response = assert_response(api_client.post(ENDPOINT.path(runId=fixture_ids.run_id)), OK)
        body = assert_fields(response, {"id": "string"})
        assert body["id"]


class TestReplayRunValidation:
    """Malformed run ids."""

    def test_invalid_run_id(self, api_client):
        """Test that a punctuation-only id is rejected."""
        assert_response(api_client.post(ENDPOINT.path(runId="!!!")), VALIDATION | NOT_FOUND)

    def test_empty_run_id(self, api_client):
        """Test that an empty id segment is rejected."""
        response = api_client.post(ENDPOINT.path(runId=""))
        assert_response(response, VALIDATION | NOT_FOUND)

    def test_very_long_run_id(self, api_client):
        """Test that an oversized id is rejected or not found."""
        path = ENDPOINT.path(runId=large_string(LIMITS["long_identifier"], "r"))
        assert_response(api_client.post(path), {400} | NOT_FOUND)


class TestReplayRunNotFound:
    """Replaying a run that does not exist."""

    def test_unknown_run(self, api_client, fixture_ids):
        """Test that a missing run yields 404."""
        assert_response(api_client.post(ENDPOINT.path(runId=fixture_ids.missing_run_id)), NOT_FOUND)
