"""
Shared constants for the API conformance suites.
"""

import re

# Acceptable status-code families. Tests combine them with set union.
OK = frozenset({200})
VALIDATION = frozenset({400, 422})
AUTH = frozenset({401, 403})
NOT_FOUND = frozenset({404})
TOO_LARGE = frozenset({413})
URI_TOO_LONG = frozenset({414})
SERVER_ERROR = frozenset({500})

# Responses are expected to carry a JSON content type, parameters allowed
JSON_CONTENT_TYPE = re.compile(r"application/json", re.IGNORECASE)

# Bearer token sent by the invalid-credential checks
INVALID_TOKEN = "INVALID_TOKEN"

# Placeholder identifiers; override them in the settings file to point the
# success-path tests at real resources.
DEFAULT_FIXTURE_IDS = {
    "project_ref": "my-project",
    "env": "staging",
    "envvar_name": "TEST_VAR",
    "envvar_value": "someValue",
    "deletable_envvar_name": "DELETE_ME_VAR",
    "missing_project_ref": "non-existent-project",
    "missing_env": "non-existing-env",
    "missing_envvar_name": "NON_EXISTENT_VAR",
    "schedule_id": "sched_1234",
    "deletable_schedule_id": "sched_delete_1234",
    "missing_schedule_id": "sched_does_not_exist",
    "run_id": "run_existing_1234",
    "delayed_run_id": "run_delayed_1234",
    "missing_run_id": "run_nonexistent_123",
    "task_identifier": "validTask123",
    "missing_task_identifier": "does-not-exist-000",
}

# Size limits used by edge-case tests
LIMITS = {
    "batch_max_items": 500,  # Maximum tasks accepted by a single batch trigger
    "long_identifier": 1000,  # Length of oversized path identifiers
    "huge_identifier": 10000,  # Length of identifiers that should never be accepted
    "large_value": 10000,  # Characters in a large string field
    "huge_value": 100000,  # Characters in a payload expected to hit size limits
    "import_bulk_count": 1000,  # Variables in a bulk envvar import
}

# Timeout constants (in seconds)
TIMEOUT_CONSTANTS = {
    "request_default": 30.0,  # Default timeout for API requests
    "reachability_check": 5.0,  # Timeout for the pre-suite reachability check
}

# Characters of a response body kept in assertion messages
BODY_EXCERPT_LIMIT = 500
