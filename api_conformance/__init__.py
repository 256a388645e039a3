"""
Black-box HTTP conformance harness for the task-execution service REST API.

The package holds the shared pieces every endpoint suite needs (settings,
HTTP client, endpoint catalogue, payload builders, validators and the
declarative case runner) so the test modules only describe requests and
expectations.
"""

__version__ = "0.1.0"
