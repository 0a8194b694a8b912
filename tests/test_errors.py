"""Tests for the error taxonomy's messages, status codes and details."""

import pytest

from mealplanner.errors import (
    AuthError,
    ConfigError,
    EmptyResponseError,
    MealPlannerError,
    RunFailedError,
    RunTimeoutError,
    UpstreamError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc,status",
    [
        (ValidationError("bad"), 400),
        (ConfigError(["AGENT_ID"]), 500),
        (AuthError("no token"), 500),
        (UpstreamError("Create thread", "boom"), 500),
        (RunTimeoutError("queued", 121000, 120000), 500),
        (RunFailedError("failed"), 500),
        (EmptyResponseError(), 500),
    ],
)
def test_status_codes(exc, status):
    assert isinstance(exc, MealPlannerError)
    assert exc.status_code == status


def test_upstream_error_truncates_body():
    err = UpstreamError("List messages", "(502): gateway", upstream_status=502, body="x" * 5000)

    assert str(err) == "List messages failed: (502): gateway"
    assert len(err.body) == 2003
    assert err.details() == {"operation": "List messages", "upstream_status": 502, "body": err.body}


def test_timeout_message_names_last_status():
    err = RunTimeoutError("in_progress", 120500, 120000)

    assert str(err) == "Run polling timed out after 120000ms. Last status: in_progress"
    assert err.details() == {"last_status": "in_progress", "elapsed_ms": 120500}


def test_run_failed_prefers_upstream_detail():
    assert str(RunFailedError("failed", "Rate limit is exceeded.")) == "Rate limit is exceeded."
    assert str(RunFailedError("cancelled")) == "Run ended with status: cancelled"


def test_auth_error_details_only_with_status():
    assert AuthError("network down").details() == {}
    assert AuthError("denied", upstream_status=401, body="{}").details() == {"upstream_status": 401}
