"""Tests for the error taxonomy and its serialized form."""

import pytest

from app.core.errors import (
    DateParseError,
    ErrorCategory,
    ErrorContext,
    IntervalsApiError,
    ToolInputError,
    TrainerRoadApiError,
    WhoopApiError,
)

CONTEXT = ErrorContext(operation="fetch activities", resource="activities from 2024-12-01 to 2024-12-29")


@pytest.mark.parametrize(
    ("status", "category", "retryable"),
    [
        (400, ErrorCategory.VALIDATION, False),
        (401, ErrorCategory.AUTHENTICATION, False),
        (403, ErrorCategory.AUTHORIZATION, False),
        (404, ErrorCategory.NOT_FOUND, False),
        (429, ErrorCategory.RATE_LIMIT, True),
        (502, ErrorCategory.SERVICE_UNAVAILABLE, True),
        (418, ErrorCategory.INTERNAL, False),
    ],
)
def test_intervals_status_mapping(status, category, retryable):
    error = IntervalsApiError.from_http_status(status, CONTEXT)
    assert error.category == category
    assert error.is_retryable is retryable
    assert error.status_code == status
    assert f"HTTP {status}" in error.message


def test_trainerroad_forbidden_is_authentication():
    error = TrainerRoadApiError.from_http_status(403, CONTEXT, "Forbidden")
    assert error.category == ErrorCategory.AUTHENTICATION
    assert error.message.endswith("(HTTP 403 Forbidden)")


def test_whoop_refresh_error_categories():
    assert WhoopApiError.token_refresh_error(400).category == ErrorCategory.AUTHENTICATION
    server = WhoopApiError.token_refresh_error(503)
    assert server.category == ErrorCategory.SERVICE_UNAVAILABLE
    assert server.is_retryable
    assert WhoopApiError.token_refresh_error(original=OSError("reset")).is_retryable


def test_to_dict_payload():
    payload = IntervalsApiError.from_http_status(404, CONTEXT, "Not Found").to_dict()

    assert payload["code"] == "NOT_FOUND"
    assert payload["category"] == "not_found"
    assert payload["source"] == "intervals"
    assert payload["retryable"] is False
    assert payload["status_code"] == 404
    assert payload["what_happened"] == (
        "The fetch activities operation for activities from 2024-12-01 to 2024-12-29 failed."
    )
    assert "listing tool" in payload["how_to_fix"]


def test_network_error_has_no_status():
    payload = IntervalsApiError.network_error(CONTEXT, ConnectionError("refused")).to_dict()
    assert payload["code"] == "NETWORK"
    assert payload["retryable"] is True
    assert "status_code" not in payload
    assert "refused" in payload["message"]


def test_date_parse_error():
    error = DateParseError("  the other day ", "start_date")

    assert error.category == ErrorCategory.DATE_PARSE
    assert error.message.startswith("I couldn't understand 'the other day' as a date for start_date.")
    assert error.what_happened() == "The start_date parameter couldn't be parsed as a valid date."
    assert error.context.parameters == {"start_date": "  the other day "}
    assert error.to_dict()["source"] == "date_parser"


def test_tool_input_error():
    error = ToolInputError("Invalid arguments for get_recent_workouts: days: too big", "get_recent_workouts", {"days": 900})
    payload = error.to_dict()

    assert payload["code"] == "VALIDATION"
    assert payload["source"] == "tools"
    assert payload["what_happened"] == "The call get_recent_workouts operation failed."
