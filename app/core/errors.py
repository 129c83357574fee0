"""Error taxonomy for tool and API failures.

Every error raised towards a tool caller is an ``ApiError``. Messages are
written to be read by a language model: they say what failed and how to
recover. Subclasses add per-platform constructors for HTTP status codes
and network failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorCategory(StrEnum):
    DATE_PARSE = "date_parse"
    NOT_FOUND = "not_found"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    SERVICE_UNAVAILABLE = "service_unavailable"
    VALIDATION = "validation"
    INTERNAL = "internal"


class ErrorSource(StrEnum):
    INTERVALS = "intervals"
    WHOOP = "whoop"
    TRAINERROAD = "trainerroad"
    DATE_PARSER = "date_parser"
    TOOLS = "tools"


@dataclass(frozen=True)
class ErrorContext:
    """What was being attempted when an error occurred."""

    operation: str
    resource: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)


_HOW_TO_FIX: dict[ErrorCategory, str] = {
    ErrorCategory.NOT_FOUND: "Double-check that the ID or date range is correct. Use the appropriate listing tool to find valid IDs.",
    ErrorCategory.AUTHENTICATION: "The API credentials may be invalid or expired. Please check the configuration.",
    ErrorCategory.AUTHORIZATION: "The configured API key may not have permission for this operation.",
    ErrorCategory.RATE_LIMIT: "Wait a moment before trying again. The API is temporarily limiting requests.",
    ErrorCategory.NETWORK: "This is usually a temporary connectivity issue. Please try again in a moment.",
    ErrorCategory.SERVICE_UNAVAILABLE: "The external service is temporarily unavailable. Please try again shortly.",
    ErrorCategory.VALIDATION: "Please check that all input parameters are valid and in the expected format.",
    ErrorCategory.DATE_PARSE: "Try using a format like '2024-12-25', 'yesterday', '7 days ago', 'last week', or 'last month'.",
}
_DEFAULT_HOW_TO_FIX = "An unexpected error occurred. Please try again or contact support if the issue persists."


class ApiError(Exception):
    """Base error for all API and tool failures."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        is_retryable: bool,
        context: ErrorContext,
        source: ErrorSource,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        self.message = message
        self.category = category
        self.is_retryable = is_retryable
        self.context = context
        self.source = source
        self.status_code = status_code
        self.reason = reason
        super().__init__(self.message)

    def what_happened(self) -> str:
        resource_info = f" for {self.context.resource}" if self.context.resource else ""
        return f"The {self.context.operation} operation{resource_info} failed."

    def how_to_fix(self) -> str:
        return _HOW_TO_FIX.get(self.category, _DEFAULT_HOW_TO_FIX)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for an error payload returned to the tool caller."""
        payload: dict[str, Any] = {
            "code": self.category.value.upper(),
            "message": self.message,
            "category": self.category.value,
            "source": self.source.value,
            "retryable": self.is_retryable,
            "what_happened": self.what_happened(),
            "how_to_fix": self.how_to_fix(),
        }
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        return payload


class DateParseError(ApiError):
    """Raised when a natural-language date cannot be understood."""

    def __init__(self, input_value: str, parameter_name: str = "date", message: str | None = None):
        self.input_value = input_value
        self.parameter_name = parameter_name
        super().__init__(
            message or self.build_message(input_value, parameter_name),
            ErrorCategory.DATE_PARSE,
            False,
            ErrorContext(
                operation="parse date",
                resource=f"{parameter_name} parameter",
                parameters={parameter_name: input_value},
            ),
            ErrorSource.DATE_PARSER,
        )

    @staticmethod
    def build_message(input_value: str, parameter_name: str) -> str:
        return (
            f"I couldn't understand '{input_value.strip()}' as a date for {parameter_name}. "
            "Try formats like '2024-12-25', 'yesterday', '7 days ago', 'last week', or 'last month'."
        )

    def what_happened(self) -> str:
        return f"The {self.parameter_name} parameter couldn't be parsed as a valid date."


class ToolInputError(ApiError):
    """Raised when tool arguments fail validation."""

    def __init__(self, message: str, tool_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(
            message,
            ErrorCategory.VALIDATION,
            False,
            ErrorContext(operation=f"call {tool_name}", parameters=parameters or {}),
            ErrorSource.TOOLS,
        )


def _status_label(status_code: int, reason: str | None) -> str:
    return f"HTTP {status_code} {reason}".rstrip() if reason else f"HTTP {status_code}"


def _categorize_status(status_code: int) -> tuple[ErrorCategory, bool]:
    """Map an HTTP status code to (category, is_retryable)."""
    if status_code == 400:
        return ErrorCategory.VALIDATION, False
    if status_code == 401:
        return ErrorCategory.AUTHENTICATION, False
    if status_code == 403:
        return ErrorCategory.AUTHORIZATION, False
    if status_code == 404:
        return ErrorCategory.NOT_FOUND, False
    if status_code == 429:
        return ErrorCategory.RATE_LIMIT, True
    if status_code >= 500:
        return ErrorCategory.SERVICE_UNAVAILABLE, True
    return ErrorCategory.INTERNAL, False


class IntervalsApiError(ApiError):
    """Raised when an Intervals.icu call fails."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        is_retryable: bool,
        context: ErrorContext,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        super().__init__(message, category, is_retryable, context, ErrorSource.INTERVALS, status_code, reason)

    @classmethod
    def from_http_status(cls, status_code: int, context: ErrorContext, reason: str | None = None) -> IntervalsApiError:
        category, is_retryable = _categorize_status(status_code)
        resource_info = f" '{context.resource}'" if context.resource else ""
        messages = {
            ErrorCategory.VALIDATION: f"The request to {context.operation} was invalid. Please check the parameters.",
            ErrorCategory.AUTHENTICATION: "Authentication failed with Intervals.icu. The API key may be invalid or expired.",
            ErrorCategory.AUTHORIZATION: (
                f"Access denied for {context.operation}. The API key may not have permission for this operation."
            ),
            ErrorCategory.NOT_FOUND: f"I couldn't find{resource_info}. It may have been deleted or the ID might be incorrect.",
            ErrorCategory.RATE_LIMIT: "Intervals.icu is temporarily limiting requests. Please try again in a few seconds.",
            ErrorCategory.SERVICE_UNAVAILABLE: "Intervals.icu is temporarily unavailable. Please try again shortly.",
        }
        base = messages.get(category, "An unexpected error occurred with Intervals.icu.")
        message = f"{base} ({_status_label(status_code, reason)})"
        return cls(message, category, is_retryable, context, status_code, reason)

    @classmethod
    def network_error(cls, context: ErrorContext, original: Exception | None = None) -> IntervalsApiError:
        detail = f": {original}" if original else ""
        return cls(
            f"I'm having trouble connecting to Intervals.icu{detail}. This is usually temporary. Please try again in a moment.",
            ErrorCategory.NETWORK,
            True,
            context,
        )


class TrainerRoadApiError(ApiError):
    """Raised when the TrainerRoad calendar feed cannot be fetched or read."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        is_retryable: bool,
        context: ErrorContext,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        super().__init__(message, category, is_retryable, context, ErrorSource.TRAINERROAD, status_code, reason)

    @classmethod
    def from_http_status(cls, status_code: int, context: ErrorContext, reason: str | None = None) -> TrainerRoadApiError:
        is_retryable = status_code >= 500 or status_code == 429
        if status_code in (401, 403):
            category = ErrorCategory.AUTHENTICATION
            base = "The TrainerRoad calendar URL may be invalid or expired. Please check the configuration."
        elif status_code == 404:
            category = ErrorCategory.NOT_FOUND
            base = "I couldn't find the TrainerRoad calendar. The URL may be incorrect."
        elif status_code == 429:
            category = ErrorCategory.RATE_LIMIT
            base = "TrainerRoad is temporarily limiting requests. Please try again in a few seconds."
        elif status_code >= 500:
            category = ErrorCategory.SERVICE_UNAVAILABLE
            base = "TrainerRoad is temporarily unavailable. Please try again shortly."
        else:
            category = ErrorCategory.INTERNAL
            base = "An unexpected error occurred with TrainerRoad."
        message = f"{base} ({_status_label(status_code, reason)})"
        return cls(message, category, is_retryable, context, status_code, reason)

    @classmethod
    def network_error(cls, context: ErrorContext, original: Exception | None = None) -> TrainerRoadApiError:
        detail = f": {original}" if original else ""
        return cls(
            f"I'm having trouble connecting to TrainerRoad{detail}. This is usually temporary. Please try again in a moment.",
            ErrorCategory.NETWORK,
            True,
            context,
        )

    @classmethod
    def parse_error(cls, context: ErrorContext, original: Exception | None = None) -> TrainerRoadApiError:
        detail = f": {original}" if original else ""
        return cls(
            f"I couldn't read the TrainerRoad calendar{detail}. The calendar feed may be in an unexpected format.",
            ErrorCategory.VALIDATION,
            False,
            context,
        )


class WhoopApiError(ApiError):
    """Raised when a Whoop call or token refresh fails."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        is_retryable: bool,
        context: ErrorContext,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        super().__init__(message, category, is_retryable, context, ErrorSource.WHOOP, status_code, reason)

    @classmethod
    def from_http_status(cls, status_code: int, context: ErrorContext, reason: str | None = None) -> WhoopApiError:
        category, is_retryable = _categorize_status(status_code)
        resource_info = f" for {context.resource}" if context.resource else ""
        messages = {
            ErrorCategory.VALIDATION: f"The request to Whoop{resource_info} was invalid. Please check the parameters.",
            ErrorCategory.AUTHENTICATION: "Authentication failed with Whoop. The access token may be invalid or expired.",
            ErrorCategory.AUTHORIZATION: (
                f"Access denied for Whoop{resource_info}. The token may not have permission for this operation."
            ),
            ErrorCategory.NOT_FOUND: f"I couldn't find the Whoop data{resource_info}. It may not exist or may not be available yet.",
            ErrorCategory.RATE_LIMIT: "Whoop is temporarily limiting requests. Please try again in a few seconds.",
            ErrorCategory.SERVICE_UNAVAILABLE: "Whoop is temporarily unavailable. Please try again shortly.",
        }
        base = messages.get(category, "An unexpected error occurred with Whoop.")
        message = f"{base} ({_status_label(status_code, reason)})"
        return cls(message, category, is_retryable, context, status_code, reason)

    @classmethod
    def network_error(cls, context: ErrorContext, original: Exception | None = None) -> WhoopApiError:
        detail = f": {original}" if original else ""
        return cls(
            f"I'm having trouble connecting to Whoop{detail}. This is usually temporary. Please try again in a moment.",
            ErrorCategory.NETWORK,
            True,
            context,
        )

    @classmethod
    def token_refresh_error(
        cls,
        status_code: int | None = None,
        reason: str | None = None,
        original: Exception | None = None,
    ) -> WhoopApiError:
        detail = f" ({_status_label(status_code, reason)})" if status_code is not None else ""
        if original:
            detail += f" Original error: {original}"
        return cls(
            f"The Whoop token refresh failed{detail}. Please try this request again in a few moments; "
            "if it keeps failing the refresh token may need to be re-issued.",
            ErrorCategory.AUTHENTICATION if status_code in (400, 401) else ErrorCategory.SERVICE_UNAVAILABLE,
            status_code is None or status_code >= 500,
            ErrorContext(operation="refresh authentication token"),
            status_code,
            reason,
        )

    @classmethod
    def missing_credentials(cls) -> WhoopApiError:
        return cls(
            "Whoop is not configured. Set WHOOP_CLIENT_ID, WHOOP_CLIENT_SECRET and a refresh token to enable it.",
            ErrorCategory.AUTHENTICATION,
            False,
            ErrorContext(operation="authenticate with Whoop"),
        )
