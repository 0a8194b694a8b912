"""Error taxonomy for the meal planner proxy.

Every error raised while serving a plan request derives from
MealPlannerError. The REST layer catches it once, logs it and turns it into
``{"error": ..., "details": ...}`` with ``status_code``.
"""

from __future__ import annotations

from typing import Any

# Upstream bodies can be large HTML error pages
_MAX_BODY_CHARS = 2000


def _truncate(body: str | None) -> str:
    if not body:
        return ""
    if len(body) <= _MAX_BODY_CHARS:
        return body
    return body[:_MAX_BODY_CHARS] + "..."


class MealPlannerError(Exception):
    """Base class; subclasses set the HTTP status returned to the caller."""

    status_code = 500

    def details(self) -> dict[str, Any]:
        return {}


class ConfigError(MealPlannerError):
    """Required server-side configuration is missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")

    def details(self) -> dict[str, Any]:
        return {"missing": self.missing}


class ValidationError(MealPlannerError):
    """The caller sent an unusable request body."""

    status_code = 400


class AuthError(MealPlannerError):
    """Token exchange failed or returned no access token."""

    def __init__(self, message: str, upstream_status: int | None = None, body: str | None = None) -> None:
        self.upstream_status = upstream_status
        self.body = _truncate(body)
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        if self.upstream_status is None:
            return {}
        return {"upstream_status": self.upstream_status}


class UpstreamError(MealPlannerError):
    """An agent service call failed or returned an unusable payload."""

    def __init__(
        self,
        operation: str,
        message: str,
        upstream_status: int | None = None,
        body: str | None = None,
    ) -> None:
        self.operation = operation
        self.upstream_status = upstream_status
        self.body = _truncate(body)
        super().__init__(f"{operation} failed: {message}")

    def details(self) -> dict[str, Any]:
        result: dict[str, Any] = {"operation": self.operation}
        if self.upstream_status is not None:
            result["upstream_status"] = self.upstream_status
        if self.body:
            result["body"] = self.body
        return result


class RunTimeoutError(MealPlannerError):
    """The run did not reach a terminal status within the poll ceiling."""

    def __init__(self, last_status: str, elapsed_ms: int, timeout_ms: int) -> None:
        self.last_status = last_status
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        super().__init__(f"Run polling timed out after {timeout_ms}ms. Last status: {last_status}")

    def details(self) -> dict[str, Any]:
        return {"last_status": self.last_status, "elapsed_ms": self.elapsed_ms}


class RunFailedError(MealPlannerError):
    """The run ended failed, cancelled or expired."""

    def __init__(self, status: str, detail: str | None = None) -> None:
        self.status = status
        self.detail = detail
        super().__init__(detail or f"Run ended with status: {status}")

    def details(self) -> dict[str, Any]:
        return {"status": self.status}


class EmptyResponseError(MealPlannerError):
    """The run completed but no assistant text could be extracted."""

    def __init__(self, message: str = "No assistant text found in messages response.") -> None:
        super().__init__(message)
