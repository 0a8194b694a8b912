"""Data contract for the agent service's thread/message/run resources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class RunOutcome(StrEnum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Different service generations report success/failure with different words
SUCCESS_STATUSES = frozenset({"completed", "succeeded", "finished"})
FAILURE_STATUSES = frozenset({"failed", "cancelled", "canceled", "expired", "error"})


@dataclass
class Run:
    """A snapshot of one run as returned by the service."""

    id: str
    status: str  # lowercased
    error_message: str | None = None

    @property
    def outcome(self) -> RunOutcome:
        if self.status in SUCCESS_STATUSES:
            return RunOutcome.SUCCEEDED
        if self.status in FAILURE_STATUSES:
            return RunOutcome.FAILED
        return RunOutcome.PENDING

    @classmethod
    def from_payload(cls, payload: dict[str, Any], run_id: str = "") -> Run:
        """Build from a get-run response.

        Status may arrive as ``status`` or ``state``; error detail as
        ``last_error.message`` or ``error.message``.
        """
        status = payload.get("status") or payload.get("state") or ""
        error_message = None
        for key in ("last_error", "error"):
            err = payload.get(key)
            if isinstance(err, dict) and isinstance(err.get("message"), str) and err["message"]:
                error_message = err["message"]
                break
        return cls(
            id=str(payload.get("id") or run_id),
            status=str(status).lower(),
            error_message=error_message,
        )
