"""Structured (JSON-ready) reports for operation outcomes."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sshit.models import Outcome


def _epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def build_report(
    operation: str,
    outcome: Outcome[Any, Any],
    started: datetime,
    ended: datetime,
    context: dict[str, Any] | None = None,
    payload: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the single JSON object describing one operation run.

    Args:
        operation: Operation name (e.g. "check")
        outcome: The operation's outcome
        started: Aware datetime taken before the operation ran
        ended: Aware datetime taken after it returned
        context: Inputs echoed back (host, socket, command)
        payload: Success fields; ignored for failures

    Returns:
        Dict with ok, operation, context, timing, and either the payload
        or failure/debugData
    """
    report: dict[str, Any] = {"ok": outcome.ok, "operation": operation}
    report.update({k: v for k, v in (context or {}).items() if v is not None})

    if outcome.ok:
        report.update(payload or {})
    else:
        report["failure"] = _plain(outcome.failure)
        report["debugData"] = outcome.debug_data

    started_ms = _epoch_ms(started)
    ended_ms = _epoch_ms(ended)
    report.update(
        {
            "startedAt": started_ms,
            "endedAt": ended_ms,
            "elapsedMilliseconds": ended_ms - started_ms,
            "startedAtUTC": started.astimezone(UTC).isoformat(),
            "endedAtUTC": ended.astimezone(UTC).isoformat(),
        }
    )
    return report


def utc_now() -> datetime:
    return datetime.now(UTC)
