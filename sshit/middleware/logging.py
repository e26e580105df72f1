"""Tool-call logging middleware with failure-kind tracking."""

import json
import logging
import time
from collections import Counter
from typing import Any

from fastmcp.server.middleware import Middleware, MiddlewareContext

# Argument values longer than this are cut in the call line
ARG_PREVIEW_CHARS = 60


def _report_from_result(result: Any) -> dict[str, Any] | None:
    """Extract the operation report from a tool result, if it carries one."""
    if isinstance(result, dict):
        return result
    structured = getattr(result, "structured_content", None)
    if isinstance(structured, dict):
        # Non-object tool outputs are wrapped as {"result": ...}
        inner = structured.get("result")
        return inner if isinstance(inner, dict) and "ok" in inner else structured
    return None


def describe_call(tool_name: str, arguments: dict[str, Any] | None) -> str:
    """Render a tool call as ``name(key='value', ...)`` with long values cut."""
    rendered = []
    for key, value in (arguments or {}).items():
        if isinstance(value, str) and len(value) > ARG_PREVIEW_CHARS:
            value = f"{value[:ARG_PREVIEW_CHARS]}..."
        rendered.append(f"{key}={value!r}")
    return f"{tool_name}({', '.join(rendered)})"


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class ToolLoggingMiddleware(Middleware):
    """Logs every tool call with its arguments, outcome and duration.

    Lifecycle failures come back as reports with ``ok: false`` rather than
    exceptions; they are logged at WARNING and counted per
    ``tool:FailureKind`` so repeated SocketDead or Timeout results stand out.

    Example:
        >>> server.add_middleware(ToolLoggingMiddleware(slow_threshold_ms=500.0))
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_payloads: bool = False,
        max_payload_length: int = 1000,
        slow_threshold_ms: float = 1000.0,
    ) -> None:
        """Initialize the middleware.

        Args:
            logger: Logger to write to (default: this module's logger).
            include_payloads: Also log each report at DEBUG.
            max_payload_length: Cut logged reports after this many characters.
            slow_threshold_ms: Calls at or above this duration are flagged slow.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.include_payloads = include_payloads
        self.max_payload_length = max_payload_length
        self.slow_threshold_ms = slow_threshold_ms
        self._failures: Counter[str] = Counter()

    def get_failure_stats(self) -> dict[str, int]:
        """Get operation failure counts keyed by ``tool:FailureKind``."""
        return dict(self._failures)

    def reset_stats(self) -> None:
        self._failures.clear()

    def _timing(self, duration_ms: float) -> str:
        flag = " SLOW!" if self._is_slow(duration_ms) else ""
        return f"{duration_ms:.1f}ms{flag}"

    def _is_slow(self, duration_ms: float) -> bool:
        return duration_ms >= self.slow_threshold_ms

    def _payload_preview(self, report: dict[str, Any]) -> str:
        text = json.dumps(report, default=str)
        if len(text) <= self.max_payload_length:
            return text
        return f"{text[: self.max_payload_length]}... [truncated]"

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log the call, then its outcome and timing."""
        tool_name = getattr(context.message, "name", "unknown")
        call = describe_call(tool_name, getattr(context.message, "arguments", None))
        self.logger.info(">>> TOOL: %s", call)

        start = time.perf_counter()
        try:
            result = await call_next(context)
        except Exception as e:
            self.logger.error(
                "!!! TOOL: %s raised %s: %s [%s]",
                tool_name,
                type(e).__name__,
                e,
                self._timing(_elapsed_ms(start)),
            )
            raise

        duration_ms = _elapsed_ms(start)
        report = _report_from_result(result)

        if report is not None and report.get("ok") is False:
            kind = str(report.get("failure", "unknown"))
            self._failures[f"{tool_name}:{kind}"] += 1
            self.logger.warning(
                "<<< TOOL: %s -> failed: %s [%s]", tool_name, kind, self._timing(duration_ms)
            )
        else:
            self.logger.log(
                logging.WARNING if self._is_slow(duration_ms) else logging.INFO,
                "<<< TOOL: %s -> ok [%s]",
                tool_name,
                self._timing(duration_ms),
            )

        if self.include_payloads and report is not None:
            self.logger.debug("    Report: %s", self._payload_preview(report))

        return result
