"""Error handling middleware for exceptions escaping a request."""

import logging
from collections import Counter
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server.middleware import Middleware, MiddlewareContext


class ErrorHandlingMiddleware(Middleware):
    """Logs and counts exceptions escaping request handling, then re-raises.

    Lifecycle operations report their failures as values, so what reaches
    this middleware is either rejected input (ToolError, logged at WARNING)
    or a bug (anything else, logged at ERROR).
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.include_traceback = include_traceback
        self._counts: Counter[str] = Counter()

    def get_error_stats(self) -> dict[str, int]:
        """Get error counts by exception type name."""
        return dict(self._counts)

    def reset_stats(self) -> None:
        self._counts.clear()

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        try:
            return await call_next(context)
        except ToolError as e:
            self._counts[type(e).__name__] += 1
            self.logger.warning("Rejected %s: %s", context.method, e)
            raise
        except Exception as e:
            self._counts[type(e).__name__] += 1
            self.logger.error(
                "Unexpected error in %s: %s: %s",
                context.method,
                type(e).__name__,
                e,
                exc_info=self.include_traceback,
            )
            raise
