"""sshit MCP middleware components."""

from sshit.middleware.errors import ErrorHandlingMiddleware
from sshit.middleware.logging import ToolLoggingMiddleware

__all__ = ["ErrorHandlingMiddleware", "ToolLoggingMiddleware"]
