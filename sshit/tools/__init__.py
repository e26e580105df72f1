"""MCP tools for sshit."""

from sshit.tools.sockets import (
    socket_check,
    socket_create,
    socket_exec,
    socket_exit,
    socket_path,
    socket_remove,
    socket_teardown,
    socket_validate,
)

__all__ = [
    "socket_check",
    "socket_create",
    "socket_exec",
    "socket_exit",
    "socket_path",
    "socket_remove",
    "socket_teardown",
    "socket_validate",
]
