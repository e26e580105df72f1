"""MCP tools for SSH control socket lifecycle management."""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from sshit.tools.handlers import (
    handle_check,
    handle_create,
    handle_exec,
    handle_exit,
    handle_remove,
    handle_teardown,
    handle_validate,
    socket_path_for,
)
from sshit.utils.validation import validate_host

logger = logging.getLogger(__name__)


def _checked_host(host: str) -> str:
    try:
        return validate_host(host)
    except ValueError as e:
        logger.warning("Rejected host %r: %s", host, e)
        raise ToolError(str(e)) from e


async def socket_create(
    host: str,
    socket_path: str | None = None,
    connect_timeout: int | None = None,
    server_alive_interval: int | None = None,
) -> dict[str, Any]:
    """Start a persistent background SSH control master for a host.

    Args:
        host: Host to connect to (e.g. "user@10.0.0.3" or an ssh config alias).
        socket_path: Control socket path. Defaults to /tmp/sshit-ctrl-<host>.
        connect_timeout: Connect timeout in seconds (default: 10).
        server_alive_interval: Keep-alive interval in seconds (default: 30).

    Returns:
        Report with ok, path/host/createdAt on success or failure/debugData
        (AuthenticationFailed, HostKeyVerificationFailed, HostNotFound,
        ConnectionRefused, PermissionDenied, Timeout, UnknownError).
    """
    return await handle_create(
        _checked_host(host),
        socket_path,
        connect_timeout=connect_timeout,
        server_alive_interval=server_alive_interval,
    )


async def socket_check(host: str, socket_path: str | None = None) -> dict[str, Any]:
    """Check whether a control socket's master is alive or dead.

    Fails with SocketNotFound when the socket file does not exist.
    """
    return await handle_check(_checked_host(host), socket_path)


async def socket_exec(
    host: str,
    command: str,
    socket_path: str | None = None,
    timeout: int | None = None,
    stdout_formats: list[str] | None = None,
    stderr_formats: list[str] | None = None,
) -> dict[str, Any]:
    """Run a command on a host over its existing control socket.

    Never opens a new connection: a missing socket fails with SocketNotFound.
    A nonzero remote exit code is still ok=true; only ssh's own failures
    (exit 255) report SocketNotFound, SocketDead, ConnectionFailed or Timeout.

    Args:
        host: Host the control socket belongs to.
        command: Remote command line.
        socket_path: Control socket path. Defaults to /tmp/sshit-ctrl-<host>.
        timeout: Connect timeout in seconds (default: 30).
        stdout_formats: Any of "utf-8", "base64" (default: ["utf-8"]).
        stderr_formats: Any of "utf-8", "base64" (default: ["utf-8"]).
            stderr may include local ssh client warnings.
    """
    if not command:
        raise ToolError("Command cannot be empty")
    return await handle_exec(
        _checked_host(host),
        command,
        socket_path,
        timeout=timeout,
        stdout_formats=stdout_formats,
        stderr_formats=stderr_formats,
    )


async def socket_exit(host: str, socket_path: str | None = None) -> dict[str, Any]:
    """Ask a control master to exit gracefully.

    exitedCleanly=false is not a failure: the master may already be dead.
    """
    return await handle_exit(_checked_host(host), socket_path)


async def socket_remove(socket_path: str) -> dict[str, Any]:
    """Delete a control socket file without contacting its master."""
    if not socket_path:
        raise ToolError("Socket path cannot be empty")
    return await handle_remove(socket_path)


async def socket_teardown(host: str, socket_path: str | None = None) -> dict[str, Any]:
    """Exit a control master and remove its socket file.

    Tearing down a socket that is already gone succeeds with
    exitedCleanly=false and fileRemoved=false.
    """
    return await handle_teardown(_checked_host(host), socket_path)


async def socket_validate(host: str, socket_path: str | None = None) -> dict[str, Any]:
    """Report whether a control socket is usable (status alive, dead or not-found)."""
    return await handle_validate(_checked_host(host), socket_path)


async def socket_path(host: str) -> str:
    """Return the default control socket path for a host."""
    return socket_path_for(_checked_host(host))
