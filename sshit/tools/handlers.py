"""Operation handlers shared by the CLI and the MCP tools.

Each handler runs one lifecycle operation, times it, and returns the
JSON-ready report for it.
"""

from collections.abc import Sequence
from typing import Any

from sshit.services import (
    check_socket,
    create_socket,
    exec_command,
    exit_socket,
    get_settings,
    remove_socket_file,
    tear_down_socket,
    validate_socket,
)
from sshit.utils.formatting import format_stream
from sshit.utils.report import build_report, utc_now
from sshit.utils.socket_path import resolve_socket_path


def socket_path_for(host: str, socket_path: str | None = None) -> str:
    """Resolve the socket path for host using the configured prefix."""
    return resolve_socket_path(host, socket_path, prefix=get_settings().socket_prefix)


async def handle_create(
    host: str,
    socket_path: str | None = None,
    connect_timeout: int | None = None,
    server_alive_interval: int | None = None,
) -> dict[str, Any]:
    """Create a control master and report it."""
    settings = get_settings()
    started = utc_now()
    outcome = await create_socket(
        host,
        socket_path,
        connect_timeout=settings.connect_timeout if connect_timeout is None else connect_timeout,
        server_alive_interval=(
            settings.server_alive_interval
            if server_alive_interval is None
            else server_alive_interval
        ),
    )
    ended = utc_now()

    payload = outcome.value.to_dict() if outcome.ok else None
    return build_report(
        "create",
        outcome,
        started,
        ended,
        context={"host": host, "socket": socket_path_for(host, socket_path)},
        payload=payload,
    )


async def handle_check(host: str, socket_path: str | None = None) -> dict[str, Any]:
    path = socket_path_for(host, socket_path)
    started = utc_now()
    outcome = await check_socket(path, host)
    ended = utc_now()

    payload = {"status": outcome.value.value} if outcome.ok else None
    return build_report(
        "check", outcome, started, ended, context={"host": host, "socket": path}, payload=payload
    )


async def handle_exec(
    host: str,
    command: str,
    socket_path: str | None = None,
    timeout: int | None = None,
    stdout_formats: Sequence[str] | None = None,
    stderr_formats: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Run a remote command over a control socket and report its output.

    Streams are rendered in the requested formats ("utf-8", "base64"),
    defaulting to utf-8. stderr may include local ssh client diagnostics.
    """
    path = socket_path_for(host, socket_path)
    started = utc_now()
    if timeout is None:
        timeout = get_settings().exec_timeout
    outcome = await exec_command(path, host, command, timeout=timeout)
    ended = utc_now()

    payload = None
    if outcome.ok:
        payload = {
            "exitCode": outcome.value.exit_code,
            "stdout": format_stream(outcome.value.stdout_bytes, stdout_formats),
            "stderr": format_stream(outcome.value.stderr_bytes, stderr_formats),
        }
    return build_report(
        "exec",
        outcome,
        started,
        ended,
        context={"host": host, "socket": path, "command": command},
        payload=payload,
    )


async def handle_exit(host: str, socket_path: str | None = None) -> dict[str, Any]:
    path = socket_path_for(host, socket_path)
    started = utc_now()
    outcome = await exit_socket(path, host)
    ended = utc_now()

    payload = {"exitedCleanly": outcome.value} if outcome.ok else None
    return build_report(
        "exit", outcome, started, ended, context={"host": host, "socket": path}, payload=payload
    )


async def handle_remove(socket_path: str) -> dict[str, Any]:
    started = utc_now()
    outcome = await remove_socket_file(socket_path)
    ended = utc_now()

    payload = {"removed": True} if outcome.ok else None
    return build_report(
        "remove", outcome, started, ended, context={"socket": socket_path}, payload=payload
    )


async def handle_teardown(host: str, socket_path: str | None = None) -> dict[str, Any]:
    path = socket_path_for(host, socket_path)
    started = utc_now()
    outcome = await tear_down_socket(path, host)
    ended = utc_now()

    payload = None
    if outcome.ok:
        payload = {
            "exitedCleanly": outcome.value.exited_cleanly,
            "fileRemoved": outcome.value.file_removed,
        }
    return build_report(
        "teardown", outcome, started, ended, context={"host": host, "socket": path}, payload=payload
    )


async def handle_validate(host: str, socket_path: str | None = None) -> dict[str, Any]:
    path = socket_path_for(host, socket_path)
    started = utc_now()
    outcome = await validate_socket(path, host)
    ended = utc_now()

    payload = None
    if outcome.ok:
        payload = {"valid": outcome.value.valid, "status": outcome.value.status.value}
    return build_report(
        "validate", outcome, started, ended, context={"host": host, "socket": path}, payload=payload
    )
