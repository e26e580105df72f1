"""Tests for operation handlers and their reports."""

import base64
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from sshit.config import Settings
from sshit.models import ShellResult, ShellResultBytes
from sshit.services import set_settings
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

HOST = "user@10.0.0.3"


def test_socket_path_for_uses_configured_prefix() -> None:
    set_settings(Settings(socket_prefix="/run/sshit-"))
    assert socket_path_for(HOST) == "/run/sshit-user-10-0-0-3"
    assert socket_path_for(HOST, "/x.sock") == "/x.sock"


@pytest.mark.asyncio
async def test_create_report_uses_settings_defaults() -> None:
    set_settings(Settings(connect_timeout=4, server_alive_interval=9))
    mock = AsyncMock(return_value=ShellResult(exit_code=0, stdout="", stderr=""))

    with patch("sshit.services.sockets.run_command", mock):
        report = await handle_create(HOST)

    args = mock.call_args.args[1]
    assert "ConnectTimeout=4" in args
    assert "ServerAliveInterval=9" in args
    assert report["ok"] is True
    assert report["operation"] == "create"
    assert report["path"] == "/tmp/sshit-ctrl-user-10-0-0-3"
    assert report["host"] == HOST
    assert report["createdAt"].endswith("+00:00")
    assert report["elapsedMilliseconds"] >= 0


@pytest.mark.asyncio
async def test_create_failure_report() -> None:
    mock = AsyncMock(
        return_value=ShellResult(exit_code=255, stdout="", stderr="Host key verification failed.\n")
    )

    with patch("sshit.services.sockets.run_command", mock):
        report = await handle_create(HOST, connect_timeout=1)

    assert report["ok"] is False
    assert report["failure"] == "HostKeyVerificationFailed"
    assert report["debugData"] == "Host key verification failed.\n"
    assert report["socket"] == "/tmp/sshit-ctrl-user-10-0-0-3"


@pytest.mark.asyncio
async def test_check_report_for_missing_socket(tmp_path: Path) -> None:
    report = await handle_check(HOST, str(tmp_path / "missing"))

    assert report["ok"] is False
    assert report["failure"] == "SocketNotFound"


@pytest.mark.asyncio
async def test_check_report_status(socket_file: Path) -> None:
    mock = AsyncMock(return_value=ShellResult(exit_code=0, stdout="", stderr=""))

    with patch("sshit.services.sockets.run_command", mock):
        report = await handle_check(HOST, str(socket_file))

    assert report["ok"] is True
    assert report["status"] == "alive"
    assert report["socket"] == str(socket_file)


@pytest.mark.asyncio
async def test_exec_report_renders_streams(socket_file: Path) -> None:
    """stdout and stderr are rendered in their own requested formats."""
    mock = AsyncMock(
        return_value=ShellResultBytes(
            exit_code=1, stdout_bytes=b"\x00\xffdata", stderr_bytes=b"warning\n"
        )
    )

    with patch("sshit.services.sockets.run_command_bytes", mock):
        report = await handle_exec(
            HOST,
            "cat blob",
            str(socket_file),
            stdout_formats=["base64"],
        )

    assert report["ok"] is True
    assert report["exitCode"] == 1
    assert report["command"] == "cat blob"
    assert base64.b64decode(report["stdout"]["base64"]) == b"\x00\xffdata"
    assert "text" not in report["stdout"]
    assert report["stderr"]["text"] == "warning\n"
    assert report["stderr"]["byteCount"] == 8


@pytest.mark.asyncio
async def test_exec_uses_configured_timeout(socket_file: Path) -> None:
    set_settings(Settings(exec_timeout=12))
    mock = AsyncMock(
        return_value=ShellResultBytes(exit_code=0, stdout_bytes=b"", stderr_bytes=b"")
    )

    with patch("sshit.services.sockets.run_command_bytes", mock):
        await handle_exec(HOST, "true", str(socket_file))

    assert "ConnectTimeout=12" in mock.call_args.args[1]


@pytest.mark.asyncio
async def test_exit_report(socket_file: Path) -> None:
    mock = AsyncMock(return_value=ShellResult(exit_code=255, stdout="", stderr=""))

    with patch("sshit.services.sockets.run_command", mock):
        report = await handle_exit(HOST, str(socket_file))

    assert report["ok"] is True
    assert report["exitedCleanly"] is False


@pytest.mark.asyncio
async def test_remove_report(socket_file: Path) -> None:
    report = await handle_remove(str(socket_file))
    assert report["ok"] is True
    assert report["removed"] is True
    assert report["socket"] == str(socket_file)

    again = await handle_remove(str(socket_file))
    assert again["ok"] is False
    assert again["failure"] == "FileNotFound"


@pytest.mark.asyncio
async def test_teardown_report_when_nothing_exists(tmp_path: Path) -> None:
    report = await handle_teardown(HOST, str(tmp_path / "missing"))

    assert report["ok"] is True
    assert report["exitedCleanly"] is False
    assert report["fileRemoved"] is False


@pytest.mark.asyncio
async def test_validate_report(tmp_path: Path) -> None:
    report = await handle_validate(HOST, str(tmp_path / "missing"))

    assert report["ok"] is True
    assert report["valid"] is False
    assert report["status"] == "not-found"
