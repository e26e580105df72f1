"""End-to-end lifecycle against a fake ssh client.

The fake client is a shell script standing in for OpenSSH: ``-M`` writes
an "alive" socket file, ``-O check``/``-O exit`` read and remove it, and
a plain invocation runs the remote command locally with ``sh -c``.
"""

import base64
import os
import shutil
import stat
from pathlib import Path

import pytest

from sshit.config import Settings
from sshit.models import (
    CheckSocketFailure,
    CreateSocketFailure,
    ExecFailure,
    SocketStatus,
    ValidationStatus,
)
from sshit.services import (
    check_socket,
    create_socket,
    exec_command,
    exit_socket,
    set_settings,
    tear_down_socket,
    validate_socket,
)
from sshit.tools.handlers import handle_exec

pytestmark = pytest.mark.skipif(
    os.name != "posix" or shutil.which("sh") is None,
    reason="requires a POSIX shell",
)

FAKE_SSH = """#!/bin/sh
socket=""; master=""; control=""
while [ $# -gt 0 ]; do
  case "$1" in
    -M) master=1; shift ;;
    -S) socket="$2"; shift 2 ;;
    -O) control="$2"; shift 2 ;;
    -o) shift 2 ;;
    -fN) shift ;;
    *) break ;;
  esac
done
host="$1"; shift
if [ -n "$master" ]; then
  case "$host" in
    *unknown*)
      echo "ssh: Could not resolve hostname $host: Name or service not known" >&2
      exit 255 ;;
  esac
  echo alive > "$socket"
  exit 0
fi
state="$(cat "$socket" 2>/dev/null)"
case "$control" in
  check)
    if [ "$state" = alive ]; then echo "Master running (pid=4242)" >&2; exit 0; fi
    echo "Control socket connect($socket): Connection refused" >&2
    exit 255 ;;
  exit)
    if [ "$state" != alive ]; then exit 255; fi
    echo "Exit request sent." >&2
    rm -f "$socket"
    exit 0 ;;
esac
if [ "$state" != alive ]; then
  echo "Control socket connect($socket): Connection refused" >&2
  exit 255
fi
exec sh -c "$1"
"""


@pytest.fixture
def fake_ssh(tmp_path: Path) -> Settings:
    """Settings pointing at the fake ssh client and a temp socket prefix."""
    script = tmp_path / "ssh"
    script.write_text(FAKE_SSH)
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    settings = Settings(ssh_binary=str(script), socket_prefix=f"{tmp_path}/sshit-ctrl-")
    set_settings(settings)
    return settings


@pytest.mark.asyncio
async def test_full_lifecycle(fake_ssh: Settings) -> None:
    """create -> check -> exec -> teardown -> validate."""
    created = await create_socket("user@10.0.0.3")
    assert created.ok
    path = created.value.path
    assert path == f"{fake_ssh.socket_prefix}user-10-0-0-3"
    assert Path(path).exists()

    status = await check_socket(path, "user@10.0.0.3")
    assert status.value is SocketStatus.ALIVE

    result = await exec_command(path, "user@10.0.0.3", "printf hello; printf oops >&2; exit 3")
    assert result.ok
    assert result.value.exit_code == 3
    assert result.value.stdout == "hello"
    assert result.value.stderr == "oops"

    torn_down = await tear_down_socket(path, "user@10.0.0.3")
    assert torn_down.ok
    assert torn_down.value.exited_cleanly is True
    # the fake master removes its socket on exit, like OpenSSH
    assert torn_down.value.file_removed is False
    assert not Path(path).exists()

    gone = await check_socket(path, "user@10.0.0.3")
    assert gone.failure is CheckSocketFailure.SOCKET_NOT_FOUND
    after = await exec_command(path, "user@10.0.0.3", "true")
    assert after.failure is ExecFailure.SOCKET_NOT_FOUND

    validation = await validate_socket(path, "user@10.0.0.3")
    assert validation.value.status is ValidationStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_create_failure_is_classified(fake_ssh: Settings) -> None:
    outcome = await create_socket("unknown.invalid")

    assert outcome.failure is CreateSocketFailure.HOST_NOT_FOUND
    assert "Could not resolve hostname" in outcome.debug_data


@pytest.mark.asyncio
async def test_stale_socket_is_dead(fake_ssh: Settings) -> None:
    """A leftover file with no live master is dead, and exec fails over it."""
    path = Path(f"{fake_ssh.socket_prefix}stale")
    path.write_text("dead\n")

    status = await check_socket(str(path), "stale")
    assert status.value is SocketStatus.DEAD

    result = await exec_command(str(path), "stale", "true")
    assert result.failure is ExecFailure.CONNECTION_FAILED

    exited = await exit_socket(str(path), "stale")
    assert exited.value is False

    torn_down = await tear_down_socket(str(path), "stale")
    assert torn_down.value.exited_cleanly is False
    assert torn_down.value.file_removed is True


@pytest.mark.asyncio
async def test_exec_binary_output_round_trips(fake_ssh: Settings) -> None:
    created = await create_socket("box")
    assert created.ok

    report = await handle_exec(
        "box", "printf '\\000\\377\\376'", stdout_formats=["base64"]
    )

    assert report["ok"] is True
    assert base64.b64decode(report["stdout"]["base64"]) == b"\x00\xff\xfe"
    assert report["stdout"]["byteCount"] == 3
