"""SSH control socket lifecycle operations.

Each operation runs the external ssh client at most once and returns an
Outcome. Nothing raises: an ssh client that cannot be started, like any
unexpected exception, becomes the operation's UnknownError failure.
"""

import logging
import os
from datetime import UTC, datetime

from sshit.models import (
    CheckSocketFailure,
    CreateSocketFailure,
    ExecFailure,
    ExecResult,
    ExitSocketFailure,
    Failure,
    Outcome,
    RemoveSocketFileFailure,
    SocketInfo,
    SocketStatus,
    Success,
    TearDownFailure,
    TearDownResult,
    ValidateSocketFailure,
    ValidationResult,
    ValidationStatus,
)
from sshit.services.classify import (
    CREATE_FAILURE_RULES,
    EXEC_TRANSPORT_RULES,
    classify,
)
from sshit.services.shell import run_command, run_command_bytes
from sshit.services.state import get_settings
from sshit.utils.socket_path import resolve_socket_path

logger = logging.getLogger(__name__)

# OpenSSH reserves 255 for its own failures
SSH_TRANSPORT_ERROR_CODE = 255


def _socket_missing(socket_path: str) -> str:
    return f"Control socket does not exist: {socket_path}"


async def create_socket(
    host: str,
    socket_path: str | None = None,
    connect_timeout: int = 10,
    server_alive_interval: int = 30,
) -> Outcome[SocketInfo, CreateSocketFailure]:
    """Start a backgrounded control master for ``host``.

    Args:
        host: Host identifier (e.g. ``user@10.0.0.3``)
        socket_path: Explicit socket path; resolved from host when omitted
        connect_timeout: ConnectTimeout forwarded to ssh, in seconds
        server_alive_interval: ServerAliveInterval forwarded to ssh, in seconds

    Returns:
        Success with SocketInfo, or Failure classified from ssh's stderr
    """
    try:
        settings = get_settings()
        path = resolve_socket_path(host, socket_path, prefix=settings.socket_prefix)
        logger.info("Creating control socket at %s for %s", path, host)

        result = await run_command(
            settings.ssh_binary,
            [
                "-M",
                "-S",
                path,
                "-fN",
                "-o",
                f"ConnectTimeout={connect_timeout}",
                "-o",
                f"ServerAliveInterval={server_alive_interval}",
                "-o",
                "StrictHostKeyChecking=accept-new",
                host,
            ],
        )

        if not result.spawned:
            logger.error("Could not run ssh: %s", result.spawn_error)
            return Failure(CreateSocketFailure.UNKNOWN_ERROR, result.spawn_error or "")

        if result.exit_code == 0:
            logger.info("Control socket created at %s", path)
            return Success(SocketInfo(path=path, host=host, created_at=datetime.now(UTC)))

        stderr = result.stderr
        logger.warning("ssh failed with exit code %d: %s", result.exit_code, stderr.strip())

        kind = classify(stderr, CREATE_FAILURE_RULES, None)
        if kind is None:
            return Failure(
                CreateSocketFailure.UNKNOWN_ERROR,
                f"Exit code {result.exit_code}: {stderr}",
            )
        return Failure(kind, stderr)

    except Exception as e:
        logger.exception("Creating control socket for %s failed", host)
        return Failure(CreateSocketFailure.UNKNOWN_ERROR, str(e))


async def check_socket(
    socket_path: str,
    host: str,
) -> Outcome[SocketStatus, CheckSocketFailure]:
    """Probe whether the master behind a control socket is responsive.

    The file is checked first so ssh never gets a chance to fall back to
    a fresh connection. A dead master is a status, not a failure.
    """
    try:
        if not os.path.exists(socket_path):
            return Failure(CheckSocketFailure.SOCKET_NOT_FOUND, _socket_missing(socket_path))

        logger.info("Checking socket health: %s", socket_path)

        result = await run_command(
            get_settings().ssh_binary,
            ["-S", socket_path, "-O", "check", host],
        )

        if not result.spawned:
            logger.error("Could not run ssh: %s", result.spawn_error)
            return Failure(CheckSocketFailure.UNKNOWN_ERROR, result.spawn_error or "")

        if result.exit_code == 0:
            logger.info("Socket is alive: %s", socket_path)
            return Success(SocketStatus.ALIVE)

        logger.info("Socket is dead: %s", socket_path)
        return Success(SocketStatus.DEAD)

    except Exception as e:
        logger.exception("Checking socket %s failed", socket_path)
        return Failure(CheckSocketFailure.UNKNOWN_ERROR, str(e))


async def exec_command(
    socket_path: str,
    host: str,
    command: str,
    timeout: int = 30,
) -> Outcome[ExecResult, ExecFailure]:
    """Run ``command`` on ``host`` over an existing control socket.

    ControlMaster=no forbids ssh from opening its own connection, so a
    missing or broken socket fails instead of silently running slow and
    unmultiplexed. Exit code 255 is always an ssh failure; every other
    code is the remote command's own.

    Args:
        socket_path: Control socket to multiplex over
        host: Host the socket belongs to
        command: Remote command line
        timeout: ConnectTimeout forwarded to ssh, in seconds

    Returns:
        Success with ExecResult (any remote exit code), or Failure
    """
    try:
        if not os.path.exists(socket_path):
            return Failure(ExecFailure.SOCKET_NOT_FOUND, _socket_missing(socket_path))

        logger.info("Executing on %s via %s: %s", host, socket_path, command)

        result = await run_command_bytes(
            get_settings().ssh_binary,
            [
                "-S",
                socket_path,
                "-o",
                "ControlMaster=no",
                "-o",
                f"ConnectTimeout={timeout}",
                host,
                command,
            ],
        )

        if not result.spawned:
            logger.error("Could not run ssh: %s", result.spawn_error)
            return Failure(ExecFailure.UNKNOWN_ERROR, result.spawn_error or "")

        stdout = result.stdout_bytes.decode("utf-8", errors="replace")
        stderr = result.stderr_bytes.decode("utf-8", errors="replace")

        if result.exit_code == SSH_TRANSPORT_ERROR_CODE:
            logger.warning("ssh transport failure on %s: %s", host, stderr.strip())
            kind = classify(stderr, EXEC_TRANSPORT_RULES, None)
            if kind is None:
                return Failure(ExecFailure.CONNECTION_FAILED, f"Exit 255: {stderr}")
            return Failure(kind, stderr)

        logger.info("Command completed with exit code %d", result.exit_code)
        return Success(
            ExecResult(
                exit_code=result.exit_code,
                stdout=stdout,
                stderr=stderr,
                stdout_bytes=result.stdout_bytes,
                stderr_bytes=result.stderr_bytes,
            )
        )

    except Exception as e:
        logger.exception("Executing on %s via %s failed", host, socket_path)
        return Failure(ExecFailure.UNKNOWN_ERROR, str(e))


async def exit_socket(
    socket_path: str,
    host: str,
) -> Outcome[bool, ExitSocketFailure]:
    """Ask the master behind a control socket to exit.

    Returns:
        Success(True) when ssh reports a clean exit, Success(False) when the
        exit command failed (the master may already be dead), or Failure
    """
    try:
        if not os.path.exists(socket_path):
            return Failure(ExitSocketFailure.SOCKET_NOT_FOUND, _socket_missing(socket_path))

        logger.info("Requesting socket exit: %s", socket_path)

        result = await run_command(
            get_settings().ssh_binary,
            ["-S", socket_path, "-O", "exit", host],
        )

        if not result.spawned:
            logger.error("Could not run ssh: %s", result.spawn_error)
            return Failure(ExitSocketFailure.UNKNOWN_ERROR, result.spawn_error or "")

        exited_cleanly = result.exit_code == 0
        if exited_cleanly:
            logger.info("Socket exited cleanly: %s", socket_path)
        else:
            logger.info("Socket exit command failed (may already be dead): %s", socket_path)
        return Success(exited_cleanly)

    except Exception as e:
        logger.exception("Exiting socket %s failed", socket_path)
        return Failure(ExitSocketFailure.UNKNOWN_ERROR, str(e))


async def remove_socket_file(
    socket_path: str,
) -> Outcome[bool, RemoveSocketFileFailure]:
    """Delete a control socket file. Does not talk to the master process."""
    try:
        logger.info("Removing socket file: %s", socket_path)
        os.unlink(socket_path)
    except FileNotFoundError:
        return Failure(RemoveSocketFileFailure.FILE_NOT_FOUND, f"File does not exist: {socket_path}")
    except PermissionError:
        return Failure(RemoveSocketFileFailure.PERMISSION_DENIED, f"Permission denied: {socket_path}")
    except Exception as e:
        logger.error("Removing socket file %s failed: %s", socket_path, e)
        return Failure(RemoveSocketFileFailure.UNKNOWN_ERROR, str(e))

    logger.info("Socket file removed: %s", socket_path)
    return Success(True)


async def tear_down_socket(
    socket_path: str,
    host: str,
) -> Outcome[TearDownResult, TearDownFailure]:
    """Exit the master, then remove the socket file.

    A socket that is already gone, or whose file ssh removed on exit, is
    torn down successfully. Only a real filesystem error fails.
    """
    try:
        logger.info("Tearing down socket: %s", socket_path)

        exit_outcome = await exit_socket(socket_path, host)
        if isinstance(exit_outcome, Failure):
            if exit_outcome.failure is ExitSocketFailure.SOCKET_NOT_FOUND:
                logger.info("Socket file does not exist, nothing to tear down")
                return Success(TearDownResult(exited_cleanly=False, file_removed=False))
            exited_cleanly = False
        else:
            exited_cleanly = exit_outcome.value

        remove_outcome = await remove_socket_file(socket_path)
        if isinstance(remove_outcome, Failure):
            if remove_outcome.failure is RemoveSocketFileFailure.FILE_NOT_FOUND:
                logger.info("Socket file already removed: %s", socket_path)
                return Success(TearDownResult(exited_cleanly=exited_cleanly, file_removed=False))
            return Failure(TearDownFailure.REMOVE_FAILED, remove_outcome.debug_data)

        logger.info("Socket torn down: %s", socket_path)
        return Success(TearDownResult(exited_cleanly=exited_cleanly, file_removed=True))

    except Exception as e:
        logger.exception("Tearing down socket %s failed", socket_path)
        return Failure(TearDownFailure.UNKNOWN_ERROR, str(e))


async def validate_socket(
    socket_path: str,
    host: str,
) -> Outcome[ValidationResult, ValidateSocketFailure]:
    """Judge whether a control socket can be used for commands.

    A missing socket is a valid answer (``not-found``), not a failure.
    """
    try:
        logger.info("Validating socket: %s", socket_path)

        check_outcome = await check_socket(socket_path, host)
        if isinstance(check_outcome, Failure):
            if check_outcome.failure is CheckSocketFailure.SOCKET_NOT_FOUND:
                logger.info("Socket not found: %s", socket_path)
                return Success(ValidationResult(valid=False, status=ValidationStatus.NOT_FOUND))
            return Failure(ValidateSocketFailure.UNKNOWN_ERROR, check_outcome.debug_data)

        status = ValidationStatus(check_outcome.value.value)
        valid = status is ValidationStatus.ALIVE
        logger.info("Socket is %s, valid=%s", status.value, valid)
        return Success(ValidationResult(valid=valid, status=status))

    except Exception as e:
        logger.exception("Validating socket %s failed", socket_path)
        return Failure(ValidateSocketFailure.UNKNOWN_ERROR, str(e))
