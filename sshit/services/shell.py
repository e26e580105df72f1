"""Local process execution that never raises."""

import asyncio
import logging
from collections.abc import Sequence

from sshit.models import ShellResult, ShellResultBytes

logger = logging.getLogger(__name__)


def _normalize_exit_code(returncode: int | None) -> int:
    # Killed by a signal (negative) or no status at all
    if returncode is None or returncode < 0:
        return 1
    return returncode


async def run_command_bytes(program: str, args: Sequence[str]) -> ShellResultBytes:
    """Run a program and capture its output as raw bytes.

    stdin is closed; stdout and stderr are drained until the process exits.
    A program that cannot be started yields exit code 1 with the system
    error message as stderr and ``spawn_error`` set.

    Args:
        program: Executable name or path
        args: Argument list (no shell involved)

    Returns:
        ShellResultBytes with exit code and captured streams
    """
    logger.debug("Spawning %s %s", program, " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            program,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        message = str(e)
        logger.debug("Failed to spawn %s: %s", program, message)
        return ShellResultBytes(
            exit_code=1,
            stdout_bytes=b"",
            stderr_bytes=message.encode("utf-8"),
            spawn_error=message,
        )

    stdout_bytes, stderr_bytes = await proc.communicate()
    return ShellResultBytes(
        exit_code=_normalize_exit_code(proc.returncode),
        stdout_bytes=stdout_bytes or b"",
        stderr_bytes=stderr_bytes or b"",
    )


async def run_command(program: str, args: Sequence[str]) -> ShellResult:
    """Run a program and capture its output as text.

    Same contract as run_command_bytes, with streams decoded as UTF-8
    (undecodable bytes replaced).
    """
    result = await run_command_bytes(program, args)
    return ShellResult(
        exit_code=result.exit_code,
        stdout=result.stdout_bytes.decode("utf-8", errors="replace"),
        stderr=result.stderr_bytes.decode("utf-8", errors="replace"),
        spawn_error=result.spawn_error,
    )
