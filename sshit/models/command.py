"""Process and remote command result models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ShellResult:
    """Result of a local process run with text output.

    When the process could not be spawned at all, ``spawn_error`` holds the
    system error message, ``exit_code`` is 1 and ``stderr`` repeats the message.
    """

    exit_code: int
    stdout: str
    stderr: str
    spawn_error: str | None = None

    @property
    def spawned(self) -> bool:
        return self.spawn_error is None


@dataclass(frozen=True)
class ShellResultBytes:
    """Binary-safe variant of ShellResult."""

    exit_code: int
    stdout_bytes: bytes
    stderr_bytes: bytes
    spawn_error: str | None = None

    @property
    def spawned(self) -> bool:
        return self.spawn_error is None


@dataclass(frozen=True)
class ExecResult:
    """Result of a remote command run over a control socket.

    ``exit_code`` is the remote command's own exit code. ``stderr`` may
    include diagnostics from the local ssh client mixed with the remote
    command's stderr; the two cannot be told apart.
    """

    exit_code: int
    stdout: str
    stderr: str
    stdout_bytes: bytes
    stderr_bytes: bytes
