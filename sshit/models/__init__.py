"""Data models for sshit."""

from sshit.models.command import ExecResult, ShellResult, ShellResultBytes
from sshit.models.outcome import (
    CheckSocketFailure,
    CreateSocketFailure,
    ExecFailure,
    ExitSocketFailure,
    Failure,
    Outcome,
    RemoveSocketFileFailure,
    Success,
    TearDownFailure,
    ValidateSocketFailure,
)
from sshit.models.socket import (
    SocketInfo,
    SocketStatus,
    TearDownResult,
    ValidationResult,
    ValidationStatus,
)
from sshit.models.tunnel import Tunnel, TunnelStore

__all__ = [
    "CheckSocketFailure",
    "CreateSocketFailure",
    "ExecFailure",
    "ExecResult",
    "ExitSocketFailure",
    "Failure",
    "Outcome",
    "RemoveSocketFileFailure",
    "ShellResult",
    "ShellResultBytes",
    "SocketInfo",
    "SocketStatus",
    "Success",
    "TearDownFailure",
    "TearDownResult",
    "Tunnel",
    "TunnelStore",
    "ValidateSocketFailure",
    "ValidationResult",
    "ValidationStatus",
]
