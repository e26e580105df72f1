"""sshit: SSH control master socket lifecycle management.

Create a control master, check it, run commands over it, and tear it down,
with every outcome reported as a typed success or failure.
"""

from sshit.models import SocketInfo, SocketStatus, TearDownResult, ValidationResult
from sshit.services import (
    check_socket,
    create_socket,
    exec_command,
    exit_socket,
    remove_socket_file,
    tear_down_socket,
    validate_socket,
)
from sshit.utils.socket_path import resolve_socket_path

__version__ = "0.1.0"

__all__ = [
    "SocketInfo",
    "SocketStatus",
    "TearDownResult",
    "ValidationResult",
    "check_socket",
    "create_socket",
    "exec_command",
    "exit_socket",
    "remove_socket_file",
    "resolve_socket_path",
    "tear_down_socket",
    "validate_socket",
]
