"""Services for sshit."""

from sshit.services.classify import (
    CREATE_FAILURE_RULES,
    EXEC_TRANSPORT_RULES,
    ClassificationRule,
    classify,
    contains_all,
    contains_any,
)
from sshit.services.shell import run_command, run_command_bytes
from sshit.services.sockets import (
    check_socket,
    create_socket,
    exec_command,
    exit_socket,
    remove_socket_file,
    tear_down_socket,
    validate_socket,
)
from sshit.services.state import get_settings, reset_state, set_settings

__all__ = [
    "CREATE_FAILURE_RULES",
    "ClassificationRule",
    "EXEC_TRANSPORT_RULES",
    "check_socket",
    "classify",
    "contains_all",
    "contains_any",
    "create_socket",
    "exec_command",
    "exit_socket",
    "get_settings",
    "remove_socket_file",
    "reset_state",
    "run_command",
    "run_command_bytes",
    "set_settings",
    "tear_down_socket",
    "validate_socket",
]
