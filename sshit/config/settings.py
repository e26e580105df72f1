"""sshit settings, read from SSHIT_* environment variables.

Unset or malformed values fall back to the defaults below.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_SOCKET_PREFIX = "/tmp/sshit-ctrl-"


@dataclass
class Settings:
    """Runtime options for the ssh client, the MCP server and logging.

    Construct directly in tests; use from_env() everywhere else.
    """

    # External ssh client
    ssh_binary: str = "ssh"
    socket_prefix: str = DEFAULT_SOCKET_PREFIX

    # Timeouts forwarded to ssh (seconds)
    connect_timeout: int = 10
    server_alive_interval: int = 30
    exec_timeout: int = 30

    # MCP transport
    transport: str = "stdio"
    http_host: str = "127.0.0.1"
    http_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_colors: bool = True
    log_payloads: bool = False
    slow_threshold_ms: int = 1000
    include_traceback: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment.

        Returns:
            Settings with every SSHIT_* override applied
        """
        return cls(
            ssh_binary=os.getenv("SSHIT_SSH_BINARY", "ssh"),
            socket_prefix=os.getenv("SSHIT_SOCKET_PREFIX", DEFAULT_SOCKET_PREFIX),
            connect_timeout=cls._get_int("SSHIT_CONNECT_TIMEOUT", 10),
            server_alive_interval=cls._get_int("SSHIT_SERVER_ALIVE_INTERVAL", 30),
            exec_timeout=cls._get_int("SSHIT_EXEC_TIMEOUT", 30),
            transport=cls._get_transport(),
            http_host=os.getenv("SSHIT_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("SSHIT_HTTP_PORT", 8000),
            log_level=os.getenv("SSHIT_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("SSHIT_LOG_COLORS", True),
            log_payloads=cls._get_bool("SSHIT_LOG_PAYLOADS", False),
            slow_threshold_ms=cls._get_int("SSHIT_SLOW_THRESHOLD_MS", 1000),
            include_traceback=cls._get_bool("SSHIT_INCLUDE_TRACEBACK", False),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Parse an integer variable, warning on malformed values.

        Args:
            key: Variable name
            default: Default value if not set or invalid

        Returns:
            The parsed value, or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Ignoring %s=%r: not an integer, using %d", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get MCP transport ("stdio" or "http"), defaulting to stdio."""
        transport = os.getenv("SSHIT_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"
