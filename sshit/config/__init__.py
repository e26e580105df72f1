"""Configuration module for sshit."""

from sshit.config.settings import DEFAULT_SOCKET_PREFIX, Settings

__all__ = ["DEFAULT_SOCKET_PREFIX", "Settings"]
