"""Utilities for sshit."""

from sshit.utils.console import ColorfulFormatter, configure_logging
from sshit.utils.formatting import format_bytes, format_stream, normalize_formats
from sshit.utils.report import build_report, utc_now
from sshit.utils.socket_path import resolve_socket_path, sanitize_host
from sshit.utils.validation import validate_host

__all__ = [
    "build_report",
    "ColorfulFormatter",
    "configure_logging",
    "format_bytes",
    "format_stream",
    "normalize_formats",
    "resolve_socket_path",
    "sanitize_host",
    "utc_now",
    "validate_host",
]
