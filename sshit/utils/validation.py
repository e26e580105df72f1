"""Input validation for host identifiers received from clients."""

from typing import Final

MAX_HOST_LENGTH: Final[int] = 253

# Characters that have no place in a host argument handed to ssh
SUSPICIOUS_CHARS: Final[list[str]] = [
    "/", "\\", ";", "&", "|", "$", "`", " ", "\t", "\n", "\r", "\x00",
]


def validate_host(host: str) -> str:
    """Validate a host identifier before it reaches the ssh argument list.

    Args:
        host: Host such as ``user@10.0.0.3`` or an ssh config alias

    Returns:
        The host, unchanged

    Raises:
        ValueError: If the host is empty, too long, looks like an ssh
            option, or contains shell/control characters
    """
    if not host:
        raise ValueError("Host cannot be empty")

    if len(host) > MAX_HOST_LENGTH:
        raise ValueError(f"Host name too long: {len(host)} chars")

    # ssh would parse a leading dash as an option
    if host.startswith("-"):
        raise ValueError(f"Host cannot start with '-': {host!r}")

    for char in SUSPICIOUS_CHARS:
        if char in host:
            raise ValueError(f"Host contains invalid characters: {host!r}")

    return host
