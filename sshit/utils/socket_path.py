"""Control socket path resolution."""

import re

from sshit.config import DEFAULT_SOCKET_PREFIX

_SEPARATORS = re.compile(r"[@.:]")
_DISALLOWED = re.compile(r"[^A-Za-z0-9-]")


def sanitize_host(host: str) -> str:
    """Reduce a host identifier to characters safe for a file name.

    ``@``, ``.`` and ``:`` become ``-``; anything else outside
    ``[A-Za-z0-9-]`` is dropped.

    Args:
        host: Host identifier such as ``user@10.0.0.3``

    Returns:
        Sanitized host string (may be empty)
    """
    return _DISALLOWED.sub("", _SEPARATORS.sub("-", host))


def resolve_socket_path(
    host: str,
    socket_path: str | None = None,
    prefix: str = DEFAULT_SOCKET_PREFIX,
) -> str:
    """Return the control socket path for a host.

    An explicit ``socket_path`` wins. Otherwise the path is a pure function
    of the host, so reconnecting to the same host finds the same socket.

    Examples:
        >>> resolve_socket_path("user@10.0.0.3")
        '/tmp/sshit-ctrl-user-10-0-0-3'
    """
    if socket_path:
        return socket_path
    return f"{prefix}{sanitize_host(host)}"
