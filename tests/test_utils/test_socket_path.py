"""Tests for control socket path resolution."""

import re

import pytest

from sshit.config import DEFAULT_SOCKET_PREFIX
from sshit.utils.socket_path import resolve_socket_path, sanitize_host


def test_user_at_ip_maps_to_dashed_path() -> None:
    assert resolve_socket_path("user@10.0.0.3") == "/tmp/sshit-ctrl-user-10-0-0-3"


def test_path_is_deterministic() -> None:
    """The same host always resolves to the same socket path."""
    assert resolve_socket_path("deploy@web-1.example.com") == resolve_socket_path(
        "deploy@web-1.example.com"
    )


def test_explicit_socket_path_wins() -> None:
    assert resolve_socket_path("user@10.0.0.3", "/run/custom.sock") == "/run/custom.sock"


def test_empty_explicit_path_falls_back_to_host() -> None:
    assert resolve_socket_path("host", "") == "/tmp/sshit-ctrl-host"


def test_ipv6_and_port_separators() -> None:
    assert sanitize_host("root@fe80::1") == "root-fe80--1"


def test_unsafe_characters_are_dropped() -> None:
    """Slashes, spaces and shell metacharacters never reach the path."""
    assert sanitize_host("../etc/pass wd;rm") == "--etcpasswdrm"
    assert "/" not in resolve_socket_path("a/b")[len("/tmp/") :]


def test_empty_host_gives_bare_prefix() -> None:
    assert resolve_socket_path("") == "/tmp/sshit-ctrl-"


def test_custom_prefix() -> None:
    assert resolve_socket_path("box", prefix="/run/user/1000/ctl-") == "/run/user/1000/ctl-box"


@pytest.mark.parametrize(
    "host",
    [
        "user@10.0.0.3",
        "déploy@sérveur.example",
        "user%admin@host",
        "under_score@host_name",
        " padded host\t",
        "root@[2001:db8::1]:2222",
        "../../etc/passwd",
        "$(reboot)`id`;|&",
        "",
    ],
)
def test_path_suffix_is_restricted_and_stable(host: str) -> None:
    """Any host yields the same path twice, with only [A-Za-z0-9-] after the prefix."""
    first = resolve_socket_path(host)
    second = resolve_socket_path(host)

    assert first == second
    assert first.startswith(DEFAULT_SOCKET_PREFIX)
    assert re.fullmatch(r"[A-Za-z0-9-]*", first[len(DEFAULT_SOCKET_PREFIX) :])
