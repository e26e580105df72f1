"""Shared fixtures for sshit tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from sshit.config import Settings
from sshit.services import reset_state, set_settings


@pytest.fixture(autouse=True)
def default_settings() -> Iterator[Settings]:
    """Give every test default settings, independent of SSHIT_* env vars."""
    settings = Settings()
    set_settings(settings)
    yield settings
    reset_state()


@pytest.fixture
def socket_file(tmp_path: Path) -> Path:
    """An existing control socket file."""
    path = tmp_path / "sshit-ctrl-user-10-0-0-3"
    path.write_text("")
    return path
