"""Control socket data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SocketStatus(str, Enum):
    """Liveness of a control socket whose file exists."""

    ALIVE = "alive"
    DEAD = "dead"


class ValidationStatus(str, Enum):
    ALIVE = "alive"
    DEAD = "dead"
    NOT_FOUND = "not-found"


@dataclass(frozen=True)
class SocketInfo:
    """A control master started by create_socket."""

    path: str
    host: str
    created_at: datetime

    def to_dict(self) -> dict[str, str]:
        return {
            "path": self.path,
            "host": self.host,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class TearDownResult:
    """Result of a teardown.

    Both flags False is a success: there was nothing to tear down.
    """

    exited_cleanly: bool
    file_removed: bool


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    status: ValidationStatus
