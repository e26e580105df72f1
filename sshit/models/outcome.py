"""Operation outcome types and per-operation failure kinds."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, TypeVar, Union

T = TypeVar("T")
K = TypeVar("K")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful operation carrying its value."""

    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure(Generic[K]):
    """Failed operation.

    ``debug_data`` is free text (raw stderr or a system error message)
    meant for display only.
    """

    failure: K
    debug_data: str = ""
    ok: ClassVar[bool] = False


Outcome = Union[Success[T], Failure[K]]


class CreateSocketFailure(str, Enum):
    AUTHENTICATION_FAILED = "AuthenticationFailed"
    HOST_KEY_VERIFICATION_FAILED = "HostKeyVerificationFailed"
    HOST_NOT_FOUND = "HostNotFound"
    CONNECTION_REFUSED = "ConnectionRefused"
    PERMISSION_DENIED = "PermissionDenied"
    TIMEOUT = "Timeout"
    UNKNOWN_ERROR = "UnknownError"


class CheckSocketFailure(str, Enum):
    SOCKET_NOT_FOUND = "SocketNotFound"
    UNKNOWN_ERROR = "UnknownError"


class ExecFailure(str, Enum):
    SOCKET_NOT_FOUND = "SocketNotFound"
    SOCKET_DEAD = "SocketDead"
    CONNECTION_FAILED = "ConnectionFailed"
    TIMEOUT = "Timeout"
    UNKNOWN_ERROR = "UnknownError"


class ExitSocketFailure(str, Enum):
    SOCKET_NOT_FOUND = "SocketNotFound"
    UNKNOWN_ERROR = "UnknownError"


class RemoveSocketFileFailure(str, Enum):
    FILE_NOT_FOUND = "FileNotFound"
    PERMISSION_DENIED = "PermissionDenied"
    UNKNOWN_ERROR = "UnknownError"


class TearDownFailure(str, Enum):
    REMOVE_FAILED = "RemoveFailed"
    UNKNOWN_ERROR = "UnknownError"


class ValidateSocketFailure(str, Enum):
    UNKNOWN_ERROR = "UnknownError"
