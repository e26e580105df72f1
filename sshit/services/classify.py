"""Ordered classification of ssh client diagnostics.

Rules are evaluated top to bottom and the first match wins, so a specific
pattern must come before any generic pattern that also matches its text.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Final, Generic, TypeVar

from sshit.models import CreateSocketFailure, ExecFailure

R = TypeVar("R")

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class ClassificationRule(Generic[R]):
    """Maps text matching ``predicate`` to ``result``."""

    result: R
    predicate: Predicate

    def matches(self, text: str) -> bool:
        return self.predicate(text)


def contains_any(*needles: str) -> Predicate:
    """Predicate true when any needle is a substring of the text."""
    return lambda text: any(needle in text for needle in needles)


def contains_all(*needles: str) -> Predicate:
    """Predicate true when every needle is a substring of the text."""
    return lambda text: all(needle in text for needle in needles)


def classify(text: str, rules: Sequence[ClassificationRule[R]], default: R) -> R:
    """Return the result of the first rule matching ``text``, else ``default``."""
    for rule in rules:
        if rule.matches(text):
            return rule.result
    return default


CREATE_FAILURE_RULES: Final[list[ClassificationRule[CreateSocketFailure]]] = [
    ClassificationRule(
        CreateSocketFailure.PERMISSION_DENIED,
        contains_any("Permission denied (publickey"),
    ),
    ClassificationRule(
        CreateSocketFailure.AUTHENTICATION_FAILED,
        contains_any("Permission denied", "Authentication failed"),
    ),
    ClassificationRule(
        CreateSocketFailure.HOST_KEY_VERIFICATION_FAILED,
        contains_any(
            "REMOTE HOST IDENTIFICATION HAS CHANGED",
            "Host key verification failed",
        ),
    ),
    ClassificationRule(
        CreateSocketFailure.HOST_NOT_FOUND,
        contains_any("Could not resolve hostname", "Name or service not known"),
    ),
    ClassificationRule(
        CreateSocketFailure.CONNECTION_REFUSED,
        contains_any("Connection refused"),
    ),
    ClassificationRule(
        CreateSocketFailure.TIMEOUT,
        contains_any("Operation timed out", "Connection timed out"),
    ),
]

# Applied only to exit code 255 (ssh transport failure)
EXEC_TRANSPORT_RULES: Final[list[ClassificationRule[ExecFailure]]] = [
    ClassificationRule(
        ExecFailure.SOCKET_NOT_FOUND,
        contains_any("No such file", "no such file"),
    ),
    ClassificationRule(
        ExecFailure.CONNECTION_FAILED,
        contains_any("Connection refused", "Connection reset"),
    ),
    ClassificationRule(
        ExecFailure.TIMEOUT,
        contains_any("Operation timed out", "Connection timed out"),
    ),
    ClassificationRule(
        ExecFailure.SOCKET_DEAD,
        contains_all("Control socket", "dead"),
    ),
]
