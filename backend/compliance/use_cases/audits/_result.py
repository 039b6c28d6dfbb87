"""Result object returned by the scoring operations.

Saving a response and completing an audit never raise to the caller:
every outcome, including not-found and storage failures, comes back as
an OperationResult the caller branches on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    CONFLICT = "conflict"
    STORAGE = "storage"


@dataclass(frozen=True)
class OperationResult:
    success: bool
    passed: bool | None = None
    percentage: float | None = None
    error: str | None = None
    failure_kind: FailureKind | None = None

    @classmethod
    def failure(cls, error: str, kind: FailureKind) -> "OperationResult":
        return cls(success=False, error=error, failure_kind=kind)
