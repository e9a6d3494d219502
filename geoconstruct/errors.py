"""Usage errors raised (or recorded) while building a construction."""

from __future__ import annotations

from dataclasses import dataclass


class ConstructionError(Exception):
    """Base class for build-time usage errors."""

    kind = "usage"

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name
        self.message = message


class UnknownReferenceError(ConstructionError):
    kind = "unknown-reference"


class DuplicateNameError(ConstructionError):
    kind = "duplicate-name"


class ReservedNameError(ConstructionError):
    kind = "reserved-name"


class InvalidIntersectionError(ConstructionError):
    kind = "invalid-intersection"


class ForeignEntityError(ConstructionError):
    kind = "foreign-entity"


@dataclass
class Diagnostic:
    """Record of a usage error that was reported instead of raised."""

    kind: str
    name: str
    message: str

    @classmethod
    def from_error(cls, error: ConstructionError) -> "Diagnostic":
        return cls(kind=error.kind, name=error.name, message=error.message)

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        return self.message


__all__ = [
    "ConstructionError",
    "UnknownReferenceError",
    "DuplicateNameError",
    "ReservedNameError",
    "InvalidIntersectionError",
    "ForeignEntityError",
    "Diagnostic",
]
