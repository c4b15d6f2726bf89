"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each subclass names its error ``kind``; presentation code switches on that
rather than on message text.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "DomainError"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``errors`` holds one FieldError per rejected input field when the
    failure comes from validating a command; it is empty for plain rule
    violations such as a non-positive quantity.
    """

    kind = "InvalidArgument"

    def __init__(self, message: str, errors: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])

    @classmethod
    def from_errors(cls, errors: list[FieldError]) -> ValidationError:
        return cls("; ".join(str(e) for e in errors), errors)


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "NotFound"


class InsufficientStockError(DomainException):
    """A purchase asked for more units than are in stock."""

    kind = "InsufficientStock"

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for sweet '{product_id}' "
            f"(requested {requested}, {available} available)"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class UnauthorizedError(DomainException):
    """The caller lacks the capability required for the operation."""

    kind = "Unauthorized"


class TransientStorageError(DomainException):
    """The storage round-trip failed for reasons unrelated to business rules.

    Callers may retry; nothing was applied.
    """

    kind = "TransientStorageFailure"
