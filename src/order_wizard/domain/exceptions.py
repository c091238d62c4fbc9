"""Domain-level exceptions.

All user-recoverable problems are expressed as subclasses of
DomainException so the CLI layer can catch them uniformly and display
field-level messages.  ``OutOfRangeError`` is deliberately *not* one of
them: it signals a broken caller, not bad user input.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A single field failed a stage rule or an Order invariant."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class StageValidationError(DomainException):
    """One or more fields of a stage submission were rejected.

    Carries every failing field so the caller can report them together.
    """

    def __init__(self, errors: list[ValidationError]) -> None:
        super().__init__("; ".join(str(e) for e in errors))
        self.errors = list(errors)

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def message_for(self, field: str) -> str | None:
        for error in self.errors:
            if error.field == field:
                return error.message
        return None


class StageIncompleteError(DomainException):
    """Forward navigation attempted past a stage that was never submitted."""


class CatalogError(DomainException):
    """The catalog source is malformed or inconsistent."""


class OutOfRangeError(ValueError):
    """Navigation requested to a stage outside the wizard."""
