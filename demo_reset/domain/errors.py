"""Failure taxonomy for the demo reset workflow."""

from __future__ import annotations


class DemoResetError(Exception):
    """Base exception for every reset failure."""


class PreconditionError(DemoResetError):
    """Raised when required input is missing or inconsistent."""


class IdentifierIntegrityError(PreconditionError):
    """Raised when assigned identifiers do not line up with the seed list."""


class OrdinalOutOfRangeError(PreconditionError):
    """Raised when a seed references an ordinal outside ``[1, N]``."""


class InvalidStayError(PreconditionError):
    """Raised when a booking ends before it starts."""


class SeedDataError(PreconditionError):
    """Raised when seed files cannot be read or parsed."""


class StatusDerivationError(DemoResetError):
    """Raised when no lifecycle rule matches a booking."""


class PersistenceError(DemoResetError):
    """Raised when the storage layer rejects a delete or insert."""


class ResetPhaseError(DemoResetError):
    """Wraps any failure with the label of the phase that produced it."""

    def __init__(self, phase: str, message: str) -> None:
        super().__init__(f"{phase} failed: {message}")
        self.phase = phase
