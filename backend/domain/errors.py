"""Error taxonomy shared by the registry, the booking engine and the services."""

from __future__ import annotations


class HostelBookingError(Exception):
    """Base exception for booking workflow failures."""


class ValidationError(HostelBookingError):
    """Raised when input is missing or out of range."""


class NotFoundError(HostelBookingError):
    """Raised when a room or booking id does not exist in persisted state."""


class ConflictError(HostelBookingError):
    """Raised when an operation collides with existing state."""


class StorageError(HostelBookingError):
    """Raised when the state file could not be written."""
