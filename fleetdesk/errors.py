"""
Error types raised by the db layer.

Routers translate these into HTTP responses; nothing below the routers
knows about HTTP.
"""


class FleetError(Exception):
    """Base class for errors raised by fleetdesk."""


class NotFoundError(FleetError):
    """The requested row does not exist for this owner."""


class ValidationError(FleetError):
    """Caller supplied input that cannot be applied. No write was attempted."""


class AllocationError(FleetError):
    """Base class for failures of the allocate/reallocate operation."""


class AllocationValidationError(AllocationError, ValidationError):
    """No driver selected, or a driver/vehicle that is not usable by this owner."""


class StorageError(AllocationError):
    """The database read or write failed. The session was rolled back."""


class DataConsistencyWarning(UserWarning):
    """More than one allocation row exists for a single leg."""
