"""Exceptions raised by wpmaint core operations."""


class MaintenanceError(Exception):
    """Base class for all maintenance mode failures."""

    pass


class DurationValidationError(MaintenanceError, ValueError):
    """Raised when the requested duration is missing, invalid or contradictory."""

    pass


class MaintenancePermissionError(MaintenanceError):
    """Raised when the sentinel file or its directory is not writable."""

    pass


class MaintenanceConflictError(MaintenanceError):
    """Raised when maintenance mode is already enabled and --force was not given."""

    pass


class MaintenanceIOError(MaintenanceError):
    """Raised when the sentinel file cannot be written or deleted."""

    pass


class SentinelParseError(MaintenanceError):
    """Raised when the sentinel file cannot be read or understood."""

    pass
