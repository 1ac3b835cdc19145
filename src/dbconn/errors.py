"""Error taxonomy for the query facade.

Construction-time errors (ConfigurationError, ConnectionError) leave the
facade unusable. Per-call errors (PreparationError, ParameterBindingError,
ExecutionError) leave the connection intact.
"""


class DatabaseError(Exception):
    """Base class for every error raised by dbconn."""

    def __init__(self, message: str, sql: str | None = None):
        super().__init__(message)
        self.sql = sql


class ConfigurationError(DatabaseError):
    """Unknown connection profile or malformed profile source."""


class ConnectionError(DatabaseError):  # noqa: A001
    """Backend unreachable, credentials rejected, or facade already closed."""


class PreparationError(DatabaseError):
    """The backend rejected the SQL text."""


class ParameterBindingError(DatabaseError):
    """A parameter cannot be bound, or the parameter count is wrong."""


class ExecutionError(DatabaseError):
    """The bound statement failed at run time."""
