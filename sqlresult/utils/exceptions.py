"""
Centralized exception hierarchy for sqlresult.

All custom exceptions inherit from SqlResultError so callers (REPL, web app)
can handle every wrapper error without swallowing unrelated system
exceptions.
"""

from enum import Enum


class ErrorKind(Enum):
    """Which driver operation a failure came from."""
    READ = "read"
    RELEASE = "release"
    EXECUTE = "execute"


class SqlResultError(Exception):
    """Base exception for all sqlresult errors."""
    pass


class DriverOperationError(SqlResultError):
    """
    A driver call failed while reading or releasing a statement outcome.

    Carries the kind of operation that failed and the original driver
    exception, if any.
    """

    def __init__(self, kind: ErrorKind, message: str, cause: Exception = None):
        self.kind = kind
        self.cause = cause
        super().__init__(message)


class StatementExecutionError(SqlResultError):
    """Raised when the driver rejects a statement."""

    def __init__(self, sql: str, cause: Exception):
        self.sql = sql
        self.cause = cause
        self.kind = ErrorKind.EXECUTE
        super().__init__(f"Statement failed: {cause}\nSQL: {sql}")


class EmptyStatementError(SqlResultError):
    """Raised when there is no SQL text to execute."""

    def __init__(self):
        super().__init__("Statement is empty")


class ConnectionSetupError(SqlResultError):
    """Raised when the driver cannot be imported or refuses to connect."""

    def __init__(self, driver: str, reason: str):
        self.driver = driver
        self.reason = reason
        super().__init__(f"Cannot connect using driver '{driver}': {reason}")


class ConfigurationError(SqlResultError):
    """Raised when a setting has an invalid value."""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid setting {name}={value!r}: {reason}")
