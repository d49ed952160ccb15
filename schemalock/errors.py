"""
Migration driver exceptions.

This module defines the exception hierarchy for the migration-state driver,
enabling callers to tell lock contention apart from transport failures.

Exception Hierarchy:
    MigrationDriverError (base)
    ├── ConfigurationError
    │   ├── NoDatabaseNameError
    │   └── NoDatabaseClientError
    ├── DatabaseLockedError
    └── DriverError
        └── TransactionError
"""

from typing import Optional, Union


class MigrationDriverError(Exception):
    """
    Base exception for migration driver errors.

    All driver exceptions inherit from this base class,
    allowing catch-all error handling when needed.
    """
    pass


class ConfigurationError(MigrationDriverError):
    """
    Driver configuration is invalid.

    Raised when:
    - Database name or client is missing at construction
    - Migrations table name is not a valid identifier
    - Configuration file cannot be read or parsed
    """
    pass


class NoDatabaseNameError(ConfigurationError):
    """No database name was given to the driver."""

    def __init__(self, message: str = "no database name"):
        super().__init__(message)


class NoDatabaseClientError(ConfigurationError):
    """No database client (engine) was given to the driver."""

    def __init__(self, message: str = "no database client"):
        super().__init__(message)


class DatabaseLockedError(MigrationDriverError):
    """
    Advisory lock could not be obtained within the lock timeout.

    Another process holds the migration lock for this database.
    Recoverable: the caller may retry later.
    """

    def __init__(self, message: str = "database is locked"):
        super().__init__(message)


class DriverError(MigrationDriverError):
    """
    Query execution against the database failed.

    Wraps the underlying database error together with the failing
    query text so failures can be diagnosed from logs alone.

    Attributes:
        msg: Human-readable description of the failed step
        orig_error: Underlying exception (None if not caused by one)
        query: Query text or migration script bytes (None if not applicable)

    Example:
        >>> err = DriverError("failed to select version",
        ...                   orig_error=exc,
        ...                   query="SELECT version, dirty FROM t LIMIT 1")
        >>> str(err)
        'failed to select version in query: SELECT version, dirty ... : <exc>'
    """

    def __init__(
        self,
        msg: str,
        orig_error: Optional[BaseException] = None,
        query: Union[str, bytes, None] = None,
    ) -> None:
        self.msg = msg
        self.orig_error = orig_error
        self.query = query
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.msg
        if self.query:
            query = self.query
            if isinstance(query, bytes):
                query = query.decode('utf-8', errors='replace')
            text = f"{text} in query: {query}"
        if self.orig_error is not None:
            text = f"{text}: {self.orig_error}"
        return text


class TransactionError(DriverError):
    """
    Version replace transaction failed.

    Raised when the delete, insert or commit step of a version update
    fails. The transaction is always rolled back; if the rollback fails
    too, that error is kept in ``rollback_error`` instead of being lost.

    Attributes:
        rollback_error: Exception raised by the rollback, if any
    """

    def __init__(
        self,
        msg: str,
        orig_error: Optional[BaseException] = None,
        query: Union[str, bytes, None] = None,
        rollback_error: Optional[BaseException] = None,
    ) -> None:
        self.rollback_error = rollback_error
        super().__init__(msg, orig_error=orig_error, query=query)
