"""
Abstract migration driver interface.

This module defines the MigrationDriver abstract base class that every
database-specific driver implements, and the MigrationState record it
reads and writes. An orchestrating migrator drives these seven operations
in whatever order implements its up/down semantics.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional, TextIO, Union

# Version reported when no migration has ever run; real versions start at 1
NO_MIGRATION_VERSION = 0

# Largest version the BIGINT version column can hold
MAX_MIGRATION_VERSION = 2 ** 63 - 1

MigrationContent = Union[bytes, str, BinaryIO, TextIO]


@dataclass(frozen=True)
class MigrationState:
    """
    Schema version recorded in the migrations table.

    Attributes:
        version: Last migration version applied (NO_MIGRATION_VERSION if none)
        dirty: True if the last migration attempt did not confirm completion

    Example:
        >>> state = driver.get_version()
        >>> if state.dirty:
        ...     raise RuntimeError(f"database is dirty at v{state.version}")
    """

    version: int
    dirty: bool

    @property
    def has_version(self) -> bool:
        """Whether any migration has been recorded."""
        return self.version != NO_MIGRATION_VERSION

    def __repr__(self) -> str:
        return f"<MigrationState(v{self.version}{', dirty' if self.dirty else ''})>"


class MigrationDriver(ABC):
    """
    Abstract interface for migration-state drivers.

    A driver tracks the schema version of one database, serializes
    schema changes across processes with an advisory lock, and executes
    migration scripts. It performs exactly one transition or read per
    call; sequencing versions is the orchestrator's job.

    Attributes:
        logger: Logger instance for driver events
        verbose: Log lock and version traffic at INFO level

    Example:
        >>> driver.lock()
        >>> try:
        ...     state = driver.get_version()
        ...     driver.set_version(2, dirty=True)
        ...     driver.run_migration(script)
        ...     driver.set_version(2, dirty=False)
        ... finally:
        ...     driver.unlock()
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 verbose: bool = False):
        """
        Initialize driver.

        Args:
            logger: Optional logger instance. If None, uses the logger
                named after the driver's module (e.g. schemalock.mysql).
            verbose: Log lock and version traffic at INFO instead of DEBUG
        """
        self.logger = logger or logging.getLogger(self.__class__.__module__)
        self.verbose = verbose

    def _log(self, msg: str, *args) -> None:
        """Log routine driver traffic, at INFO only in verbose mode."""
        self.logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    @abstractmethod
    def lock(self) -> None:
        """
        Acquire the database-wide migration lock.

        Reentrant within one driver: a second call while held is a no-op.

        Raises:
            DatabaseLockedError: If another process holds the lock
            DriverError: If the lock query fails
        """
        pass

    @abstractmethod
    def unlock(self) -> None:
        """
        Release the migration lock. No-op if not held.

        Raises:
            DriverError: If the release query fails (lock stays held)
        """
        pass

    @abstractmethod
    def get_version(self) -> MigrationState:
        """
        Read the current migration state.

        Returns:
            MigrationState; NO_MIGRATION_VERSION with dirty=False if none

        Raises:
            DriverError: If the state cannot be read
        """
        pass

    @abstractmethod
    def set_version(self, version: int, dirty: bool) -> None:
        """
        Atomically replace the recorded migration state.

        Raises:
            TransactionError: If the replace fails (nothing is applied)
        """
        pass

    @abstractmethod
    def run_migration(self, migration: MigrationContent) -> None:
        """
        Execute one migration script.

        Raises:
            DriverError: If the script fails
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """
        Drop the migrations table. Irreversible.

        Raises:
            DriverError: If the table cannot be dropped
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release resources held by the driver."""
        pass
