"""
Migration-state driver for relational databases.

This package tracks the schema version of a database, guards schema changes
with a server-side advisory lock, and applies migration scripts. The
MigrationDriver interface is what an orchestrating migrator talks to;
MySQLDriver implements it for MySQL-compatible servers.
"""

from .adapter import (
    MAX_MIGRATION_VERSION,
    NO_MIGRATION_VERSION,
    MigrationDriver,
    MigrationState,
)
from .config import (
    DriverConfig,
    configure_logger,
    configure_logging_from_config,
    load_config,
)
from .errors import (
    ConfigurationError,
    DatabaseLockedError,
    DriverError,
    MigrationDriverError,
    NoDatabaseClientError,
    NoDatabaseNameError,
    TransactionError,
)
from .identifier import DEFAULT_MIGRATIONS_TABLE, TableName
from .lock import ADVISORY_LOCK_ID_SALT, LOCK_TIMEOUT_SECONDS, ReentrancyFlag, locking_key
from .mysql import MySQLDriver

__all__ = [
    # Driver interface
    "MigrationDriver",
    "MigrationState",
    "MySQLDriver",
    "NO_MIGRATION_VERSION",
    "MAX_MIGRATION_VERSION",
    # Errors
    "MigrationDriverError",
    "ConfigurationError",
    "NoDatabaseNameError",
    "NoDatabaseClientError",
    "DatabaseLockedError",
    "DriverError",
    "TransactionError",
    # Locking
    "locking_key",
    "ReentrancyFlag",
    "ADVISORY_LOCK_ID_SALT",
    "LOCK_TIMEOUT_SECONDS",
    # Configuration
    "DriverConfig",
    "load_config",
    "configure_logger",
    "configure_logging_from_config",
    "TableName",
    "DEFAULT_MIGRATIONS_TABLE",
]
