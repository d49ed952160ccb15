"""
Validated SQL identifiers for the migrations table name.

The migrations table name is spliced into DDL/DML text, so it is checked
against an allow-listed character set before it ever reaches a query.
"""

import re

from .errors import ConfigurationError

# Default name of the table holding the migration state
DEFAULT_MIGRATIONS_TABLE = "schema_migrations"


class TableName(str):
    """
    Table name restricted to letters, digits, ``_`` and ``$``.

    Must start with a letter or underscore and be at most 64 characters
    (the MySQL identifier limit).

    Example:
        >>> TableName("schema_migrations")
        'schema_migrations'
        >>> TableName("users; DROP TABLE x")
        Traceback (most recent call last):
        ...
        ConfigurationError: invalid migrations table name: 'users; DROP TABLE x'
    """

    PATTERN: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]{0,63}$")

    def __new__(cls, value: str) -> "TableName":
        if not isinstance(value, str) or not cls.PATTERN.match(value):
            raise ConfigurationError(f"invalid migrations table name: {value!r}")
        return super().__new__(cls, value)

    def quoted(self, engine) -> str:
        """
        Render the name quoted for the engine's SQL dialect.

        Args:
            engine: SQLAlchemy engine whose dialect does the quoting

        Returns:
            Quoted identifier, e.g. `schema_migrations` on MySQL
        """
        return engine.dialect.identifier_preparer.quote_identifier(str(self))
