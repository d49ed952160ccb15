#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Driver configuration and logging setup.

Configuration can be built in code, from a dictionary, or loaded from a
JSON or YAML file:

    {
        "database_name": "app_db",
        "migrations_table": "schema_migrations",
        "locking": true,
        "verbose": false,
        "log_level": "INFO",
        "log_file": null
    }

The SCHEMALOCK_DATABASE environment variable overrides ``database_name``.
"""
import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .errors import ConfigurationError
from .identifier import DEFAULT_MIGRATIONS_TABLE, TableName

DATABASE_ENV_VAR = 'SCHEMALOCK_DATABASE'

DEFAULT_LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# Name of the handler configure_logger installs and later replaces
HANDLER_NAME = 'schemalock'


def _build_handler(log_file, log_format):
    if isinstance(log_file, (str, Path)):
        handler = logging.FileHandler(log_file, encoding='utf-8', errors='replace')
    else:
        handler = logging.StreamHandler(log_file)
    handler.setFormatter(logging.Formatter(log_format or DEFAULT_LOG_FORMAT))
    handler.set_name(HANDLER_NAME)
    return handler


def configure_logger(logger='schemalock',
                     log_file=None,
                     log_format=None,
                     log_level=logging.INFO):
    """Attach the schemalock log handler to a logger

    Repeated calls replace the handler installed by the previous call, so
    reconfiguring never duplicates log lines. Handlers added by other code
    are left alone.

    Args:
        logger: Logger instance or name (defaults to the package logger)
        log_file: Path to append to, or a stream (None for stderr)
        log_format: Format string (None for DEFAULT_LOG_FORMAT)
        log_level: Level number or name such as 'DEBUG'

    Returns:
        The configured logger

    Raises:
        ConfigurationError: If log_level is not a known level
    """
    if isinstance(logger, str):
        logger = logging.getLogger(logger)
    level = _parse_log_level(log_level)

    for existing in list(logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            logger.removeHandler(existing)
            existing.close()

    logger.addHandler(_build_handler(log_file, log_format))
    logger.setLevel(level)
    return logger


def _parse_log_level(value: Union[str, int]) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"invalid log level: {value!r}")
    return level


@dataclass
class DriverConfig:
    """
    Configuration for MySQLDriver.

    Attributes:
        database_name: Name of the database; also selects the lock key
        migrations_table: Table holding the migration state
        locking: Disable to skip all advisory lock calls
        verbose: Log lock and version traffic at INFO level
        log_level: Level for configure_logging_from_config
        log_file: Log file path (None for stderr)
        log_format: Log line format (None for DEFAULT_LOG_FORMAT)
    """

    database_name: str = ''
    migrations_table: str = DEFAULT_MIGRATIONS_TABLE
    locking: bool = True
    verbose: bool = False
    log_level: Union[str, int] = 'INFO'
    log_file: Optional[str] = None
    log_format: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.migrations_table = TableName(self.migrations_table)
        self.log_level = _parse_log_level(self.log_level)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DriverConfig':
        """
        Build a config from a mapping, rejecting unknown keys.

        Args:
            data: Mapping of DriverConfig field names to values

        Returns:
            DriverConfig instance

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"configuration must be a mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"unknown configuration keys: {', '.join(unknown)}")

        return cls(**data)


def load_config(path: Union[str, Path]) -> DriverConfig:
    """Load driver configuration from a JSON or YAML file

    YAML is used for .yaml/.yml files, JSON otherwise. The
    SCHEMALOCK_DATABASE environment variable takes precedence over the
    file's database_name.

    Args:
        path: Path to the configuration file

    Returns:
        DriverConfig built from the file

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as fp:
            if config_path.suffix in ('.yaml', '.yml'):
                data = yaml.safe_load(fp)
            else:
                data = json.load(fp)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"failed to parse {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"failed to read {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"configuration in {config_path} must be a mapping")

    if DATABASE_ENV_VAR in os.environ:
        data = {**data, 'database_name': os.environ[DATABASE_ENV_VAR]}

    return DriverConfig.from_dict(data)


def configure_logging_from_config(config: DriverConfig,
                                  logger='schemalock') -> logging.Logger:
    """Attach a handler to the driver logger as described by config."""
    return configure_logger(
        logger,
        log_file=config.log_file,
        log_format=config.log_format,
        log_level=config.log_level,
    )
