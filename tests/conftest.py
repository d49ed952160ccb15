"""
Global pytest configuration and fixtures for schemalock tests

Provides:
- Fake lock server shared by the engines of one test
- SQLite engines wired to the fake lock server
- Mock engine for failure injection
- Ready-to-use MySQLDriver
"""

import pytest
from unittest.mock import MagicMock
from sqlalchemy import create_engine

from schemalock import MySQLDriver
from tests.fixtures.lock_server import FakeLockServer


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


# ============================================================================
# Engines and Drivers
# ============================================================================

@pytest.fixture
def lock_server():
    """Fake lock server shared by all engines of one test"""
    return FakeLockServer()


@pytest.fixture
def db_url(tmp_path):
    """URL of a file-backed SQLite database (shared across connections)"""
    return f"sqlite:///{tmp_path / 'migrations.db'}"


@pytest.fixture
def make_engine(db_url, lock_server):
    """Factory for engines on the same database, one per simulated process"""
    engines = []

    def _make():
        engine = lock_server.attach(
            create_engine(db_url, connect_args={"check_same_thread": False})
        )
        engines.append(engine)
        return engine

    yield _make

    for engine in engines:
        engine.dispose()


@pytest.fixture
def engine(make_engine):
    """SQLite engine with GET_LOCK / RELEASE_LOCK available"""
    return make_engine()


@pytest.fixture
def driver(engine, lock_server):
    """MySQLDriver for database 'testdb' with locking enabled"""
    driver = MySQLDriver(engine, "testdb")
    yield driver
    lock_server.fail.clear()
    driver.close()


@pytest.fixture
def mock_engine():
    """
    MagicMock standing in for a SQLAlchemy engine.

    Identifiers are quoted with backticks like the MySQL dialect.
    """
    engine = MagicMock()
    engine.dialect.identifier_preparer.quote_identifier.side_effect = (
        lambda name: f"`{name}`"
    )
    return engine
