"""
Shared pytest fixtures for the authorization core tests.

Provides:
- Settings fixtures (isolated from the environment and .env)
- In-memory store and engine fixtures
- SQLite database fixtures (temporary file with schema)
"""

import sqlite3
import uuid
import pytest
from pathlib import Path
from typing import Generator

from backoffice_auth.config import AuthSettings, reset_settings
from backoffice_auth.db import get_sqlite_connection
from backoffice_auth.permissions.engine import PermissionEngine, reset_permission_engine
from backoffice_auth.permissions.schema import create_schema
from backoffice_auth.permissions.storage import InMemoryPermissionStore, SQLitePermissionStore


# ============================================================================
# Settings Fixtures
# ============================================================================

@pytest.fixture
def settings() -> AuthSettings:
    """Default settings, ignoring any .env file"""
    return AuthSettings(_env_file=None, environment="testing")


@pytest.fixture(autouse=True)
def _reset_globals() -> Generator[None, None, None]:
    """Clear cached settings and the process-wide engine around each test"""
    reset_settings()
    reset_permission_engine()
    yield
    reset_settings()
    reset_permission_engine()


# ============================================================================
# In-memory Fixtures
# ============================================================================

@pytest.fixture
def store() -> InMemoryPermissionStore:
    """Empty in-memory permission store"""
    return InMemoryPermissionStore()


@pytest.fixture
def engine(store: InMemoryPermissionStore, settings: AuthSettings) -> PermissionEngine:
    """Engine reading from the in-memory store"""
    return PermissionEngine(store, settings)


# ============================================================================
# SQLite Fixtures
# ============================================================================

@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Temporary database file with the role/permission schema"""
    path = tmp_path / "backoffice.db"
    conn = get_sqlite_connection(path)
    create_schema(conn)
    conn.close()
    return path


@pytest.fixture
def db(db_path: Path) -> Generator[sqlite3.Connection, None, None]:
    """Connection for seeding test data (autocommit per helper call)"""
    conn = get_sqlite_connection(db_path)
    yield conn
    conn.close()


@pytest.fixture
def sqlite_store(db_path: Path) -> SQLitePermissionStore:
    return SQLitePermissionStore(db_path)


# ============================================================================
# Data Helpers
# ============================================================================

class SQLiteSeeder:
    """Writes role, assignment and legacy grant rows for a test"""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def role(self, role_id: str, module_levels=None, name: str = None) -> None:
        """Insert a role row; module_levels is stored as-is (JSON text or NULL)"""
        self.conn.execute(
            "INSERT INTO roles (id, name, module_levels) VALUES (?, ?, ?)",
            (role_id, name or role_id, module_levels),
        )
        self.conn.commit()

    def assign(self, user_id: str, role_id: str) -> None:
        self.conn.execute(
            "INSERT INTO user_roles (id, user_id, role_id, assigned_by) VALUES (?, ?, ?, ?)",
            (str(uuid.uuid4()), user_id, role_id, "test"),
        )
        self.conn.commit()

    def grant(self, role_id: str, module: str, action: str) -> None:
        permission_id = f"{module}:{action}"
        self.conn.execute(
            "INSERT OR IGNORE INTO permissions (id, module, action) VALUES (?, ?, ?)",
            (permission_id, module, action),
        )
        self.conn.execute(
            "INSERT INTO role_permissions (id, role_id, permission_id) VALUES (?, ?, ?)",
            (str(uuid.uuid4()), role_id, permission_id),
        )
        self.conn.commit()


@pytest.fixture
def seed(db: sqlite3.Connection) -> SQLiteSeeder:
    return SQLiteSeeder(db)
