"""
Role/permission table definitions

The application owns these tables; this library only reads them.
create_schema is idempotent and used by tests and local setups.
"""

import sqlite3
import logging

logger = logging.getLogger(__name__)


def create_schema(conn: sqlite3.Connection) -> None:
    """
    Create role/permission tables

    Tables:
    - roles: Role definitions; module_levels holds a JSON object or NULL
    - user_roles: User -> role assignments
    - permissions: Legacy (module, action) catalog
    - role_permissions: Legacy role -> permission grants
    """
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS roles (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT,
            is_system_role INTEGER DEFAULT 0,
            module_levels TEXT,
            created_at TEXT,
            updated_at TEXT
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS user_roles (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            role_id TEXT NOT NULL,
            assigned_at TEXT,
            assigned_by TEXT
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS permissions (
            id TEXT PRIMARY KEY,
            module TEXT NOT NULL,
            action TEXT NOT NULL,
            description TEXT
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS role_permissions (
            id TEXT PRIMARY KEY,
            role_id TEXT NOT NULL,
            permission_id TEXT NOT NULL
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_user_roles_user ON user_roles(user_id)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_role_permissions_role ON role_permissions(role_id)")

    conn.commit()
    logger.debug("Role/permission schema ready")
