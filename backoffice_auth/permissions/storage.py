"""
Permission Storage

Read-only access to role assignments, role definitions and legacy grants.

PermissionStore is the port the engine depends on. SQLitePermissionStore
reads the application database; InMemoryPermissionStore keeps records in
dicts for tests and embedding.
"""

import sqlite3
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union

from ..db import get_readonly_connection
from ..errors import StorageError, ErrorType
from ..schemas import parse_role
from .types import Role, RoleAssignment, LegacyPermission

logger = logging.getLogger(__name__)


class PermissionStore(Protocol):
    """Reads the engine needs from the role/permission store"""

    def get_role_assignments_for_user(self, user_id: str) -> List[RoleAssignment]:
        ...

    def get_role(self, role_id: str) -> Optional[Role]:
        ...

    def get_legacy_grants_for_role(self, role_id: str) -> List[LegacyPermission]:
        ...


class SQLitePermissionStore:
    """
    PermissionStore over the application's SQLite database

    Opens a read-only connection per call so instances can be shared across
    threads. A missing database file is reported as STORAGE_UNAVAILABLE and
    is never created.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = db_path

    def _get_connection(self) -> sqlite3.Connection:
        return get_readonly_connection(self.db_path)

    def _fetch(self, query: str, params: Tuple) -> List[sqlite3.Row]:
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            raise StorageError(
                f"Cannot open permission store: {e}",
                error_type=ErrorType.STORAGE_UNAVAILABLE,
                details={"db_path": str(self.db_path)},
            ) from e

        try:
            return conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StorageError(
                f"Permission store query failed: {e}",
                details={"db_path": str(self.db_path)},
            ) from e
        finally:
            conn.close()

    def get_role_assignments_for_user(self, user_id: str) -> List[RoleAssignment]:
        rows = self._fetch(
            "SELECT id, user_id, role_id, assigned_by FROM user_roles WHERE user_id = ?",
            (user_id,),
        )
        return [
            RoleAssignment(
                id=row["id"],
                user_id=row["user_id"],
                role_id=row["role_id"],
                assigned_by=row["assigned_by"],
            )
            for row in rows
        ]

    def get_role(self, role_id: str) -> Optional[Role]:
        rows = self._fetch(
            """
            SELECT id, name, description, is_system_role, module_levels
            FROM roles
            WHERE id = ?
            """,
            (role_id,),
        )
        if not rows:
            return None
        row = rows[0]
        return parse_role({
            "id": row["id"],
            "name": row["name"],
            "description": row["description"],
            "is_system_role": bool(row["is_system_role"]),
            "module_levels": row["module_levels"],
        })

    def get_legacy_grants_for_role(self, role_id: str) -> List[LegacyPermission]:
        rows = self._fetch(
            """
            SELECT p.id, p.module, p.action
            FROM role_permissions rp
            JOIN permissions p ON rp.permission_id = p.id
            WHERE rp.role_id = ?
            """,
            (role_id,),
        )
        return [
            LegacyPermission(id=row["id"], module=row["module"], action=row["action"])
            for row in rows
        ]


class InMemoryPermissionStore:
    """
    PermissionStore backed by plain dicts

    Roles are stored raw (module_levels as a dict or JSON string) and decoded
    on every read, like rows coming out of a key-value store.
    """

    def __init__(self):
        self._roles: Dict[str, Dict[str, Any]] = {}
        self._assignments: List[RoleAssignment] = []
        self._permissions: Dict[str, LegacyPermission] = {}
        self._role_permissions: List[Tuple[str, str]] = []

    def add_role(
        self,
        role_id: str,
        name: str = "",
        module_levels: Union[Dict[str, Any], str, None] = None,
        **extra: Any,
    ) -> None:
        self._roles[role_id] = {"id": role_id, "name": name or role_id, "module_levels": module_levels, **extra}

    def assign_role(self, user_id: str, role_id: str) -> None:
        self._assignments.append(RoleAssignment(user_id=user_id, role_id=role_id))

    def add_permission(self, permission_id: str, module: str, action: str) -> None:
        self._permissions[permission_id] = LegacyPermission(id=permission_id, module=module, action=action)

    def grant_legacy(self, role_id: str, module: str, action: str) -> None:
        """Grant a legacy (module, action) to a role, creating the permission if needed"""
        permission_id = f"{module}:{action}"
        if permission_id not in self._permissions:
            self.add_permission(permission_id, module, action)
        self._role_permissions.append((role_id, permission_id))

    def get_role_assignments_for_user(self, user_id: str) -> List[RoleAssignment]:
        return [a for a in self._assignments if a.user_id == user_id]

    def get_role(self, role_id: str) -> Optional[Role]:
        data = self._roles.get(role_id)
        if data is None:
            return None
        return parse_role(data)

    def get_legacy_grants_for_role(self, role_id: str) -> List[LegacyPermission]:
        return [
            self._permissions[permission_id]
            for rid, permission_id in self._role_permissions
            if rid == role_id and permission_id in self._permissions
        ]
