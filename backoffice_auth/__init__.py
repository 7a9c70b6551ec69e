"""
Back-office authorization core

Hierarchical, module-scoped permission levels with legacy action-grant
compatibility and a settings sub-policy. See backoffice_auth.permissions.
"""

from .permissions import (
    PermissionLevel,
    PermissionProfile,
    PermissionEngine,
    get_permission_engine,
)
from .errors import AuthCoreError, StorageError, MalformedRoleDataError, InvalidLevelError
from .config import AuthSettings, get_settings

__version__ = "0.1.0"

__all__ = [
    "PermissionLevel",
    "PermissionProfile",
    "PermissionEngine",
    "get_permission_engine",
    "AuthCoreError",
    "StorageError",
    "MalformedRoleDataError",
    "InvalidLevelError",
    "AuthSettings",
    "get_settings",
]
