"""
Permissions Package

Level-based authorization core for the back-office application.

This package provides:
- Permission levels and the cumulative action catalog
- Legacy action -> level inference
- Effective-level resolution across a user's roles
- Settings sub-policy (per-action required levels)
- Backward compatible {module: [actions]} views

Public API:
- Types: PermissionLevel, PermissionProfile, Role, RoleAssignment, LegacyPermission, ModuleAccess
- Hierarchy: actions_for_level, has_permission_for_action, has_minimum_level,
  minimum_level_for_action, actions_to_level
- Engine: PermissionEngine, get_permission_engine
- Storage: PermissionStore, SQLitePermissionStore, InMemoryPermissionStore
- Settings and legacy helpers: via .settings_levels and .compat
"""

from .types import (
    PermissionLevel,
    PermissionProfile,
    Role,
    RoleAssignment,
    LegacyPermission,
    ModuleAccess,
)
from .hierarchy import (
    LEVEL_NAMES,
    PERMISSION_LEVEL_ACTIONS,
    ALL_LEVELS,
    USER_ASSIGNABLE_LEVELS,
    level_name,
    actions_for_level,
    has_permission_for_action,
    has_minimum_level,
    minimum_level_for_action,
    actions_to_level,
    describe_module_access,
)
from .storage import PermissionStore, SQLitePermissionStore, InMemoryPermissionStore
from .engine import PermissionEngine, get_permission_engine, reset_permission_engine
from .settings_levels import (
    SETTINGS_PERMISSION_CONFIG,
    SETTINGS_PERMISSION_GROUPS,
    can_access_settings_action,
    get_available_settings_actions,
    get_accessible_settings_groups,
)
from . import compat
from . import role_templates

__all__ = [
    # Types
    "PermissionLevel",
    "PermissionProfile",
    "Role",
    "RoleAssignment",
    "LegacyPermission",
    "ModuleAccess",
    # Hierarchy
    "LEVEL_NAMES",
    "PERMISSION_LEVEL_ACTIONS",
    "ALL_LEVELS",
    "USER_ASSIGNABLE_LEVELS",
    "level_name",
    "actions_for_level",
    "has_permission_for_action",
    "has_minimum_level",
    "minimum_level_for_action",
    "actions_to_level",
    "describe_module_access",
    # Storage
    "PermissionStore",
    "SQLitePermissionStore",
    "InMemoryPermissionStore",
    # Engine
    "PermissionEngine",
    "get_permission_engine",
    "reset_permission_engine",
    # Settings
    "SETTINGS_PERMISSION_CONFIG",
    "SETTINGS_PERMISSION_GROUPS",
    "can_access_settings_action",
    "get_available_settings_actions",
    "get_accessible_settings_groups",
    # Submodules
    "compat",
    "role_templates",
]
