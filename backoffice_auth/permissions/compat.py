"""
Permission Compatibility Layer

Backward compatible {module: [actions]} views for call sites written against
the old action-based permission system. Values are derived from the level
engine; new code should call PermissionEngine directly.

LEGACY_LEVEL_ACTIONS is deliberately separate from
hierarchy.PERMISSION_LEVEL_ACTIONS: old callers depend on these exact action
names (e.g. "assign-role", no "search"/"export").
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .types import PermissionLevel, LegacyPermission
from .hierarchy import WILDCARD
from .engine import PermissionEngine, get_permission_engine
from ..schemas import UserPermissionsContextModel

logger = logging.getLogger(__name__)


LEGACY_LEVEL_ACTIONS: Dict[PermissionLevel, List[str]] = {
    PermissionLevel.NONE: [],
    PermissionLevel.READ: ["read", "view", "list"],
    PermissionLevel.WRITE: ["read", "view", "list", "create", "edit", "update"],
    PermissionLevel.FULL: ["read", "view", "list", "create", "edit", "update", "delete", "manage"],
    PermissionLevel.ADMIN: [
        "read", "view", "list", "create", "edit", "update", "delete", "manage",
        "configure", "admin", "assign-role",
    ],
    PermissionLevel.SUPER_ADMIN: [WILDCARD],
}


def level_actions(level: PermissionLevel) -> List[str]:
    """Legacy action names for a level (a fresh list each call)"""
    return list(LEGACY_LEVEL_ACTIONS.get(level, []))


def get_user_permissions_context(
    user_id: str,
    engine: Optional[PermissionEngine] = None,
) -> Dict[str, Any]:
    """
    Get the legacy permissions context for a user

    Returns:
        Dict with:
        - permissions: list of {"module", "action"} pairs
        - permission_map: module -> list of actions
        - is_super_admin: bool
    """
    engine = engine or get_permission_engine()
    profile = engine.get_permission_profile(user_id)

    permissions: List[Dict[str, str]] = []
    permission_map: Dict[str, List[str]] = {}
    for module, level in profile.module_levels.items():
        actions = level_actions(level)
        permission_map[module] = actions
        permissions.extend({"module": module, "action": action} for action in actions)

    return UserPermissionsContextModel(
        permissions=permissions,
        permission_map=permission_map,
        is_super_admin=profile.is_super_admin,
    ).model_dump()


def get_user_module_permissions(
    user_id: str,
    modules: Sequence[str],
    engine: Optional[PermissionEngine] = None,
) -> Dict[str, List[str]]:
    """Legacy actions for each requested module ([] where the user has none)"""
    engine = engine or get_permission_engine()
    profile = engine.get_permission_profile(user_id)
    return {module: level_actions(profile.level_for(module)) for module in modules}


def is_super_admin(permission_map: Mapping[str, Sequence[str]]) -> bool:
    """Check for the {"*": ["*"]} super admin marker"""
    return WILDCARD in permission_map.get(WILDCARD, ())


def has_permission(
    permission_map: Mapping[str, Sequence[str]],
    module: str,
    action: str,
) -> bool:
    """Check a legacy permission map for module:action (or a wildcard)"""
    if is_super_admin(permission_map):
        return True

    module_actions = permission_map.get(module, ())
    return action in module_actions or WILDCARD in module_actions


def has_module_access(permission_map: Mapping[str, Sequence[str]], module: str) -> bool:
    """Check if the map grants anything at all on a module"""
    if is_super_admin(permission_map):
        return True
    return len(permission_map.get(module, ())) > 0


def map_permissions_by_module(permissions: Iterable[Any]) -> Dict[str, List[str]]:
    """
    Group (module, action) records by module

    Accepts LegacyPermission objects or {"module", "action"} dicts. Actions
    keep first-seen order and are deduplicated.
    """
    mapped: Dict[str, List[str]] = {}
    for perm in permissions:
        if isinstance(perm, LegacyPermission):
            module, action = perm.module, perm.action
        else:
            module, action = perm["module"], perm["action"]
        actions = mapped.setdefault(module, [])
        if action not in actions:
            actions.append(action)
    return mapped


def check_permission(
    user_id: str,
    module: str,
    action: str,
    engine: Optional[PermissionEngine] = None,
) -> bool:
    """
    Legacy module:action check through the permission map

    Fails closed on any error.
    """
    try:
        permission_map = get_user_permissions_context(user_id, engine)["permission_map"]
        allowed = has_permission(permission_map, module, action)
        logger.debug(f"Legacy permission check: user {user_id} {module}:{action} -> {allowed}")
        return allowed
    except Exception as e:
        logger.error(
            f"Legacy permission check failed for user {user_id} on {module}:{action}: {e}",
            exc_info=True,
            extra={"user_id": user_id, "perm_module": module, "action": action},
        )
        return False
