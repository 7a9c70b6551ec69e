"""
Permission Hierarchy

Ordering of permission levels and the cumulative action catalog each level
grants. Pure functions over static tables.

Note: compat.LEGACY_LEVEL_ACTIONS is a second, older action table kept for
legacy callers. The two are intentionally not unified.
"""

from typing import Dict, FrozenSet, Iterable, Tuple

from .types import ModuleAccess, PermissionLevel


WILDCARD = "*"

LEVEL_NAMES: Dict[PermissionLevel, str] = {
    PermissionLevel.NONE: "No Access",
    PermissionLevel.READ: "Read Only",
    PermissionLevel.WRITE: "Read & Write",
    PermissionLevel.FULL: "Full Access",
    PermissionLevel.ADMIN: "Administrator",
    PermissionLevel.SUPER_ADMIN: "Super Admin",
}

_READ_ACTIONS = ("view", "list", "read", "search", "export")
_WRITE_ACTIONS = _READ_ACTIONS + ("create", "edit", "update", "duplicate")
_FULL_ACTIONS = _WRITE_ACTIONS + ("delete", "manage", "assign", "transfer")
_ADMIN_ACTIONS = _FULL_ACTIONS + ("configure", "admin", "manage_all", "restore")

# Cumulative: each level's set is a strict superset of the one below
PERMISSION_LEVEL_ACTIONS: Dict[PermissionLevel, FrozenSet[str]] = {
    PermissionLevel.NONE: frozenset(),
    PermissionLevel.READ: frozenset(_READ_ACTIONS),
    PermissionLevel.WRITE: frozenset(_WRITE_ACTIONS),
    PermissionLevel.FULL: frozenset(_FULL_ACTIONS),
    PermissionLevel.ADMIN: frozenset(_ADMIN_ACTIONS),
    PermissionLevel.SUPER_ADMIN: frozenset({WILDCARD}),
}

ALL_LEVELS: Tuple[PermissionLevel, ...] = tuple(PermissionLevel)

# Levels an administrator may hand out through the role editor
USER_ASSIGNABLE_LEVELS: Tuple[PermissionLevel, ...] = (
    PermissionLevel.READ,
    PermissionLevel.WRITE,
    PermissionLevel.FULL,
    PermissionLevel.ADMIN,
)

# Legacy inference markers, checked from the highest level down
_SUPER_ADMIN_MARKERS = frozenset({WILDCARD, "super_admin"})
_ADMIN_MARKERS = frozenset({"configure", "admin", "manage_all"})
_FULL_MARKERS = frozenset({"delete", "manage", "assign"})
_WRITE_MARKERS = frozenset({"create", "edit", "update"})


def level_name(level: PermissionLevel) -> str:
    """Human-readable name for a level"""
    return LEVEL_NAMES[PermissionLevel(level)]


def actions_for_level(level: PermissionLevel) -> FrozenSet[str]:
    """
    Get all actions granted at a level, including inherited ones

    SUPER_ADMIN returns the wildcard set {"*"}.
    """
    return PERMISSION_LEVEL_ACTIONS.get(level, frozenset())


def has_permission_for_action(level: PermissionLevel, action: str) -> bool:
    """
    Check if a level allows a specific action

    SUPER_ADMIN allows every action, known or not. NONE allows nothing.
    """
    if level >= PermissionLevel.SUPER_ADMIN:
        return True
    if level <= PermissionLevel.NONE:
        return False
    return action in actions_for_level(level)


def has_minimum_level(level: PermissionLevel, required: PermissionLevel) -> bool:
    """Check if level meets or exceeds the required level"""
    return level >= required


def minimum_level_for_action(action: str) -> PermissionLevel:
    """
    Lowest level whose action set contains the action

    "*" resolves to SUPER_ADMIN. Actions missing from every level resolve
    to NONE.
    """
    if action == WILDCARD:
        return PermissionLevel.SUPER_ADMIN

    for level in ALL_LEVELS:
        if action in PERMISSION_LEVEL_ACTIONS[level]:
            return level

    return PermissionLevel.NONE


def actions_to_level(actions: Iterable[str]) -> PermissionLevel:
    """
    Infer a level from a set of legacy action grants

    Used for roles that only carry pre-level (module, action) grants.
    Any non-empty set with no recognised action is READ.
    """
    granted = set(actions)
    if not granted:
        return PermissionLevel.NONE

    if granted & _SUPER_ADMIN_MARKERS:
        return PermissionLevel.SUPER_ADMIN
    if granted & _ADMIN_MARKERS:
        return PermissionLevel.ADMIN
    if granted & _FULL_MARKERS:
        return PermissionLevel.FULL
    if granted & _WRITE_MARKERS:
        return PermissionLevel.WRITE

    return PermissionLevel.READ


def describe_module_access(module: str, level: PermissionLevel) -> ModuleAccess:
    """Level summary with view/write/full/admin flags for one module"""
    level = PermissionLevel(level)
    return ModuleAccess(
        module=module,
        level=level,
        level_name=level_name(level),
        can_view=level >= PermissionLevel.READ,
        can_write=level >= PermissionLevel.WRITE,
        can_full=level >= PermissionLevel.FULL,
        can_admin=level >= PermissionLevel.ADMIN,
    )
