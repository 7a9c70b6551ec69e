"""
Effective-Level Resolution Engine

Resolves a user's per-module permission levels from their role assignments:
- Explicit role.module_levels (merged across roles, highest level wins)
- Legacy (module, action) grants, inferred into a level only for modules
  that no role configures explicitly
- Super admin flag and overall effective level

Every public method fails closed: storage failures and malformed role data
are logged and turned into "no access", never raised to the caller.
"""

import logging
from typing import Optional, Dict, List, Iterable, Any

from ..config import AuthSettings, get_settings
from ..errors import AuthCoreError
from .types import PermissionLevel, PermissionProfile, Role, LegacyPermission, ModuleAccess
from .hierarchy import (
    actions_to_level,
    describe_module_access,
    has_minimum_level,
    has_permission_for_action,
    level_name,
    minimum_level_for_action,
)
from .settings_levels import can_access_settings_action
from .storage import PermissionStore, SQLitePermissionStore

logger = logging.getLogger(__name__)


def merge_module_levels(
    roles: Iterable[Role],
    legacy_grants: Iterable[LegacyPermission],
) -> Dict[str, PermissionLevel]:
    """
    Merge explicit and legacy grants into one module -> level map

    1. Explicit module_levels from every role, keeping the highest level
    2. For modules still missing, the level inferred from all legacy
       actions held on that module

    Explicit levels are never overridden by inference, even a higher one.
    """
    module_levels: Dict[str, PermissionLevel] = {}

    for role in roles:
        if not role.module_levels:
            continue
        for module, level in role.module_levels.items():
            current = module_levels.get(module, PermissionLevel.NONE)
            module_levels[module] = max(current, PermissionLevel(level))

    legacy_actions = group_actions_by_module(legacy_grants)
    for module, actions in legacy_actions.items():
        if module not in module_levels:
            module_levels[module] = actions_to_level(actions)

    return module_levels


def group_actions_by_module(grants: Iterable[LegacyPermission]) -> Dict[str, List[str]]:
    """Module -> sorted unique legacy actions"""
    grouped: Dict[str, set] = {}
    for grant in grants:
        grouped.setdefault(grant.module, set()).add(grant.action)
    return {module: sorted(actions) for module, actions in grouped.items()}


def build_profile(
    user_id: str,
    module_levels: Dict[str, PermissionLevel],
    legacy_permissions: Optional[Dict[str, List[str]]] = None,
) -> PermissionProfile:
    """Derive the super admin flag and effective level from module levels"""
    is_super_admin = any(
        level == PermissionLevel.SUPER_ADMIN for level in module_levels.values()
    )
    if is_super_admin:
        effective_level = PermissionLevel.SUPER_ADMIN
    else:
        effective_level = max(module_levels.values(), default=PermissionLevel.NONE)

    return PermissionProfile(
        user_id=user_id,
        module_levels=module_levels,
        effective_level=PermissionLevel(effective_level),
        is_super_admin=is_super_admin,
        legacy_permissions=legacy_permissions or {},
    )


class PermissionEngine:
    """
    Level-based permission evaluation

    Reads through an injected PermissionStore. Holds no per-user state:
    every call re-reads role data and builds a fresh profile, so a single
    engine can serve concurrent requests.
    """

    def __init__(self, store: PermissionStore, settings: Optional[AuthSettings] = None):
        """
        Args:
            store: Role/permission reads (SQLite, in-memory, or a fake)
            settings: Optional settings; defaults to get_settings()
        """
        self.store = store
        self.settings = settings or get_settings()

    def get_permission_profile(self, user_id: str) -> PermissionProfile:
        """
        Resolve the complete permission profile for a user

        Returns an empty profile (no modules, NONE, not super admin) if any
        read fails or a role record is malformed.
        """
        try:
            return self._resolve_profile(user_id)
        except AuthCoreError as e:
            logger.error(
                f"Failed to resolve permission profile for user {user_id}: "
                f"{e.error_type.value}: {e.message}",
                exc_info=True,
                extra={"user_id": user_id},
            )
        except Exception as e:
            logger.error(
                f"Unexpected error resolving permission profile for user {user_id}: {e}",
                exc_info=True,
                extra={"user_id": user_id},
            )
        return PermissionProfile(user_id=user_id)

    def _resolve_profile(self, user_id: str) -> PermissionProfile:
        assignments = self.store.get_role_assignments_for_user(user_id)

        # Preserve order, drop duplicate assignments of the same role
        role_ids = list(dict.fromkeys(a.role_id for a in assignments))

        roles: List[Role] = []
        for role_id in role_ids:
            role = self.store.get_role(role_id)
            if role is None:
                logger.debug(f"Role {role_id} assigned to user {user_id} not found")
                continue
            roles.append(role)

        legacy_grants: List[LegacyPermission] = []
        for role_id in role_ids:
            legacy_grants.extend(self.store.get_legacy_grants_for_role(role_id))

        module_levels = merge_module_levels(roles, legacy_grants)
        profile = build_profile(
            user_id,
            module_levels,
            legacy_permissions=group_actions_by_module(legacy_grants),
        )

        logger.debug(
            f"Resolved {len(module_levels)} module levels for user {user_id} "
            f"from {len(role_ids)} roles (effective={profile.effective_level.name})"
        )
        return profile

    def check_permission_level(self, user_id: str, module: str, action: str) -> bool:
        """
        Check if a user may perform an action in a module

        Args:
            user_id: User ID
            module: Module name (e.g. "contacts")
            action: Action (e.g. "view", "delete")

        Returns:
            True if the user's level on the module allows the action
        """
        try:
            profile = self.get_permission_profile(user_id)

            if profile.is_super_admin:
                return True

            granted = has_permission_for_action(profile.level_for(module), action)
            if not granted:
                logger.debug(
                    f"Permission denied: user {user_id} {module}:{action} "
                    f"(level={profile.level_for(module).name})"
                )
            return granted
        except Exception as e:
            logger.error(
                f"Permission check failed for user {user_id} on {module}:{action}: {e}",
                exc_info=True,
                extra={"user_id": user_id, "perm_module": module, "action": action},
            )
            return False

    def has_minimum_level_for_user(
        self,
        user_id: str,
        module: str,
        required: PermissionLevel,
    ) -> bool:
        """Check if a user holds at least `required` on a module (super admins always pass)"""
        try:
            profile = self.get_permission_profile(user_id)

            if profile.is_super_admin:
                return True

            return has_minimum_level(profile.level_for(module), PermissionLevel.parse(required))
        except Exception as e:
            logger.error(
                f"Level check failed for user {user_id} on {module} (required={required}): {e}",
                exc_info=True,
                extra={"user_id": user_id, "perm_module": module},
            )
            return False

    def get_user_module_level(self, user_id: str, module: str) -> PermissionLevel:
        """User's level for a module, NONE when not granted"""
        try:
            return self.get_permission_profile(user_id).level_for(module)
        except Exception as e:
            logger.error(
                f"Failed to get module level for user {user_id} on {module}: {e}",
                exc_info=True,
                extra={"user_id": user_id, "perm_module": module},
            )
            return PermissionLevel.NONE

    def get_module_access(self, user_id: str, module: str) -> ModuleAccess:
        """Level plus can_view/can_write/can_full/can_admin flags for a module"""
        return describe_module_access(module, self.get_user_module_level(user_id, module))

    def check_settings_permission(self, user_id: str, action: str) -> bool:
        """
        Check if a user can perform a settings action

        Resolves the user's level on the settings module, then applies the
        per-action settings table. Super admins always pass.

        Args:
            user_id: User ID
            action: Settings action (e.g. "edit_company_info")
        """
        module = self.settings.settings_module
        try:
            profile = self.get_permission_profile(user_id)

            if profile.is_super_admin:
                return True

            return can_access_settings_action(
                profile.level_for(module),
                action,
                deny_unknown=self.settings.deny_unknown_settings_actions,
            )
        except Exception as e:
            logger.error(
                f"Settings permission check failed for user {user_id} ({action}): {e}",
                exc_info=True,
                extra={"user_id": user_id, "perm_module": module, "action": action},
            )
            return False

    def explain_permission(self, user_id: str, module: str, action: str) -> Dict[str, Any]:
        """
        Explain why a permission was granted or denied

        Only enabled when BACKOFFICE_AUTH_PERMS_EXPLAIN=1.

        Returns:
            Dict with decision, reason, user level and required level
        """
        if not self.settings.perms_explain:
            return {
                "error": "Diagnostics disabled. Set BACKOFFICE_AUTH_PERMS_EXPLAIN=1 to enable."
            }

        profile = self.get_permission_profile(user_id)
        user_level = profile.level_for(module)
        required = minimum_level_for_action(action)
        decision = profile.is_super_admin or has_permission_for_action(user_level, action)

        if profile.is_super_admin:
            reason = "Super Admin on at least one module - all actions allowed"
        elif user_level == PermissionLevel.NONE:
            reason = f"No access to module {module}"
        elif required == PermissionLevel.NONE:
            reason = f"Action {action} is not granted by any level below Super Admin"
        elif decision:
            reason = f"{level_name(user_level)} on {module} includes {action}"
        else:
            reason = (
                f"{level_name(user_level)} on {module} does not include {action} "
                f"(requires {level_name(required)})"
            )

        return {
            "decision": "allow" if decision else "deny",
            "user_id": user_id,
            "module": module,
            "action": action,
            "user_level": int(user_level),
            "user_level_name": level_name(user_level),
            "required_level": int(required),
            "is_super_admin": profile.is_super_admin,
            "reason": reason,
        }


# Process-wide engine wired from settings
_permission_engine: Optional[PermissionEngine] = None


def get_permission_engine() -> PermissionEngine:
    """Get or initialize the process-wide engine backed by SQLite"""
    global _permission_engine

    if _permission_engine is None:
        settings = get_settings()
        _permission_engine = PermissionEngine(SQLitePermissionStore(settings.db_path), settings)

    return _permission_engine


def reset_permission_engine() -> None:
    """Drop the process-wide engine (tests, reconfiguration)"""
    global _permission_engine
    _permission_engine = None
