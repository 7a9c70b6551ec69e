"""
Settings Module Permission Configuration

Maps each settings action to the minimum level a user needs on the
"settings" module. The per-action table is authoritative; the groups below
only decide which settings sections a UI renders.
"""

from typing import Dict, List, Optional

from .types import PermissionLevel


SETTINGS_PERMISSION_CONFIG: Dict[str, PermissionLevel] = {
    # ============ READ LEVEL (1) ============
    "view_general": PermissionLevel.READ,
    "view_company": PermissionLevel.READ,
    "view_system": PermissionLevel.READ,
    "view_appearance": PermissionLevel.READ,
    "view_notifications": PermissionLevel.READ,
    "view_language": PermissionLevel.READ,
    "view_timezone": PermissionLevel.READ,

    # ============ WRITE LEVEL (2) ============
    # Personal and basic settings
    "edit_appearance": PermissionLevel.WRITE,
    "edit_notifications": PermissionLevel.WRITE,
    "edit_language": PermissionLevel.WRITE,
    "edit_timezone": PermissionLevel.WRITE,
    "edit_user_preferences": PermissionLevel.WRITE,

    # ============ FULL LEVEL (3) ============
    # Company-wide settings
    "edit_company_info": PermissionLevel.FULL,
    "edit_company_logo": PermissionLevel.FULL,
    "edit_company_contact": PermissionLevel.FULL,
    "edit_email_settings": PermissionLevel.FULL,
    "edit_sms_settings": PermissionLevel.FULL,
    "manage_templates": PermissionLevel.FULL,
    "manage_custom_fields": PermissionLevel.FULL,

    # ============ ADMIN LEVEL (4) ============
    "manage_integrations": PermissionLevel.ADMIN,
    "manage_api_keys": PermissionLevel.ADMIN,
    "manage_webhooks": PermissionLevel.ADMIN,
    "manage_security": PermissionLevel.ADMIN,
    "manage_authentication": PermissionLevel.ADMIN,
    "manage_backup": PermissionLevel.ADMIN,
    "manage_audit_logs": PermissionLevel.ADMIN,
    "view_system_logs": PermissionLevel.ADMIN,
    "manage_permissions": PermissionLevel.ADMIN,
    "manage_roles": PermissionLevel.ADMIN,

    # ============ SUPER_ADMIN LEVEL (5) ============
    "manage_database": PermissionLevel.SUPER_ADMIN,
    "manage_environment": PermissionLevel.SUPER_ADMIN,
    "access_danger_zone": PermissionLevel.SUPER_ADMIN,
    "delete_all_data": PermissionLevel.SUPER_ADMIN,
    "manage_super_admins": PermissionLevel.SUPER_ADMIN,
}


SETTINGS_PERMISSION_GROUPS: Dict[str, Dict] = {
    "general": {
        "label": "General Settings",
        "actions": [
            "view_general",
            "edit_appearance",
            "edit_language",
            "edit_timezone",
            "edit_user_preferences",
        ],
        "required_level": PermissionLevel.WRITE,
    },
    "company": {
        "label": "Company Settings",
        "actions": [
            "view_company",
            "edit_company_info",
            "edit_company_logo",
            "edit_company_contact",
        ],
        "required_level": PermissionLevel.FULL,
    },
    "communication": {
        "label": "Communication Settings",
        "actions": [
            "edit_email_settings",
            "edit_sms_settings",
            "edit_notifications",
            "manage_templates",
        ],
        "required_level": PermissionLevel.FULL,
    },
    "integration": {
        "label": "Integrations & API",
        "actions": [
            "manage_integrations",
            "manage_api_keys",
            "manage_webhooks",
        ],
        "required_level": PermissionLevel.ADMIN,
    },
    "security": {
        "label": "Security & Access",
        "actions": [
            "manage_security",
            "manage_authentication",
            "manage_permissions",
            "manage_roles",
            "manage_audit_logs",
        ],
        "required_level": PermissionLevel.ADMIN,
    },
    "system": {
        "label": "System Administration",
        "actions": [
            "view_system",
            "view_system_logs",
            "manage_backup",
            "manage_database",
            "manage_environment",
        ],
        "required_level": PermissionLevel.ADMIN,
    },
    "dangerZone": {
        "label": "Danger Zone",
        "actions": [
            "access_danger_zone",
            "delete_all_data",
            "manage_super_admins",
        ],
        "required_level": PermissionLevel.SUPER_ADMIN,
    },
}


def get_required_level_for_settings(action: str) -> Optional[PermissionLevel]:
    """
    Get the required level for a settings action

    Returns:
        The configured level, or None if the action is not in the table
    """
    return SETTINGS_PERMISSION_CONFIG.get(action)


def can_access_settings_action(
    user_level: PermissionLevel,
    action: str,
    deny_unknown: bool = False,
) -> bool:
    """
    Check if a settings-module level allows a settings action

    Unknown actions require NONE (always allowed) unless deny_unknown is set,
    in which case they are refused for every level.

    Args:
        user_level: User's level on the settings module
        action: Settings action (e.g. "edit_company_info")
        deny_unknown: Refuse actions missing from SETTINGS_PERMISSION_CONFIG
    """
    required = get_required_level_for_settings(action)
    if required is None:
        return not deny_unknown
    return user_level >= required


def get_available_settings_actions(user_level: PermissionLevel) -> List[str]:
    """All settings actions whose required level is at or below user_level"""
    return [
        action
        for action, required in SETTINGS_PERMISSION_CONFIG.items()
        if user_level >= required
    ]


def get_accessible_settings_groups(user_level: PermissionLevel) -> List[str]:
    """Settings groups (UI sections) visible at user_level"""
    return [
        name
        for name, group in SETTINGS_PERMISSION_GROUPS.items()
        if user_level >= group["required_level"]
    ]
