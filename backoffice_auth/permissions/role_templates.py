"""
System Role Templates

Module level maps for the built-in roles, plus the mapping from old role
names to these templates. Read-only data: the application seeds roles from
these, this library never writes them.

Roles (in order of privilege):
- Super Administrator: SUPER_ADMIN everywhere
- Administrator: ADMIN on most modules
- Manager: FULL on core modules
- Sales Representative: WRITE on CRM modules
- Viewer: READ on most modules
"""

from typing import Dict, Optional

from .types import PermissionLevel

N = PermissionLevel.NONE
R = PermissionLevel.READ
W = PermissionLevel.WRITE
F = PermissionLevel.FULL
A = PermissionLevel.ADMIN
S = PermissionLevel.SUPER_ADMIN

MODULES = (
    "dashboard", "users", "roles", "permissions", "settings",
    "contacts", "companies", "deals", "tasks", "notes",
    "scheduler", "reports", "notifications", "support",
    "locations", "positions",
)


def _levels(*levels: PermissionLevel) -> Dict[str, PermissionLevel]:
    return dict(zip(MODULES, levels, strict=True))


SYSTEM_ROLE_TEMPLATES: Dict[str, Dict] = {
    "Super Administrator": {
        "description": "Complete system control with all permissions",
        "module_levels": _levels(S, S, S, S, S, S, S, S, S, S, S, S, S, S, S, S),
    },
    "Administrator": {
        "description": "System administration with most permissions",
        "module_levels": _levels(A, A, F, R, A, A, A, A, A, A, A, A, F, F, A, A),
    },
    "Manager": {
        "description": "Department manager with full access to core modules",
        "module_levels": _levels(F, R, R, N, W, F, F, F, F, F, F, F, W, W, R, R),
    },
    "Sales Representative": {
        "description": "Sales team member with CRM access",
        "module_levels": _levels(R, N, N, N, R, W, W, W, W, W, W, R, R, R, R, N),
    },
    "Viewer": {
        "description": "Read-only access to most modules",
        "module_levels": _levels(R, N, N, N, R, R, R, R, R, R, R, R, R, R, R, R),
    },
}

DEFAULT_TEMPLATE = "Viewer"

# Lower-cased pre-level role names -> template
LEGACY_ROLE_NAME_MAPPING: Dict[str, str] = {
    "super admin": "Super Administrator",
    "super_admin": "Super Administrator",
    "administrator": "Administrator",
    "admin": "Administrator",
    "manager": "Manager",
    "sales": "Sales Representative",
    "sales representative": "Sales Representative",
    "viewer": "Viewer",
    "employee": "Viewer",
    "user": "Viewer",
}


def template_for_role_name(role_name: Optional[str]) -> str:
    """Template name for an old role name; unknown or missing names get Viewer"""
    if not role_name:
        return DEFAULT_TEMPLATE
    key = role_name.strip().lower()
    if key in LEGACY_ROLE_NAME_MAPPING:
        return LEGACY_ROLE_NAME_MAPPING[key]
    for template in SYSTEM_ROLE_TEMPLATES:
        if template.lower() == key:
            return template
    return DEFAULT_TEMPLATE


def get_template_levels(template: str) -> Dict[str, PermissionLevel]:
    """
    Copy of a template's module levels

    Raises:
        KeyError: unknown template name
    """
    return dict(SYSTEM_ROLE_TEMPLATES[template]["module_levels"])
