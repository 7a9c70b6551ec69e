"""
Permission Types

Core type definitions for the level-based permission system.
"""

from enum import IntEnum
from typing import Optional, Dict, List, Union
from dataclasses import dataclass, field

from ..errors import InvalidLevelError


class PermissionLevel(IntEnum):
    """
    Hierarchical permission levels (0-5)

    Each higher level includes every capability of the levels below it.
    """
    NONE = 0
    READ = 1
    WRITE = 2
    FULL = 3
    ADMIN = 4
    SUPER_ADMIN = 5

    @classmethod
    def parse(cls, value: Union[int, str, "PermissionLevel"]) -> "PermissionLevel":
        """
        Coerce a stored or user-supplied value into a PermissionLevel

        Accepts an int (0-5), a numeric string ("3") or a level name
        ("full", "SUPER_ADMIN").

        Raises:
            InvalidLevelError: value does not name a level
        """
        if isinstance(value, cls):
            return value

        number: Optional[int] = None
        if isinstance(value, bool):
            pass
        elif isinstance(value, int):
            number = value
        elif isinstance(value, float) and value.is_integer():
            number = int(value)
        elif isinstance(value, str):
            text = value.strip()
            if text.lstrip("-").isdigit():
                number = int(text)
            elif text.upper() in cls.__members__:
                return cls[text.upper()]

        if number is not None and number in cls._value2member_map_:
            return cls(number)
        raise InvalidLevelError(f"Invalid permission level: {value!r}", details={"value": repr(value)})


@dataclass
class Role:
    """
    Role definition as read from storage

    Attributes:
        id: Role identifier
        name: Display name
        module_levels: Decoded module -> level map, or None when the role
            predates the level system and only has legacy grants
        description: Optional description
        is_system_role: Built-in role flag
    """
    id: str
    name: str
    module_levels: Optional[Dict[str, PermissionLevel]] = None
    description: Optional[str] = None
    is_system_role: bool = False


@dataclass
class RoleAssignment:
    """User -> role link"""
    user_id: str
    role_id: str
    id: Optional[str] = None
    assigned_by: Optional[str] = None


@dataclass
class LegacyPermission:
    """Pre-level grantable (module, action) pair"""
    id: str
    module: str
    action: str


@dataclass
class PermissionProfile:
    """
    Resolved permissions for one user

    Never persisted; rebuilt from role data on every request.

    Attributes:
        user_id: User identifier
        module_levels: Module -> highest level granted by any role
        effective_level: SUPER_ADMIN if any module is SUPER_ADMIN,
            otherwise the highest module level (NONE when empty)
        is_super_admin: True iff some module resolved to SUPER_ADMIN
        legacy_permissions: Module -> raw legacy actions held through roles
    """
    user_id: str
    module_levels: Dict[str, PermissionLevel] = field(default_factory=dict)
    effective_level: PermissionLevel = PermissionLevel.NONE
    is_super_admin: bool = False
    legacy_permissions: Dict[str, List[str]] = field(default_factory=dict)

    def level_for(self, module: str) -> PermissionLevel:
        """Level for a module, NONE when the user holds nothing there"""
        return self.module_levels.get(module, PermissionLevel.NONE)


@dataclass
class ModuleAccess:
    """Convenience flags for a single module level"""
    module: str
    level: PermissionLevel
    level_name: str
    can_view: bool
    can_write: bool
    can_full: bool
    can_admin: bool
