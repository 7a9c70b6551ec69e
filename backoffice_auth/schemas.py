"""
Pydantic models for the authorization core.

RoleRecord validates raw role rows coming out of storage.
UserPermissionsContextModel is the shape of the legacy permissions context.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import MalformedRoleDataError
from .permissions.types import PermissionLevel, Role


class RoleRecord(BaseModel):
    """Stored role, with module_levels as a JSON string or a mapping"""
    id: str
    name: str = ""
    description: Optional[str] = None
    is_system_role: bool = False
    module_levels: Optional[Dict[str, PermissionLevel]] = None

    @field_validator("module_levels", mode="before")
    @classmethod
    def decode_module_levels(cls, v: Any) -> Any:
        if v is None:
            return None
        if isinstance(v, (bytes, bytearray)):
            v = v.decode("utf-8")
        if isinstance(v, str):
            if not v.strip():
                return None
            v = json.loads(v)
            if v is None:
                return None
        if not isinstance(v, dict):
            raise ValueError("module_levels must be an object")
        return {str(module): PermissionLevel.parse(level) for module, level in v.items()}

    def to_role(self) -> Role:
        return Role(
            id=self.id,
            name=self.name,
            module_levels=dict(self.module_levels) if self.module_levels is not None else None,
            description=self.description,
            is_system_role=self.is_system_role,
        )


def parse_role(data: Dict[str, Any]) -> Role:
    """
    Validate a raw role record into a Role

    Raises:
        MalformedRoleDataError: record or its module_levels failed to decode
    """
    try:
        return RoleRecord.model_validate(data).to_role()
    except ValidationError as e:
        raise MalformedRoleDataError(
            f"Invalid role record {data.get('id')!r}",
            details={"role_id": data.get("id"), "errors": e.errors(include_url=False)},
        ) from e


class ModulePermission(BaseModel):
    """Legacy (module, action) pair"""
    module: str
    action: str


class UserPermissionsContextModel(BaseModel):
    """Legacy permissions context"""
    permissions: List[ModulePermission] = Field(default_factory=list)
    permission_map: Dict[str, List[str]] = Field(default_factory=dict)
    is_super_admin: bool = False
