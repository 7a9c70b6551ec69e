"""
Tests for backoffice_auth/permissions/compat.py (legacy action-map views)
"""

import pytest
from unittest.mock import MagicMock

from backoffice_auth.errors import StorageError
from backoffice_auth.schemas import UserPermissionsContextModel
from backoffice_auth.permissions.types import PermissionLevel, LegacyPermission
from backoffice_auth.permissions.hierarchy import actions_for_level
from backoffice_auth.permissions.engine import PermissionEngine
from backoffice_auth.permissions import compat


class TestLevelActions:
    """Tests for the legacy per-level action lists"""

    def test_tables_differ_from_catalog(self):
        """Test legacy names are kept separate from the level catalog"""
        assert "assign-role" in compat.level_actions(PermissionLevel.ADMIN)
        assert "assign-role" not in actions_for_level(PermissionLevel.ADMIN)
        assert "search" not in compat.level_actions(PermissionLevel.READ)
        assert "search" in actions_for_level(PermissionLevel.READ)

    def test_values(self):
        assert compat.level_actions(PermissionLevel.NONE) == []
        assert compat.level_actions(PermissionLevel.READ) == ["read", "view", "list"]
        assert compat.level_actions(PermissionLevel.FULL)[-2:] == ["delete", "manage"]
        assert compat.level_actions(PermissionLevel.SUPER_ADMIN) == ["*"]

    def test_returns_copy(self):
        actions = compat.level_actions(PermissionLevel.READ)
        actions.append("mutated")
        assert "mutated" not in compat.level_actions(PermissionLevel.READ)


class TestUserPermissionsContext:
    """Tests for get_user_permissions_context"""

    def test_context_shape(self, store, engine):
        store.add_role("A", module_levels={"crm": 1, "tasks": 2})
        store.assign_role("u1", "A")

        ctx = compat.get_user_permissions_context("u1", engine)

        assert ctx["permission_map"] == {
            "crm": ["read", "view", "list"],
            "tasks": ["read", "view", "list", "create", "edit", "update"],
        }
        assert {"module": "crm", "action": "view"} in ctx["permissions"]
        assert len(ctx["permissions"]) == 9
        assert ctx["is_super_admin"] is False
        assert UserPermissionsContextModel.model_validate(ctx).model_dump() == ctx

    def test_none_level_module_has_empty_actions(self, store, engine):
        store.add_role("A", module_levels={"users": 0})
        store.assign_role("u1", "A")
        ctx = compat.get_user_permissions_context("u1", engine)
        assert ctx["permission_map"] == {"users": []}
        assert ctx["permissions"] == []

    def test_super_admin_context(self, store, engine):
        store.add_role("root", module_levels={"settings": 5})
        store.assign_role("u1", "root")
        ctx = compat.get_user_permissions_context("u1", engine)
        assert ctx["is_super_admin"] is True
        assert ctx["permission_map"]["settings"] == ["*"]

    def test_context_fails_closed(self, settings):
        broken = MagicMock()
        broken.get_role_assignments_for_user.side_effect = StorageError("down")
        ctx = compat.get_user_permissions_context("u1", PermissionEngine(broken, settings))
        assert ctx == {"permissions": [], "permission_map": {}, "is_super_admin": False}

    def test_module_permissions(self, store, engine):
        store.add_role("A", module_levels={"crm": 3})
        store.assign_role("u1", "A")
        result = compat.get_user_module_permissions("u1", ["crm", "users"], engine)
        assert "delete" in result["crm"]
        assert result["users"] == []


class TestHasPermission:
    """Tests for has_permission and map helpers"""

    def test_wildcard_marker(self):
        assert compat.has_permission({"*": ["*"]}, "crm", "delete") is True
        assert compat.is_super_admin({"*": ["*"]}) is True

    def test_module_wildcard(self):
        assert compat.has_permission({"crm": ["*"]}, "crm", "anything") is True
        assert compat.has_permission({"crm": ["*"]}, "users", "view") is False

    def test_module_action(self):
        permission_map = {"crm": ["view", "list"]}
        assert compat.has_permission(permission_map, "crm", "view") is True
        assert compat.has_permission(permission_map, "crm", "delete") is False
        assert compat.has_permission(permission_map, "tasks", "view") is False

    def test_empty_map(self):
        assert compat.has_permission({}, "crm", "view") is False
        assert compat.is_super_admin({}) is False

    def test_has_module_access(self):
        assert compat.has_module_access({"crm": ["view"]}, "crm") is True
        assert compat.has_module_access({"crm": []}, "crm") is False
        assert compat.has_module_access({"*": ["*"]}, "anything") is True

    def test_map_permissions_by_module(self):
        perms = [
            LegacyPermission(id="1", module="crm", action="view"),
            {"module": "crm", "action": "edit"},
            {"module": "crm", "action": "view"},
            {"module": "tasks", "action": "list"},
        ]
        assert compat.map_permissions_by_module(perms) == {"crm": ["view", "edit"], "tasks": ["list"]}


class TestCheckPermission:
    """Tests for the legacy check_permission path"""

    @pytest.fixture
    def rep(self, store):
        store.add_role("sales", module_levels={"crm": 2})
        store.assign_role("rep", "sales")

    def test_allowed(self, rep, engine):
        assert compat.check_permission("rep", "crm", "edit", engine) is True

    def test_denied(self, rep, engine):
        assert compat.check_permission("rep", "crm", "delete", engine) is False

    def test_uses_legacy_names(self, rep, engine):
        """Test legacy map names apply ("duplicate" is only in the level catalog)"""
        assert engine.check_permission_level("rep", "crm", "duplicate") is True
        assert compat.check_permission("rep", "crm", "duplicate", engine) is False

    def test_error_fails_closed(self, engine, monkeypatch):
        def explode(user_id, engine=None):
            raise RuntimeError("context failure")

        monkeypatch.setattr(compat, "get_user_permissions_context", explode)
        assert compat.check_permission("rep", "crm", "view", engine) is False

    def test_default_engine(self, monkeypatch, db_path, seed):
        seed.role("A", '{"crm": 1}')
        seed.assign("u1", "A")
        monkeypatch.setenv("BACKOFFICE_AUTH_DB_PATH", str(db_path))
        assert compat.check_permission("u1", "crm", "view") is True
