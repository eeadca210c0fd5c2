"""Tests for the declarative registry and context schemas."""

import json

import pytest
from pydantic import ValidationError

from scoped_rbac import DuplicateScopeError, RegistryConfigError, create_expression
from scoped_rbac.schema import (
    ContextSchema,
    ModuleSchema,
    RegistrySchema,
    load_registry,
    registry_from_dict,
)

DECLARATION = {
    "modules": [
        {"name": "user", "permissions": ["READ", "WRITE"]},
        {"name": "team", "permissions": ["READ", "WRITE", "READ"]},
    ]
}


class TestModuleSchema:
    def test_to_module(self):
        module = ModuleSchema(name="user", permissions=["READ", "WRITE"]).to_module()
        assert module.name == "user"
        assert module.permissions == frozenset({"READ", "WRITE"})

    def test_duplicate_permissions_dropped(self):
        schema = ModuleSchema(name="team", permissions=["READ", "WRITE", "READ"])
        assert schema.permissions == ["READ", "WRITE"]

    @pytest.mark.parametrize("name", ["", "a.b"])
    def test_rejects_bad_name(self, name):
        with pytest.raises(ValidationError):
            ModuleSchema(name=name, permissions=["READ"])

    @pytest.mark.parametrize("permission", ["", "READ.ALL"])
    def test_rejects_bad_permission(self, permission):
        with pytest.raises(ValidationError):
            ModuleSchema(name="user", permissions=[permission])

    def test_requires_permissions(self):
        with pytest.raises(ValidationError):
            ModuleSchema(name="user", permissions=[])


class TestRegistrySchema:
    def test_build(self):
        registry = RegistrySchema.model_validate(DECLARATION).build()
        assert registry.scopes() == ["user", "team"]
        assert registry.is_declared("team", "WRITE")

    def test_empty(self):
        assert len(RegistrySchema().build()) == 0

    def test_duplicate_names(self):
        data = {"modules": [{"name": "user", "permissions": ["READ"]}] * 2}
        with pytest.raises(DuplicateScopeError):
            registry_from_dict(data)

    def test_registry_drives_strict_expressions(self):
        expr = create_expression(registry_from_dict(DECLARATION), strict=True)
        assert expr.has("team.WRITE")({"team": ["WRITE"]}) is True


class TestLoadRegistry:
    def test_loads_json_file(self, tmp_path):
        path = tmp_path / "permissions.json"
        path.write_text(json.dumps(DECLARATION), encoding="utf-8")
        registry = load_registry(path)
        assert registry.scopes() == ["user", "team"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(RegistryConfigError) as exc_info:
            load_registry(tmp_path / "missing.json")
        assert "missing.json" in str(exc_info.value)

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "permissions.json"
        path.write_text('{"modules": [{"name": "user"}]}', encoding="utf-8")
        with pytest.raises(ValidationError):
            load_registry(str(path))


class TestContextSchema:
    def test_preserves_three_states(self, expr):
        context = ContextSchema.model_validate({"user": ["READ"], "team": None}).to_context()
        assert "support" not in context
        assert context["team"] is None
        assert context["user"] == ("READ",)

        assert expr.has("user.READ")(context) is True
        assert expr.not_("team.READ")(context) is False
        assert expr.not_("support.READ")(context) is False

    def test_from_json(self):
        context = ContextSchema.model_validate_json('{"user": [], "team": null}').to_context()
        assert context == {"user": (), "team": None}

    def test_rejects_non_list_grants(self):
        with pytest.raises(ValidationError):
            ContextSchema.model_validate({"user": "READ"})

    def test_context_is_read_only(self):
        context = ContextSchema.model_validate({"user": ["READ"]}).to_context()
        with pytest.raises(TypeError):
            context["user"] = ["WRITE"]  # type: ignore[index]
