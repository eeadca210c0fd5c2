"""Tests for Module and create_module."""

import pytest

from scoped_rbac import Module, create_module
from scoped_rbac.module import permission_id

from conftest import Level, UserPermissions


def test_enum_domain_uses_member_values():
    module = create_module(UserPermissions)("user")
    assert module.name == "user"
    assert module.permissions == frozenset({"READ", "WRITE", "UPDATE", "CREATE", "DELETE"})


def test_non_string_enum_values_are_stringified():
    module = create_module(Level)("level")
    assert module.permissions == frozenset({"1", "2"})


def test_iterable_domain():
    module = create_module(["READ", "WRITE", "READ"])("docs")
    assert module.permissions == frozenset({"READ", "WRITE"})


def test_non_string_iterable_domain():
    module = create_module([1, 2])("level")
    assert module.permissions == frozenset({"1", "2"})


def test_declares():
    module = create_module(["READ"])("docs")
    assert module.declares("READ")
    assert not module.declares("WRITE")


def test_same_name_twice_gives_distinct_values():
    factory = create_module(UserPermissions)
    a = factory("user")
    b = factory("user")
    assert a is not b
    assert a == b


def test_factory_is_reusable_across_names():
    factory = create_module(UserPermissions)
    assert factory("user").name == "user"
    assert factory("admin").name == "admin"


def test_module_is_frozen():
    module = Module(name="user", permissions=frozenset())
    with pytest.raises(AttributeError):
        module.name = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("READ", "READ"),
        (UserPermissions.READ, "READ"),
        (Level.LOW, "1"),
        (1, "1"),
        (None, None),
    ],
)
def test_permission_id(value, expected):
    assert permission_id(value) == expected
