"""Shared test fixtures."""

from enum import Enum

import pytest

from scoped_rbac import build_registry, create_expression, create_module


class UserPermissions(str, Enum):
    READ = "READ"
    WRITE = "WRITE"
    UPDATE = "UPDATE"
    CREATE = "CREATE"
    DELETE = "DELETE"


class TeamPermissions(str, Enum):
    READ = "READ"
    WRITE = "WRITE"
    UPDATE = "UPDATE"
    CREATE = "CREATE"
    DELETE = "DELETE"


class Level(Enum):
    LOW = 1
    HIGH = 2


class SupportPermissions(str, Enum):
    READ = "READ"
    WRITE = "WRITE"
    UPDATE = "UPDATE"
    CREATE = "CREATE"
    DELETE = "DELETE"


@pytest.fixture
def registry():
    return build_registry(
        create_module(TeamPermissions)("team"),
        create_module(UserPermissions)("user"),
        create_module(SupportPermissions)("support"),
    )


@pytest.fixture
def expr(registry):
    return create_expression(registry)


@pytest.fixture
def strict_expr(registry):
    return create_expression(registry, strict=True)
