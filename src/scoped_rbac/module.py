"""Module: a named permission scope with a closed permission domain."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

SEPARATOR = "."

PermissionDomain = type[Enum] | Iterable[str]


def permission_id(value: Any) -> Any:
    """Return the identifier a grant or domain entry stands for.

    Enum members are identified by their value, so ``EUser.READ`` and
    ``"READ"`` are the same permission when ``EUser.READ.value == "READ"``.
    Any other non-string identifier is compared by its ``str()`` form, so a
    grant of ``1`` matches the path ``"level.1"``.
    """
    if isinstance(value, Enum):
        return str(value.value)
    if value is None or isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class Module:
    """Immutable binding of a scope name to its permission domain.

    Attributes:
        name:        Scope name, unique within a registry.
        permissions: Identifiers legal in this scope.  Only consulted when
                     validating paths, never during evaluation.
    """

    name: str
    permissions: frozenset[str]

    def declares(self, permission: str) -> bool:
        return permission in self.permissions


def create_module(permission_domain: PermissionDomain) -> Callable[[str], Module]:
    """Return a factory that binds *permission_domain* to a scope name.

    *permission_domain* is either an ``Enum`` subclass (member values become
    the identifiers) or an iterable of identifier strings.

    Example::

        class UserPermissions(str, Enum):
            READ = "READ"
            WRITE = "WRITE"

        user = create_module(UserPermissions)("user")
    """
    permissions = frozenset(permission_id(p) for p in permission_domain)

    def factory(name: str) -> Module:
        return Module(name=name, permissions=permissions)

    return factory
