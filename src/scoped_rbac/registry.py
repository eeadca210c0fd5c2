"""Registry: the immutable collection of uniquely-named modules."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from functools import reduce
from types import MappingProxyType

from scoped_rbac.exceptions import DuplicateScopeError
from scoped_rbac.module import SEPARATOR, Module

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Registry:
    """Read-only mapping of scope name to :class:`Module`.

    Registries are never mutated.  :func:`register` returns a new registry
    each time, so a registry is always fully assembled by the time anything
    else can see it.
    """

    modules: Mapping[str, Module] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", MappingProxyType(dict(self.modules)))

    def __hash__(self) -> int:
        return hash(frozenset(self.modules.items()))

    def __contains__(self, scope: object) -> bool:
        return scope in self.modules

    def __getitem__(self, scope: str) -> Module:
        return self.modules[scope]

    def __iter__(self) -> Iterator[str]:
        return iter(self.modules)

    def __len__(self) -> int:
        return len(self.modules)

    def scopes(self) -> list[str]:
        """Return scope names in registration order."""
        return list(self.modules)

    def permission_pairs(self) -> frozenset[tuple[str, str]]:
        """Return every legal ``(scope, permission)`` pair."""
        return frozenset(
            (scope, permission)
            for scope, module in self.modules.items()
            for permission in module.permissions
        )

    def is_declared(self, scope: str, permission: str) -> bool:
        module = self.modules.get(scope)
        return module is not None and module.declares(permission)


def get_default_registry() -> Registry:
    """Return an empty registry."""
    return Registry()


def register(module: Module) -> Callable[[Registry], Registry]:
    """Return a step that adds *module* to a registry.

    The step raises :class:`DuplicateScopeError` when the scope name is
    already present and leaves its input untouched either way::

        registry = register(team)(register(user)(get_default_registry()))
    """

    def step(registry: Registry) -> Registry:
        if module.name in registry.modules:
            raise DuplicateScopeError(module.name)
        if SEPARATOR in module.name:
            logger.warning(
                "Scope '%s' contains '%s'; no permission path can address it",
                module.name,
                SEPARATOR,
            )
        logger.debug("Registering scope '%s' (%d permissions)", module.name, len(module.permissions))
        return Registry(modules={**registry.modules, module.name: module})

    return step


def build_registry(*modules: Module, registry: Registry | None = None) -> Registry:
    """Fold :func:`register` over *modules*, left to right."""
    start = registry if registry is not None else get_default_registry()
    return reduce(lambda acc, module: register(module)(acc), modules, start)
