"""Expression: the ``has`` / ``not_`` / ``and_`` / ``or_`` combinators bound to a registry."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from scoped_rbac.exceptions import InvalidPathError, UnknownPermissionError
from scoped_rbac.module import SEPARATOR
from scoped_rbac.predicates import AllOf, AnyOf, Has, Lacks, PredicateFn

if TYPE_CHECKING:
    from scoped_rbac.registry import Registry

logger = logging.getLogger(__name__)


def split_path(path: str) -> tuple[str, str] | None:
    """Split ``"<scope>.<permission>"`` on the first separator.

    Returns ``None`` for a path with no separator or an empty half.
    """
    scope, sep, permission = path.partition(SEPARATOR)
    if not sep or not scope or not permission:
        return None
    return scope, permission


class Expression:
    """Predicate constructors closed over one registry.

    Parameters:
        registry: The registry whose scopes and permission domains paths
                  are checked against.
        strict:   When ``True``, ``has`` / ``not_`` raise on malformed or
                  undeclared paths.  Otherwise such paths are logged and
                  evaluate fail-closed.

    The instance unpacks into its four combinators::

        has, not_, and_, or_ = create_expression(registry)
        can_edit = and_([has("user.READ"), or_([has("user.WRITE"), has("team.WRITE")])])
        can_edit({"user": ["READ", "WRITE"], "team": None})  # True
    """

    def __init__(self, registry: Registry, *, strict: bool = False) -> None:
        self._registry = registry
        self._strict = strict

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def strict(self) -> bool:
        return self._strict

    def __iter__(self) -> Iterator[object]:
        return iter((self.has, self.not_, self.and_, self.or_))

    # ── leaves ───────────────────────────────────────────────

    def _resolve(self, path: str) -> tuple[str | None, str | None]:
        parts = split_path(path)
        if parts is None:
            if self._strict:
                raise InvalidPathError(path)
            logger.warning("Malformed permission path '%s'; it will never match", path)
            return None, None

        scope, permission = parts
        if not self._registry.is_declared(scope, permission):
            if self._strict:
                raise UnknownPermissionError(scope, permission)
            logger.warning("Permission path '%s' is not declared in the registry", path)
        return scope, permission

    def has(self, path: str) -> Has:
        """Predicate: the scope is granted and includes the permission."""
        return Has(path, *self._resolve(path))

    def not_(self, path: str) -> Lacks:
        """Predicate: the scope is granted and does not include the permission."""
        return Lacks(path, *self._resolve(path))

    # ── combinators ──────────────────────────────────────────

    def and_(self, predicates: Iterable[PredicateFn]) -> AllOf:
        return AllOf(predicates)

    def or_(self, predicates: Iterable[PredicateFn]) -> AnyOf:
        return AnyOf(predicates)


def create_expression(registry: Registry, *, strict: bool = False) -> Expression:
    """Bind the four combinators to *registry*."""
    return Expression(registry, strict=strict)
