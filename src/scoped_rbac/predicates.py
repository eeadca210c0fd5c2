"""Predicate nodes: the leaves and combinators of an access-control tree.

Every node is an immutable callable ``context -> bool``.  Combinator trees
are evaluated with an explicit stack rather than recursion, so arbitrarily
deep nesting is safe.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any, ClassVar

from scoped_rbac.context import Context, GrantIndex

PredicateFn = Callable[[Context], bool]

_EXHAUSTED = object()


class Predicate(ABC):
    """Base class for every built-in predicate node."""

    operator: ClassVar[str] = "base"

    @abstractmethod
    def __call__(self, context: Context) -> bool: ...

    @abstractmethod
    def scopes(self) -> frozenset[str]:
        """Scope names referenced anywhere in this tree."""

    @abstractmethod
    def export(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of this tree."""


# ── leaves ───────────────────────────────────────────────────


class _Leaf(Predicate):
    """Shared machinery for :class:`Has` and :class:`Lacks`.

    A leaf built from a malformed path (``scope`` or ``permission`` is
    ``None``) still validates the context but always evaluates to ``False``.
    """

    def __init__(self, path: str, scope: str | None, permission: str | None) -> None:
        self.path = path
        self.scope = scope
        self.permission = permission

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    def __call__(self, context: Context) -> bool:
        return self.evaluate(GrantIndex(context))

    def evaluate(self, index: GrantIndex) -> bool:
        """Evaluate against a context already wrapped for this evaluation."""
        if self.scope is None or self.permission is None:
            return False
        grants = index.grants(self.scope)
        if grants is None:
            return False
        return self._match(self.permission in grants)

    @abstractmethod
    def _match(self, present: bool) -> bool: ...

    def scopes(self) -> frozenset[str]:
        return frozenset({self.scope}) if self.scope is not None else frozenset()

    def export(self) -> dict[str, Any]:
        return {"operator": self.operator, "path": self.path}


class Has(_Leaf):
    """True when the scope is granted and contains the permission."""

    operator = "has"

    def _match(self, present: bool) -> bool:
        return present


class Lacks(_Leaf):
    """True when the scope is granted but does not contain the permission.

    An absent or ungranted scope is ``False``, exactly as for :class:`Has`.
    """

    operator = "not"

    def _match(self, present: bool) -> bool:
        return not present


# ── combinators ──────────────────────────────────────────────


class _Combinator(Predicate):
    """Folds child predicates with a boolean operator.

    ``absorbing`` is the value that decides the fold on sight (``False`` for
    AND, ``True`` for OR); the empty fold yields its negation.
    """

    absorbing: ClassVar[bool]

    def __init__(self, predicates: Iterable[PredicateFn]) -> None:
        self.predicates: tuple[PredicateFn, ...] = tuple(predicates)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.predicates)} predicates)"

    def __call__(self, context: Context) -> bool:
        # The index is built on the first leaf, so an empty fold accepts any context.
        index: GrantIndex | None = None
        stack: list[tuple[_Combinator, Any]] = [(self, iter(self.predicates))]
        result: bool | None = None
        while stack:
            node, children = stack[-1]
            if result is node.absorbing:
                stack.pop()
                continue
            child = next(children, _EXHAUSTED)
            if child is _EXHAUSTED:
                stack.pop()
                result = not node.absorbing
            elif isinstance(child, _Leaf):
                if index is None:
                    index = GrantIndex(context)
                result = child.evaluate(index)
            elif isinstance(child, _Combinator):
                stack.append((child, iter(child.predicates)))
                result = None
            else:
                result = bool(child(context))
        return bool(result)

    def _walk(self) -> Iterable[PredicateFn]:
        """Yield every non-combinator node of the tree."""
        stack: list[_Combinator] = [self]
        while stack:
            node = stack.pop()
            for child in node.predicates:
                if isinstance(child, _Combinator):
                    stack.append(child)
                else:
                    yield child

    def scopes(self) -> frozenset[str]:
        found: set[str] = set()
        for child in self._walk():
            if isinstance(child, Predicate):
                found |= child.scopes()
        return frozenset(found)

    def export(self) -> dict[str, Any]:
        root: dict[str, Any] = {"operator": self.operator, "predicates": []}
        stack: list[tuple[_Combinator, dict[str, Any]]] = [(self, root)]
        while stack:
            node, out = stack.pop()
            for child in node.predicates:
                if isinstance(child, _Combinator):
                    entry: dict[str, Any] = {"operator": child.operator, "predicates": []}
                    stack.append((child, entry))
                elif isinstance(child, Predicate):
                    entry = child.export()
                else:
                    entry = {"operator": "callable", "name": getattr(child, "__qualname__", repr(child))}
                out["predicates"].append(entry)
        return root


class AllOf(_Combinator):
    """Passes only if **all** children pass.  Short-circuits on first failure."""

    operator = "all_of"
    absorbing = False


class AnyOf(_Combinator):
    """Passes if **at least one** child passes.  Short-circuits on first success."""

    operator = "any_of"
    absorbing = True
