"""Three-state scope lookup over an evaluation context.

A context is any mapping of scope name to an optional sequence of granted
permission identifiers.  For a given scope it is in exactly one state:

* ``ABSENT``    the key is missing;
* ``NO_GRANT``  the key is present with ``None``;
* ``GRANTED``   the key is present with a sequence (possibly empty).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from scoped_rbac.exceptions import InvalidContextError
from scoped_rbac.module import permission_id

logger = logging.getLogger(__name__)

Context = Mapping[str, Sequence[Any] | None]


class ScopeState(Enum):
    ABSENT = "absent"
    NO_GRANT = "no_grant"
    GRANTED = "granted"


@dataclass(frozen=True)
class ScopeLookup:
    """Result of :func:`lookup_scope`.  ``grants`` is empty unless ``GRANTED``."""

    state: ScopeState
    grants: tuple[Any, ...] = ()

    @property
    def granted(self) -> bool:
        return self.state is ScopeState.GRANTED

    def contains(self, permission: str) -> bool:
        return self.granted and permission in self.grants


_ABSENT = ScopeLookup(ScopeState.ABSENT)
_NO_GRANT = ScopeLookup(ScopeState.NO_GRANT)
_UNREAD = object()


def ensure_context(context: Any) -> Context:
    """Raise :class:`InvalidContextError` unless *context* is a mapping."""
    if not isinstance(context, Mapping):
        raise InvalidContextError(f"expected a mapping of scope to grants, got {type(context).__name__}")
    return context


def _classify(context: Context, scope: str) -> ScopeLookup:
    if scope not in context:
        return _ABSENT
    value = context[scope]
    if value is None:
        return _NO_GRANT
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise InvalidContextError(
            f"grants for scope '{scope}' must be a sequence of permissions, got {type(value).__name__}"
        )
    return ScopeLookup(ScopeState.GRANTED, tuple(permission_id(v) for v in value))


def lookup_scope(context: Context, scope: str) -> ScopeLookup:
    """Classify *scope* in *context* and normalise its grants."""
    return _classify(ensure_context(context), scope)


class GrantIndex:
    """One evaluation's view of a context.

    The context is validated once on construction, and each scope's grants
    are read and normalised into a set the first time a leaf asks for them.
    A one-shot iterable of grants is therefore consumed once per evaluation
    and seen by every leaf of the tree.
    """

    def __init__(self, context: Any) -> None:
        self.context = ensure_context(context)
        self._grants: dict[str, frozenset[Any] | None] = {}

    def grants(self, scope: str) -> frozenset[Any] | None:
        """Return the granted identifiers, or ``None`` when *scope* is absent or ungranted."""
        found = self._grants.get(scope, _UNREAD)
        if found is _UNREAD:
            lookup = _classify(self.context, scope)
            if lookup.state is ScopeState.ABSENT:
                logger.debug("Scope '%s' absent from context", scope)
            found = frozenset(lookup.grants) if lookup.granted else None
            self._grants[scope] = found
        return found
