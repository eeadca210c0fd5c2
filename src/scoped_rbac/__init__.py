"""scoped_rbac: permission modules, a registry, and boolean access predicates.

Declare each permission scope as a module, fold the modules into an
immutable registry, then build predicates with ``has`` / ``not_`` /
``and_`` / ``or_`` and evaluate them against a per-request context.
"""

from scoped_rbac.context import GrantIndex, ScopeLookup, ScopeState, lookup_scope
from scoped_rbac.exceptions import (
    DuplicateScopeError,
    InvalidContextError,
    InvalidPathError,
    RbacError,
    RegistryConfigError,
    UnknownPermissionError,
)
from scoped_rbac.expression import Expression, create_expression, split_path
from scoped_rbac.module import Module, create_module
from scoped_rbac.predicates import AllOf, AnyOf, Has, Lacks, Predicate
from scoped_rbac.registry import Registry, build_registry, get_default_registry, register

__all__ = [
    "AllOf",
    "AnyOf",
    "DuplicateScopeError",
    "Expression",
    "GrantIndex",
    "Has",
    "InvalidContextError",
    "InvalidPathError",
    "Lacks",
    "Module",
    "Predicate",
    "RbacError",
    "Registry",
    "RegistryConfigError",
    "ScopeLookup",
    "ScopeState",
    "UnknownPermissionError",
    "build_registry",
    "create_expression",
    "create_module",
    "get_default_registry",
    "lookup_scope",
    "register",
    "split_path",
]
