"""Custom exceptions for the scoped_rbac package."""

from __future__ import annotations


class RbacError(Exception):
    """Base exception for all scoped_rbac errors."""


class DuplicateScopeError(RbacError):
    """Raised when a module is registered under a scope name already in use."""

    def __init__(self, scope: str) -> None:
        self.scope = scope
        super().__init__(f"Scope '{scope}' is already registered - modules must have unique names")


class InvalidContextError(RbacError, TypeError):
    """Raised when a predicate is evaluated against something that is not a context."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid evaluation context: {detail}")


class InvalidPathError(RbacError, ValueError):
    """Raised in strict mode for a path that is not ``"<scope>.<permission>"``."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Malformed permission path '{path}': expected '<scope>.<permission>'")


class UnknownPermissionError(RbacError, LookupError):
    """Raised in strict mode for a scope/permission pair the registry does not declare."""

    def __init__(self, scope: str, permission: str) -> None:
        self.scope = scope
        self.permission = permission
        super().__init__(f"Permission '{permission}' is not declared for scope '{scope}'")


class RegistryConfigError(RbacError):
    """Raised when a registry configuration source cannot be read."""

    def __init__(self, source: str, detail: str = "") -> None:
        self.source = source
        msg = f"Cannot load registry configuration from '{source}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
