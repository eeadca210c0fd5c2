# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Declarative configuration for modules, registries and contexts.

These Pydantic models let an application declare its permission modules
as data (a JSON file, a settings dict) and turn request payloads into
evaluation contexts without losing the absent / ``null`` / list
distinction.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, RootModel, field_validator

from scoped_rbac.exceptions import RegistryConfigError
from scoped_rbac.module import SEPARATOR, Module, create_module
from scoped_rbac.registry import Registry, build_registry


def _check_identifier(value: str, what: str) -> str:
    if not value:
        raise ValueError(f"{what} must not be empty")
    if SEPARATOR in value:
        raise ValueError(f"{what} '{value}' must not contain '{SEPARATOR}'")
    return value


class ModuleSchema(BaseModel):
    """Single module declaration.

    Attributes:
        name: Scope name, unique within the registry
        permissions: Permission identifiers declared for the scope
    """

    name: str
    permissions: list[str] = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _check_identifier(value, "Scope name")

    @field_validator("permissions")
    @classmethod
    def validate_permissions(cls, value: list[str]) -> list[str]:
        for permission in value:
            _check_identifier(permission, "Permission")
        return list(dict.fromkeys(value))  # dedupe, preserve order

    def to_module(self) -> Module:
        return create_module(self.permissions)(self.name)


class RegistrySchema(BaseModel):
    """Ordered list of module declarations.

    Attributes:
        modules: Modules in registration order
    """

    modules: list[ModuleSchema] = Field(default_factory=list)

    def build(self) -> Registry:
        """Register every module in order.

        Raises:
            DuplicateScopeError: If two modules share a name
        """
        return build_registry(*(m.to_module() for m in self.modules))


class ContextSchema(RootModel[dict[str, list[str] | None]]):
    """Evaluation context from a request payload.

    Keys missing from the payload stay absent; ``null`` stays ``None``.
    """

    root: dict[str, list[str] | None] = Field(default_factory=dict)

    def to_context(self) -> Mapping[str, Sequence[str] | None]:
        return MappingProxyType(
            {scope: None if grants is None else tuple(grants) for scope, grants in self.root.items()}
        )


def load_registry(path: str | Path) -> Registry:
    """Build a registry from a JSON file shaped like :class:`RegistrySchema`.

    Raises:
        RegistryConfigError: If the file cannot be read
        pydantic.ValidationError: If the content is not a valid declaration
        DuplicateScopeError: If two modules share a name
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise RegistryConfigError(str(path), str(e)) from e
    return RegistrySchema.model_validate_json(raw).build()


def registry_from_dict(data: Mapping[str, Any]) -> Registry:
    """Build a registry from an already-parsed declaration."""
    return RegistrySchema.model_validate(data).build()
