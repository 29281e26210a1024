"""Data models for role schemes, users and resolution diagnostics."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InvalidIdentifier(ValueError):
    """Raised for a role or permission identifier that cannot be parsed."""

    def __init__(self, identifier: Any, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Invalid identifier {identifier!r}: {reason}")


def _as_list(value: Any) -> Any:
    """Wrap a scalar into a one-element list; ``None`` becomes ``[]``."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, tuple):
        return list(value)
    return value


class RoleScheme(BaseModel):
    """A named role: nested role references plus the permissions it grants.

    Frozen, so a scheme handed out by the registry cannot be changed behind it.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    require_decoration: bool = False
    roles: tuple[str, ...] = ()
    permissions: tuple[str, ...] = ()

    @field_validator("roles", "permissions", mode="before")
    @classmethod
    def _wrap_scalars(cls, v: Any) -> Any:
        return _as_list(v)


class User(BaseModel):
    """Already-authenticated user record. Read-only input to the engine."""

    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)

    @field_validator("roles", "permissions", mode="before")
    @classmethod
    def _wrap_scalars(cls, v: Any) -> Any:
        return _as_list(v)

    @classmethod
    def coerce(cls, user: Any) -> User:
        """Accept a ``User``, a mapping, or any object with ``roles``/``permissions``."""
        if isinstance(user, cls):
            return user
        if isinstance(user, Mapping):
            return cls.model_validate(dict(user))
        return cls(
            roles=getattr(user, "roles", None),
            permissions=getattr(user, "permissions", None),
        )


@dataclass(frozen=True)
class CycleReport:
    """A role reference that pointed back into its own expansion path.

    ``path`` runs from the top-level identifier to the identifier that was
    referenced again, e.g. ``("CIRC1", "CIRC2", "CIRC1")``.
    """

    path: tuple[str, ...]

    @property
    def identifier(self) -> str:
        return self.path[-1]

    def __str__(self) -> str:
        return " -> ".join(self.path)
