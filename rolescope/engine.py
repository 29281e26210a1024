"""Permissions engine: the public API over a role registry."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from rolescope.aggregator import role_permissions, user_permissions_with_report
from rolescope.config.models import RoleScopeConfig
from rolescope.expander import expand_roles_with_report, user_roles_with_report
from rolescope.matcher import matches, matches_all
from rolescope.models import CycleReport, RoleScheme, User
from rolescope.registry import RoleRegistry

logger = logging.getLogger(__name__)


class Permissions:
    """Resolves effective roles and permissions for users.

    Each query reads one registry snapshot, so a concurrent ``register`` or
    ``clear`` is either fully visible to it or not at all. A cycle is logged
    once per registry generation, not on every query that runs into it.
    """

    def __init__(self, registry: RoleRegistry | None = None, report_cycles: bool = True) -> None:
        self._registry = registry if registry is not None else RoleRegistry()
        self.report_cycles = report_cycles
        self._reported: set[tuple[str, ...]] = set()
        self._reported_generation = -1
        self._report_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: RoleScopeConfig) -> Permissions:
        return cls(
            RoleRegistry(strict_identifiers=config.strict_identifiers),
            report_cycles=config.report_cycles,
        )

    @property
    def registry(self) -> RoleRegistry:
        return self._registry

    # -- Registry --------------------------------------------------------------

    def register(
        self, name: str, scheme: RoleScheme | Mapping[str, Any] | None = None
    ) -> RoleScheme:
        """Register a role scheme. ``NAME:`` marks it decoration-required."""
        return self._registry.register(name, scheme)

    def role(self, name: str) -> RoleScheme | None:
        return self._registry.lookup(name)

    def all_roles(self) -> Mapping[str, RoleScheme]:
        return self._registry.all()

    def clear(self) -> None:
        self._registry.clear()

    # -- Resolution ------------------------------------------------------------

    def expand_roles(self, identifier: str) -> list[str]:
        """Role closure of a single (possibly decorated) role reference."""
        generation, schemes = self._registry.versioned_snapshot()
        closure, cycles = expand_roles_with_report(schemes, identifier)
        self._report(generation, cycles)
        return closure

    def find_cycles(self, identifier: str) -> list[CycleReport]:
        return expand_roles_with_report(self._registry.snapshot(), identifier)[1]

    def get_role_permissions(self, identifier: str) -> list[str]:
        """Decorated permissions granted by a role and everything it nests."""
        return role_permissions(self._registry.snapshot(), identifier)

    def get_user_roles(self, user: User | Mapping[str, Any]) -> list[str]:
        user = User.coerce(user)
        generation, schemes = self._registry.versioned_snapshot()
        roles, cycles = user_roles_with_report(schemes, user.roles)
        self._report(generation, cycles)
        return roles

    def get_user_permissions(self, user: User | Mapping[str, Any]) -> list[str]:
        user = User.coerce(user)
        generation, schemes = self._registry.versioned_snapshot()
        permissions, cycles = user_permissions_with_report(schemes, user)
        self._report(generation, cycles)
        return permissions

    # -- Queries ---------------------------------------------------------------

    def user_has_role(self, user: User | Mapping[str, Any], role: str) -> bool:
        return matches(role, self.get_user_roles(user))

    def user_has_permission(self, user: User | Mapping[str, Any], permission: str) -> bool:
        return matches(permission, self.get_user_permissions(user))

    def user_has_all_permissions(
        self, user: User | Mapping[str, Any], permissions: Iterable[str]
    ) -> bool:
        return matches_all(permissions, self.get_user_permissions(user))

    def _report(self, generation: int, cycles: list[CycleReport]) -> None:
        if not self.report_cycles or not cycles:
            return
        with self._report_lock:
            if generation != self._reported_generation:
                self._reported.clear()
                self._reported_generation = generation
            fresh = [c for c in cycles if c.path not in self._reported]
            self._reported.update(c.path for c in fresh)
        for cycle in fresh:
            logger.warning("Cyclic role graph truncated at %s", cycle)
