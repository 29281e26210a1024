"""Role registry: role name -> RoleScheme."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from rolescope.decoration import SEPARATOR, validate_identifier
from rolescope.models import InvalidIdentifier, RoleScheme

logger = logging.getLogger(__name__)


class RoleRegistry:
    """Thread-safe mapping of role names to schemes.

    Writers take a lock and swap in a fresh dict; readers grab the current
    dict through ``snapshot()`` and never see a half-applied write.
    """

    def __init__(self, strict_identifiers: bool = True) -> None:
        self._schemes: dict[str, RoleScheme] = {}
        self._generation = 0
        self._lock = threading.Lock()
        self.strict_identifiers = strict_identifiers

    # -- Writes ----------------------------------------------------------------

    def register(
        self, name: str, scheme: RoleScheme | Mapping[str, Any] | None = None
    ) -> RoleScheme:
        """Store *scheme* under *name*, last write wins.

        A trailing ``:`` on *name* marks the role as requiring a decoration
        and is stripped from the stored key.
        """
        require = False
        if isinstance(name, str) and name.endswith(SEPARATOR):
            name = name[: -len(SEPARATOR)]
            require = True
        if not isinstance(name, str) or not name:
            raise InvalidIdentifier(name, "role name must be a non-empty string")
        if SEPARATOR in name:
            raise InvalidIdentifier(name, "role name must not contain ':' except as a trailing marker")

        stored = self._coerce(scheme)
        stored = stored.model_copy(
            deep=True,
            update={
                "name": name,
                "require_decoration": require or stored.require_decoration,
            }
        )
        if self.strict_identifiers:
            for entry in (*stored.roles, *stored.permissions):
                validate_identifier(entry)

        with self._lock:
            replaced = name in self._schemes
            schemes = dict(self._schemes)
            schemes[name] = stored
            self._schemes = schemes
            self._generation += 1

        if replaced:
            logger.info("Replaced role scheme %s", name)
        else:
            logger.debug(
                "Registered role scheme %s (require_decoration=%s)",
                name,
                stored.require_decoration,
            )
        return stored

    def clear(self) -> None:
        with self._lock:
            count = len(self._schemes)
            self._schemes = {}
            self._generation += 1
        logger.info("Cleared %d role scheme(s)", count)

    # -- Reads -----------------------------------------------------------------

    def lookup(self, name: str) -> RoleScheme | None:
        """Return the scheme for *name*; a trailing ``:`` is ignored."""
        if name.endswith(SEPARATOR):
            name = name[: -len(SEPARATOR)]
        return self._schemes.get(name)

    def snapshot(self) -> Mapping[str, RoleScheme]:
        """Read-only view of the registry as of this call."""
        return MappingProxyType(self._schemes)

    def versioned_snapshot(self) -> tuple[int, Mapping[str, RoleScheme]]:
        """Snapshot plus the write generation it belongs to.

        The generation goes up by one on every ``register`` and ``clear``.
        """
        with self._lock:
            return self._generation, MappingProxyType(self._schemes)

    def all(self) -> Mapping[str, RoleScheme]:
        return self.snapshot()

    def names(self) -> list[str]:
        return list(self._schemes)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._schemes)

    @staticmethod
    def _coerce(scheme: RoleScheme | Mapping[str, Any] | None) -> RoleScheme:
        if scheme is None:
            return RoleScheme()
        if isinstance(scheme, RoleScheme):
            return scheme
        return RoleScheme.model_validate(dict(scheme))
