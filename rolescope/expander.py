"""Role closure expansion with decoration propagation.

Nested references ending in ``:`` take the decoration of the role that
references them; already-decorated or undecorated references are used as-is.
Visitation is keyed on the full decorated identifier, so ``ROLE:A`` and
``ROLE:B`` are expanded independently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from rolescope.decoration import decorate, split
from rolescope.models import CycleReport, RoleScheme

logger = logging.getLogger(__name__)


def expand_roles_with_report(
    schemes: Mapping[str, RoleScheme],
    identifier: str,
    visited: set[str] | None = None,
) -> tuple[list[str], list[CycleReport]]:
    """Expand *identifier* into its role closure, depth-first, pre-order.

    Returns the closure and every reference that looped back onto its own
    expansion path. Identifiers already in *visited* are skipped.
    """
    if visited is None:
        visited = set()

    closure: list[str] = []
    cycles: list[CycleReport] = []
    path: list[str] = []
    stack: list[tuple[str, int]] = [(identifier, 0)]

    while stack:
        current, depth = stack.pop()
        del path[depth:]
        base_name, scope_name = split(current)

        if current in visited:
            if current in path:
                cycles.append(CycleReport(path=(*path, current)))
            continue
        visited.add(current)

        scheme = schemes.get(base_name)
        if scheme is None:
            logger.debug("No scheme registered for role %s", current)
            continue
        # Partial roles are inert without a decoration
        if not scope_name and scheme.require_decoration:
            continue

        closure.append(current)
        path.append(current)
        for ref in reversed(scheme.roles):
            stack.append((decorate(ref, scope_name), depth + 1))

    return closure, cycles


def expand_roles(
    schemes: Mapping[str, RoleScheme],
    identifier: str,
    visited: set[str] | None = None,
) -> list[str]:
    return expand_roles_with_report(schemes, identifier, visited)[0]


def user_roles_with_report(
    schemes: Mapping[str, RoleScheme], roles: Iterable[str]
) -> tuple[list[str], list[CycleReport]]:
    """Role closure of every role a user declares, deduplicated in order.

    Each declared role is expanded with its own visited set. A declared role
    with no registered scheme is kept as an opaque leaf.
    """
    result: list[str] = []
    cycles: list[CycleReport] = []
    for role in roles:
        closure, found = expand_roles_with_report(schemes, role)
        if split(role)[0] not in schemes:
            closure = [role]
        result.extend(closure)
        cycles.extend(found)
    return list(dict.fromkeys(result)), cycles
