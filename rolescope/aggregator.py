"""Permission aggregation over a role closure."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from rolescope.decoration import decorate, split
from rolescope.expander import expand_roles, user_roles_with_report
from rolescope.models import CycleReport, RoleScheme, User


def collect_permissions(
    schemes: Mapping[str, RoleScheme], closure: Iterable[str]
) -> list[str]:
    """Decorated permissions granted by each role in *closure*, in order.

    Open ``PERM:`` slots on a scheme take the scope of the role instance
    that grants them.
    """
    permissions: list[str] = []
    for identifier in closure:
        base_name, scope_name = split(identifier)
        scheme = schemes.get(base_name)
        if scheme is None:
            continue
        permissions.extend(decorate(p, scope_name) for p in scheme.permissions)
    return permissions


def merge_permissions(own: Iterable[str], granted: Iterable[str]) -> list[str]:
    """User-attached permissions first, verbatim, then role grants; first wins."""
    return list(dict.fromkeys([*own, *granted]))


def role_permissions(schemes: Mapping[str, RoleScheme], identifier: str) -> list[str]:
    """All permissions reachable from a single role reference."""
    closure = expand_roles(schemes, identifier)
    return list(dict.fromkeys(collect_permissions(schemes, closure)))


def user_permissions_with_report(
    schemes: Mapping[str, RoleScheme], user: User
) -> tuple[list[str], list[CycleReport]]:
    """Effective permissions of *user* and any cycles hit resolving its roles."""
    closure, cycles = user_roles_with_report(schemes, user.roles)
    return merge_permissions(user.permissions, collect_permissions(schemes, closure)), cycles


def user_permissions(schemes: Mapping[str, RoleScheme], user: User) -> list[str]:
    return user_permissions_with_report(schemes, user)[0]
