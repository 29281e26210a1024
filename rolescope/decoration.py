"""Decorated identifier codec.

An identifier is either ``NAME`` (undecorated), ``NAME:`` (an unbound
decoration slot that the referencing role fills in) or ``NAME:SCOPE``.
The scope ``*`` is the wildcard.
"""

from __future__ import annotations

from rolescope.models import InvalidIdentifier

SEPARATOR = ":"
WILDCARD = "*"


def split(identifier: str) -> tuple[str, str]:
    """Split *identifier* on its first colon into ``(base, scope)``.

    ``scope`` is ``""`` for both ``NAME`` and ``NAME:``.
    """
    if not isinstance(identifier, str):
        raise InvalidIdentifier(identifier, "identifier must be a string")
    base, _, scope = identifier.partition(SEPARATOR)
    if not base:
        raise InvalidIdentifier(identifier, "empty base name")
    return base, scope


def compose(base_name: str, scope_name: str = "") -> str:
    """Build ``base`` or ``base:scope`` from its parts."""
    if not base_name:
        raise InvalidIdentifier(base_name, "empty base name")
    if SEPARATOR in base_name:
        raise InvalidIdentifier(base_name, "base name must not contain ':'")
    if SEPARATOR in scope_name:
        raise InvalidIdentifier(scope_name, "scope must be a single segment")
    if not scope_name:
        return base_name
    return f"{base_name}{SEPARATOR}{scope_name}"


def is_unbound(identifier: str) -> bool:
    """True for an open decoration slot such as ``PERM:``."""
    return identifier.endswith(SEPARATOR)


def is_wildcard_scope(scope_name: str) -> bool:
    return scope_name == WILDCARD


def decorate(identifier: str, scope_name: str) -> str:
    """Bind an open slot to *scope_name*; anything else is returned unchanged.

    ``decorate("PERM:", "OK")`` gives ``"PERM:OK"``. With an empty scope the
    slot stays open.
    """
    if is_unbound(identifier):
        return f"{identifier}{scope_name}"
    return identifier


def validate_identifier(identifier: str) -> str:
    """Reject empty bases and multi-segment scopes like ``A:b:c``."""
    _, scope_name = split(identifier)
    if SEPARATOR in scope_name:
        raise InvalidIdentifier(identifier, "scope must be a single segment")
    return identifier
