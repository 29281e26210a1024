"""Membership matching between held identifiers and a test identifier.

Only the held side is widened: an undecorated ``KEY`` that a user holds
behaves like ``KEY:*``. The tested identifier is taken literally, so

    held KEY:DECOR  test KEY:DECOR  -> match
    held KEY        test KEY:DECOR  -> match
    held KEY:DECOR  test KEY        -> no match
    held KEY:DECOR  test KEY:*      -> no match
    held KEY:*      test KEY:DECOR  -> match
"""

from __future__ import annotations

from collections.abc import Iterable

from rolescope.decoration import SEPARATOR, WILDCARD, is_wildcard_scope, split


def held_scope(identifier: str) -> str:
    """Scope of a held identifier, with a missing decoration read as ``*``.

    An open slot (``KEY:``) is not widened.
    """
    if SEPARATOR not in identifier:
        return WILDCARD
    return split(identifier)[1]


def matches(test: str, have: Iterable[str]) -> bool:
    """True if any identifier in *have* satisfies *test*."""
    test_base = split(test)[0]
    for held in have:
        if held == test:
            return True
        if split(held)[0] == test_base and is_wildcard_scope(held_scope(held)):
            return True
    return False


def matches_all(tests: Iterable[str], have: Iterable[str]) -> bool:
    held = list(have)
    return all(matches(test, held) for test in tests)
