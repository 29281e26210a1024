"""Shared test fixtures for rolescope."""

import pytest

from rolescope.engine import Permissions
from rolescope.registry import RoleRegistry


REFERENCE_ROLES = {
    "ROLE1": {"roles": [], "permissions": ["PERM1"]},
    "ROLE2": {"roles": [], "permissions": ["PERM2"]},
    "NEST1": {"roles": ["NEST2"], "permissions": ["PERM2"]},
    "NEST2": {"roles": [], "permissions": ["PERM2"]},
    "DEC1:": {"roles": [], "permissions": ["PERM1", "PERM2:"]},
    "DEC2": {"roles": ["DEC1:"], "permissions": []},
    "DEC3": {"roles": ["DEC1", "DEC2"], "permissions": []},
    "DEC4:": {"roles": ["DEC1:SNAIL", "DEC1:"], "permissions": []},
    "DEC5": {"roles": ["DEC1"]},
    "CIRC1": {"roles": ["CIRC2"], "permissions": ["PERM1"]},
    "CIRC2": {"roles": ["CIRC1"], "permissions": ["PERM1"]},
}


@pytest.fixture
def registry():
    """A registry seeded with the reference role set."""
    reg = RoleRegistry()
    for name, scheme in REFERENCE_ROLES.items():
        reg.register(name, scheme)
    return reg


@pytest.fixture
def schemes(registry):
    return registry.snapshot()


@pytest.fixture
def engine(registry):
    return Permissions(registry)
