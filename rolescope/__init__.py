"""rolescope - role and permission resolution with scoped decorations."""

from rolescope.config import RoleScopeConfig, load_config
from rolescope.decoration import compose, decorate, is_unbound, is_wildcard_scope, split
from rolescope.engine import Permissions
from rolescope.matcher import matches
from rolescope.models import CycleReport, InvalidIdentifier, RoleScheme, User
from rolescope.registry import RoleRegistry

__version__ = "0.1.0"

__all__ = [
    "CycleReport",
    "InvalidIdentifier",
    "Permissions",
    "RoleRegistry",
    "RoleScheme",
    "RoleScopeConfig",
    "User",
    "compose",
    "decorate",
    "is_unbound",
    "is_wildcard_scope",
    "load_config",
    "matches",
    "split",
]
