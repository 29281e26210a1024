from .loader import load_config
from .models import RoleScopeConfig

__all__ = [
    "RoleScopeConfig",
    "load_config",
]
