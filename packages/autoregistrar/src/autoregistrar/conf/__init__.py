from .defaults import DEFAULTS
from .models import RegistrarSettings
from .settings import CONFIG_MODULE_ENVVAR, ENV_PREFIX, Settings, env_truthy

__all__ = [
    "CONFIG_MODULE_ENVVAR",
    "DEFAULTS",
    "ENV_PREFIX",
    "RegistrarSettings",
    "Settings",
    "env_truthy",
]
