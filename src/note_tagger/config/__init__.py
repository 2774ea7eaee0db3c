"""Settings loading and validation."""

from .settings import (
    DEFAULT_SETTINGS,
    TaggerSettings,
    apply_env_api_keys,
    load_settings,
    save_settings,
    settings_from_dict,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "TaggerSettings",
    "apply_env_api_keys",
    "load_settings",
    "save_settings",
    "settings_from_dict",
]
