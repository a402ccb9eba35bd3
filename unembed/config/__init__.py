from .loader import SettingsStore, load_config, resolve_config_path
from .models import ConverterSettings, UnembedConfig

__all__ = [
    "ConverterSettings",
    "SettingsStore",
    "UnembedConfig",
    "load_config",
    "resolve_config_path",
]
