# Settings module
from .settings import (
    AnalyzerSettings,
    AppSettings,
    ConfigError,
    PlaybackSettings,
    load_config,
    save_config,
    settings_from_dict,
)

__all__ = [
    "AnalyzerSettings",
    "AppSettings",
    "ConfigError",
    "PlaybackSettings",
    "load_config",
    "save_config",
    "settings_from_dict",
]
