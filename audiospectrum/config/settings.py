"""Configuration loading and validation for audiospectrum."""

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Union

import yaml

from ..analysis.bands import parse_band_type

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration file holds invalid values."""


@dataclass
class AnalyzerSettings:
    """Band analyzer settings."""
    number_of_samples: int = 1024
    band_type: str = "TenBand"
    fall_speed: float = 0.08  # peak decay, level units per second
    sensitivity: float = 8.0  # mean tracker steepness
    max_decay: float = 0.0  # 0 = running maxima never decay


@dataclass
class PlaybackSettings:
    """Frame driver settings."""
    sample_rate: int = 44100
    fps: int = 60
    loop: bool = False


@dataclass
class AppSettings:
    """Complete application settings."""
    analyzer: AnalyzerSettings = field(default_factory=AnalyzerSettings)
    playback: PlaybackSettings = field(default_factory=PlaybackSettings)


def _parse_section(section: str, cls, raw: Any):
    if raw is None:
        return cls()
    if not isinstance(raw, dict):
        raise ConfigError(f"Section '{section}' must be a mapping")

    known = {f.name: f for f in fields(cls)}
    for key in raw:
        if key not in known:
            logger.warning(f"Ignoring unknown key '{section}.{key}'")

    values = {}
    for name, f in known.items():
        if name not in raw:
            continue
        value = raw[name]
        expected = type(f.default)
        try:
            if expected is bool:
                if not isinstance(value, bool):
                    raise TypeError(value)
            elif expected is int:
                if isinstance(value, bool) or int(value) != value:
                    raise TypeError(value)
                value = int(value)
            elif expected is float:
                if isinstance(value, bool):
                    raise TypeError(value)
                value = float(value)
            else:
                value = str(value)
        except (TypeError, ValueError):
            raise ConfigError(
                f"Invalid value for '{section}.{name}': {value!r} "
                f"(expected {expected.__name__})"
            ) from None
        values[name] = value
    return cls(**values)


def validate(settings: AppSettings) -> AppSettings:
    """Check value ranges. Raises ConfigError on the first problem."""
    analyzer = settings.analyzer
    if analyzer.number_of_samples < 1:
        raise ConfigError("analyzer.number_of_samples must be positive")
    if analyzer.number_of_samples & (analyzer.number_of_samples - 1):
        logger.warning(
            f"analyzer.number_of_samples={analyzer.number_of_samples} is not a power of two"
        )
    try:
        analyzer.band_type = parse_band_type(analyzer.band_type).value
    except ValueError as e:
        raise ConfigError(str(e)) from None
    for name in ("fall_speed", "sensitivity", "max_decay"):
        if getattr(analyzer, name) < 0:
            raise ConfigError(f"analyzer.{name} must not be negative")

    playback = settings.playback
    if playback.sample_rate <= 0:
        raise ConfigError("playback.sample_rate must be positive")
    if playback.fps <= 0:
        raise ConfigError("playback.fps must be positive")
    return settings


def settings_from_dict(raw: dict) -> AppSettings:
    """Create settings from a plain dictionary (as parsed from YAML)."""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("Configuration root must be a mapping")
    for key in raw:
        if key not in ("analyzer", "playback"):
            logger.warning(f"Ignoring unknown section '{key}'")
    return validate(AppSettings(
        analyzer=_parse_section("analyzer", AnalyzerSettings, raw.get("analyzer")),
        playback=_parse_section("playback", PlaybackSettings, raw.get("playback")),
    ))


def load_config(config_path: Union[str, Path] = "config.yaml") -> AppSettings:
    """Load configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

    settings = settings_from_dict(raw)
    logger.info(f"Loaded configuration from {path}")
    return settings


def save_config(settings: AppSettings, config_path: Union[str, Path]) -> None:
    """Save settings to a YAML file."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(settings), f, sort_keys=False)
