"""
Engine and logging settings loaded from TOML.

Only runtime settings live in the file (default operators, profiling and
logging); variables, sets and rules are always built in code by the host.

Example config/fis_config.toml:

    [engine]
    and_method = "min"
    inference_method = "last_of_maxima"
    profile = false
    latency_budget_ms = 10.0

    [logging]
    log_dir = "logs"
    overwrite = true
    log_level = "DEBUG"
    console_level = "INFO"

Typical usage:

    engine_cfg, log_cfg = load_settings("config/fis_config.toml")
    configure_logging(log_cfg)
    system = new_system("SongRating", settings=engine_cfg)
"""
import logging
import tomllib
from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from mamdani.operators import (
    AndMethod,
    InferenceMethod,
    resolve_and_method,
    resolve_inference_method,
)
from mamdani.logger import setup_logging


@dataclass(frozen=True)
class EngineSettings:
    and_method: AndMethod = AndMethod.MIN
    inference_method: InferenceMethod = InferenceMethod.LAST_OF_MAXIMA
    profile: bool = False
    latency_budget_ms: float = 10.0


@dataclass(frozen=True)
class LoggingSettings:
    log_dir: str = "logs"
    overwrite: bool = True
    log_level: int = logging.DEBUG
    console_level: int = logging.INFO


# ------------------------------------------------------------
# Load TOML
# ------------------------------------------------------------
def _load_toml(path: str) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _level(value: Union[str, int]) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {value!r}")
    return level


# ------------------------------------------------------------
# Section parsers
# ------------------------------------------------------------
def engine_settings_from_dict(cfg: Dict[str, Any]) -> EngineSettings:
    """Builds EngineSettings from an [engine] table; missing keys keep defaults."""
    defaults = EngineSettings()
    return EngineSettings(
        and_method=resolve_and_method(cfg.get("and_method", defaults.and_method)),
        inference_method=resolve_inference_method(
            cfg.get("inference_method", defaults.inference_method)
        ),
        profile=bool(cfg.get("profile", defaults.profile)),
        latency_budget_ms=float(cfg.get("latency_budget_ms", defaults.latency_budget_ms)),
    )


def logging_settings_from_dict(cfg: Dict[str, Any]) -> LoggingSettings:
    """Builds LoggingSettings from a [logging] table; missing keys keep defaults."""
    defaults = LoggingSettings()
    return LoggingSettings(
        log_dir=str(cfg.get("log_dir", defaults.log_dir)),
        overwrite=bool(cfg.get("overwrite", defaults.overwrite)),
        log_level=_level(cfg.get("log_level", defaults.log_level)),
        console_level=_level(cfg.get("console_level", defaults.console_level)),
    )


# ------------------------------------------------------------
# Main loader
# ------------------------------------------------------------
def load_settings(
    path: str = "config/fis_config.toml",
) -> Tuple[EngineSettings, LoggingSettings]:
    """
    Reads the engine and logging settings from a TOML file.

    Returns:
        (EngineSettings, LoggingSettings)

    Raises:
        UnknownOperator: An [engine] method name is not supported.
        ValueError: A [logging] level name is not a logging level.
    """
    cfg = _load_toml(path)
    return (
        engine_settings_from_dict(cfg.get("engine", {})),
        logging_settings_from_dict(cfg.get("logging", {})),
    )


def configure_logging(settings: LoggingSettings) -> None:
    setup_logging(
        log_dir=settings.log_dir,
        overwrite=settings.overwrite,
        log_level=settings.log_level,
        console_level=settings.console_level,
    )
