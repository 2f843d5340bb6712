# config.py
# Defaults live here; each one can be overridden through the environment.
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .utils.exceptions import ConfigurationError

DRIVER = "sqlite3"
DATABASE = ":memory:"
LOG_LEVEL = "WARNING"
RENDER_MODE = "brackets"

RENDER_MODES = ("brackets", "grid")
LOG_FORMAT = '[%(asctime)s] {%(name)s} %(levelname)s - %(message)s'

ENV_PREFIX = "SQLRESULT_"


@dataclass(frozen=True)
class Settings:
    driver: str = DRIVER
    connect_args: Dict[str, Any] = field(default_factory=lambda: {"database": DATABASE})
    log_level: str = LOG_LEVEL
    render_mode: str = RENDER_MODE


def _level(value: str) -> str:
    name = value.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigurationError(ENV_PREFIX + "LOG_LEVEL", value, "unknown log level")
    return name


def _render_mode(value: str) -> str:
    mode = value.strip().lower()
    if mode not in RENDER_MODES:
        raise ConfigurationError(ENV_PREFIX + "RENDER_MODE", value,
                                 f"expected one of {', '.join(RENDER_MODES)}")
    return mode


def load_settings(env: Mapping[str, str] = None, **overrides) -> Settings:
    """
    Build Settings from module defaults, environment, then keyword overrides.

    Recognised variables: SQLRESULT_DRIVER, SQLRESULT_DATABASE,
    SQLRESULT_LOG_LEVEL, SQLRESULT_RENDER_MODE. Overrides set to None are
    ignored so argparse results can be passed straight through.
    """
    if env is None:
        env = os.environ

    values = {
        "driver": env.get(ENV_PREFIX + "DRIVER", DRIVER),
        "database": env.get(ENV_PREFIX + "DATABASE", DATABASE),
        "log_level": env.get(ENV_PREFIX + "LOG_LEVEL", LOG_LEVEL),
        "render_mode": env.get(ENV_PREFIX + "RENDER_MODE", RENDER_MODE),
    }
    for key, value in overrides.items():
        if key not in values:
            raise TypeError(f"Unknown setting: {key}")
        if value is not None:
            values[key] = value

    driver = values["driver"].strip()
    if not driver:
        raise ConfigurationError(ENV_PREFIX + "DRIVER", values["driver"], "driver name is empty")

    return Settings(
        driver=driver,
        connect_args={"database": values["database"]},
        log_level=_level(values["log_level"]),
        render_mode=_render_mode(values["render_mode"]),
    )


def configure_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """Attach a stream handler to the package logger, once."""
    logger = logging.getLogger("sqlresult")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
