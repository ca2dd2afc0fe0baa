# src/erlang_engine/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from .search import SearchConfig
from .traffic import DEFAULT_INTERVAL_MINUTES

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENV_PREFIX = "ERLANG_"


@dataclass(frozen=True)
class EngineSettings:
    search: SearchConfig = field(default_factory=SearchConfig)
    default_interval_minutes: int = DEFAULT_INTERVAL_MINUTES
    log_level: str = "WARNING"


def _env(name: str, parse: Callable[[str], T], default: T) -> T:
    """
    Return the parsed environment value, or `default` if it is unset or unparsable.
    Keep this tolerant so a typo in one variable does not stop the engine.
    """
    raw = os.getenv(ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        return parse(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r; using default %r", ENV_PREFIX, name, raw, default)
        return default


def load_settings_from_env(*, defaults: Optional[EngineSettings] = None) -> EngineSettings:
    """
    Reads engine settings from the environment, e.g.

      ERLANG_SEARCH_TRAFFIC_MULTIPLE=5
      ERLANG_SEARCH_LOW_TRAFFIC_FLOOR=10
      ERLANG_SEARCH_HEADROOM=100
      ERLANG_DEFAULT_INTERVAL_MINUTES=15
      ERLANG_LOG_LEVEL=DEBUG
    """
    base = defaults or EngineSettings()

    search = SearchConfig(
        traffic_multiple=_env("SEARCH_TRAFFIC_MULTIPLE", float, base.search.traffic_multiple),
        low_traffic_floor=_env("SEARCH_LOW_TRAFFIC_FLOOR", int, base.search.low_traffic_floor),
        headroom=_env("SEARCH_HEADROOM", int, base.search.headroom),
    )

    return EngineSettings(
        search=search,
        default_interval_minutes=_env("DEFAULT_INTERVAL_MINUTES", int, base.default_interval_minutes),
        log_level=_env("LOG_LEVEL", str.upper, base.log_level),
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Basic console logging for scripts and notebooks. Libraries should not call this."""
    name = (level or load_settings_from_env().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "EngineSettings",
    "load_settings_from_env",
    "configure_logging",
]
