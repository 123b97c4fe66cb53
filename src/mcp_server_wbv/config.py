"""Server settings read from ``WBV_*`` environment variables."""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from mcp_server_wbv.analysis.weighting import FrequencyWeighting
from mcp_server_wbv.errors import InvalidConfigurationError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise InvalidConfigurationError(f"{name} must be a boolean, got '{raw}'")


def _parse_window(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise InvalidConfigurationError(f"WBV_MTVV_WINDOW_S must be a number, got '{raw}'") from None
    if not (math.isfinite(value) and value > 0):
        raise InvalidConfigurationError(f"WBV_MTVV_WINDOW_S must be positive, got {value}")
    return value


def parse_log_level(raw: str) -> int:
    """Map a level name (case-insensitive) to its :mod:`logging` value."""
    name = raw.strip().upper()
    if name not in LOG_LEVELS:
        raise InvalidConfigurationError(f"Unknown log level '{raw}', expected one of {LOG_LEVELS}")
    return getattr(logging, name)


@dataclass(frozen=True)
class Settings:
    """Analysis defaults for the server.

    Attributes:
        default_weighting: Weighting used when a tool call does not name one.
        mtvv_window_s: MTVV running-RMS window in seconds.
        parallel_axes: Compute the three axes concurrently.
        log_level: Root log level name.
    """

    default_weighting: FrequencyWeighting = FrequencyWeighting.WB
    mtvv_window_s: float = 1.0
    parallel_axes: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from the environment, falling back to defaults.

        Raises:
            InvalidConfigurationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        weighting = defaults.default_weighting
        if env.get("WBV_DEFAULT_WEIGHTING"):
            weighting = FrequencyWeighting.parse(env["WBV_DEFAULT_WEIGHTING"])

        window = defaults.mtvv_window_s
        if env.get("WBV_MTVV_WINDOW_S"):
            window = _parse_window(env["WBV_MTVV_WINDOW_S"])

        parallel = defaults.parallel_axes
        if env.get("WBV_PARALLEL_AXES"):
            parallel = _parse_bool("WBV_PARALLEL_AXES", env["WBV_PARALLEL_AXES"])

        level = defaults.log_level
        if env.get("WBV_LOG_LEVEL"):
            parse_log_level(env["WBV_LOG_LEVEL"])
            level = env["WBV_LOG_LEVEL"].strip().upper()

        return cls(
            default_weighting=weighting,
            mtvv_window_s=window,
            parallel_axes=parallel,
            log_level=level,
        )
