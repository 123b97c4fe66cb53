"""Signal pre‑processing for vibration recordings.

Effective sample‑rate estimation from capture timestamps, acceleration unit
conversion, and gravity (offset / drift) removal prior to spectral analysis.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import signal as sig

from mcp_server_wbv.errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

STANDARD_GRAVITY = 9.80665  # m/s² per g


class AccelerationUnit(str, Enum):
    """Units an acceleration series may be expressed in."""

    METERS_PER_SECOND_SQUARED = "m/s²"
    G = "g"

    @classmethod
    def parse(cls, value: AccelerationUnit | str) -> AccelerationUnit:
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("m/s²", "m/s^2", "m/s2", "mps2", "si"):
            return cls.METERS_PER_SECOND_SQUARED
        if key in ("g", "gforce", "g-force"):
            return cls.G
        raise InvalidConfigurationError(f"Unknown acceleration unit '{value}'")


def convert_units(
    values: ArrayLike,
    from_unit: AccelerationUnit | str,
    to_unit: AccelerationUnit | str = AccelerationUnit.METERS_PER_SECOND_SQUARED,
) -> NDArray[np.floating]:
    """Convert an acceleration series between m/s² and g.

    Args:
        values: Acceleration samples.
        from_unit: Unit of ``values``.
        to_unit: Desired unit.

    Returns:
        Converted copy of ``values``.
    """
    src = AccelerationUnit.parse(from_unit)
    dst = AccelerationUnit.parse(to_unit)
    x = np.array(values, dtype=np.float64)
    if src is dst:
        return x
    if src is AccelerationUnit.G:
        return x * STANDARD_GRAVITY
    return x / STANDARD_GRAVITY


def estimate_sample_rate(
    timestamps: ArrayLike,
    fallback: float | None = None,
) -> float | None:
    """Estimate the average effective sample rate from capture timestamps.

    Motion sensors deliver samples with jitter, so the nominal rate is
    replaced by ``(n - 1) / (t_last - t_first)``.

    Args:
        timestamps: Sample times in seconds (ascending).
        fallback: Rate to use when the duration is not positive or fewer
            than two timestamps are available (typically the nominal rate).

    Returns:
        Estimated rate in Hz, ``fallback`` if no estimate is possible, or
        ``None`` if neither is available.
    """
    t = np.asarray(timestamps, dtype=np.float64)
    if t.size >= 2:
        duration = float(t[-1] - t[0])
        if math.isfinite(duration) and duration > 0:
            return (t.size - 1) / duration
    logger.debug("Cannot estimate sample rate from %d timestamps; using fallback %r", t.size, fallback)
    return fallback


def remove_dc_offset(x: NDArray[np.floating]) -> NDArray[np.floating]:
    """Remove the DC (mean) component from a signal."""
    return x - np.mean(x)


def remove_gravity(
    x: ArrayLike,
    method: Literal["constant", "linear"] = "constant",
) -> NDArray[np.floating]:
    """Remove the static gravity component from a raw accelerometer axis.

    Args:
        x: Raw axis samples (gravity included).
        method: ``"constant"`` subtracts the mean; ``"linear"`` also removes
            a linear drift (slow orientation change during capture).

    Returns:
        Detrended copy of ``x``.  Empty input returns an empty array.
    """
    arr = np.array(x, dtype=np.float64)
    if arr.size == 0:
        return arr
    if method == "constant":
        return remove_dc_offset(arr)
    if method == "linear":
        return sig.detrend(arr, type="linear")
    raise InvalidConfigurationError(f"Unknown gravity removal method '{method}'")
