"""Frequency weighting curves for whole-body vibration.

Simplified closed-form approximations of the Wg, Wb and Wd curves.  Each
curve is a piecewise function of frequency evaluated per spectral bin; no
analog pole/zero model is involved.

Below 1 Hz every weighted curve returns 0.0.  This is a deliberate
simplification of the standard curves, which have a defined (non-zero)
low-frequency response.
"""

from __future__ import annotations

import math
from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcp_server_wbv.errors import InvalidConfigurationError


class FrequencyWeighting(str, Enum):
    """Closed set of supported weighting curves."""

    NONE = "none"
    WG = "Wg"
    WB = "Wb"
    WD = "Wd"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, value: FrequencyWeighting | str | None) -> FrequencyWeighting:
        """Resolve a weighting from an enum member or a case-insensitive name.

        ``None`` and the empty string map to :attr:`NONE`.

        Raises:
            InvalidConfigurationError: If the name is not a known weighting.
        """
        if isinstance(value, cls):
            return value
        if value is None or str(value).strip() == "":
            return cls.NONE
        key = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == key or member.name.lower() == key:
                return member
        raise InvalidConfigurationError(
            f"Unknown frequency weighting '{value}'. "
            f"Supported: {', '.join(m.value for m in cls)}"
        )


_DESCRIPTIONS = {
    FrequencyWeighting.NONE: "No frequency weighting applied.",
    FrequencyWeighting.WG: "Wg, motion-sickness oriented weighting (peak 4-8 Hz).",
    FrequencyWeighting.WB: "Wb, vertical whole-body weighting (peak 5-16 Hz).",
    FrequencyWeighting.WD: "Wd, horizontal whole-body weighting (peak 1-2 Hz).",
}


def _gain_wg(f: float) -> float:
    if f < 1.0:
        return 0.0
    if f < 4.0:
        return 0.5 * math.sqrt(f)
    if f <= 8.0:
        return 1.0
    return 8.0 / f


def _gain_wb(f: float) -> float:
    if f < 1.0:
        return 0.0
    if f < 2.0:
        return 0.4 * math.sqrt(f)
    if f < 5.0:
        return f / 5.0
    if f <= 16.0:
        return 1.0
    return 16.0 / f


def _gain_wd(f: float) -> float:
    if f < 1.0:
        return 0.0
    if f < 2.0:
        return 1.0
    return 2.0 / f


_CURVES = {
    FrequencyWeighting.WG: _gain_wg,
    FrequencyWeighting.WB: _gain_wb,
    FrequencyWeighting.WD: _gain_wd,
}


def gain(frequency: float, kind: FrequencyWeighting | str) -> float:
    """Evaluate the weighting gain at a single frequency.

    Args:
        frequency: Frequency in Hz.  Any real value is accepted.
        kind: Weighting curve (enum member or name).

    Returns:
        Amplitude gain.  ``1.0`` for ``frequency <= 0`` (DC passes through
        unattenuated) and for :attr:`FrequencyWeighting.NONE`.
    """
    kind = FrequencyWeighting.parse(kind)
    frequency = float(frequency)
    if not frequency > 0 or kind is FrequencyWeighting.NONE:
        return 1.0
    return _CURVES[kind](frequency)


def gains(
    frequencies: ArrayLike,
    kind: FrequencyWeighting | str,
) -> NDArray[np.floating]:
    """Vectorised :func:`gain` over an array of bin frequencies.

    Args:
        frequencies: Frequencies in Hz.
        kind: Weighting curve.

    Returns:
        Array of gains with the same shape as ``frequencies``.
    """
    kind = FrequencyWeighting.parse(kind)
    f = np.asarray(frequencies, dtype=np.float64)
    out = np.ones_like(f)
    if kind is FrequencyWeighting.NONE or f.size == 0:
        return out

    pos = f > 0
    fp = np.where(pos, f, 1.0)  # keeps sqrt/division finite on masked bins

    if kind is FrequencyWeighting.WG:
        w = np.select(
            [fp < 1.0, fp < 4.0, fp <= 8.0],
            [0.0, 0.5 * np.sqrt(fp), 1.0],
            default=8.0 / fp,
        )
    elif kind is FrequencyWeighting.WB:
        w = np.select(
            [fp < 1.0, fp < 2.0, fp < 5.0, fp <= 16.0],
            [0.0, 0.4 * np.sqrt(fp), fp / 5.0, 1.0],
            default=16.0 / fp,
        )
    else:
        w = np.select([fp < 1.0, fp < 2.0], [0.0, 1.0], default=2.0 / fp)

    out[pos] = w[pos]
    return out
