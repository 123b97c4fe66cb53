"""Vibration dose statistics: RMS, VDV and MTVV.

All functions take a (normally frequency-weighted) acceleration series.
Invalid inputs return ``0.0`` from the scalar functions; :func:`compute_dose`
reports the same conditions as ``None`` so callers can tell "no data" apart
from a genuinely zero signal.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True)
class DoseResult:
    """Dose values for one axis.  ``None`` marks an unavailable metric.

    Attributes:
        rms: Overall RMS of the series (unit of the input).
        vdv: Vibration Dose Value (unit·s^0.25).
        mtvv: Maximum Transient Vibration Value (unit of the input).
    """

    rms: float | None
    vdv: float | None
    mtvv: float | None

    def to_dict(self) -> dict:
        return asdict(self)


def _valid_rate(sample_rate: float) -> bool:
    return math.isfinite(sample_rate) and sample_rate > 0


def _window_samples(sample_rate: float, window_s: float) -> int:
    if not _valid_rate(sample_rate) or not (math.isfinite(window_s) and window_s > 0):
        return 0
    return int(math.floor(window_s * sample_rate))


def rms(series: ArrayLike) -> float:
    """Root-mean-square of the series; ``0.0`` for an empty series."""
    x = np.asarray(series, dtype=np.float64)
    if x.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(x ** 2)))


def vdv(series: ArrayLike, sample_rate: float) -> float:
    """Vibration Dose Value, ``(sum(a**4) * dt) ** 0.25``.

    Args:
        series: Weighted acceleration samples.
        sample_rate: Sampling frequency in Hz.

    Returns:
        VDV, or ``0.0`` for an empty series or ``sample_rate <= 0``.
    """
    x = np.asarray(series, dtype=np.float64)
    if x.size == 0 or not _valid_rate(sample_rate):
        return 0.0
    dt = 1.0 / sample_rate
    return float((np.sum(x ** 4) * dt) ** 0.25)


def running_rms(
    series: ArrayLike,
    sample_rate: float,
    window_s: float = 1.0,
) -> NDArray[np.floating]:
    """Sliding-window RMS stepped one sample at a time.

    Uses a cumulative sum of squares, so the cost is O(n) regardless of the
    window length.

    Args:
        series: Weighted acceleration samples.
        sample_rate: Sampling frequency in Hz.
        window_s: Window length in seconds.

    Returns:
        Array of ``len(series) - window + 1`` RMS values, where ``window =
        floor(window_s * sample_rate)``.  Empty when the window is not
        defined or the series is shorter than one window.
    """
    x = np.asarray(series, dtype=np.float64)
    w = _window_samples(sample_rate, window_s)
    if x.size == 0 or w <= 0 or x.size < w:
        return np.zeros(0, dtype=np.float64)

    csum = np.concatenate(([0.0], np.cumsum(x ** 2)))
    window_sums = csum[w:] - csum[:-w]
    # cancellation in the running sum can dip fractionally below zero
    np.maximum(window_sums, 0.0, out=window_sums)
    return np.sqrt(window_sums / w)


def mtvv(series: ArrayLike, sample_rate: float, window_s: float = 1.0) -> float:
    """Maximum Transient Vibration Value: maximum of the running RMS.

    A series shorter than one window returns ``0.0`` rather than falling back
    to the whole-signal RMS.

    Args:
        series: Weighted acceleration samples.
        sample_rate: Sampling frequency in Hz.
        window_s: Running-RMS window in seconds (1 s by convention).

    Returns:
        MTVV, or ``0.0`` when it is undefined.
    """
    trace = running_rms(series, sample_rate, window_s)
    if trace.size == 0:
        return 0.0
    return float(np.max(trace))


def vdv_total(
    vdv_x: float | None,
    vdv_y: float | None,
    vdv_z: float | None,
) -> float | None:
    """Combine per-axis VDVs by fourth-power vector sum.

    Returns ``None`` if any axis value is unavailable.
    """
    parts = (vdv_x, vdv_y, vdv_z)
    if any(p is None for p in parts):
        return None
    return float(sum(p ** 4 for p in parts) ** 0.25)  # type: ignore[operator]


def compute_dose(
    series: ArrayLike,
    sample_rate: float,
    window_s: float = 1.0,
) -> DoseResult:
    """Compute RMS, VDV and MTVV, marking undefined metrics as ``None``.

    Args:
        series: Weighted acceleration samples.
        sample_rate: Sampling frequency in Hz.
        window_s: MTVV window in seconds.

    Returns:
        :class:`DoseResult` for the series.
    """
    x = np.asarray(series, dtype=np.float64)
    if x.size == 0:
        return DoseResult(rms=None, vdv=None, mtvv=None)

    rate_ok = _valid_rate(sample_rate)
    w = _window_samples(sample_rate, window_s)

    return DoseResult(
        rms=rms(x),
        vdv=vdv(x, sample_rate) if rate_ok else None,
        mtvv=mtvv(x, sample_rate, window_s) if 0 < w <= x.size else None,
    )
