"""Frequency-domain weighting of vibration time series.

The signal is transformed, every bin is scaled by the weighting gain at its
frequency, and the result is transformed back.  Time-domain IIR/FIR
realisations of the weighting curves are not provided.
"""

from __future__ import annotations

import dataclasses
import logging
import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcp_server_wbv.analysis.spectral import Spectrum, forward_transform, inverse_transform
from mcp_server_wbv.analysis.weighting import FrequencyWeighting, gain, gains

logger = logging.getLogger(__name__)


def weight_spectrum(
    spectrum: Spectrum,
    kind: FrequencyWeighting | str,
) -> Spectrum:
    """Return a copy of ``spectrum`` with every bin scaled by the weighting gain.

    Magnitudes are scaled with the bins; phases are unchanged except where a
    zero gain collapses a bin.

    Args:
        spectrum: Unweighted spectrum.
        kind: Weighting curve.

    Returns:
        Weighted :class:`Spectrum` (same length and frequencies).
    """
    kind = FrequencyWeighting.parse(kind)
    if kind is FrequencyWeighting.NONE or spectrum.n_samples == 0:
        return spectrum

    w = gains(spectrum.frequencies, kind)
    real = spectrum.real * w
    imag = spectrum.imag * w
    tail = spectrum.tail * gain(spectrum.tail_frequency_hz, kind)

    return dataclasses.replace(
        spectrum,
        real=real,
        imag=imag,
        magnitudes=spectrum.magnitudes * w,
        phases=np.arctan2(imag, real),
        tail=tail,
    )


def apply_weighting(
    samples: ArrayLike,
    sample_rate: float,
    kind: FrequencyWeighting | str,
) -> NDArray[np.floating]:
    """Apply a frequency weighting to a time series via FFT.

    Steps:
      1. Forward real FFT
      2. Multiply each bin by ``gain(f_k, kind)`` (DC gets 1.0)
      3. Inverse FFT back to a series of the same length

    Fail-soft cases return the input unchanged (as a new array):
    ``kind`` is ``none`` (no transform runs), the series is empty, or
    ``sample_rate <= 0``.

    Args:
        samples: Real-valued acceleration series.
        sample_rate: Sampling frequency in Hz.
        kind: Weighting curve.

    Returns:
        Weighted series with ``len(samples)`` samples.

    Raises:
        TransformError: If the series cannot be transformed (non-finite data).
    """
    kind = FrequencyWeighting.parse(kind)
    x = np.array(samples, dtype=np.float64)

    if kind is FrequencyWeighting.NONE:
        return x
    if x.size == 0:
        return x
    fs = float(sample_rate)
    if not (math.isfinite(fs) and fs > 0):
        logger.debug("Skipping %s weighting: invalid sample rate %r", kind.value, sample_rate)
        return x

    spec = forward_transform(x, fs)
    weighted = inverse_transform(weight_spectrum(spec, kind), len(x))
    return weighted
