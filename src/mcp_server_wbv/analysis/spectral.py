"""Spectral analysis for vibration signals.

Forward and inverse real FFT with amplitude-correct normalisation, and the
``Spectrum`` value type shared by the weighting filter and the orchestrator.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from mcp_server_wbv.errors import InvalidConfigurationError, TransformError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Spectrum:
    """Single-sided spectrum of a real time series of length ``n_samples``.

    The display arrays hold ``n_samples // 2`` bins starting at DC.  The
    rfft bin at index ``n_samples // 2`` (the Nyquist bin for even lengths)
    is kept separately in ``tail`` so the inverse transform is exact.

    Attributes:
        frequencies: Bin frequencies in Hz, ``k * sample_rate / n_samples``.
        real: Raw (unscaled) real parts of the DFT.
        imag: Raw (unscaled) imaginary parts of the DFT.
        magnitudes: Amplitude spectrum; DC scaled by ``1/N``, others ``2/N``.
        phases: Bin phases in radians.
        sample_rate: Sampling frequency in Hz.
        n_samples: Length of the originating time series.
        tail: Raw complex DFT value at bin ``n_samples // 2``.
    """

    frequencies: NDArray[np.floating]
    real: NDArray[np.floating]
    imag: NDArray[np.floating]
    magnitudes: NDArray[np.floating]
    phases: NDArray[np.floating]
    sample_rate: float
    n_samples: int
    tail: complex = 0j

    @classmethod
    def empty(cls, sample_rate: float = 0.0) -> Spectrum:
        e = np.zeros(0, dtype=np.float64)
        return cls(e, e.copy(), e.copy(), e.copy(), e.copy(), float(sample_rate), 0)

    @property
    def is_empty(self) -> bool:
        return len(self.frequencies) == 0

    @property
    def n_bins(self) -> int:
        return len(self.frequencies)

    @property
    def resolution_hz(self) -> float:
        """Frequency spacing between bins (0.0 for an empty spectrum)."""
        if self.n_samples == 0 or self.sample_rate <= 0:
            return 0.0
        return self.sample_rate / self.n_samples

    @property
    def tail_frequency_hz(self) -> float:
        return (self.n_samples // 2) * self.resolution_hz

    @property
    def complex_bins(self) -> NDArray[np.complexfloating]:
        return self.real + 1j * self.imag

    def peak_frequency(self, skip_dc: bool = False) -> float | None:
        """Frequency of the largest magnitude bin, or ``None`` if no bins."""
        mags = self.magnitudes[1:] if skip_dc else self.magnitudes
        if len(mags) == 0:
            return None
        idx = int(np.argmax(mags)) + (1 if skip_dc else 0)
        return float(self.frequencies[idx])

    def to_dict(self) -> dict:
        return {
            "frequencies_hz": self.frequencies.tolist(),
            "magnitudes": self.magnitudes.tolist(),
            "phases_rad": self.phases.tolist(),
            "sample_rate_hz": self.sample_rate,
            "n_samples": self.n_samples,
            "n_bins": self.n_bins,
            "resolution_hz": self.resolution_hz,
        }


def _coerce_sample_rate(sample_rate: float) -> float:
    try:
        return float(sample_rate)
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError(f"Sample rate must be a number, got {sample_rate!r}") from exc


def _as_series(samples: ArrayLike) -> NDArray[np.floating]:
    try:
        x = np.array(samples, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise TransformError(f"Samples are not real-valued: {exc}") from exc
    if x.ndim != 1:
        raise TransformError(f"Expected a 1-D time series, got {x.ndim}-D input")
    if not np.all(np.isfinite(x)):
        raise TransformError("Time series contains NaN or infinite samples")
    return x


def forward_transform(samples: ArrayLike, sample_rate: float) -> Spectrum:
    """Compute the single-sided spectrum of a real time series.

    Any length is supported (numpy's FFT is not restricted to powers of two).
    A length of 1 yields no display bins; its DC value lives in ``tail``.
    An empty series, or a sample rate that is zero, negative or non-finite,
    yields an empty spectrum.

    Args:
        samples: Real-valued time series.
        sample_rate: Sampling frequency in Hz.

    Returns:
        :class:`Spectrum` with ``len(samples) // 2`` bins.

    Raises:
        InvalidConfigurationError: If ``sample_rate`` is not a number.
        TransformError: If the samples are not a finite 1-D real series.
    """
    fs = _coerce_sample_rate(sample_rate)
    x = _as_series(samples)
    n = len(x)
    rate_ok = math.isfinite(fs) and fs > 0
    if n == 0:
        return Spectrum.empty(fs if rate_ok else 0.0)
    if not rate_ok:
        logger.debug("Empty spectrum for %d samples: invalid sample rate %r", n, sample_rate)
        return Spectrum.empty()

    X = np.fft.rfft(x)
    n_half = n // 2
    bins = X[:n_half]

    freqs = np.arange(n_half, dtype=np.float64) * (fs / n)
    mags = (2.0 / n) * np.abs(bins)
    if n_half > 0:
        mags[0] /= 2.0  # DC component not doubled

    return Spectrum(
        frequencies=freqs,
        real=bins.real.copy(),
        imag=bins.imag.copy(),
        magnitudes=mags,
        phases=np.angle(bins),
        sample_rate=fs,
        n_samples=n,
        tail=complex(X[n_half]),
    )


def inverse_transform(spectrum: Spectrum, length: int | None = None) -> NDArray[np.floating]:
    """Reconstruct a real time series from a (possibly weighted) spectrum.

    The ``1/N`` scaling is applied, so an unmodified spectrum round-trips to
    the original samples within floating-point tolerance.

    Args:
        spectrum: Spectrum from :func:`forward_transform` (or a weighted copy).
        length: Expected output length.  Defaults to ``spectrum.n_samples``.

    Returns:
        Time series of ``spectrum.n_samples`` samples.

    Raises:
        TransformError: If ``length`` disagrees with the spectrum.
    """
    n = spectrum.n_samples if length is None else int(length)
    if n != spectrum.n_samples:
        raise TransformError(
            f"Requested length {n} does not match spectrum of {spectrum.n_samples} samples"
        )
    if n == 0:
        return np.zeros(0, dtype=np.float64)
    if len(spectrum.real) != n // 2 or len(spectrum.imag) != n // 2:
        raise TransformError(
            f"Spectrum has {len(spectrum.real)} bins, expected {n // 2} for {n} samples"
        )

    full = np.empty(n // 2 + 1, dtype=np.complex128)
    full[: n // 2] = spectrum.real + 1j * spectrum.imag
    full[n // 2] = spectrum.tail
    return np.fft.irfft(full, n=n)


def amplitude_spectrum(
    samples: ArrayLike,
    sample_rate: float,
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Return only the ``(frequencies, magnitudes)`` display arrays."""
    spec = forward_transform(samples, sample_rate)
    return spec.frequencies, spec.magnitudes
