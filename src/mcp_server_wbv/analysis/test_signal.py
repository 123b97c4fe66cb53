"""Synthetic test‑signal generator for whole‑body vibration.

Generates simulated accelerometer axes (tones, noise, shocks and a static
gravity offset) for testing, validation and demonstration purposes.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from mcp_server_wbv.analysis.preprocessing import STANDARD_GRAVITY
from mcp_server_wbv.analysis.recording import TriaxialRecording


def generate_vibration_signal(
    duration_s: float,
    fs: float,
    tones: list[tuple[float, float]] | None = None,
    noise_std: float = 0.0,
    shocks: list[tuple[float, float]] | None = None,
    offset: float = 0.0,
    seed: int | None = 42,
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Generate one acceleration axis.

    Args:
        duration_s: Signal duration in seconds.
        fs: Sampling frequency in Hz.
        tones: List of (frequency_hz, amplitude) sinusoids.
        noise_std: Standard deviation of additive Gaussian noise.
        shocks: List of (time_s, amplitude) half‑sine shocks of 50 ms,
            e.g. a vehicle passing over a bump.
        offset: Constant added to every sample (gravity on a vertical axis).
        seed: Seed for the noise generator.

    Returns:
        (time, signal) — 1‑D arrays.
    """
    n_samples = int(duration_s * fs)
    t = np.arange(n_samples) / fs
    x = np.full(n_samples, float(offset))

    for freq, amp in tones or []:
        x += amp * np.sin(2.0 * np.pi * freq * t)

    shock_len = max(int(0.05 * fs), 1)
    for t0, amp in shocks or []:
        start = int(round(t0 * fs))
        if start < 0 or start >= n_samples:
            continue
        stop = min(start + shock_len, n_samples)
        x[start:stop] += amp * np.sin(np.pi * (np.arange(stop - start) + 0.5) / shock_len)

    if noise_std > 0:
        x += np.random.default_rng(seed).normal(0, noise_std, n_samples)

    return t, x


def generate_test_recording(
    duration_s: float = 10.0,
    fs: float = 100.0,
    vertical_freq_hz: float = 5.0,
    vertical_amplitude: float = 1.0,
    lateral_freq_hz: float = 1.5,
    lateral_amplitude: float = 0.3,
    noise_std: float = 0.02,
    shocks: list[tuple[float, float]] | None = None,
    include_gravity: bool = False,
    seed: int | None = 42,
) -> TriaxialRecording:
    """Generate a complete synthetic triaxial recording.

    x and y carry the lateral tone (y in quadrature), z carries the vertical
    tone, any shocks and optionally gravity.

    Args:
        duration_s: Recording duration in seconds.
        fs: Sampling frequency in Hz.
        vertical_freq_hz: Frequency of the z‑axis tone.
        vertical_amplitude: Peak z‑axis amplitude (m/s²).
        lateral_freq_hz: Frequency of the x/y tone.
        lateral_amplitude: Peak x/y amplitude (m/s²).
        noise_std: Noise level on every axis.
        shocks: Optional (time_s, amplitude) shocks on the z axis.
        include_gravity: Add 9.80665 m/s² to the z axis.
        seed: Base seed; each axis uses ``seed + index``.

    Returns:
        :class:`TriaxialRecording` with timestamps in seconds.
    """
    seeds = [None if seed is None else seed + i for i in range(3)]

    t, x = generate_vibration_signal(
        duration_s, fs, [(lateral_freq_hz, lateral_amplitude)], noise_std, seed=seeds[0],
    )
    y_tone = lateral_amplitude * np.cos(2.0 * np.pi * lateral_freq_hz * t)
    _, y = generate_vibration_signal(duration_s, fs, None, noise_std, seed=seeds[1])
    y += y_tone
    _, z = generate_vibration_signal(
        duration_s, fs,
        [(vertical_freq_hz, vertical_amplitude)],
        noise_std,
        shocks=shocks,
        offset=STANDARD_GRAVITY if include_gravity else 0.0,
        seed=seeds[2],
    )
    return TriaxialRecording.from_arrays(t, x, y, z)
