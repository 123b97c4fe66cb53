"""Tests for the synthetic vibration generator."""

import numpy as np
import pytest

from mcp_server_wbv.analysis.preprocessing import STANDARD_GRAVITY
from mcp_server_wbv.analysis.spectral import forward_transform
from mcp_server_wbv.analysis.test_signal import generate_test_recording, generate_vibration_signal


class TestGenerateVibrationSignal:
    def test_length(self):
        t, x = generate_vibration_signal(2.0, 250.0)
        assert len(t) == len(x) == 500
        assert t[1] - t[0] == pytest.approx(1 / 250.0)

    def test_tone(self):
        _, x = generate_vibration_signal(10.0, 100.0, tones=[(5.0, 2.0)])
        spec = forward_transform(x, 100.0)
        assert spec.peak_frequency() == pytest.approx(5.0)
        assert spec.magnitudes[50] == pytest.approx(2.0, abs=1e-9)

    def test_offset(self):
        _, x = generate_vibration_signal(1.0, 100.0, offset=STANDARD_GRAVITY)
        np.testing.assert_allclose(x, STANDARD_GRAVITY)

    def test_shock(self):
        _, x = generate_vibration_signal(2.0, 100.0, shocks=[(1.0, 5.0)])
        assert np.argmax(x) in range(100, 105)
        assert np.max(x) == pytest.approx(5.0, abs=0.1)
        assert np.all(x[:100] == 0.0)

    def test_shock_outside_range_ignored(self):
        _, x = generate_vibration_signal(1.0, 100.0, shocks=[(5.0, 5.0)])
        assert np.all(x == 0.0)

    def test_noise_reproducible(self):
        _, a = generate_vibration_signal(1.0, 100.0, noise_std=0.1, seed=7)
        _, b = generate_vibration_signal(1.0, 100.0, noise_std=0.1, seed=7)
        np.testing.assert_array_equal(a, b)
        assert np.std(a) == pytest.approx(0.1, rel=0.3)


class TestGenerateTestRecording:
    def test_shape(self):
        rec = generate_test_recording(duration_s=5.0, fs=200.0)
        assert rec.n_samples == 1000
        assert rec.effective_sample_rate() == pytest.approx(200.0)

    def test_axes_content(self):
        rec = generate_test_recording(noise_std=0.0)
        assert forward_transform(rec.z, 100.0).peak_frequency() == pytest.approx(5.0)
        assert forward_transform(rec.x, 100.0).peak_frequency() == pytest.approx(1.5)
        assert forward_transform(rec.y, 100.0).peak_frequency() == pytest.approx(1.5)

    def test_gravity(self):
        rec = generate_test_recording(include_gravity=True, noise_std=0.0)
        assert np.mean(rec.z) == pytest.approx(STANDARD_GRAVITY, abs=1e-6)
        assert np.mean(rec.x) == pytest.approx(0.0, abs=1e-6)
