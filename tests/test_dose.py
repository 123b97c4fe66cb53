"""Tests for RMS, VDV and MTVV dose metrics."""

import numpy as np
import pytest

from mcp_server_wbv.analysis.dose import (
    DoseResult,
    compute_dose,
    mtvv,
    rms,
    running_rms,
    vdv,
    vdv_total,
)


class TestRMS:
    def test_constant(self):
        assert rms(np.full(50, -2.0)) == pytest.approx(2.0)

    def test_sine(self, tone_5hz):
        assert rms(tone_5hz["signal"]) == pytest.approx(1.0 / np.sqrt(2.0), rel=1e-9)

    def test_empty(self):
        assert rms([]) == 0.0


class TestVDV:
    def test_constant_closed_form(self):
        # (sum(1) * dt) ** 0.25 = (1600 / 100) ** 0.25 = 2
        assert vdv(np.ones(1600), 100.0) == pytest.approx(2.0)

    def test_scales_linearly(self):
        a = vdv(np.ones(400), 100.0)
        assert vdv(3.0 * np.ones(400), 100.0) == pytest.approx(3.0 * a)

    def test_empty(self):
        assert vdv([], 100.0) == 0.0

    @pytest.mark.parametrize("fs", [0.0, -1.0])
    def test_invalid_rate(self, fs):
        assert vdv(np.ones(10), fs) == 0.0

    def test_shock_dominates(self):
        x = np.zeros(1000)
        x[500] = 10.0
        assert vdv(x, 100.0) == pytest.approx((1e4 / 100.0) ** 0.25)


class TestRunningRMS:
    def test_length(self):
        assert len(running_rms(np.ones(250), 100.0, 1.0)) == 151

    def test_window_is_floored(self):
        # floor(1.0 * 10.5) = 10 samples
        assert len(running_rms(np.ones(10), 10.5, 1.0)) == 1

    def test_matches_direct_computation(self, rng):
        x = rng.normal(size=300)
        w = 50
        direct = [np.sqrt(np.mean(x[i:i + w] ** 2)) for i in range(len(x) - w + 1)]
        np.testing.assert_allclose(running_rms(x, 50.0, 1.0), direct, rtol=1e-9)

    def test_too_short(self):
        assert running_rms(np.ones(99), 100.0, 1.0).size == 0


class TestMTVV:
    def test_constant(self):
        assert mtvv(np.full(500, 3.0), 100.0, 1.0) == pytest.approx(3.0)

    def test_burst(self):
        x = np.concatenate([np.zeros(500), np.ones(100), np.zeros(400)])
        assert mtvv(x, 100.0, 1.0) == pytest.approx(1.0)

    def test_burst_shorter_than_window(self):
        x = np.concatenate([np.zeros(500), 2.0 * np.ones(25), np.zeros(475)])
        assert mtvv(x, 100.0, 1.0) == pytest.approx(np.sqrt(4.0 * 25 / 100))

    def test_series_shorter_than_window(self):
        assert mtvv(np.ones(99), 100.0, 1.0) == 0.0

    def test_exactly_one_window(self):
        assert mtvv(np.full(100, 2.0), 100.0, 1.0) == pytest.approx(2.0)

    def test_empty(self):
        assert mtvv([], 100.0) == 0.0

    @pytest.mark.parametrize("fs, window", [(0.0, 1.0), (-5.0, 1.0), (100.0, 0.0), (100.0, -1.0)])
    def test_invalid_window(self, fs, window):
        assert mtvv(np.ones(500), fs, window) == 0.0

    def test_not_less_than_rms_for_long_series(self, rng):
        x = rng.normal(size=2000)
        assert mtvv(x, 100.0) >= rms(x) * 0.8


class TestClosedForms:
    @pytest.mark.parametrize(
        "series, fs, expected",
        [
            ([1, 2], 1.0, 17 ** 0.25),
            ([1, 2], 2.0, 8.5 ** 0.25),
            ([1, 1, 1, 1], 1.0, 4 ** 0.25),
        ],
    )
    def test_vdv(self, series, fs, expected):
        assert vdv(series, fs) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "series, fs, window_s, expected",
        [
            ([1, 1, 5, 5, 1, 1], 1.0, 2.0, 5.0),
            ([2, 2], 1.0, 2.0, 2.0),
            ([1, 2, 3], 10.0, 1.0, 0.0),
        ],
    )
    def test_mtvv(self, series, fs, window_s, expected):
        assert mtvv(series, fs, window_s) == pytest.approx(expected)


class TestVDVTotal:
    def test_equal_axes(self):
        assert vdv_total(1.0, 1.0, 1.0) == pytest.approx(3.0 ** 0.25)

    def test_single_axis(self):
        assert vdv_total(2.0, 0.0, 0.0) == pytest.approx(2.0)

    def test_missing_axis(self):
        assert vdv_total(1.0, None, 1.0) is None


class TestComputeDose:
    def test_valid(self):
        d = compute_dose(np.ones(400), 100.0, 1.0)
        assert d.rms == pytest.approx(1.0)
        assert d.vdv == pytest.approx(2.0 ** 0.5)
        assert d.mtvv == pytest.approx(1.0)

    def test_empty_all_unavailable(self):
        assert compute_dose([], 100.0) == DoseResult(None, None, None)

    def test_zero_signal_is_zero_not_none(self):
        d = compute_dose(np.zeros(200), 100.0)
        assert d == DoseResult(0.0, 0.0, 0.0)

    def test_invalid_rate(self):
        d = compute_dose(np.ones(200), 0.0)
        assert d.rms == pytest.approx(1.0)
        assert d.vdv is None
        assert d.mtvv is None

    def test_short_series_mtvv_unavailable(self):
        d = compute_dose(np.ones(50), 100.0, 1.0)
        assert d.vdv is not None
        assert d.mtvv is None

    def test_to_dict(self):
        assert compute_dose(np.zeros(0), 1.0).to_dict() == {"rms": None, "vdv": None, "mtvv": None}
