"""Tests for the frequency weighting curves."""

import numpy as np
import pytest

from mcp_server_wbv.analysis.weighting import FrequencyWeighting, gain, gains
from mcp_server_wbv.errors import InvalidConfigurationError

W = FrequencyWeighting


class TestGainSpotValues:
    @pytest.mark.parametrize("f, expected", [
        (1.0, 0.5), (4.0, 1.0), (8.0, 1.0), (16.0, 0.5), (0.99, 0.0),
    ])
    def test_wg(self, f, expected):
        assert gain(f, W.WG) == pytest.approx(expected)

    @pytest.mark.parametrize("f, expected", [
        (1.0, 0.4), (2.0, 0.4), (5.0, 1.0), (16.0, 1.0), (16.01, 16.0 / 16.01),
    ])
    def test_wb(self, f, expected):
        assert gain(f, W.WB) == pytest.approx(expected)

    def test_wb_just_above_16hz(self):
        assert gain(16.01, W.WB) == pytest.approx(0.9994, abs=1e-4)

    @pytest.mark.parametrize("f, expected", [
        (1.0, 1.0), (1.99, 1.0), (2.0, 1.0), (10.0, 0.2),
    ])
    def test_wd(self, f, expected):
        assert gain(f, W.WD) == pytest.approx(expected)

    def test_wb_sqrt_segment(self):
        assert gain(1.5, W.WB) == pytest.approx(0.4 * np.sqrt(1.5))

    def test_wg_sqrt_segment(self):
        assert gain(2.0, W.WG) == pytest.approx(0.5 * np.sqrt(2.0))


class TestGainEdgeCases:
    @pytest.mark.parametrize("kind", list(W))
    def test_dc_passes(self, kind):
        assert gain(0.0, kind) == 1.0

    @pytest.mark.parametrize("kind", list(W))
    def test_negative_frequency_passes(self, kind):
        assert gain(-5.0, kind) == 1.0

    @pytest.mark.parametrize("f", [0.3, 1.0, 7.0, 500.0])
    def test_none_is_unity(self, f):
        assert gain(f, W.NONE) == 1.0

    @pytest.mark.parametrize("kind", [W.WG, W.WB, W.WD])
    def test_sub_hz_is_zero(self, kind):
        assert gain(0.5, kind) == 0.0

    @pytest.mark.parametrize("kind", [W.WG, W.WB, W.WD])
    def test_high_frequency_decays(self, kind):
        assert 0.0 < gain(1000.0, kind) < 0.1

    def test_accepts_name(self):
        assert gain(10.0, "wd") == pytest.approx(0.2)


class TestGainsVectorised:
    @pytest.mark.parametrize("kind", list(W))
    def test_matches_scalar(self, kind):
        freqs = np.array([-1.0, 0.0, 0.5, 0.99, 1.0, 1.5, 2.0, 3.0, 4.0, 5.0,
                          7.9, 8.0, 8.1, 12.0, 16.0, 16.01, 40.0, 80.0])
        expected = [gain(f, kind) for f in freqs]
        np.testing.assert_allclose(gains(freqs, kind), expected, rtol=0, atol=0)

    def test_empty(self):
        assert gains([], W.WB).shape == (0,)

    def test_shape_preserved(self):
        assert gains(np.ones((2, 3)), W.WB).shape == (2, 3)


class TestFrequencyWeightingParse:
    @pytest.mark.parametrize("text, expected", [
        ("Wb", W.WB), ("wb", W.WB), (" WG ", W.WG), ("wd", W.WD),
        ("none", W.NONE), ("NONE", W.NONE), ("", W.NONE), (None, W.NONE),
    ])
    def test_parse(self, text, expected):
        assert W.parse(text) is expected

    def test_member_passthrough(self):
        assert W.parse(W.WD) is W.WD

    def test_unknown_raises(self):
        with pytest.raises(InvalidConfigurationError, match="Unknown frequency weighting"):
            W.parse("Wk")

    def test_unknown_is_value_error(self):
        with pytest.raises(ValueError):
            W.parse("A-weighting")

    @pytest.mark.parametrize("kind", list(W))
    def test_descriptions(self, kind):
        assert kind.description
