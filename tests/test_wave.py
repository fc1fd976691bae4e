"""Tests for the traveling wave."""

import math

import pytest

from hexdrift.wave import marker_drift, ripple_offset, wave


class TestWave:
    def test_range(self):
        for t in (0.0, 0.7, 3.3, 100.0):
            for x in range(-500, 1500, 97):
                for y in range(-500, 1500, 131):
                    value = wave(t, (float(x), float(y)))
                    assert 0.0 <= value <= 1.0

    @pytest.mark.parametrize("t", [0.0, 1.25, 17.0])
    @pytest.mark.parametrize("pos", [(0.0, 0.0), (123.0, 456.0), (-80.0, 900.0)])
    def test_periodic_in_time(self, t, pos):
        assert wave(t, pos) == pytest.approx(wave(t + 2 * math.pi, pos), abs=1e-12)

    def test_sharpened_peak_and_trough(self):
        assert wave(math.pi / 2, (0.0, 0.0)) == pytest.approx(1.0)
        assert wave(-math.pi / 2, (0.0, 0.0)) == pytest.approx(0.0)
        # raw 0.5 becomes 0.5 ** 4
        assert wave(0.0, (0.0, 0.0)) == pytest.approx(0.0625)

    def test_depends_on_position(self):
        assert wave(0.0, (0.0, 0.0)) != pytest.approx(wave(0.0, (400.0, 0.0)))
        assert wave(0.0, (0.0, 0.0)) != pytest.approx(wave(0.0, (0.0, 400.0)))

    def test_travels_diagonally(self):
        """Advancing time matches sampling further along the diagonal."""
        k = 0.3
        shift = k / (0.003 * 2)
        assert wave(1.0 + k, (10.0, 10.0)) == pytest.approx(wave(1.0, (10.0 + shift, 10.0 + shift)))


class TestOffsets:
    def test_ripple_offset(self):
        assert ripple_offset(0.5, 4.0) == 0.0
        assert ripple_offset(1.0, 4.0) == -2.0
        assert ripple_offset(0.0, 4.0) == 2.0

    def test_marker_drift_bounded(self):
        for t in range(0, 50):
            assert -1.0 <= marker_drift(t * 0.37, t * 13.0) <= 1.0
