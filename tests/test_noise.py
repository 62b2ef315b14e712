"""Tests for noise channel sampling."""

import numpy as np
import pytest

from biomeforge.noise import NoiseChannel, NoiseField, channel_seed


class TestChannelSeed:
    """Tests for per-channel seed derivation."""

    def test_channels_have_distinct_offsets(self) -> None:
        """No two channels share an offset."""
        offsets = [int(channel) for channel in NoiseChannel]
        assert len(offsets) == len(set(offsets))

    def test_offset_added_to_seed(self) -> None:
        """Channel seed is base seed plus offset."""
        assert channel_seed(10, NoiseChannel.HUMIDITY) == 2010
        assert channel_seed(10, NoiseChannel.ELEVATION_BASE) == 10

    def test_wraps_to_32_bits(self) -> None:
        """Seeds near the u32 limit wrap around."""
        assert channel_seed(0xFFFFFFFF, NoiseChannel.ELEVATION_MID) == 99


class TestNoiseField:
    """Tests for NoiseField sampling."""

    def test_sample_in_unit_range(self) -> None:
        """Point samples are in [0, 1]."""
        field = NoiseField(42)
        values = [field.sample(x * 3.7, x * 1.3, 5.0) for x in range(200)]
        assert min(values) >= 0.0
        assert max(values) <= 1.0

    def test_sample_deterministic(self) -> None:
        """Same arguments give the same value."""
        assert NoiseField(5).sample(12.0, 7.0, 25.0) == NoiseField(5).sample(
            12.0, 7.0, 25.0
        )

    def test_grid_shape(self) -> None:
        """Grid output is (rows, columns)."""
        field = NoiseField(1)
        result = field.sample_grid(np.arange(10), np.arange(4), 8.0)
        assert result.shape == (4, 10)

    def test_grid_in_unit_range(self) -> None:
        """Grid samples are in [0, 1]."""
        field = NoiseField(3)
        result = field.sample_grid(np.arange(64), np.arange(64), 6.0)
        assert result.min() >= 0.0
        assert result.max() <= 1.0

    def test_grid_deterministic(self) -> None:
        """Repeated grid sampling is bit-identical."""
        xs, ys = np.arange(20), np.arange(15)
        first = NoiseField(99).sample_grid(xs, ys, 10.0)
        second = NoiseField(99).sample_grid(xs, ys, 10.0)
        np.testing.assert_array_equal(first, second)

    def test_grid_matches_point_samples(self) -> None:
        """Grid sampling agrees with per-point sampling."""
        field = NoiseField(8)
        grid = field.sample_grid(np.arange(5), np.arange(3), 4.0)
        for y in range(3):
            for x in range(5):
                assert grid[y, x] == pytest.approx(field.sample(x, y, 4.0), abs=1e-12)

    def test_row_band_matches_full_grid(self) -> None:
        """Sampling a band of rows equals the same rows of a full grid."""
        field = NoiseField(21)
        xs = np.arange(16)
        full = field.sample_grid(xs, np.arange(16), 5.0)
        band = field.sample_grid(xs, np.arange(4, 9), 5.0)
        np.testing.assert_array_equal(band, full[4:9])

    def test_channels_decorrelated(self) -> None:
        """Different channels of one seed give different fields."""
        xs, ys = np.arange(16), np.arange(16)
        base = NoiseField.for_channel(42, NoiseChannel.ELEVATION_BASE)
        mid = NoiseField.for_channel(42, NoiseChannel.ELEVATION_MID)
        assert not np.allclose(
            base.sample_grid(xs, ys, 10.0), mid.sample_grid(xs, ys, 10.0)
        )

    def test_scale_stretches_features(self) -> None:
        """Larger scale gives smoother output."""
        field = NoiseField(4)
        xs, ys = np.arange(64), np.arange(8)
        fine = field.sample_grid(xs, ys, 2.0)
        coarse = field.sample_grid(xs, ys, 50.0)
        assert np.abs(np.diff(coarse, axis=1)).mean() < np.abs(np.diff(fine, axis=1)).mean()
