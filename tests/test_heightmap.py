"""Tests for heightmap generation."""

import numpy as np
import pytest

from biomeforge.config import GenerationConfig
from biomeforge.heightmap import (
    combine_octaves,
    generate_heightmap,
    max_amplitude,
    overlay_strength,
)


def _with(config: GenerationConfig, **changes) -> GenerationConfig:
    return config.model_copy(update=changes)


class TestMaxAmplitude:
    """Tests for the normalization constant."""

    def test_default_config(self) -> None:
        """Defaults give (1.5 - 0.5) * 1.0 + 0.5 + 0.15."""
        assert max_amplitude(GenerationConfig()) == pytest.approx(1.65)

    def test_mountainous_exponent(self) -> None:
        """Mountainous exponent applies to the 1.5 peak."""
        config = GenerationConfig(mountainous=2.0, amp_base=2.0, amp_mid=0.0, amp_detail=0.0)
        assert max_amplitude(config) == pytest.approx((2.25 - 0.5) * 2.0)


class TestCombineOctaves:
    """Tests for octave combination."""

    def test_all_ones_is_maximum(self) -> None:
        """Octaves at their maximum normalize to 1."""
        config = GenerationConfig(mountainous=1.7)
        ones = np.ones((2, 2))
        result = combine_octaves(ones, ones, ones, config, max_amplitude(config))
        np.testing.assert_allclose(result, 1.0)

    def test_all_zeros_is_zero(self) -> None:
        """Octaves at zero with a linear base give 0."""
        config = GenerationConfig()
        zeros = np.zeros((2, 2))
        result = combine_octaves(zeros, zeros, zeros, config, max_amplitude(config))
        np.testing.assert_allclose(result, 0.0)

    def test_clamped_to_unit_range(self) -> None:
        """Sub-linear mountainous exponents can't push values below 0."""
        config = GenerationConfig(mountainous=0.3)
        values = np.linspace(0.0, 1.0, 11).reshape(1, -1)
        result = combine_octaves(values, values, values, config, max_amplitude(config))
        assert result.min() >= 0.0
        assert result.max() <= 1.0

    def test_non_positive_max_amp(self) -> None:
        """A degenerate amplitude setup yields zeros instead of NaN."""
        config = GenerationConfig(amp_base=0.0, amp_mid=0.0, amp_detail=0.0)
        ones = np.ones((2, 2))
        result = combine_octaves(ones, ones, ones, config, max_amplitude(config))
        np.testing.assert_array_equal(result, 0.0)


class TestOverlayStrength:
    """Tests for overlay percentage conversion."""

    def test_percent_to_fraction(self) -> None:
        assert overlay_strength(GenerationConfig(overlay=25.0)) == 0.25

    def test_full(self) -> None:
        assert overlay_strength(GenerationConfig(overlay=100.0)) == 1.0


class TestGenerateHeightmap:
    """Tests for generate_heightmap."""

    def test_output_shape(self, small_config: GenerationConfig) -> None:
        """Output is (height, width)."""
        result = generate_heightmap(small_config, seed=1)
        assert result.shape == (24, 32)

    def test_output_dtype(self, small_config: GenerationConfig) -> None:
        """Output is float32."""
        result = generate_heightmap(small_config, seed=1)
        assert result.dtype == np.float32

    @pytest.mark.parametrize(
        "changes",
        [
            {},
            {"island_mode": False},
            {"mountainous": 3.0},
            {"mountainous": 0.5, "island_curve": 7.0},
            {"scale_base": 3.0, "scale_mid": 2.0, "scale_detail": 1.0},
            {"amp_mid": 2.0, "amp_detail": 1.0},
        ],
    )
    def test_values_in_unit_range(
        self, small_config: GenerationConfig, changes: dict
    ) -> None:
        """Every cell is in [0, 1]."""
        result = generate_heightmap(_with(small_config, **changes), seed=2024)
        assert result.min() >= 0.0
        assert result.max() <= 1.0

    def test_deterministic(self, small_config: GenerationConfig) -> None:
        """Same config and seed give bit-identical grids."""
        first = generate_heightmap(small_config, seed=77)
        second = generate_heightmap(small_config, seed=77)
        np.testing.assert_array_equal(first, second)

    def test_different_seed_different_map(self, small_config: GenerationConfig) -> None:
        """Different seeds give different grids."""
        config = _with(small_config, scale_base=8.0, island_mode=False)
        first = generate_heightmap(config, seed=1)
        second = generate_heightmap(config, seed=2)
        assert not np.array_equal(first, second)

    def test_worker_count_does_not_change_output(self) -> None:
        """Row-band fan-out gives the same grid as a single worker."""
        config = GenerationConfig(width=20, height=64, use_random_seed=False)
        single = generate_heightmap(config, seed=5, workers=1)
        parallel = generate_heightmap(config, seed=5, workers=4)
        np.testing.assert_array_equal(single, parallel)

    def test_does_not_mutate_previous(self, small_config: GenerationConfig) -> None:
        """The previous map is read, never written."""
        previous = np.full((24, 32), 0.25, dtype=np.float32)
        generate_heightmap(_with(small_config, overlay=30.0), seed=3, previous=previous)
        np.testing.assert_array_equal(previous, 0.25)


class TestIslandMode:
    """Tests for island falloff in generated maps."""

    def test_center_unattenuated(self, small_config: GenerationConfig) -> None:
        """The center cell equals the same cell without island mode."""
        island = generate_heightmap(small_config, seed=9)
        plain = generate_heightmap(_with(small_config, island_mode=False), seed=9)
        assert island[12, 16] == plain[12, 16]

    def test_border_pulled_to_zero(self, small_config: GenerationConfig) -> None:
        """Outermost row and column are zero."""
        result = generate_heightmap(small_config, seed=9)
        np.testing.assert_array_equal(result[0, :], 0.0)
        np.testing.assert_array_equal(result[:, 0], 0.0)

    def test_never_raises_cells(self, small_config: GenerationConfig) -> None:
        """Island mode only lowers terrain."""
        island = generate_heightmap(small_config, seed=9)
        plain = generate_heightmap(_with(small_config, island_mode=False), seed=9)
        assert np.all(island <= plain)


class TestOverlayBlend:
    """Tests for blending with a previous heightmap."""

    @pytest.fixture
    def previous(self) -> np.ndarray:
        rng = np.random.default_rng(0)
        return rng.random((24, 32)).astype(np.float32)

    def test_full_overlay_ignores_previous(
        self, small_config: GenerationConfig, previous: np.ndarray
    ) -> None:
        """overlay=100 reproduces the fresh map exactly."""
        fresh = generate_heightmap(small_config, seed=4)
        blended = generate_heightmap(small_config, seed=4, previous=previous)
        np.testing.assert_array_equal(fresh, blended)

    def test_zero_overlay_reproduces_previous(
        self, small_config: GenerationConfig, previous: np.ndarray
    ) -> None:
        """overlay=0 keeps the previous map."""
        config = _with(small_config, overlay=0.0)
        result = generate_heightmap(config, seed=4, previous=previous)
        np.testing.assert_array_equal(result, previous)

    def test_flat_previous_accepted(
        self, small_config: GenerationConfig, previous: np.ndarray
    ) -> None:
        """A row-major flat list works as the previous map."""
        config = _with(small_config, overlay=0.0)
        result = generate_heightmap(config, seed=4, previous=previous.ravel().tolist())
        np.testing.assert_array_equal(result, previous)

    def test_half_overlay_is_average(
        self, small_config: GenerationConfig, previous: np.ndarray
    ) -> None:
        """overlay=50 averages fresh and previous maps."""
        fresh = generate_heightmap(small_config, seed=4)
        blended = generate_heightmap(
            _with(small_config, overlay=50.0), seed=4, previous=previous
        )
        np.testing.assert_allclose(blended, 0.5 * fresh + 0.5 * previous, atol=1e-6)

    def test_size_mismatch_disables_blend(
        self, small_config: GenerationConfig
    ) -> None:
        """A previous map of the wrong size is ignored."""
        config = _with(small_config, overlay=0.0)
        fresh = generate_heightmap(config, seed=4)
        result = generate_heightmap(config, seed=4, previous=np.ones((10, 10)))
        np.testing.assert_array_equal(result, fresh)

    def test_transposed_previous_disables_blend(
        self, small_config: GenerationConfig, previous: np.ndarray
    ) -> None:
        """A (width, height) previous map is ignored, not reshaped."""
        config = _with(small_config, overlay=0.0)
        fresh = generate_heightmap(config, seed=4)
        result = generate_heightmap(config, seed=4, previous=previous.T)
        np.testing.assert_array_equal(result, fresh)
