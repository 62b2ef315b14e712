"""Shared test fixtures for map generation tests."""

import pytest

from biomeforge.config import BiomeConfig, GenerationConfig


@pytest.fixture
def small_config() -> GenerationConfig:
    """32x24 map with a fixed seed."""
    return GenerationConfig(width=32, height=24, seed=7, use_random_seed=False)


@pytest.fixture
def flat_climate():
    """Factory for biome configs with uniform temperature and humidity.

    Temperature is given normalized: 0 = -10 C, 1 = 40 C.
    Humidity is given normalized: 0 = 0 %, 1 = 100 %.
    """

    def make(temperature: float, humidity: float, **kwargs) -> BiomeConfig:
        return BiomeConfig(
            seed=11,
            use_random_seed=False,
            base_temperature=temperature * 50.0 - 10.0,
            base_humidity=humidity * 100.0,
            temperature_variation=0.0,
            humidity_variation=0.0,
            **kwargs,
        )

    return make
