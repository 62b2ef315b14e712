"""Map generation configuration models and TOML loading."""

import random
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

MAX_SEED = 0xFFFFFFFF


class GenerationConfig(BaseModel):
    """Heightmap generation parameters.

    Scales are noise wavelengths in cells; amplitudes weight each octave.
    """

    width: int = Field(default=512, gt=0, description="Map width in cells")
    height: int = Field(default=512, gt=0, description="Map height in cells")
    seed: int = Field(default=12345, ge=0, le=MAX_SEED, description="Base seed (u32)")
    use_random_seed: bool = Field(
        default=True, description="Draw a fresh seed on every generation"
    )

    island_mode: bool = Field(default=True, description="Attenuate terrain near borders")
    island_border: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Border band as fraction of map size"
    )
    island_curve: float = Field(default=2.0, description="Falloff curve exponent")

    sea_level: float = Field(
        default=0.4, ge=0.0, le=1.0, description="Normalized water threshold"
    )
    mountainous: float = Field(default=1.0, description="Exponent applied to base octave")

    scale_base: float = Field(default=400.0, gt=0, description="Base octave wavelength")
    amp_base: float = Field(default=1.0, description="Base octave amplitude")
    scale_mid: float = Field(default=100.0, gt=0, description="Mid octave wavelength")
    amp_mid: float = Field(default=0.5, description="Mid octave amplitude")
    scale_detail: float = Field(default=25.0, gt=0, description="Detail octave wavelength")
    amp_detail: float = Field(default=0.15, description="Detail octave amplitude")

    overlay: float = Field(
        default=100.0,
        ge=0.0,
        le=100.0,
        description="Weight of the fresh map when blending with the previous one (%)",
    )

    @property
    def size(self) -> int:
        """Number of cells in the grid."""
        return self.width * self.height


class RefinerConfig(BaseModel):
    """Post-processing transform applied to an existing heightmap."""

    height_offset: float = Field(default=0.0, description="Added before scaling")
    height_coeff: float = Field(default=1.0, description="Multiplier after offset")
    height_exponent: float = Field(
        default=1.0, gt=0.0, description="Power applied after offset and scale"
    )
    # Reserved: accepted but not consumed by the transform.
    smoothness: float = Field(default=0.0, ge=0.0, description="Reserved")
    curve_points: list[tuple[float, float]] | None = Field(
        default=None, description="Reserved"
    )
    paint_map_overlay: list[float] | None = Field(default=None, description="Reserved")


class BiomeConfig(BaseModel):
    """Climate noise parameters for biome classification.

    Temperature is in Celsius, humidity in percent. Both are normalized to
    [0, 1] before classification: temperature maps -10..40 C, humidity
    0..100 %, variations are divided by 100.
    """

    seed: int = Field(default=12345, ge=0, le=MAX_SEED, description="Climate seed (u32)")
    use_random_seed: bool = Field(default=True, description="Draw a fresh climate seed")
    scale: float = Field(default=10000.0, gt=0, description="Climate noise wavelength")
    base_temperature: float = Field(default=15.0, description="Mean temperature (C)")
    base_humidity: float = Field(default=50.0, description="Mean humidity (%)")
    temperature_variation: float = Field(default=20.0, ge=0.0, description="Spread (C)")
    humidity_variation: float = Field(default=20.0, ge=0.0, description="Spread (%)")
    biome_blend_factor: float = Field(default=0.5, description="Reserved")
    slope_rules: bool = Field(
        default=True, description="Let steep slopes force mountains"
    )


class WaterConfig(BaseModel):
    """Lake and river parameters for a water synthesis stage.

    Declared for configuration files; no water simulation consumes it yet.
    """

    seed: int = Field(default=32345, ge=0, le=MAX_SEED)
    use_random_seed: bool = True

    lake_attempts: int = Field(default=100, ge=0)
    min_lake_n: int = Field(default=0, ge=0)
    max_lake_n: int = Field(default=100, ge=0)
    min_elevation: float = Field(default=0.0, ge=0.0, le=1.0)
    max_elevation: float = Field(default=1.0, ge=0.0, le=1.0)
    min_capacity: float = Field(default=10.0, ge=0.0)
    max_capacity: float = Field(default=1_000_000.0, ge=0.0)
    min_depth: float = Field(default=1.0, ge=0.0)
    base_evaporation: float = 50.0
    base_inflow: float = 50.0
    base_drainage: float = 50.0
    biome_influence: float = 50.0
    lake_terrain_modification: float = 10.0

    river_count: int = Field(default=10, ge=0)
    river_width: float = 50.0
    river_momentum: float = 50.0
    river_direction_variation: float = 10.0
    river_speed: float = 50.0
    river_spread: float = 50.0
    river_depth: float = 50.0


class ProjectConfig(BaseModel):
    """All stage configurations for one map."""

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    refiner: RefinerConfig = Field(default_factory=RefinerConfig)
    biome: BiomeConfig = Field(default_factory=BiomeConfig)
    water: WaterConfig = Field(default_factory=WaterConfig)


def load_config(config_path: Path) -> ProjectConfig:
    """Load a project configuration from a TOML file.

    Args:
        config_path: Path to the TOML file. Tables `[generation]`,
            `[refiner]`, `[biome]` and `[water]` are all optional.

    Returns:
        Validated ProjectConfig.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the TOML is malformed.
        pydantic.ValidationError: If a value is out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return ProjectConfig.model_validate(data)


def resolve_seed(
    use_random_seed: bool,
    seed: int,
    rng: random.Random | None = None,
) -> int:
    """Pick the seed for one generation call.

    Args:
        use_random_seed: Whether to draw a fresh seed.
        seed: Configured seed, used when not drawing.
        rng: Source of randomness (defaults to the module RNG).

    Returns:
        A seed in [0, 2**32).
    """
    if not use_random_seed:
        return seed & MAX_SEED
    rng = rng or random
    return rng.randint(0, MAX_SEED)
