"""Procedural heightmap and biome map generation.

Three stages turn configuration into authoring grids: noise-based
heightmap synthesis, optional refinement, and biome classification.
"""

from .biomes import Biome, biome_color, choose_biome
from .classification import classify_biomes
from .config import (
    BiomeConfig,
    GenerationConfig,
    ProjectConfig,
    RefinerConfig,
    WaterConfig,
    load_config,
    resolve_seed,
)
from .heightmap import generate_heightmap
from .noise import NoiseChannel, NoiseField
from .persistence import export_ascii_grid, export_png, load_map, save_map
from .pipeline import GenerationResult, generate_world
from .refiner import refine_heightmap
from .validation import ValidationResult, validate_world

__all__ = [
    "Biome",
    "BiomeConfig",
    "GenerationConfig",
    "GenerationResult",
    "NoiseChannel",
    "NoiseField",
    "ProjectConfig",
    "RefinerConfig",
    "ValidationResult",
    "WaterConfig",
    "biome_color",
    "choose_biome",
    "classify_biomes",
    "export_ascii_grid",
    "export_png",
    "generate_heightmap",
    "generate_world",
    "load_config",
    "load_map",
    "refine_heightmap",
    "resolve_seed",
    "save_map",
    "validate_world",
]
