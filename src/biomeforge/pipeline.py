"""Stage orchestration: generate, refine, classify."""

import random
from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

from .classification import classify_biomes
from .config import ProjectConfig, resolve_seed
from .heightmap import generate_heightmap
from .refiner import refine_heightmap

logger = structlog.get_logger()


@dataclass
class GenerationResult:
    """Grids produced by one pipeline run."""

    seed: int
    biome_seed: int
    heightmap: NDArray[np.float32]
    biomes: NDArray[np.uint8]
    raw_heightmap: NDArray[np.float32]

    @property
    def refined(self) -> bool:
        """Whether the heightmap went through the refiner."""
        return self.heightmap is not self.raw_heightmap


def generate_world(
    project: ProjectConfig,
    previous: ArrayLike | None = None,
    refine: bool = False,
    workers: int | None = None,
    rng: random.Random | None = None,
) -> GenerationResult:
    """Run the full pipeline.

    Seeds are resolved here: a random seed is drawn for each stage whose
    config asks for one.

    Args:
        project: Stage configurations.
        previous: Earlier heightmap to overlay-blend with.
        refine: Whether to run the refiner between generation and
            classification.
        workers: Row-band threads per stage (None = default).
        rng: Source for random seeds.

    Returns:
        GenerationResult holding every grid and the seeds used.
    """
    generation = project.generation
    seed = resolve_seed(generation.use_random_seed, generation.seed, rng)
    biome_seed = resolve_seed(project.biome.use_random_seed, project.biome.seed, rng)

    logger.info(
        "pipeline_started",
        width=generation.width,
        height=generation.height,
        seed=seed,
        biome_seed=biome_seed,
        refine=refine,
    )

    raw = generate_heightmap(generation, seed, previous=previous, workers=workers)

    heightmap = raw
    if refine:
        heightmap = refine_heightmap(raw, project.refiner, generation)

    biomes = classify_biomes(
        generation, project.biome, heightmap, biome_seed, workers=workers
    )

    return GenerationResult(
        seed=seed,
        biome_seed=biome_seed,
        heightmap=heightmap,
        biomes=biomes,
        raw_heightmap=raw,
    )
