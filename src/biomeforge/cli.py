"""Command-line interface for map generation."""

import argparse
import logging
import time
from pathlib import Path

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Install the console renderer at INFO (or DEBUG when verbose)."""
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the `biomeforge` command."""
    parser = argparse.ArgumentParser(
        description="Generate a heightmap and biome map"
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="TOML config file"
    )
    parser.add_argument("--width", type=int, default=None, help="Map width in cells")
    parser.add_argument("--height", type=int, default=None, help="Map height in cells")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Fixed seed for both stages (disables random seeds)",
    )
    parser.add_argument(
        "--refine", action="store_true", help="Run the refiner before classifying"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="map.npz",
        help="Output .npz path (default: map.npz)",
    )
    parser.add_argument("--asc", type=str, default=None, help="Export ASCII grid")
    parser.add_argument(
        "--min-elevation", type=float, default=0.0, help="ASCII grid elevation at 0"
    )
    parser.add_argument(
        "--max-elevation", type=float, default=1000.0, help="ASCII grid elevation at 1"
    )
    parser.add_argument(
        "--png-height", type=str, default=None, help="Export grayscale heightmap PNG"
    )
    parser.add_argument(
        "--png-biomes", type=str, default=None, help="Export biome color PNG"
    )
    parser.add_argument(
        "--png-preview",
        type=str,
        default=None,
        help="Export elevation band color preview PNG",
    )
    parser.add_argument(
        "--workers", type=int, default=None, help="Threads per stage"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for map generation."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from .config import ProjectConfig, load_config
    from .persistence import export_ascii_grid, export_png, save_map
    from .pipeline import generate_world
    from .preview import biomes_to_rgb, heightmap_to_grayscale, heightmap_to_rgb
    from .validation import validate_world

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            logger.error("config_not_found", path=args.config)
            raise SystemExit(1)
        project = load_config(config_path)
        logger.info("config_loaded", path=str(config_path))
    else:
        project = ProjectConfig()

    overrides = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.seed is not None:
        overrides.update(seed=args.seed, use_random_seed=False)
        project.biome = project.biome.model_validate(
            {**project.biome.model_dump(), "seed": args.seed, "use_random_seed": False}
        )
    if overrides:
        project.generation = project.generation.model_validate(
            {**project.generation.model_dump(), **overrides}
        )

    start_time = time.time()
    result = generate_world(project, refine=args.refine, workers=args.workers)
    logger.info("generation_complete", seconds=round(time.time() - start_time, 2))

    validate_world(result.heightmap, result.biomes, project.generation)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    save_map(output_path, result.heightmap, result.biomes, project.generation, result.seed)

    if args.asc:
        export_ascii_grid(
            Path(args.asc), result.heightmap, args.min_elevation, args.max_elevation
        )
    if args.png_height:
        export_png(Path(args.png_height), heightmap_to_grayscale(result.heightmap))
    if args.png_biomes:
        export_png(Path(args.png_biomes), biomes_to_rgb(result.biomes))
    if args.png_preview:
        export_png(
            Path(args.png_preview),
            heightmap_to_rgb(result.heightmap, project.generation.sea_level),
        )


if __name__ == "__main__":
    main()
