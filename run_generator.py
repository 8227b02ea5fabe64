#!/usr/bin/env python3
"""
arcadetrack Track Generator Runner

Generates a track descriptor for the pseudo-3D arcade renderer and writes
it as JSON.

Usage:
    python run_generator.py --atlas spritesheet.json                  # Random curves/slopes
    python run_generator.py --atlas spritesheet.json --mode straight  # Straight track
    python run_generator.py --atlas spritesheet.json --layout layout.json
    python run_generator.py --help                                    # Show all options
"""

import argparse
import logging
import sys
from pathlib import Path

from arcadetrack.errors import TrackGenerationError
from arcadetrack.export import ExporterConfig, TrackExporter
from arcadetrack.sprites import SpriteCatalog
from arcadetrack.track import GenerationMode, GeneratorConfig, TrackGenerator, load_layout

logger = logging.getLogger("arcadetrack")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="arcadetrack procedural track generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Random track with curves and slopes, 12 zones
    python run_generator.py --atlas examples/data/spritesheet.json

    # Track following a layout file, reproducible
    python run_generator.py --atlas examples/data/spritesheet.json \\
        --layout examples/data/layout.json --seed 42

    # Widget-style options file (trackParam, objects, obstacle, ...)
    python run_generator.py --atlas examples/data/spritesheet.json \\
        --config examples/data/generator.json --mode straight
        """
    )

    parser.add_argument(
        "--atlas",
        type=Path,
        required=True,
        help="Sprite atlas JSON file"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON file with generator options"
    )
    parser.add_argument(
        "--layout",
        type=Path,
        help="JSON layout file (implies --mode layout)"
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GenerationMode],
        help="Generation mode (default: layout if a layout is given, else curves)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible tracks"
    )
    parser.add_argument(
        "--reverse-layout",
        action="store_true",
        help="Expand layout entries last-to-first"
    )

    # Output
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("tracks/track.json"),
        help="Output file (default: tracks/track.json)"
    )
    parser.add_argument(
        "--indent",
        type=int,
        help="Pretty-print JSON with this indent"
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)"
    )

    return parser.parse_args()


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge the options file and command line overrides."""
    config = GeneratorConfig.from_file(args.config) if args.config else GeneratorConfig()

    if args.layout:
        config.track_layout = load_layout(args.layout)
    if args.seed is not None:
        config.seed = args.seed
    if args.reverse_layout:
        config.reverse_layout = True

    return config


def main() -> int:
    args = parse_args()
    setup_logging(args.log_level)

    try:
        config = build_config(args)
        catalog = SpriteCatalog.from_file(args.atlas)
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return 1
    except (ValueError, KeyError, TypeError) as e:
        # Malformed JSON, atlas frames or option values
        logger.error(f"Invalid input: {e!r}")
        return 1
    logger.info(f"Loaded {len(catalog)} sprites from {args.atlas}")

    try:
        mode = args.mode or ("layout" if config.track_layout else "curves")
        track = TrackGenerator(catalog, config).generate(mode)
    except TrackGenerationError as e:
        logger.error(f"Track generation failed: {e}")
        return 1

    exporter = TrackExporter(ExporterConfig(
        output_dir=str(args.output.parent),
        indent=args.indent,
    ))
    exporter.export_json(track, args.output.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
