#!/usr/bin/env python3
"""
Track Generation Example

This example demonstrates how to:
1. Generate tracks in each generation mode
2. Use seeds for reproducible tracks
3. Follow a layout file with traffic signals
4. Inspect segment heights, curves and sprites

Run with: python generate_tracks.py
"""

from pathlib import Path

import numpy as np

from arcadetrack.export import ExporterConfig, TrackExporter
from arcadetrack.sprites import SpriteCatalog
from arcadetrack.track import GeneratorConfig, TrackGenerator, load_layout

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def generate_default_track(catalog):
    """Generate a random track with default settings."""
    print("=" * 60)
    print("1. Default Track Generation (curves and slopes)")
    print("=" * 60)

    generator = TrackGenerator(catalog)
    track = generator.generate_curves_slopes()

    print(f"\nZones: {track.num_zones} x {track.zone_size} segments")
    print(f"Segments: {track.num_segments}")
    print(f"Obstacles: {track.num_obstacles}")

    return track


def generate_seeded_tracks(catalog):
    """Generate reproducible tracks using seeds."""
    print("\n" + "=" * 60)
    print("2. Seeded Track Generation (Reproducible)")
    print("=" * 60)

    generator = TrackGenerator(catalog)
    exporter = TrackExporter()

    # Same seed twice
    track1 = generator.generate_with_seed(12345)
    track2 = generator.generate_with_seed(12345)

    print(f"\nTrack A segments: {track1.num_segments}")
    print(f"Track B segments: {track2.num_segments}")
    print(f"Identical JSON: {exporter.to_json(track1) == exporter.to_json(track2)}")

    # Different seed
    track3 = generator.generate_with_seed(99999)
    print(f"Different seed identical: {exporter.to_json(track1) == exporter.to_json(track3)}")


def generate_straight_track(catalog):
    """Generate a flat, straight test track."""
    print("\n" + "=" * 60)
    print("3. Straight Track")
    print("=" * 60)

    config = GeneratorConfig(num_zones=4, zone_size=100, obstacle_per_iteration=25)
    track = TrackGenerator(catalog, config).generate_straight()

    flat = all(s.height == 0.0 and s.curve == 0.0 for s in track.segments)
    print(f"\nSegments: {track.num_segments}")
    print(f"All flat and straight: {flat}")
    print(f"Obstacles: {track.num_obstacles}")


def generate_layout_track(catalog):
    """Generate a track from the example layout and options files."""
    print("\n" + "=" * 60)
    print("4. Layout Track with Traffic Signals")
    print("=" * 60)

    config = GeneratorConfig.from_file(DATA_DIR / "generator.json")
    config.track_layout = load_layout(DATA_DIR / "layout.json")
    config.seed = 7

    track = TrackGenerator(catalog, config).generate_from_layout()

    signals = [
        (i, s.sprite) for i, s in enumerate(track.segments)
        if s.sprite is not None and s.sprite.handle in {
            catalog.resolve(name) for name in ("traffic_light_green", "traffic_light_red")
        }
    ]

    print(f"\nZones after expansion: {track.num_zones}")
    print(f"Segments: {track.num_segments}")
    print(f"Traffic lights placed: {len(signals)}")
    for index, sprite in signals:
        print(f"  segment {index}: pos {sprite.relative_position_x:+.2f}")

    return track


def inspect_track_segments(track):
    """Detailed inspection of a track's profile."""
    print("\n" + "=" * 60)
    print("5. Track Profile Analysis")
    print("=" * 60)

    heights = np.array([s.height for s in track.segments])
    curves = np.array([s.curve for s in track.segments])

    print(f"\nHeight range: {heights.min():.0f} .. {heights.max():.0f}")
    print(f"Curve range: {curves.min():.0f} .. {curves.max():.0f}")
    print(f"Largest step between segments: {np.abs(np.diff(heights)).max():.1f}")

    decorated = sum(1 for s in track.segments if s.sprite is not None)
    print(f"Decorated segments: {decorated}")
    print(f"Obstacles: {track.num_obstacles}")


def main():
    catalog = SpriteCatalog.load_in_background(DATA_DIR / "spritesheet.json")
    catalog.ensure_ready(timeout=5.0)

    default_track = generate_default_track(catalog)
    generate_seeded_tracks(catalog)
    generate_straight_track(catalog)
    layout_track = generate_layout_track(catalog)

    inspect_track_segments(default_track)

    exporter = TrackExporter(ExporterConfig(output_dir="./tracks"))
    path = exporter.export_json(layout_track, "layout_track.json")
    print(f"\nLayout track written to {path}")

    print("\n" + "=" * 60)
    print("Track generation examples complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
