"""
Track generator - Procedural arcade track generation.

Generates:
- Tracks following a declarative layout (with traffic signals)
- Random tracks with curves and slopes
- Straight, flat tracks

All modes share the same pipeline: plan zones, synthesize eased segments,
schedule sprites, assemble the descriptor.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List
import copy
import json
import logging

import numpy as np

from arcadetrack.errors import InvalidLayout
from arcadetrack.sprites.catalog import SpriteCatalog
from arcadetrack.track.planner import ZonePlanner
from arcadetrack.track.scheduler import SpriteScheduler
from arcadetrack.track.synthesizer import synthesize, zone_start_values
from arcadetrack.track.track import (
    LaneConfig,
    RenderParams,
    TrackColors,
    TrackDescriptor,
    VehicleDefaults,
    assemble,
)
from arcadetrack.track.zone import Zone, parse_layout

logger = logging.getLogger(__name__)


class GenerationMode(Enum):
    """Track generation strategies."""
    LAYOUT = "layout"        # Follow track_layout
    CURVES = "curves"        # Random curves and slopes
    STRAIGHT = "straight"    # Flat and straight


@dataclass
class GeneratorConfig:
    """Configuration for procedural track generation."""
    # Track length
    num_zones: int = 12             # Number of zones in random modes
    zone_size: int = 250            # Segments per zone

    # Sprites
    objects: List[Any] = field(default_factory=lambda: ["tree", "boulder"])
    obstacle: List[Any] = field(default_factory=lambda: ["boulder"])
    obstacle_per_iteration: int = 50

    # Layout mode
    track_layout: List[Any] = field(default_factory=list)
    reverse_layout: bool = False    # Expand layout entries last-to-first

    # Topology magnitudes
    max_height: float = 900.0
    max_curve: float = 900.0
    curvature_scale: float = 10.0   # Applied to declared layout curvature

    # Renderer settings
    vehicle: VehicleDefaults = field(default_factory=VehicleDefaults)
    render: RenderParams = field(default_factory=RenderParams)
    lanes: LaneConfig = field(default_factory=LaneConfig)
    colors: TrackColors = field(default_factory=TrackColors)
    number_of_segment_per_color: int = 4
    track_segment_size: int = 5

    # Random seed (None for random)
    seed: int | None = None

    # How long a generation call waits for a background catalog load
    catalog_timeout_s: float = 0.0

    def __post_init__(self):
        """Validate and normalize configuration."""
        if isinstance(self.vehicle, dict):
            self.vehicle = VehicleDefaults(**self.vehicle)
        if isinstance(self.render, dict):
            self.render = RenderParams(**self.render)
        if isinstance(self.lanes, dict):
            self.lanes = LaneConfig(**self.lanes)
        if isinstance(self.colors, dict):
            self.colors = TrackColors(**self.colors)

        if self.num_zones < 1:
            raise InvalidLayout(f"numZones must be >= 1, got {self.num_zones}")
        if self.zone_size < 1:
            raise InvalidLayout(f"zoneSize must be >= 1, got {self.zone_size}")
        if self.obstacle_per_iteration < 1:
            raise InvalidLayout(
                f"obstaclePerIteration must be >= 1, got {self.obstacle_per_iteration}"
            )

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> "GeneratorConfig":
        """Build a config from widget-style options.

        Accepts the camelCase option names of the track generator widget
        (``trackParam``, ``controllable_car``, ``obstaclePerIteration``,
        ``trackLayout``, ...) as well as this dataclass's own field names.
        Missing options keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in options.items() if k in known}

        track_param = options.get("trackParam") or {}
        if "numZones" in track_param:
            kwargs["num_zones"] = int(track_param["numZones"])
        if "zoneSize" in track_param:
            kwargs["zone_size"] = int(track_param["zoneSize"])

        vehicle = options.get("controllable_vehicle") or options.get("controllable_car")
        if vehicle:
            kwargs["vehicle"] = VehicleDefaults(**vehicle)
        if options.get("trackColors"):
            kwargs["colors"] = TrackColors(**options["trackColors"])

        lanes = {}
        if "numLanes" in options:
            lanes["num_lanes"] = int(options["numLanes"])
        if "laneWidth" in options:
            lanes["lane_width"] = float(options["laneWidth"])
        if lanes:
            kwargs["lanes"] = LaneConfig(**lanes)

        renames = {
            "obstaclePerIteration": "obstacle_per_iteration",
            "trackLayout": "track_layout",
            "reverseLayout": "reverse_layout",
            "numberOfSegmentPerColor": "number_of_segment_per_color",
            "trackSegmentSize": "track_segment_size",
        }
        for option, name in renames.items():
            if option in options:
                kwargs[name] = options[option]

        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Path | str) -> "GeneratorConfig":
        """Load widget-style options from a JSON file."""
        with open(path, encoding="utf-8") as f:
            return cls.from_dict(json.load(f))


class TrackGenerator:
    """Procedural arcade track generator.

    Produces dense segment sequences for a pseudo-3D road renderer.

    Features:
    - Layout-driven, random curves/slopes and straight-only modes
    - Half-sine eased elevation and curvature
    - Cadence-based obstacle placement with landscape decoration
    - Exactly-once traffic signal placement

    Usage:
        catalog = SpriteCatalog.from_file("spritesheet.json")
        generator = TrackGenerator(catalog)
        track = generator.generate_curves_slopes()
    """

    def __init__(self, catalog: SpriteCatalog, config: GeneratorConfig | None = None):
        """Initialize generator.

        Args:
            catalog: Sprite catalog (may still be loading)
            config: Generator configuration. Uses defaults if None.
        """
        self.catalog = catalog
        self.config = config or GeneratorConfig()

        self._rng = np.random.default_rng(self.config.seed)

    def _begin(self, rng):
        """Wait for the catalog and pick the random source (and its seed, if known) for one call."""
        self.catalog.ensure_ready(self.config.catalog_timeout_s)

        if rng is not None:
            return rng, None
        if self.config.seed is not None:
            # Every call replays the configured seed
            return np.random.default_rng(self.config.seed), self.config.seed
        return self._rng, None

    def generate(self, mode: GenerationMode | str = GenerationMode.CURVES, rng=None) -> TrackDescriptor:
        """Generate a track with the given strategy.

        Args:
            mode: Generation mode (enum or its value)
            rng: Random source for this call only

        Returns:
            Generated track descriptor
        """
        mode = GenerationMode(mode)
        if mode is GenerationMode.LAYOUT:
            return self.generate_from_layout(rng=rng)
        if mode is GenerationMode.STRAIGHT:
            return self.generate_straight(rng=rng)
        return self.generate_curves_slopes(rng=rng)

    def generate_from_layout(self, layout: List[Any] | None = None, rng=None) -> TrackDescriptor:
        """Generate a track following a declarative layout.

        Args:
            layout: Layout entries (defaults to ``config.track_layout``)
            rng: Random source for this call only

        Returns:
            Generated track descriptor

        Raises:
            InvalidLayout: If the layout is empty or malformed
            UnknownSprite: If a pool or signal sprite is not in the catalog
        """
        specs = parse_layout(self.config.track_layout if layout is None else layout)
        if not specs:
            raise InvalidLayout("Track layout is empty")

        rng, seed = self._begin(rng)
        planner = self._planner(rng)
        zones = planner.plan_from_layout(specs, reverse=self.config.reverse_layout)
        return self._build(zones, rng, GenerationMode.LAYOUT, seed)

    def generate_curves_slopes(self, rng=None) -> TrackDescriptor:
        """Generate a random track with curves and slopes."""
        rng, seed = self._begin(rng)
        zones = self._planner(rng).plan_random(self.config.num_zones)
        return self._build(zones, rng, GenerationMode.CURVES, seed)

    def generate_straight(self, rng=None) -> TrackDescriptor:
        """Generate a flat, straight track (sprites still scheduled)."""
        rng, seed = self._begin(rng)
        zones = self._planner(rng).plan_straight(self.config.num_zones)
        return self._build(zones, rng, GenerationMode.STRAIGHT, seed)

    def generate_with_seed(
        self,
        seed: int,
        mode: GenerationMode | str = GenerationMode.CURVES,
    ) -> TrackDescriptor:
        """Generate track with specific seed.

        Args:
            seed: Random seed
            mode: Generation mode

        Returns:
            Generated track
        """
        track = self.generate(mode, rng=np.random.default_rng(seed))
        track.metadata["seed"] = seed
        return track

    def _planner(self, rng) -> ZonePlanner:
        return ZonePlanner(
            rng=rng,
            max_height=self.config.max_height,
            max_curve=self.config.max_curve,
            curvature_scale=self.config.curvature_scale,
        )

    def _build(self, zones: List[Zone], rng, mode: GenerationMode, seed: int | None) -> TrackDescriptor:
        config = self.config

        scheduler = SpriteScheduler(
            self.catalog,
            objects=config.objects,
            obstacle=config.obstacle,
            obstacle_per_iteration=config.obstacle_per_iteration,
            rng=rng,
        )
        scheduler.validate(s for zone in zones for s in zone.signals)

        starts = zone_start_values(zones)
        for zone, (height, curve) in zip(zones, starts):
            logger.debug(
                f"Zone {zone.index}: {zone.profile.value}/{zone.topography.value} "
                f"from height {height:.1f} curve {curve:.1f}, "
                f"delta {zone.height_delta:+.1f}/{zone.curve_delta:+.1f}"
            )

        segments = synthesize(zones, config.zone_size)
        scheduler.decorate(segments, zones, config.zone_size)

        track = assemble(
            vehicle=copy.deepcopy(config.vehicle),
            render=copy.deepcopy(config.render),
            lanes=copy.deepcopy(config.lanes),
            colors=copy.deepcopy(config.colors),
            segments=segments,
            num_zones=len(zones),
            zone_size=config.zone_size,
            number_of_segment_per_color=config.number_of_segment_per_color,
            track_segment_size=config.track_segment_size,
            metadata={"mode": mode.value, "seed": seed},
        )

        logger.info(
            f"Generated {mode.value} track: {len(zones)} zones, "
            f"{track.num_segments} segments, {track.num_obstacles} obstacles"
        )
        return track
