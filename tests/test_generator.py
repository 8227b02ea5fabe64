"""Tests for the track generator."""

from pathlib import Path

import pytest
import numpy as np

from arcadetrack.errors import CatalogNotReady, InvalidLayout, UnknownSprite
from arcadetrack.export import TrackExporter
from arcadetrack.sprites import SpriteCatalog
from arcadetrack.track import GenerationMode, GeneratorConfig, TrackGenerator, load_layout
from arcadetrack.track.track import RenderParams, VehicleDefaults

DATA_DIR = Path(__file__).resolve().parent.parent / "examples" / "data"

LAYOUT = [
    {
        "topography": {"name": "left", "curvature": -90},
        "profile": "up",
        "numZones": 2,
        "trafficSignals": [
            {"filename": "traffic_light_green", "zone": 1, "scale": 4,
             "posX": -0.5, "zoneDistance": 5},
        ],
    },
    {"topography": {"name": "straight", "curvature": 0}, "profile": "down", "numZones": 1},
]


@pytest.fixture
def config():
    return GeneratorConfig(num_zones=3, zone_size=20, obstacle_per_iteration=5)


class TestGeneratorConfig:
    """Test generator configuration."""

    def test_defaults(self):
        """Test default values."""
        config = GeneratorConfig()

        assert config.num_zones == 12
        assert config.zone_size == 250
        assert config.obstacle_per_iteration == 50
        assert config.max_height == 900.0
        assert config.seed is None

    def test_invalid_values(self):
        """Test non-positive sizes are rejected."""
        with pytest.raises(InvalidLayout):
            GeneratorConfig(zone_size=0)
        with pytest.raises(InvalidLayout):
            GeneratorConfig(num_zones=0)
        with pytest.raises(InvalidLayout):
            GeneratorConfig(obstacle_per_iteration=0)

    def test_from_dict(self):
        """Test widget-style option names."""
        config = GeneratorConfig.from_dict({
            "trackParam": {"numZones": 5, "zoneSize": 30},
            "obstaclePerIteration": 10,
            "controllable_car": {"maxSpeed": 15},
            "numLanes": 4,
            "render": {"camera_height": 320},
            "trackSegmentSize": 7,
            "objects": ["tree"],
        })

        assert config.num_zones == 5
        assert config.zone_size == 30
        assert config.obstacle_per_iteration == 10
        assert config.vehicle.maxSpeed == 15
        assert config.lanes.num_lanes == 4
        assert isinstance(config.render, RenderParams)
        assert config.render.camera_height == 320
        assert config.track_segment_size == 7
        assert config.objects == ["tree"]

    def test_from_file(self):
        """Test the example options file loads."""
        config = GeneratorConfig.from_file(DATA_DIR / "generator.json")

        assert config.zone_size == 250
        assert config.obstacle_per_iteration == 20
        assert len(config.obstacle) == 3


class TestTrackGenerator:
    """Test track generation."""

    @pytest.mark.parametrize("mode", ["curves", "straight"])
    def test_segment_count(self, catalog, config, mode):
        """Test random modes produce num_zones * zone_size segments."""
        track = TrackGenerator(catalog, config).generate(mode)

        assert track.num_zones == 3
        assert track.num_segments == 60
        assert track.get_state()["trackParam"] == {"numZones": 3, "zoneSize": 20}

    def test_layout_mode(self, catalog, config):
        """Test layout mode expands zones and places the signal."""
        config.track_layout = LAYOUT
        track = TrackGenerator(catalog, config).generate(GenerationMode.LAYOUT)

        assert track.num_zones == 3
        assert track.num_segments == 60
        assert track.metadata["mode"] == "layout"

        light = catalog.resolve("traffic_light_green")
        placed = [i for i, s in enumerate(track.segments)
                  if s.sprite is not None and s.sprite.handle == light]
        assert placed == [5]

    def test_layout_argument(self, catalog, config):
        """Test an explicit layout overrides the configured one."""
        track = TrackGenerator(catalog, config).generate_from_layout(LAYOUT[1:])
        assert track.num_zones == 1

    def test_empty_layout(self, catalog, config):
        """Test layout mode needs at least one entry."""
        with pytest.raises(InvalidLayout):
            TrackGenerator(catalog, config).generate_from_layout()

    def test_straight_is_flat(self, catalog, config):
        """Test straight mode keeps height and curve at zero."""
        track = TrackGenerator(catalog, config).generate_straight()

        assert all(s.height == 0.0 and s.curve == 0.0 for s in track.segments)
        assert track.num_obstacles == 12

    def test_first_zone_flat(self, catalog, config):
        """Test random tracks start flat and straight."""
        track = TrackGenerator(catalog, config).generate_with_seed(11)

        first = track.segments[:config.zone_size]
        assert all(s.height == 0.0 and s.curve == 0.0 for s in first)

    def test_seeded_config_reproducible(self, catalog, config):
        """Test a configured seed replays on every call."""
        config.seed = 42
        exporter = TrackExporter()
        generator = TrackGenerator(catalog, config)

        a = exporter.to_json(generator.generate_curves_slopes())
        b = exporter.to_json(generator.generate_curves_slopes())
        c = exporter.to_json(TrackGenerator(catalog, config).generate_curves_slopes())

        assert a == b == c

    def test_generate_with_seed(self, catalog, config):
        """Test explicit seeds are reproducible and independent."""
        exporter = TrackExporter()
        generator = TrackGenerator(catalog, config)

        a = exporter.to_json(generator.generate_with_seed(5))
        b = exporter.to_json(generator.generate_with_seed(5))
        c = exporter.to_json(generator.generate_with_seed(6))

        assert a == b
        assert a != c

    def test_seed_metadata(self, catalog, config):
        """Test metadata records the seed the track was built from."""
        generator = TrackGenerator(catalog, config)

        assert generator.generate_with_seed(5).metadata["seed"] == 5
        assert generator.generate_straight().metadata["seed"] is None
        assert generator.generate_straight(rng=np.random.default_rng(5)).metadata["seed"] is None

        config.seed = 42
        assert TrackGenerator(catalog, config).generate_straight().metadata["seed"] == 42

    def test_explicit_rng(self, catalog, config):
        """Test a per-call random source is honoured."""
        generator = TrackGenerator(catalog, config)

        a = generator.generate_straight(rng=np.random.default_rng(1))
        b = generator.generate_straight(rng=np.random.default_rng(1))
        assert a == b

    def test_unknown_sprite(self, catalog, config):
        """Test unknown pool sprites abort generation."""
        config.objects = ["tree", "dragon"]

        with pytest.raises(UnknownSprite):
            TrackGenerator(catalog, config).generate_straight()

    def test_unknown_signal_sprite(self, catalog, config):
        """Test unknown signal sprites abort layout generation."""
        layout = [{
            "numZones": 1,
            "trafficSignals": [{"filename": "stop_sign", "zone": 1, "zoneDistance": 2}],
        }]

        with pytest.raises(UnknownSprite):
            TrackGenerator(catalog, config).generate_from_layout(layout)

    def test_catalog_not_ready(self, config):
        """Test generation refuses to run before the catalog is loaded."""
        with pytest.raises(CatalogNotReady):
            TrackGenerator(SpriteCatalog(), config).generate()

    def test_descriptor_owns_settings(self, catalog, config):
        """Test later config changes do not leak into returned tracks."""
        config.vehicle = VehicleDefaults(maxSpeed=12)
        generator = TrackGenerator(catalog, config)
        track = generator.generate_straight()

        config.vehicle.maxSpeed = 99
        assert track.vehicle.maxSpeed == 12

    def test_example_data(self):
        """Test the bundled example files generate a full track."""
        catalog = SpriteCatalog.load_in_background(DATA_DIR / "spritesheet.json")
        config = GeneratorConfig.from_file(DATA_DIR / "generator.json")
        config.track_layout = load_layout(DATA_DIR / "layout.json")

        generator = TrackGenerator(catalog, config)
        generator.config.catalog_timeout_s = 5.0
        track = generator.generate_from_layout()

        assert track.num_zones == 8
        assert track.num_segments == 8 * 250

        red = catalog.resolve("traffic_light_red")
        placed = [i for i, s in enumerate(track.segments)
                  if s.sprite is not None and s.sprite.handle == red]
        assert placed == [3 * 250 + 100]
