"""
Track descriptor - Complete renderer-facing output of one generation call.

Contains:
- Vehicle defaults and camera/render parameters
- Lane configuration and colour palette
- Ordered segment list and zone parameterization
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Sequence, Tuple

from arcadetrack.errors import InconsistentTrackLength
from arcadetrack.track.segment import Segment


@dataclass
class VehicleDefaults:
    """Initial state and handling of the controllable vehicle."""
    position: float = 10.0
    speed: float = 0.0
    acceleration: float = 0.05
    deceleration: float = 0.04
    breaking: float = 0.3           # Braking deceleration (renderer's key name)
    turning: float = 5.0
    posx: float = 0.0               # Lateral offset from track centre
    maxSpeed: float = 20.0


@dataclass
class RenderParams:
    """Pseudo-3D camera parameters."""
    depthOfField: float = 150.0
    camera_distance: float = 30.0
    camera_height: float = 100.0
    width: int | None = 320         # Canvas size, optional
    height: int | None = 240

    def get_state(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class LaneConfig:
    """Lane layout of the road."""
    num_lanes: int = 3
    lane_width: float = 0.02        # Width of the lane separator


@dataclass
class TrackColors:
    """Named colour palette for road stripes and landscape."""
    grass1: str = "#699864"
    border1: str = "#e00"
    border2: str = "#fff"
    outborder1: str = "#496a46"
    outborder_end1: str = "#474747"
    track_segment1: str = "#777"
    lane1: str = "#fff"
    lane2: str = "#777"
    laneArrow1: str = "#00FF00"
    track_segment_end: str = "#000"
    lane_end: str = "#fff"


@dataclass(frozen=True)
class TrackDescriptor:
    """Everything the renderer needs to draw one track.

    Owned by the caller once returned; the generator keeps no reference.
    """
    vehicle: VehicleDefaults
    render: RenderParams
    lanes: LaneConfig
    colors: TrackColors
    segments: Tuple[Segment, ...]
    num_zones: int                  # Zones after layout expansion
    zone_size: int                  # Segments per zone
    number_of_segment_per_color: int = 4
    track_segment_size: int = 5
    metadata: Dict[str, object] = field(default_factory=dict, compare=False)

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    @property
    def num_obstacles(self) -> int:
        return sum(1 for s in self.segments if s.has_obstacle)

    def get_state(self) -> dict:
        """Get descriptor in the renderer's JSON schema.

        Returns:
            Dictionary with freshly copied nested values
        """
        return {
            "controllable_vehicle": asdict(self.vehicle),
            "laneWidth": self.lanes.lane_width,
            "numLanes": self.lanes.num_lanes,
            "numberOfSegmentPerColor": self.number_of_segment_per_color,
            "render": self.render.get_state(),
            "trackParam": {"numZones": self.num_zones, "zoneSize": self.zone_size},
            "trackSegmentSize": self.track_segment_size,
            "trackColors": asdict(self.colors),
            "track": [s.get_state() for s in self.segments],
        }


def assemble(
    vehicle: VehicleDefaults,
    render: RenderParams,
    lanes: LaneConfig,
    colors: TrackColors,
    segments: Sequence[Segment],
    num_zones: int,
    zone_size: int,
    number_of_segment_per_color: int = 4,
    track_segment_size: int = 5,
    metadata: Dict[str, object] | None = None,
) -> TrackDescriptor:
    """Aggregate generated segments and settings into a descriptor.

    Args:
        vehicle: Vehicle defaults
        render: Camera parameters
        lanes: Lane configuration
        colors: Colour palette
        segments: Segments in track order
        num_zones: Zone count after layout expansion
        zone_size: Segments per zone
        number_of_segment_per_color: Colour alternation period
        track_segment_size: Segment length used by the renderer
        metadata: Extra, non-rendered information (mode, seed, ...)

    Returns:
        Assembled track descriptor

    Raises:
        InconsistentTrackLength: If ``len(segments) != num_zones * zone_size``
    """
    expected = num_zones * zone_size
    if len(segments) != expected:
        raise InconsistentTrackLength(expected, len(segments))

    return TrackDescriptor(
        vehicle=vehicle,
        render=render,
        lanes=lanes,
        colors=colors,
        segments=tuple(segments),
        num_zones=num_zones,
        zone_size=zone_size,
        number_of_segment_per_color=number_of_segment_per_color,
        track_segment_size=track_segment_size,
        metadata=dict(metadata or {}),
    )
