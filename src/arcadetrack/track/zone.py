"""
Zones - Macro units of track topology.

Defines:
- Profile / Topography classifications
- TrafficSignal: explicitly scheduled roadside sign
- ZoneSpec: one entry of a declarative track layout
- Zone: one planned unit with its elevation and curvature deltas
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Sequence
import json

from arcadetrack.errors import InvalidLayout


class Profile(Enum):
    """Vertical profile of a zone."""
    FLAT = "flat"
    UP = "up"
    DOWN = "down"

    @property
    def sign(self) -> int:
        return {Profile.FLAT: 0, Profile.UP: 1, Profile.DOWN: -1}[self]


class Topography(Enum):
    """Horizontal shape of a zone."""
    STRAIGHT = "straight"
    LEFT = "left"      # Negative curvature
    RIGHT = "right"    # Positive curvature

    @property
    def sign(self) -> int:
        return {Topography.STRAIGHT: 0, Topography.LEFT: -1, Topography.RIGHT: 1}[self]


def _parse_enum(enum_cls, value: Any, what: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise InvalidLayout(f"Unknown {what} {value!r} (expected one of: {choices})") from None


@dataclass
class TrafficSignal:
    """Roadside sign placed at an exact spot of a layout zone."""
    filename: str = ""
    scale: float = 1.0
    zone: int = 1              # 1-based repeat index within the ZoneSpec
    pos_x: float = 0.0         # Lateral offset from track centre
    zone_distance: int = 0     # Segment offset inside the zone

    @classmethod
    def from_dict(cls, data: dict) -> "TrafficSignal":
        try:
            return cls(
                filename=data["filename"],
                scale=float(data.get("scale", 1.0)),
                zone=int(data["zone"]),
                pos_x=float(data.get("posX", 0.0)),
                zone_distance=int(data["zoneDistance"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidLayout(f"Malformed traffic signal {data!r}: {e}") from e

    def get_state(self) -> dict:
        return {
            "filename": self.filename,
            "scale": self.scale,
            "zone": self.zone,
            "posX": self.pos_x,
            "zoneDistance": self.zone_distance,
        }


@dataclass
class ZoneSpec:
    """One group of identical zones in a track layout.

    A spec with ``num_zones=3`` expands into three consecutive zones
    sharing the same profile and topography. Heights and curvatures are
    still drawn independently for each of them.
    """
    topography: Topography = Topography.STRAIGHT
    curvature: int = 0
    profile: Profile = Profile.FLAT
    num_zones: int = 1
    traffic_signals: List[TrafficSignal] = field(default_factory=list)

    def __post_init__(self):
        self.topography = _parse_enum(Topography, self.topography, "topography")
        self.profile = _parse_enum(Profile, self.profile, "profile")

    @classmethod
    def from_dict(cls, data: dict) -> "ZoneSpec":
        """Parse one layout entry.

        Args:
            data: ``{topography: {name, curvature}, profile, numZones, trafficSignals}``

        Returns:
            Parsed zone spec (not yet validated, see ``validate``)
        """
        if not isinstance(data, dict):
            raise InvalidLayout(f"Layout entry must be an object, got {data!r}")

        topography = data.get("topography") or {}
        if not isinstance(topography, dict):
            raise InvalidLayout(
                f"Layout topography must be an object with name and curvature, got {topography!r}"
            )
        try:
            curvature = int(topography.get("curvature", 0))
            num_zones = int(data.get("numZones", 1))
        except (TypeError, ValueError) as e:
            raise InvalidLayout(f"Malformed layout entry {data!r}: {e}") from e

        return cls(
            topography=topography.get("name", "straight"),
            curvature=curvature,
            profile=data.get("profile", "flat"),
            num_zones=num_zones,
            traffic_signals=[
                TrafficSignal.from_dict(s) for s in data.get("trafficSignals") or []
            ],
        )

    def validate(self) -> None:
        """Check repeat count and signal bounds.

        Raises:
            InvalidLayout: If ``num_zones < 1`` or a signal targets a zone
                outside ``[1, num_zones]``
        """
        if self.num_zones < 1:
            raise InvalidLayout(f"numZones must be >= 1, got {self.num_zones}")

        for signal in self.traffic_signals:
            if not 1 <= signal.zone <= self.num_zones:
                raise InvalidLayout(
                    f"Traffic signal {signal.filename!r} targets zone {signal.zone}, "
                    f"layout entry only has {self.num_zones}"
                )

    def get_state(self) -> dict:
        return {
            "topography": {"name": self.topography.value, "curvature": self.curvature},
            "profile": self.profile.value,
            "numZones": self.num_zones,
            "trafficSignals": [s.get_state() for s in self.traffic_signals],
        }


@dataclass
class Zone:
    """One planned unit of track.

    ``height_delta`` and ``curve_delta`` are the amounts the accumulated
    height and curve change by across the zone.
    """
    index: int = 0
    profile: Profile = Profile.FLAT
    topography: Topography = Topography.STRAIGHT
    height_delta: float = 0.0
    curve_delta: float = 0.0
    signals: List[TrafficSignal] = field(default_factory=list)

    def get_state(self) -> dict:
        return {
            "index": self.index,
            "profile": self.profile.value,
            "topography": self.topography.value,
            "height_delta": self.height_delta,
            "curve_delta": self.curve_delta,
            "signals": [s.get_state() for s in self.signals],
        }


def parse_layout(entries: Sequence[Any]) -> List[ZoneSpec]:
    """Parse a layout descriptor list, passing through parsed specs."""
    return [e if isinstance(e, ZoneSpec) else ZoneSpec.from_dict(e) for e in entries]


def load_layout(path: Path | str) -> List[ZoneSpec]:
    """Load a layout descriptor from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise InvalidLayout(f"Layout file {path} must contain a list of zones")
    return parse_layout(data)
