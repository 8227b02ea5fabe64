"""
Zone planner - Decides elevation and curvature targets zone by zone.

Three strategies:
- Layout driven: expand a declarative list of ZoneSpecs
- Random: two independent three-state machines (slope, curve)
- Straight: every zone flat and straight
"""

from typing import List, Sequence
import logging

import numpy as np

from arcadetrack.errors import InvalidLayout
from arcadetrack.track.zone import Profile, Topography, Zone, ZoneSpec, parse_layout

logger = logging.getLogger(__name__)

# Probability of leaving (or staying away from) the neutral state at a zone boundary
TRANSITION_PROBABILITY = 0.8

# Next state by current state, indexed by transition column:
# column 0 = back to neutral, columns 1 and 2 = the two non-neutral picks.
SLOPE_TRANSITIONS = {
    Profile.FLAT: (Profile.FLAT, Profile.UP, Profile.DOWN),
    Profile.UP: (Profile.FLAT, Profile.UP, Profile.UP),
    Profile.DOWN: (Profile.FLAT, Profile.DOWN, Profile.DOWN),
}

CURVE_TRANSITIONS = {
    Topography.STRAIGHT: (Topography.STRAIGHT, Topography.LEFT, Topography.RIGHT),
    Topography.LEFT: (Topography.STRAIGHT, Topography.LEFT, Topography.LEFT),
    Topography.RIGHT: (Topography.STRAIGHT, Topography.RIGHT, Topography.RIGHT),
}


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


class ZonePlanner:
    """Plans the zone sequence of a track.

    The random source only needs a ``random()`` method returning a float
    in [0, 1), so a ``numpy.random.Generator`` or a scripted stub both work.

    Usage:
        planner = ZonePlanner(rng=np.random.default_rng(7))
        zones = planner.plan_random(12)
    """

    def __init__(
        self,
        rng=None,
        max_height: float = 900.0,
        max_curve: float = 900.0,
        curvature_scale: float = 10.0,
    ):
        """Initialize planner.

        Args:
            rng: Random source (defaults to an unseeded numpy Generator)
            max_height: Largest elevation change of an up/down zone
            max_curve: Largest curvature change of a random left/right zone
            curvature_scale: Multiplier applied to declared layout curvature
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_height = max_height
        self.max_curve = max_curve
        self.curvature_scale = curvature_scale

    def _uniform(self) -> float:
        return float(self.rng.random())

    def _height_for(self, profile: Profile) -> float:
        if profile is Profile.FLAT:
            return 0.0
        return profile.sign * self.max_height * self._uniform()

    def plan_from_layout(
        self,
        layout: Sequence,
        reverse: bool = False,
    ) -> List[Zone]:
        """Expand a layout into individual zones.

        Args:
            layout: ZoneSpecs or raw layout dictionaries
            reverse: Expand entries last-to-first

        Returns:
            Planned zones in track order

        Raises:
            InvalidLayout: If any entry fails validation
        """
        specs = parse_layout(layout)
        for spec in specs:
            spec.validate()

        if reverse:
            specs = list(reversed(specs))

        zones = []
        for spec in specs:
            for repeat in range(1, spec.num_zones + 1):
                height = self._height_for(spec.profile)

                curve = 0.0
                if spec.topography is not Topography.STRAIGHT:
                    curve = (
                        spec.topography.sign
                        * abs(spec.curvature)
                        * self.curvature_scale
                        * self._uniform()
                    )

                zones.append(Zone(
                    index=len(zones),
                    profile=spec.profile,
                    topography=spec.topography,
                    height_delta=height,
                    curve_delta=curve,
                    signals=[s for s in spec.traffic_signals if s.zone == repeat],
                ))

        logger.debug(f"Planned {len(zones)} zones from {len(specs)} layout entries")
        return zones

    def plan_random(self, num_zones: int) -> List[Zone]:
        """Plan zones with the slope and curve state machines.

        Both machines start neutral, so the first zone is always flat and
        straight. After each zone both machines step independently.

        Args:
            num_zones: Number of zones to plan

        Returns:
            Planned zones in track order
        """
        _check_num_zones(num_zones)

        slope = Profile.FLAT
        curve_state = Topography.STRAIGHT
        zones = []

        for index in range(num_zones):
            height = self._height_for(slope)

            curve = 0.0
            if curve_state is not Topography.STRAIGHT:
                curve = curve_state.sign * self.max_curve * self._uniform()

            zones.append(Zone(
                index=index,
                profile=slope,
                topography=curve_state,
                height_delta=height,
                curve_delta=curve,
            ))

            slope = SLOPE_TRANSITIONS[slope][self._transition_column()]
            curve_state = CURVE_TRANSITIONS[curve_state][self._transition_column()]

        return zones

    def _transition_column(self) -> int:
        if self._uniform() < TRANSITION_PROBABILITY:
            return 1 + _round_half_up(self._uniform())
        return 0

    def plan_straight(self, num_zones: int) -> List[Zone]:
        """Plan flat, straight zones."""
        _check_num_zones(num_zones)
        return [Zone(index=i) for i in range(num_zones)]


def _check_num_zones(num_zones: int) -> None:
    if num_zones < 1:
        raise InvalidLayout(f"numZones must be >= 1, got {num_zones}")
