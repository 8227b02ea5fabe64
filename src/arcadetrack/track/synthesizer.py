"""
Segment synthesizer - Expands zones into fine-grained road segments.

Each zone is eased in with a half-sine ramp so the accumulated height and
curve change smoothly instead of stepping at zone boundaries.
"""

from typing import List, Sequence

import numpy as np

from arcadetrack.errors import InvalidLayout
from arcadetrack.track.segment import Segment
from arcadetrack.track.zone import Zone


def easing_factors(zone_size: int) -> np.ndarray:
    """Half-sine easing factors for one zone.

    ``factor[i] = (1 + sin(i / zone_size * pi - pi / 2)) / 2``, starting at
    exactly 0 for ``i = 0`` and approaching 1 at the end of the zone.

    Args:
        zone_size: Segments per zone

    Returns:
        Array of ``zone_size`` factors
    """
    i = np.arange(zone_size, dtype=float)
    return (1.0 + np.sin(i / zone_size * np.pi - np.pi / 2)) / 2.0


def synthesize(zones: Sequence[Zone], zone_size: int) -> List[Segment]:
    """Expand zones into segments with eased height and curve.

    The accumulators advance by the full zone delta once per zone, so the
    first segment of every zone starts exactly where the previous zone's
    target left off.

    Args:
        zones: Planned zones in track order
        zone_size: Segments per zone

    Returns:
        ``len(zones) * zone_size`` segments without sprites
    """
    if zone_size < 1:
        raise InvalidLayout(f"zoneSize must be >= 1, got {zone_size}")

    factors = easing_factors(zone_size)
    segments = []

    height = 0.0
    curve = 0.0
    for zone in zones:
        heights = height + zone.height_delta * factors
        curves = curve + zone.curve_delta * factors

        segments.extend(
            Segment(height=float(h), curve=float(c)) for h, c in zip(heights, curves)
        )

        height += zone.height_delta
        curve += zone.curve_delta

    return segments


def zone_start_values(zones: Sequence[Zone]) -> np.ndarray:
    """Accumulated (height, curve) at the start of each zone.

    Returns:
        Array of shape ``(len(zones) + 1, 2)``; the last row is the
        accumulation after every zone is folded in
    """
    deltas = np.array([[z.height_delta, z.curve_delta] for z in zones], dtype=float)
    deltas = deltas.reshape(-1, 2)
    return np.vstack([np.zeros((1, 2)), np.cumsum(deltas, axis=0)])
