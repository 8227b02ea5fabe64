"""
Sprite scheduler - Decides which sprite, if any, each segment carries.

Placement policy:
- Every ``obstacle_per_iteration`` segments of a zone an obstacle is
  placed on the road, drawn from the obstacle pool
- Remaining segments get a landscape decoration from the objects pool
- Layout traffic signals override both at their exact zone offset and are
  placed once per generation call

Pools are sampled independently every time, so the same position can come
up in consecutive placements.
"""

from typing import Dict, Iterable, List, Sequence
import logging

from arcadetrack.errors import InvalidLayout
from arcadetrack.sprites.catalog import SpriteCatalog, SpriteHandle
from arcadetrack.sprites.pool import SpriteDecoration, SpritePoolEntry, parse_pool
from arcadetrack.track.segment import Segment
from arcadetrack.track.zone import TrafficSignal, Zone

logger = logging.getLogger(__name__)


class SpriteScheduler:
    """Attaches decorations and obstacles to synthesized segments.

    Sprite names are resolved against the catalog up front by
    ``validate``; an unknown name aborts the whole generation call.

    Usage:
        scheduler = SpriteScheduler(catalog, objects, obstacle, 50, rng)
        scheduler.validate(signals)
        scheduler.decorate(segments, zones, zone_size)
    """

    def __init__(
        self,
        catalog: SpriteCatalog,
        objects: Sequence = (),
        obstacle: Sequence = (),
        obstacle_per_iteration: int = 50,
        rng=None,
    ):
        """Initialize scheduler.

        Args:
            catalog: Loaded sprite catalog
            objects: Decoration pool (entries or raw descriptors)
            obstacle: Obstacle pool (entries or raw descriptors)
            obstacle_per_iteration: Obstacle cadence within a zone
            rng: Random source with a ``random()`` method
        """
        if obstacle_per_iteration < 1:
            raise InvalidLayout(
                f"obstaclePerIteration must be >= 1, got {obstacle_per_iteration}"
            )

        self.catalog = catalog
        self.objects: List[SpritePoolEntry] = parse_pool(objects)
        self.obstacle: List[SpritePoolEntry] = parse_pool(obstacle)
        self.obstacle_per_iteration = obstacle_per_iteration
        self.rng = rng

        self._handles: Dict[str, SpriteHandle] = {}

    def validate(self, signals: Iterable[TrafficSignal] = ()) -> None:
        """Resolve every pool and signal sprite name.

        Raises:
            CatalogNotReady: If the catalog is not loaded
            UnknownSprite: If any name is absent from the catalog
        """
        names = [e.filename for e in self.objects + self.obstacle]
        names.extend(s.filename for s in signals)
        self._handles.update(self.catalog.resolve_all(names))

    def _handle(self, name: str) -> SpriteHandle:
        handle = self._handles.get(name)
        if handle is None:
            handle = self._handles[name] = self.catalog.resolve(name)
        return handle

    def _uniform(self) -> float:
        return float(self.rng.random())

    def _choice(self, items: Sequence):
        return items[min(int(self._uniform() * len(items)), len(items) - 1)]

    def _obstacle_position(self, entry: SpritePoolEntry) -> float:
        if entry.has_positions:
            return self._choice(entry.positions_x)
        return self._uniform() - 0.5

    def _landscape_position(self, entry: SpritePoolEntry) -> float:
        if entry.has_positions:
            return self._choice(entry.positions_x)

        # No declared positions: pick a side, then push outward past the border
        if self._uniform() < 0.5:
            position = -0.56 * self._uniform() - 0.56
        else:
            position = self._uniform() + 0.90

        if self._uniform() < 0.5:
            return position
        return 3 * position

    def pick(self, i: int) -> SpriteDecoration | None:
        """Cadence policy for zone-relative segment index ``i``.

        Returns:
            Decoration for the segment, or None when no pool can supply one
        """
        if i % self.obstacle_per_iteration == 0 and self.obstacle:
            entry = self._choice(self.obstacle)
            return SpriteDecoration(
                handle=self._handle(entry.filename),
                relative_position_x=self._obstacle_position(entry),
                is_obstacle=True,
                scale=entry.scale,
            )

        if not self.objects:
            return None
        entry = self._choice(self.objects)
        return SpriteDecoration(
            handle=self._handle(entry.filename),
            relative_position_x=self._landscape_position(entry),
            is_obstacle=False,
            scale=entry.scale,
        )

    def signal_decoration(self, signal: TrafficSignal) -> SpriteDecoration:
        """Decoration for a traffic signal (never an obstacle)."""
        return SpriteDecoration(
            handle=self._handle(signal.filename),
            relative_position_x=signal.pos_x,
            is_obstacle=False,
            scale=signal.scale,
        )

    def decorate(
        self,
        segments: List[Segment],
        zones: Sequence[Zone],
        zone_size: int,
    ) -> List[Segment]:
        """Attach sprites to segments in place.

        Args:
            segments: Synthesized segments, ``len(zones) * zone_size`` long
            zones: Zones the segments were synthesized from
            zone_size: Segments per zone

        Returns:
            The same segment list
        """
        # Tracks signals already placed during this call
        drawn = set()

        for n, zone in enumerate(zones):
            offset = n * zone_size
            pending = {}
            for signal in zone.signals:
                if 0 <= signal.zone_distance < zone_size:
                    pending.setdefault(signal.zone_distance, []).append(signal)
                else:
                    logger.debug(
                        f"Signal {signal.filename!r} at distance {signal.zone_distance} "
                        f"is outside zone {n}; skipped"
                    )

            for i in range(zone_size):
                segment = segments[offset + i]
                signal = next(
                    (s for s in pending.get(i, ()) if id(s) not in drawn), None
                )

                if signal is not None:
                    drawn.add(id(signal))
                    segment.sprite = self.signal_decoration(signal)
                else:
                    segment.sprite = self.pick(i)

        return segments
