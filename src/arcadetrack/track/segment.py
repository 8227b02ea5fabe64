"""
Track segment - The atomic record the renderer iterates.

Defines:
- Segment height and curve (absolute, accumulated along the track)
- Optional sprite decoration or obstacle
"""

from dataclasses import dataclass

from arcadetrack.sprites.pool import SpriteDecoration


@dataclass
class Segment:
    """A single fine-grained slice of the road.

    Segments are produced in track order and never reordered. Height and
    curve are absolute values, not deltas from the previous segment.
    """
    height: float = 0.0
    curve: float = 0.0
    sprite: SpriteDecoration | None = None

    @property
    def has_obstacle(self) -> bool:
        """True if the segment carries a collidable sprite."""
        return self.sprite is not None and self.sprite.is_obstacle

    def get_state(self) -> dict:
        """Get segment state for serialization.

        Returns:
            Dictionary in the renderer's segment schema (``sprite`` is
            ``False`` when empty)
        """
        return {
            "height": float(self.height),
            "curve": float(self.curve),
            "sprite": self.sprite.get_state() if self.sprite is not None else False,
        }
