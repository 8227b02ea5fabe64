"""
Sprite pools - Candidate sprites for landscape decoration and road obstacles.

Defines:
- SpritePoolEntry: a sprite name with its scale and allowed lateral positions
- SpriteDecoration: a resolved sprite attached to one track segment
"""

from dataclasses import dataclass, field
from typing import Any, List, Sequence

from arcadetrack.errors import InvalidLayout
from arcadetrack.sprites.catalog import SpriteHandle


@dataclass
class SpritePoolEntry:
    """One candidate sprite in the objects or obstacle pool.

    ``positions_x`` are lateral offsets relative to the track centre
    (0 = centre, |x| > 1 = landscape). An empty list means the position
    is drawn at random when the sprite is placed.
    """
    filename: str = ""
    scale: float = 1.0
    positions_x: List[float] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SpritePoolEntry":
        """Parse ``{filename, scale, positionsX}`` or a bare sprite name.

        Raises:
            InvalidLayout: If the entry has no filename
        """
        if isinstance(data, str):
            return cls(filename=data)

        filename = data.get("filename")
        if not filename:
            raise InvalidLayout(f"Sprite pool entry without filename: {data!r}")

        scale = data.get("scale")
        return cls(
            filename=filename,
            scale=1.0 if scale is None else float(scale),
            positions_x=[float(x) for x in data.get("positionsX", [])],
        )

    @property
    def has_positions(self) -> bool:
        return len(self.positions_x) > 0

    def get_state(self) -> dict:
        return {
            "filename": self.filename,
            "scale": self.scale,
            "positionsX": list(self.positions_x),
        }


def parse_pool(entries: Sequence[Any]) -> List[SpritePoolEntry]:
    """Parse a pool descriptor list, passing through parsed entries."""
    return [
        e if isinstance(e, SpritePoolEntry) else SpritePoolEntry.from_dict(e)
        for e in entries
    ]


@dataclass(frozen=True)
class SpriteDecoration:
    """Sprite placed on a segment.

    Obstacles sit on the drivable surface and are collidable; anything
    else is pure landscape decoration.
    """
    handle: SpriteHandle
    relative_position_x: float = 0.0  # Signed, negative = left side
    is_obstacle: bool = False
    scale: float = 1.0

    def get_state(self) -> dict:
        """Get decoration in the renderer's sprite schema."""
        return {
            "type": self.handle.get_state(),
            "pos": float(self.relative_position_x),
            "obstacle": 1 if self.is_obstacle else 0,
            "scale": float(self.scale),
        }
