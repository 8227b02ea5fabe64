"""
Sprite catalog - Name to atlas region lookup.

Provides:
- SpriteHandle: immutable rectangle inside the sprite atlas image
- SpriteCatalog: table of handles keyed by sprite name, loaded from the
  atlas descriptor either synchronously or on a background thread
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List
import json
import logging
import threading

from arcadetrack.errors import CatalogNotReady, UnknownSprite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpriteHandle:
    """Rectangular region of the sprite atlas (offset + size in pixels)."""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    @classmethod
    def from_frame(cls, frame: Dict[str, Any]) -> "SpriteHandle":
        return cls(frame["x"], frame["y"], frame["w"], frame["h"])

    def get_state(self) -> dict:
        """Get handle as the atlas ``frame`` dictionary."""
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


def sprite_key(filename: str) -> str:
    """Strip the file extension from an atlas filename.

    ``"tree.png"`` and ``"tree.old.png"`` both map to ``"tree"``.
    """
    return filename.split(".")[0]


class SpriteCatalog:
    """Read-only table mapping sprite names to atlas handles.

    The catalog is the only piece of state shared between generation
    calls. It is safe to share across threads once loaded.

    Usage:
        catalog = SpriteCatalog.from_file("spritesheet.json")
        handle = catalog.resolve("tree")

        # Or load without blocking and wait later
        catalog = SpriteCatalog.load_in_background("spritesheet.json")
        catalog.ensure_ready(timeout=5.0)
    """

    def __init__(self):
        self._handles: Dict[str, SpriteHandle] = {}
        self._ready = threading.Event()
        self._load_error: BaseException | None = None
        self._loader: threading.Thread | None = None

    @classmethod
    def from_atlas(cls, atlas: Dict[str, Any]) -> "SpriteCatalog":
        """Build a ready catalog from a parsed atlas descriptor.

        Args:
            atlas: ``{"frames": [{"filename": ..., "frame": {x, y, w, h}}]}``

        Returns:
            Loaded catalog
        """
        catalog = cls()
        catalog._populate(atlas)
        return catalog

    @classmethod
    def from_file(cls, path: Path | str) -> "SpriteCatalog":
        """Build a ready catalog from a JSON atlas file."""
        return cls.from_atlas(_read_atlas(Path(path)))

    @classmethod
    def load_in_background(cls, path: Path | str) -> "SpriteCatalog":
        """Start loading an atlas file on a worker thread.

        The returned catalog refuses lookups until the worker finishes.

        Args:
            path: JSON atlas file

        Returns:
            Catalog that becomes ready when loading completes
        """
        catalog = cls()
        path = Path(path)

        def _load():
            try:
                catalog._populate(_read_atlas(path))
            except Exception as e:
                logger.error(f"Failed to load sprite atlas {path}: {e}")
                catalog._load_error = e
                catalog._ready.set()

        catalog._loader = threading.Thread(
            target=_load, name=f"atlas-loader-{path.name}", daemon=True
        )
        catalog._loader.start()
        return catalog

    def _populate(self, atlas: Dict[str, Any]) -> None:
        handles = {}
        for entry in atlas.get("frames", []):
            handles[sprite_key(entry["filename"])] = SpriteHandle.from_frame(entry["frame"])

        self._handles = handles
        logger.debug(f"Sprite catalog loaded with {len(handles)} sprites")
        self._ready.set()

    @property
    def is_ready(self) -> bool:
        """True once loading finished successfully."""
        return self._ready.is_set() and self._load_error is None

    @property
    def names(self) -> List[str]:
        """Sorted sprite names."""
        return sorted(self._handles)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until loading finishes (successfully or not).

        Returns:
            True if loading finished within the timeout
        """
        return self._ready.wait(timeout)

    def ensure_ready(self, timeout: float | None = 0.0) -> None:
        """Wait up to ``timeout`` seconds for the catalog.

        Raises:
            CatalogNotReady: If loading is still running or failed
        """
        if not self.wait(timeout):
            raise CatalogNotReady("Sprite catalog is still loading")
        if self._load_error is not None:
            raise CatalogNotReady("Sprite catalog failed to load") from self._load_error

    def resolve(self, name: str) -> SpriteHandle:
        """Look up a sprite handle by name.

        Args:
            name: Sprite name, with or without file extension

        Returns:
            Atlas handle for the sprite

        Raises:
            CatalogNotReady: If called before loading completed
            UnknownSprite: If the name is absent
        """
        if not self.is_ready:
            raise CatalogNotReady(f"Cannot resolve {name!r}: sprite catalog not loaded")

        try:
            return self._handles[sprite_key(name)]
        except KeyError:
            raise UnknownSprite(name) from None

    def resolve_all(self, names: Iterable[str]) -> Dict[str, SpriteHandle]:
        """Resolve several names at once, failing on the first unknown one."""
        return {name: self.resolve(name) for name in names}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and sprite_key(name) in self._handles

    def __len__(self) -> int:
        return len(self._handles)


def _read_atlas(path: Path) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)
