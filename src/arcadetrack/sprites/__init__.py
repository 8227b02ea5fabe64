"""
Sprites module - Atlas lookup and sprite pools.

This module contains:
- SpriteCatalog: name to atlas region table
- SpriteHandle: immutable atlas rectangle
- SpritePoolEntry: candidate sprite for decoration/obstacle placement
- SpriteDecoration: sprite attached to a track segment
"""

from arcadetrack.sprites.catalog import SpriteCatalog, SpriteHandle
from arcadetrack.sprites.pool import SpriteDecoration, SpritePoolEntry, parse_pool

__all__ = [
    "SpriteCatalog",
    "SpriteHandle",
    "SpriteDecoration",
    "SpritePoolEntry",
    "parse_pool",
]
