"""
arcadetrack - Procedural track generation for pseudo-3D arcade driving simulators.

This package provides:
- A sprite catalog resolving atlas sprite names to image regions
- Layout-driven, randomized (curves and slopes) and straight track generation
- Half-sine eased elevation/curvature between track zones
- Obstacle, decoration and traffic signal placement
- JSON export of the renderer-facing track descriptor
"""

__version__ = "0.1.0"

from arcadetrack.sprites.catalog import SpriteCatalog
from arcadetrack.track.generator import GenerationMode, GeneratorConfig, TrackGenerator
from arcadetrack.track.track import TrackDescriptor

__all__ = [
    "SpriteCatalog",
    "TrackGenerator",
    "GeneratorConfig",
    "GenerationMode",
    "TrackDescriptor",
    "__version__",
]
