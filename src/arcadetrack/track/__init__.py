"""
Track module - Procedural arcade track generation and track data structures.

This module contains:
- TrackGenerator: Layout-driven, random and straight track generation
- ZonePlanner: Zone-by-zone elevation and curvature targets
- Segment: Atomic road slice with height, curve and sprite
- TrackDescriptor: Renderer-facing output of a generation call
"""

from arcadetrack.track.generator import GenerationMode, GeneratorConfig, TrackGenerator
from arcadetrack.track.planner import ZonePlanner
from arcadetrack.track.scheduler import SpriteScheduler
from arcadetrack.track.segment import Segment
from arcadetrack.track.synthesizer import synthesize
from arcadetrack.track.track import TrackDescriptor, assemble
from arcadetrack.track.zone import TrafficSignal, Zone, ZoneSpec, load_layout

__all__ = [
    "TrackGenerator",
    "GeneratorConfig",
    "GenerationMode",
    "ZonePlanner",
    "SpriteScheduler",
    "Segment",
    "synthesize",
    "TrackDescriptor",
    "assemble",
    "TrafficSignal",
    "Zone",
    "ZoneSpec",
    "load_layout",
]
