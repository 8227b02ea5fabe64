"""Shared fixtures for the arcadetrack tests."""

import pytest

from arcadetrack.sprites import SpriteCatalog


ATLAS = {
    "frames": [
        {"filename": "tree.png", "frame": {"x": 0, "y": 0, "w": 132, "h": 192}},
        {"filename": "boulder.png", "frame": {"x": 132, "y": 0, "w": 168, "h": 248}},
        {"filename": "stump.png", "frame": {"x": 300, "y": 0, "w": 60, "h": 40}},
        {"filename": "column.png", "frame": {"x": 360, "y": 0, "w": 40, "h": 150}},
        {"filename": "traffic_light_green.png", "frame": {"x": 400, "y": 0, "w": 30, "h": 80}},
        {"filename": "50kmh_limit.png", "frame": {"x": 430, "y": 0, "w": 50, "h": 80}},
    ]
}


class ScriptedRandom:
    """Random source replaying a fixed sequence of uniforms.

    Once the script runs out the last value repeats.
    """

    def __init__(self, *values):
        self.values = list(values) or [0.5]
        self.calls = 0

    def random(self):
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


@pytest.fixture
def atlas():
    return ATLAS


@pytest.fixture
def catalog():
    return SpriteCatalog.from_atlas(ATLAS)


@pytest.fixture
def scripted():
    """Factory for ScriptedRandom sources."""
    return ScriptedRandom
