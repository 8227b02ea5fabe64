"""
Errors - Failures that abort a track generation call.

Every error here is terminal for the call in progress: nothing is retried
internally and no partially built track is handed back.
"""


class TrackGenerationError(Exception):
    """Base class for all track generation failures."""


class InvalidLayout(TrackGenerationError, ValueError):
    """A layout, sprite pool or zone parameter is malformed."""


class UnknownSprite(TrackGenerationError, LookupError):
    """A sprite name is not present in the loaded catalog."""

    def __init__(self, name: str):
        super().__init__(f"Unknown sprite: {name!r}")
        self.name = name


class CatalogNotReady(TrackGenerationError, RuntimeError):
    """Sprite resolution was attempted before the catalog finished loading."""


class InconsistentTrackLength(TrackGenerationError, RuntimeError):
    """Segment count does not match the planned zone parameterization."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Track has {actual} segments, expected {expected}"
        )
        self.expected = expected
        self.actual = actual
