"""
Track exporter - Write generated tracks to disk.

Provides:
- JSON export in the renderer's track schema
- NumPy export of the height/curve profile for analysis
"""

from dataclasses import dataclass
from pathlib import Path
import json
import logging

import numpy as np

from arcadetrack.track.track import TrackDescriptor

logger = logging.getLogger(__name__)


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, np.floating):
            return float(obj)
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


@dataclass
class ExporterConfig:
    """Exporter configuration."""
    output_dir: str = "./tracks"
    indent: int | None = None   # None = compact single line


class TrackExporter:
    """Export track descriptors to files.

    The JSON output is what the renderer loads as its track file.
    """

    def __init__(self, config: ExporterConfig | None = None):
        """Initialize exporter.

        Args:
            config: Exporter configuration
        """
        self.config = config or ExporterConfig()
        self._output_path = Path(self.config.output_dir)

    def to_json(self, track: TrackDescriptor) -> str:
        """Serialize a track descriptor.

        Identical descriptors always serialize to identical text.
        """
        return json.dumps(track.get_state(), indent=self.config.indent, cls=NumpyEncoder)

    def export_json(self, track: TrackDescriptor, filename: str = "track.json") -> Path:
        """Export track to a JSON file.

        Args:
            track: Generated track
            filename: Output filename

        Returns:
            Path to exported file
        """
        self._output_path.mkdir(parents=True, exist_ok=True)
        output_file = self._output_path / filename

        with open(output_file, "w", encoding="utf-8") as f:
            f.write(self.to_json(track))

        logger.info(f"Track written to {output_file} ({track.num_segments} segments)")
        return output_file

    def export_numpy(self, track: TrackDescriptor, filename: str = "track_profile.npz") -> Path:
        """Export height/curve profile to NumPy compressed file.

        Args:
            track: Generated track
            filename: Output filename

        Returns:
            Path to exported file
        """
        self._output_path.mkdir(parents=True, exist_ok=True)
        output_file = self._output_path / filename

        np.savez_compressed(
            output_file,
            height=np.array([s.height for s in track.segments]),
            curve=np.array([s.curve for s in track.segments]),
            obstacle=np.array([s.has_obstacle for s in track.segments]),
        )

        return output_file
