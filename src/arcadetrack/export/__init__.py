"""
Export module - Writes generated tracks for the renderer.
"""

from arcadetrack.export.exporter import ExporterConfig, NumpyEncoder, TrackExporter

__all__ = ["TrackExporter", "ExporterConfig", "NumpyEncoder"]
