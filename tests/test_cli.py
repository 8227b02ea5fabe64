"""Tests for the run_generator command line entry point."""

import json
import sys
from pathlib import Path

import run_generator

DATA_DIR = Path(__file__).resolve().parent.parent / "examples" / "data"


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["run_generator.py", *args])
    return run_generator.main()


class TestMain:
    """Test end-to-end CLI runs."""

    def test_layout_run(self, monkeypatch, tmp_path):
        """Test a layout run writes the renderer JSON."""
        output = tmp_path / "track.json"
        code = _run(
            monkeypatch,
            "--atlas", str(DATA_DIR / "spritesheet.json"),
            "--config", str(DATA_DIR / "generator.json"),
            "--layout", str(DATA_DIR / "layout.json"),
            "--seed", "3",
            "--output", str(output),
        )

        assert code == 0
        with open(output) as f:
            data = json.load(f)
        assert data["trackParam"] == {"numZones": 8, "zoneSize": 250}
        assert len(data["track"]) == 2000

    def test_straight_mode(self, monkeypatch, tmp_path):
        """Test mode selection without a layout."""
        output = tmp_path / "straight.json"
        code = _run(
            monkeypatch,
            "--atlas", str(DATA_DIR / "spritesheet.json"),
            "--mode", "straight",
            "--output", str(output),
        )

        assert code == 0
        with open(output) as f:
            data = json.load(f)
        assert all(s["height"] == 0.0 for s in data["track"])

    def test_missing_atlas(self, monkeypatch, tmp_path):
        """Test unreadable inputs exit with status 1."""
        code = _run(
            monkeypatch,
            "--atlas", str(tmp_path / "missing.json"),
            "--output", str(tmp_path / "track.json"),
        )
        assert code == 1

    def test_unknown_sprite(self, monkeypatch, tmp_path):
        """Test generation errors exit with status 1."""
        config = tmp_path / "options.json"
        config.write_text(json.dumps({"objects": ["dragon"]}))

        code = _run(
            monkeypatch,
            "--atlas", str(DATA_DIR / "spritesheet.json"),
            "--config", str(config),
            "--output", str(tmp_path / "track.json"),
        )
        assert code == 1
        assert not (tmp_path / "track.json").exists()

    def test_malformed_config_json(self, monkeypatch, tmp_path):
        """Test an options file that is not JSON exits with status 1."""
        config = tmp_path / "options.json"
        config.write_text("{not json")

        code = _run(
            monkeypatch,
            "--atlas", str(DATA_DIR / "spritesheet.json"),
            "--config", str(config),
            "--output", str(tmp_path / "track.json"),
        )
        assert code == 1

    def test_atlas_without_frame(self, monkeypatch, tmp_path):
        """Test atlas entries missing their frame rectangle exit with status 1."""
        atlas = tmp_path / "atlas.json"
        atlas.write_text(json.dumps({"frames": [{"filename": "tree.png"}]}))

        code = _run(
            monkeypatch,
            "--atlas", str(atlas),
            "--output", str(tmp_path / "track.json"),
        )
        assert code == 1

    def test_unknown_vehicle_option(self, monkeypatch, tmp_path):
        """Test unexpected vehicle keys exit with status 1."""
        config = tmp_path / "options.json"
        config.write_text(json.dumps({"controllable_vehicle": {"turbo": 3}}))

        code = _run(
            monkeypatch,
            "--atlas", str(DATA_DIR / "spritesheet.json"),
            "--config", str(config),
            "--output", str(tmp_path / "track.json"),
        )
        assert code == 1

    def test_topography_not_object(self, monkeypatch, tmp_path):
        """Test a malformed layout file exits with status 1."""
        layout = tmp_path / "layout.json"
        layout.write_text(json.dumps([{"topography": "left", "numZones": 1}]))

        code = _run(
            monkeypatch,
            "--atlas", str(DATA_DIR / "spritesheet.json"),
            "--layout", str(layout),
            "--output", str(tmp_path / "track.json"),
        )
        assert code == 1
