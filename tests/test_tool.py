"""Tests for the hex drift host tool's config handling."""

import importlib.util
import json
from pathlib import Path

import pytest

TOOL_PATH = Path(__file__).resolve().parents[1] / "tools" / "video" / "hex_drift" / "hex_drift.py"


@pytest.fixture(scope="module")
def tool():
    pytest.importorskip("pygame")
    spec = importlib.util.spec_from_file_location("hex_drift_tool", TOOL_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestPrepareRuntimeConfig:
    def test_paths_resolve_against_config_dir(self, tool, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"record_path": "clips/out.gif"}))
        config = tool.prepare_runtime_config(path, None)
        assert config["record_path"] == (tmp_path / "clips" / "out.gif").resolve()
        assert config["save_frames_dir"] == (tmp_path / "frames").resolve()

    def test_output_dir_overrides(self, tool, tmp_path):
        out = tmp_path / "out"
        config = tool.prepare_runtime_config(tmp_path / "missing.json", str(out))
        assert config["save_frames_dir"] == (out / "frames").resolve()
        assert config["record_path"] == (out / "hexdrift.gif").resolve()

    def test_main_renders_clip(self, tool, tmp_path, monkeypatch):
        target = tmp_path / "clip.gif"
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"width": 40, "height": 30}))
        monkeypatch.setattr(
            "sys.argv",
            ["hex_drift", "--config", str(config), "--render", str(target), "--frames", "2", "--seed", "3"],
        )
        tool.main()
        assert target.exists()
