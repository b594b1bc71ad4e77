"""
Unit tests for the command line entry point.
"""

import json
import os

import pytest

from gridflow.bootstrap import entrypoints
from gridflow.bootstrap.config import GridflowConfig
from gridflow.bootstrap.entrypoints import cli_main, run_relayout


@pytest.fixture(autouse=True)
def quiet(monkeypatch):
    """Leave the root logger alone and ignore GRIDFLOW_* variables."""
    monkeypatch.setattr(entrypoints, "setup_logging", lambda **kwargs: None)
    for key in list(os.environ):
        if key.startswith("GRIDFLOW_"):
            monkeypatch.delenv(key)


@pytest.fixture
def layout_file(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps([
        {"i": "a", "x": 0, "y": 3, "w": 2, "h": 2},
        {"i": "b", "x": 20, "y": 0, "w": 4, "h": 1},
    ]))
    return path


class TestRelayoutCommand:
    """Tests for `gridflow relayout`."""

    def test_prints_layout_and_height(self, layout_file, capsys):
        code = cli_main([
            "relayout", str(layout_file),
            "--row-height", "30", "--margin", "10", "10", "--padding", "10", "10",
        ])
        result = json.loads(capsys.readouterr().out)

        assert code == 0
        positions = {item["item_id"]: (item["x"], item["y"]) for item in result["layout"]}
        assert positions == {"a": (0, 0), "b": (8, 0)}
        assert result["height"] == 90

    def test_compact_and_cols_options(self, layout_file, capsys):
        code = cli_main(["relayout", str(layout_file), "--cols", "6", "--compact", "none"])
        result = json.loads(capsys.readouterr().out)

        assert code == 0
        positions = {item["item_id"]: (item["x"], item["y"]) for item in result["layout"]}
        assert positions == {"a": (0, 3), "b": (2, 0)}

    def test_wrapped_layout_file(self, tmp_path):
        path = tmp_path / "saved.json"
        path.write_text(json.dumps({"layout": [{"i": "a", "y": 2}]}))

        result = run_relayout(GridflowConfig(), str(path))
        assert result["layout"][0]["y"] == 0

    def test_missing_file_fails(self, tmp_path):
        assert cli_main(["relayout", str(tmp_path / "missing.json")]) == 1

    def test_invalid_option_value_fails(self, layout_file):
        assert cli_main(["relayout", str(layout_file), "--cols", "0"]) == 1


class TestCli:
    """Tests for general CLI behaviour."""

    def test_no_command(self, capsys):
        assert cli_main([]) == 1

    def test_config_command(self, capsys):
        assert cli_main(["config"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["grid"]["cols"] == 12

    def test_bad_config_file(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"grid": {"cols": 0}}))

        assert cli_main(["-c", str(path), "config"]) == 1

    def test_config_file_with_wrong_types(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"grid": {"cols": "many"}}))

        assert cli_main(["-c", str(path), "config"]) == 1

    def test_config_file_not_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{grid: ")

        assert cli_main(["-c", str(path), "config"]) == 1
