"""
Unit tests for configuration loading.
"""

import json
import math
import os

import pytest

from gridflow.bootstrap.config import GridConfig, GridflowConfig, LoggingConfig, load_config
from gridflow.core.models import CompactType
from gridflow.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests start without GRIDFLOW_* variables."""
    for key in list(os.environ):
        if key.startswith("GRIDFLOW_"):
            monkeypatch.delenv(key)


class TestGridConfig:
    """Tests for GridConfig."""

    def test_defaults(self):
        config = GridConfig()

        assert config.cols == 12
        assert config.row_height == 150
        assert config.margin == (10, 10)
        assert config.compact_type is CompactType.VERTICAL
        assert math.isinf(config.max_rows)

    def test_coerces_compact_type_and_pairs(self):
        config = GridConfig(compact_type="horizontal", margin=[4, 6])
        assert config.compact_type is CompactType.HORIZONTAL
        assert config.margin == (4, 6)

    def test_validate(self):
        assert GridConfig(cols=4).validate().cols == 4

        with pytest.raises(ConfigurationError) as exc_info:
            GridConfig(cols=0).validate()
        assert exc_info.value.details["key"] == "cols"

        with pytest.raises(ConfigurationError):
            GridConfig(dropping_item_w=0).validate()

    def test_position_params(self):
        params = GridConfig(cols=6, row_height=40).position_params(600)

        assert params.cols == 6
        assert params.row_height == 40
        assert params.container_width == 600

    def test_to_dict(self):
        data = GridConfig().to_dict()
        assert data["compact_type"] == "vertical"
        assert data["max_rows"] is None
        assert data["margin"] == [10, 10]


class TestFromEnv:
    """Tests for environment configuration."""

    def test_reads_variables(self, monkeypatch):
        monkeypatch.setenv("GRIDFLOW_COLS", "6")
        monkeypatch.setenv("GRIDFLOW_MARGIN", "5,8")
        monkeypatch.setenv("GRIDFLOW_CONTAINER_PADDING", "3")
        monkeypatch.setenv("GRIDFLOW_COMPACT_TYPE", "horizontal")
        monkeypatch.setenv("GRIDFLOW_PREVENT_COLLISION", "true")

        config = GridConfig.from_env()

        assert config.cols == 6
        assert config.margin == (5, 8)
        assert config.container_padding == (3, 3)
        assert config.compact_type is CompactType.HORIZONTAL
        assert config.prevent_collision is True

    def test_bad_number(self, monkeypatch):
        monkeypatch.setenv("GRIDFLOW_COLS", "six")
        with pytest.raises(ConfigurationError):
            GridConfig.from_env()

    def test_bad_compact_type(self, monkeypatch):
        monkeypatch.setenv("GRIDFLOW_COMPACT_TYPE", "diagonal")
        with pytest.raises(ConfigurationError):
            GridConfig.from_env()

    def test_logging_config(self, monkeypatch):
        monkeypatch.setenv("GRIDFLOW_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("GRIDFLOW_JSON_LOGS", "true")

        config = LoggingConfig.from_env()
        assert config.level == "DEBUG"
        assert config.json_logs is True


class TestFromFile:
    """Tests for JSON file configuration."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = GridflowConfig.from_file(str(tmp_path / "missing.json"))
        assert config.grid.cols == 12

    def test_overrides(self, tmp_path):
        path = tmp_path / "gridflow.json"
        path.write_text(json.dumps({
            "grid": {"cols": 8, "compact_type": "none", "max_rows": None, "margin": [4, 4]},
            "logging": {"level": "DEBUG"},
        }))

        config = load_config(str(path))

        assert config.grid.cols == 8
        assert config.grid.compact_type is CompactType.NONE
        assert math.isinf(config.grid.max_rows)
        assert config.grid.margin == (4, 4)
        assert config.logging.level == "DEBUG"

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "gridflow.json"

        path.write_text(json.dumps({"grid": {"compact_type": "diagonal"}}))
        with pytest.raises(ConfigurationError):
            load_config(str(path))

        path.write_text(json.dumps({"grid": {"cols": -1}}))
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_round_trip_dict(self):
        data = GridflowConfig().to_dict()
        assert data["grid"]["cols"] == 12
        assert data["logging"]["level"] == "INFO"

    def test_numeric_strings_coerced(self, tmp_path):
        path = tmp_path / "gridflow.json"
        path.write_text(json.dumps({"grid": {"cols": "8", "row_height": "40"}}))

        config = load_config(str(path))
        assert config.grid.cols == 8
        assert config.grid.row_height == 40.0

    def test_wrong_types_raise_configuration_error(self, tmp_path):
        path = tmp_path / "gridflow.json"

        path.write_text(json.dumps({"grid": {"cols": "twelve"}}))
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(str(path))
        assert exc_info.value.details["key"] == "cols"

        path.write_text(json.dumps({"grid": {"cols": None}}))
        with pytest.raises(ConfigurationError):
            load_config(str(path))

        path.write_text(json.dumps({"grid": {"margin": 10}}))
        with pytest.raises(ConfigurationError):
            load_config(str(path))
