"""Tests for desk calculator configuration loading."""

import math
import sys

import pytest
import yaml

from deskcalc import DeskCalcConfig
from deskcalc.deskcalc_config import max_depth_limit


class TestDeskCalcConfig:
    """Test configuration defaults, validation and YAML files."""

    def test_defaults(self):
        """Test the default settings."""
        config = DeskCalcConfig.create_default()
        assert config.precision == 6
        assert config.max_depth == 200
        assert config.constants == {"pi": math.pi, "e": math.e}
        assert config.log_level == "WARNING"

    def test_default_constants_are_not_shared(self):
        """Test each configuration gets its own constants mapping."""
        first = DeskCalcConfig()
        second = DeskCalcConfig()
        first.constants["tau"] = 2 * math.pi
        assert "tau" not in second.constants

    def test_load_from_file(self, tmp_path):
        """Test settings are read from YAML."""
        path = tmp_path / "deskcalc.yaml"
        path.write_text("precision: 12\nmax_depth: 50\nconstants:\n  c: 299792458\nlog_level: debug\n")
        config = DeskCalcConfig.load_from_file(str(path))
        assert config.precision == 12
        assert config.max_depth == 50
        assert config.constants == {"c": 299792458.0}
        assert config.log_level == "DEBUG"

    def test_partial_file_keeps_defaults(self, tmp_path):
        """Test settings missing from the file keep their defaults."""
        path = tmp_path / "deskcalc.yaml"
        path.write_text("precision: 3\n")
        config = DeskCalcConfig.load_from_file(str(path))
        assert config.precision == 3
        assert config.max_depth == 200
        assert "pi" in config.constants

    def test_empty_file(self, tmp_path):
        """Test an empty file gives the default configuration."""
        path = tmp_path / "deskcalc.yaml"
        path.write_text("")
        assert DeskCalcConfig.load_from_file(str(path)) == DeskCalcConfig()

    def test_missing_file(self, tmp_path):
        """Test a missing file is reported."""
        with pytest.raises(FileNotFoundError):
            DeskCalcConfig.load_from_file(str(tmp_path / "missing.yaml"))

    def test_save_and_reload(self, tmp_path):
        """Test a saved configuration loads back unchanged."""
        path = tmp_path / "deskcalc.yaml"
        config = DeskCalcConfig(precision=9, constants={"k": 1.5})
        config.save_to_file(str(path))

        assert yaml.safe_load(path.read_text())["precision"] == 9
        assert DeskCalcConfig.load_from_file(str(path)) == config

    @pytest.mark.parametrize("content", [
        "precision: 0\n",
        "precision: many\n",
        "max_depth: -1\n",
        "constants: [1, 2]\n",
        "constants:\n  x: lots\n",
        "constants:\n  2x: 1\n",
        "constants:\n  a_b: 1\n",
        "log_level: chatty\n",
        "colour: blue\n",
        "- just\n- a list\n",
    ])
    def test_invalid_settings(self, tmp_path, content):
        """Test invalid settings are rejected."""
        path = tmp_path / "deskcalc.yaml"
        path.write_text(content)
        with pytest.raises(ValueError):
            DeskCalcConfig.load_from_file(str(path))

    def test_direct_construction_is_validated(self):
        """Test settings passed to the constructor are validated."""
        with pytest.raises(ValueError):
            DeskCalcConfig(precision=True)

        with pytest.raises(ValueError):
            DeskCalcConfig(max_depth=0)

    def test_max_depth_bounded_by_recursion_limit(self):
        """Test max_depth cannot exceed what the interpreter stack supports."""
        limit = max_depth_limit()
        assert limit == sys.getrecursionlimit() // 5
        assert DeskCalcConfig(max_depth=limit).max_depth == limit

        with pytest.raises(ValueError) as exc_info:
            DeskCalcConfig(max_depth=limit + 1)

        assert "at most" in str(exc_info.value)

    def test_max_depth_too_large_in_file(self, tmp_path):
        """Test an oversized max_depth in YAML is rejected."""
        path = tmp_path / "deskcalc.yaml"
        path.write_text("max_depth: 5000\n")
        with pytest.raises(ValueError):
            DeskCalcConfig.load_from_file(str(path))
