"""
Tests for the configuration system.
"""

from pathlib import Path

import pytest
import yaml

from sorinpaint.core.config import InpaintConfig, export_default_config


class TestInpaintConfig:
    """Tests for InpaintConfig."""

    def test_default_values(self):
        """Test that default values are correctly set."""
        config = InpaintConfig()
        assert config.use_manual_mask is True
        assert config.damage_percent == 30.0
        assert config.brush_size == 15
        assert config.lambda_fidelity == 0.5
        assert config.beta_smoothness == 1.5
        assert config.max_iter == 1000
        assert config.tol == 1e-4
        assert config.seed is None
        assert config.show_progress is False

    def test_custom_values(self):
        """Test creating config with custom values."""
        config = InpaintConfig(
            use_manual_mask=False,
            damage_percent=45.0,
            brush_size=5,
            max_iter=200,
            tol=1e-3,
            seed=11,
        )
        assert config.use_manual_mask is False
        assert config.damage_percent == 45.0
        assert config.brush_size == 5
        assert config.max_iter == 200
        assert config.tol == 1e-3
        assert config.seed == 11

    def test_damage_percent_range(self):
        """Test that damage_percent must lie in [0, 100]."""
        with pytest.raises(ValueError, match="damage_percent must be in"):
            InpaintConfig(damage_percent=-1.0)
        with pytest.raises(ValueError, match="damage_percent must be in"):
            InpaintConfig(damage_percent=100.5)

        assert InpaintConfig(damage_percent=0.0).damage_percent == 0.0
        assert InpaintConfig(damage_percent=100.0).damage_percent == 100.0

    def test_validation_positive_values(self):
        """Test that validation rejects invalid solver parameters."""
        with pytest.raises(ValueError, match="tol must be positive"):
            InpaintConfig(tol=0.0)

        with pytest.raises(ValueError, match="brush_size must be >= 1"):
            InpaintConfig(brush_size=0)

        with pytest.raises(ValueError, match="lambda_fidelity must be non-negative"):
            InpaintConfig(lambda_fidelity=-0.1)

        with pytest.raises(ValueError, match="beta_smoothness must be non-negative"):
            InpaintConfig(beta_smoothness=-0.1)

    def test_max_iter_must_be_integer(self):
        """Test that max_iter rejects non-integers but allows non-positive values."""
        with pytest.raises(ValueError, match="max_iter must be an integer"):
            InpaintConfig(max_iter=10.5)

        assert InpaintConfig(max_iter=0).max_iter == 0

    def test_serialization(self):
        """Test dictionary serialization."""
        config = InpaintConfig(damage_percent=12.5, seed=3)
        data = config.to_dict()

        assert isinstance(data, dict)
        assert data["damage_percent"] == 12.5
        assert data["seed"] == 3

        config2 = InpaintConfig.from_dict(data)
        assert config2 == config

    def test_from_dict_ignores_unknown_keys(self):
        """Test that extra keys are dropped instead of raising."""
        config = InpaintConfig.from_dict({"max_iter": 50, "not_a_field": 1})
        assert config.max_iter == 50

    def test_copy_with_overrides(self):
        """Test that overrides produce a new validated instance."""
        config = InpaintConfig()
        quick = config.copy_with_overrides(max_iter=50, tol=1e-2)

        assert quick.max_iter == 50
        assert quick.tol == 1e-2
        assert config.max_iter == 1000

        with pytest.raises(ValueError):
            config.copy_with_overrides(damage_percent=150.0)


class TestYAMLRoundTrip:
    """Tests for YAML file handling."""

    def test_yaml_round_trip(self, tmp_path: Path):
        """Test writing and reading a configuration file."""
        config = InpaintConfig(use_manual_mask=False, damage_percent=20.0, tol=5e-5, seed=9)
        filepath = config.to_yaml_file(tmp_path / "nested" / "config.yaml")

        assert filepath.exists()
        loaded = InpaintConfig.from_yaml_file(filepath)
        assert loaded == config

    def test_yaml_contents_readable(self, tmp_path: Path):
        """Test that the YAML file is plain key/value data."""
        filepath = InpaintConfig(max_iter=42).to_yaml_file(tmp_path / "config.yaml")
        with open(filepath, "r") as f:
            data = yaml.safe_load(f)
        assert data["max_iter"] == 42
        assert data["use_manual_mask"] is True

    def test_missing_file(self, tmp_path: Path):
        """Test that loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            InpaintConfig.from_yaml_file(tmp_path / "missing.yaml")

    def test_export_default_config(self, tmp_path: Path):
        """Test exporting the default template."""
        filepath = export_default_config(tmp_path)
        assert filepath.name == "inpaint_config.yaml"
        assert InpaintConfig.from_yaml_file(filepath) == InpaintConfig()
