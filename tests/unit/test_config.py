"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from lotstats.core.config import Settings, ValuationConfig, load_config
from lotstats.core.exceptions import ConfigurationError
from lotstats.core.types import OutlierMethod, WeightMethod


PROJECT_CONFIG = Path(__file__).resolve().parents[2] / "config" / "valuation.yaml"


class TestSettings:
    """Tests for environment-backed settings."""

    def test_log_level_uppercased(self):
        """Log level is normalized to uppercase."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_env_prefix(self, monkeypatch):
        """LOTSTATS_ variables override defaults."""
        monkeypatch.setenv("LOTSTATS_MAX_WORKERS", "7")
        assert Settings().max_workers == 7

    def test_paths_resolved(self, tmp_path: Path):
        """Paths are resolved to absolute paths."""
        settings = Settings(output_dir=str(tmp_path / "out"))
        assert settings.output_dir.is_absolute()


class TestValuationConfig:
    """Tests for valuation.yaml."""

    def test_defaults(self, valuation_config: ValuationConfig):
        """An empty config falls back to engine defaults."""
        assert valuation_config.weight_method == WeightMethod.HYBRID
        assert valuation_config.confidence_threshold == 0.3
        assert valuation_config.skip_outlier_filtering is False
        assert valuation_config.outlier_method == OutlierMethod.AUTO
        assert valuation_config.min_sample_size == 4

    def test_project_config_file(self):
        """The shipped config matches the engine defaults."""
        config = ValuationConfig(PROJECT_CONFIG)

        assert config.weight_method == WeightMethod.HYBRID
        assert config.confidence_threshold == 0.3
        assert config.min_sample_size == 4

    def test_reads_yaml(self, tmp_path: Path):
        """Values are read from the YAML file."""
        path = tmp_path / "valuation.yaml"
        path.write_text(
            "valuation:\n"
            "  weight_method: median\n"
            "  confidence_threshold: 0.5\n"
            "outliers:\n"
            "  method: iqr\n"
            "  min_sample_size: 6\n"
        )
        config = ValuationConfig(path)

        assert config.weight_method == WeightMethod.MEDIAN
        assert config.confidence_threshold == 0.5
        assert config.outlier_method == OutlierMethod.IQR
        assert config.min_sample_size == 6

    def test_missing_file(self, tmp_path: Path):
        """A missing file is a configuration error."""
        with pytest.raises(ConfigurationError):
            ValuationConfig(tmp_path / "nope.yaml")

    def test_bad_weight_method(self):
        """Unknown weight methods are configuration errors."""
        config = ValuationConfig.from_dict({"valuation": {"weight_method": "mode"}})
        with pytest.raises(ConfigurationError):
            config.weight_method

    def test_sentinel_method_rejected(self):
        """insufficient_data is not a configurable strategy."""
        config = ValuationConfig.from_dict({"outliers": {"method": "insufficient_data"}})
        with pytest.raises(ConfigurationError):
            config.outlier_method

    def test_bad_min_sample_size(self):
        """min_sample_size must be positive."""
        config = ValuationConfig.from_dict({"outliers": {"min_sample_size": 0}})
        with pytest.raises(ConfigurationError):
            config.min_sample_size

    def test_unknown_config_type(self):
        """load_config rejects unknown names."""
        with pytest.raises(ConfigurationError):
            load_config("regimes")
