"""
Tests for configuration schemas.
"""

import logging

import pytest

from tnacompare.config import (
    AnalysisConfig,
    BootstrapConfig,
    LoggingConfig,
    PermutationConfig,
    ReliabilityConfig,
    StabilityConfig,
    configure_logging,
)


class TestSectionConfigs:
    """Test per-analysis config validation."""

    def test_defaults(self):
        """Defaults match the estimator defaults."""
        cfg = AnalysisConfig()
        assert cfg.bootstrap.iter == 1000
        assert cfg.bootstrap.consistency_range == (0.75, 1.25)
        assert cfg.permutation.adjust == "none"
        assert cfg.reliability.iter == 100
        assert cfg.reliability.split == 0.5
        assert cfg.groups.adjust == "bonferroni"
        assert cfg.stability.measures == ["InStrength", "OutStrength", "Betweenness"]
        assert cfg.logging.level == "WARNING"

    def test_invalid_bootstrap_method(self):
        with pytest.raises(ValueError, match="method must be one of"):
            BootstrapConfig(method="jackknife")

    def test_invalid_consistency_range(self):
        with pytest.raises(ValueError, match="consistency_range"):
            BootstrapConfig(consistency_range=(1.25, 0.75))

    def test_invalid_adjust(self):
        with pytest.raises(ValueError, match="adjust must be one of"):
            PermutationConfig(adjust="sidak")

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="level must be in"):
            PermutationConfig(level=1.5)

    def test_model_type_alias(self):
        assert ReliabilityConfig(model_type="atna").model_type == "atna"
        with pytest.raises(ValueError, match="model_type must be one of"):
            ReliabilityConfig(model_type="markov")

    def test_invalid_split(self):
        with pytest.raises(ValueError, match="split must be in"):
            ReliabilityConfig(split=1.0)

    def test_invalid_measure(self):
        with pytest.raises(ValueError, match="measures must be in"):
            StabilityConfig(measures=["PageRank"])

    def test_logging_level_normalised(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValueError, match="level must be one of"):
            LoggingConfig(level="LOUD")


class TestAnalysisConfig:
    """Test loading and round-tripping the full config."""

    def test_from_dict(self):
        cfg = AnalysisConfig.from_dict({
            "bootstrap": {"iter": 200, "method": "threshold"},
            "reliability": {"model_type": "ftna", "split": 0.6},
        })
        assert cfg.bootstrap.iter == 200
        assert cfg.bootstrap.method == "threshold"
        assert cfg.reliability.split == 0.6
        assert cfg.permutation.iter == 1000

    def test_unknown_section(self):
        with pytest.raises(ValueError, match="Unknown config section"):
            AnalysisConfig.from_dict({"plots": {}})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "analysis.yaml"
        path.write_text(
            "permutation:\n"
            "  iter: 250\n"
            "  adjust: holm\n"
            "bootstrap:\n"
            "  consistency_range: [0.5, 1.5]\n"
            "logging:\n"
            "  level: info\n"
        )
        cfg = AnalysisConfig.from_yaml(path)
        assert cfg.permutation.iter == 250
        assert cfg.permutation.adjust == "holm"
        assert cfg.bootstrap.consistency_range == (0.5, 1.5)
        assert cfg.logging.level == "INFO"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert AnalysisConfig.from_yaml(path).reliability.iter == 100

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AnalysisConfig.from_yaml(tmp_path / "missing.yaml")

    def test_to_dict(self):
        data = AnalysisConfig().to_dict()
        assert set(data) == {"bootstrap", "permutation", "reliability", "groups", "stability", "logging"}
        assert data["reliability"]["model_type"] == "relative"


def test_configure_logging():
    logger = logging.getLogger("tnacompare")
    previous = logger.level
    try:
        configure_logging(AnalysisConfig.from_dict({"logging": {"level": "DEBUG"}}))
        assert logger.level == logging.DEBUG
        configure_logging(LoggingConfig(level="ERROR"))
        assert logger.level == logging.ERROR
    finally:
        logger.setLevel(previous)
