"""
Tests for calculator configuration.
"""

import json
import logging

import pytest
from pydantic import ValidationError

from scicalc import (
    CalculatorConfig,
    EvaluationLimits,
    FormatLimits,
    MathError,
    apply_config,
    config_from_env,
    evaluate,
    get_format_limits,
    load_config,
)


class TestCalculatorConfig:
    """Tests for the configuration model."""

    def test_defaults_match_default_limits(self):
        config = CalculatorConfig()
        assert config.format_limits() == FormatLimits()
        assert config.evaluation_limits() == EvaluationLimits()

    def test_accepts_camel_case(self):
        config = CalculatorConfig.model_validate({"maxScale": 4, "maxLength": 20})
        assert config.max_scale == 4
        assert config.max_length == 20

    def test_accepts_snake_case(self):
        config = CalculatorConfig(max_scale=6, max_exponent=100)
        assert config.max_scale == 6
        assert config.evaluation_limits().max_exponent == 100

    def test_accepts_literal_and_result_limits(self):
        config = CalculatorConfig.model_validate(
            {"maxLiteralExponent": 50, "maxResultDigits": 200}
        )
        limits = config.evaluation_limits()
        assert limits.max_literal_exponent == 50
        assert limits.max_result_digits == 200

    def test_rejects_invalid_precision(self):
        with pytest.raises(ValidationError):
            CalculatorConfig(precision=0)

    def test_rejects_non_integer(self):
        with pytest.raises(ValidationError):
            CalculatorConfig.model_validate({"maxScale": "lots"})

    def test_evaluation_limits_are_used(self):
        limits = CalculatorConfig(max_exponent=10).evaluation_limits()
        assert evaluate("2 ^ 10", limits) == 1024
        with pytest.raises(MathError):
            evaluate("2 ^ 11", limits)


class TestLoadConfig:
    """Tests for loading configuration files."""

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "calculator.yaml"
        path.write_text("maxScale: 5\nmaxLength: 16\nlogLevel: debug\n", encoding="utf-8")
        config = load_config(path)
        assert config.max_scale == 5
        assert config.max_length == 16
        assert config.log_level == "debug"

    def test_loads_json(self, tmp_path):
        path = tmp_path / "calculator.json"
        path.write_text(json.dumps({"max_scale": 3}), encoding="utf-8")
        assert load_config(str(path)).max_scale == 3

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == CalculatorConfig()

    def test_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)


class TestEnvironment:
    """Tests for environment configuration."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SCICALC_MAX_SCALE", "7")
        monkeypatch.setenv("SCICALC_MAX_LENGTH", "21")
        monkeypatch.setenv("SCICALC_LOG_LEVEL", "info")
        config = config_from_env()
        assert config.max_scale == 7
        assert config.max_length == 21
        assert config.log_level == "info"

    def test_defaults_without_environment(self, monkeypatch):
        monkeypatch.delenv("SCICALC_MAX_SCALE", raising=False)
        monkeypatch.delenv("SCICALC_MAX_LENGTH", raising=False)
        monkeypatch.delenv("SCICALC_LOG_LEVEL", raising=False)
        assert config_from_env() == CalculatorConfig()


class TestApplyConfig:
    """Tests for installing configuration."""

    def test_installs_format_limits(self):
        apply_config(CalculatorConfig(max_scale=2, max_length=8))
        assert get_format_limits() == FormatLimits(max_scale=2, max_length=8)

    def test_installs_log_level(self):
        logger = logging.getLogger("scicalc")
        try:
            apply_config(CalculatorConfig(log_level="debug"))
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(logging.NOTSET)

    def test_leaves_log_level_when_unset(self):
        logger = logging.getLogger("scicalc")
        logger.setLevel(logging.ERROR)
        try:
            apply_config(CalculatorConfig())
            assert logger.level == logging.ERROR
        finally:
            logger.setLevel(logging.NOTSET)

    def test_log_level_from_file_is_applied(self, tmp_path):
        path = tmp_path / "calculator.yaml"
        path.write_text("logLevel: info\n", encoding="utf-8")
        logger = logging.getLogger("scicalc")
        try:
            apply_config(load_config(path))
            assert logger.level == logging.INFO
        finally:
            logger.setLevel(logging.NOTSET)
