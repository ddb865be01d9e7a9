"""
Calculator configuration.

Configuration can come from a YAML or JSON file, from environment
variables, or be built directly. Keys are accepted in snake_case or
camelCase.

Environment variables:
    SCICALC_MAX_SCALE - Fractional digits kept for long results (default: 12)
    SCICALC_MAX_LENGTH - Display string length (default: 13)
    SCICALC_LOG_LEVEL - Log level (debug, info, warning, error)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .formatter import set_format_limits
from .limits import (
    DEFAULT_EVALUATION_LIMITS,
    DEFAULT_FORMAT_LIMITS,
    EvaluationLimits,
    FormatLimits,
)
from .log import enable_logging

logger = logging.getLogger("scicalc.config")

ENV_VAR_MAX_SCALE = "SCICALC_MAX_SCALE"
ENV_VAR_MAX_LENGTH = "SCICALC_MAX_LENGTH"
ENV_VAR_LOG_LEVEL = "SCICALC_LOG_LEVEL"


class CalculatorConfig(BaseModel):
    """Display and evaluation settings."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    max_scale: int = Field(default=DEFAULT_FORMAT_LIMITS.max_scale, alias="maxScale")

    max_length: int = Field(default=DEFAULT_FORMAT_LIMITS.max_length, alias="maxLength")

    max_expression_length: int = Field(
        default=DEFAULT_EVALUATION_LIMITS.max_expression_length,
        alias="maxExpressionLength",
        gt=0,
    )

    max_exponent: int = Field(
        default=DEFAULT_EVALUATION_LIMITS.max_exponent, alias="maxExponent"
    )

    max_factorial_operand: int = Field(
        default=DEFAULT_EVALUATION_LIMITS.max_factorial_operand,
        alias="maxFactorialOperand",
        ge=0,
    )

    precision: int = Field(default=DEFAULT_EVALUATION_LIMITS.precision, gt=0)

    division_scale: int = Field(
        default=DEFAULT_EVALUATION_LIMITS.division_scale, alias="divisionScale", ge=0
    )

    max_literal_exponent: int = Field(
        default=DEFAULT_EVALUATION_LIMITS.max_literal_exponent,
        alias="maxLiteralExponent",
        ge=0,
    )

    max_result_digits: int = Field(
        default=DEFAULT_EVALUATION_LIMITS.max_result_digits,
        alias="maxResultDigits",
        gt=0,
    )

    log_level: Optional[str] = Field(default=None, alias="logLevel")

    def format_limits(self) -> FormatLimits:
        return FormatLimits(max_scale=self.max_scale, max_length=self.max_length)

    def evaluation_limits(self) -> EvaluationLimits:
        return EvaluationLimits(
            max_expression_length=self.max_expression_length,
            max_exponent=self.max_exponent,
            max_factorial_operand=self.max_factorial_operand,
            precision=self.precision,
            division_scale=self.division_scale,
            max_literal_exponent=self.max_literal_exponent,
            max_result_digits=self.max_result_digits,
        )


def load_config(path: str | Path) -> CalculatorConfig:
    """
    Loads configuration from a YAML or JSON file.

    Raises:
        ValueError: If the file does not hold a mapping
        pydantic.ValidationError: If a value has the wrong type
    """
    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8")

    data: Any
    if file_path.suffix.lower() == ".json":
        data = json.loads(content)
    else:
        data = yaml.safe_load(content)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {file_path}")

    logger.debug("config_loaded", extra={"path": str(file_path)})
    return CalculatorConfig.model_validate(data)


def config_from_env() -> CalculatorConfig:
    """Builds configuration from SCICALC_* environment variables."""
    data: dict[str, Any] = {}

    max_scale = os.getenv(ENV_VAR_MAX_SCALE)
    if max_scale is not None:
        data["max_scale"] = max_scale

    max_length = os.getenv(ENV_VAR_MAX_LENGTH)
    if max_length is not None:
        data["max_length"] = max_length

    log_level = os.getenv(ENV_VAR_LOG_LEVEL)
    if log_level is not None:
        data["log_level"] = log_level

    return CalculatorConfig.model_validate(data)


def apply_config(config: CalculatorConfig) -> None:
    """Installs the configured display limits and log level process-wide."""
    set_format_limits(config.format_limits())
    if config.log_level is not None:
        enable_logging(config.log_level)
    logger.info(
        "format_limits_applied",
        extra={"max_scale": config.max_scale, "max_length": config.max_length},
    )
