"""
Configuration management with INI/YAML files and environment overrides
"""

import logging
import math
import os
from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from windowstats.core.exceptions import ConfigurationError, InvalidConfiguration

logger = logging.getLogger(__name__)

DEFAULT_PERCENTILES = [50.0, 95.0, 99.0]


@dataclass
class AggregatorConfig:
    """
    Sliding-window aggregator configuration

    Validation Rules:
        - window_seconds: must be > 0
        - percentiles: any floats; ranks outside 0-100 are kept and skipped
          at estimation time
        - max_samples: None or >= 1
        - sweep_interval_seconds: None (lazy eviction only) or > 0
    """

    window_seconds: float = 60.0
    percentiles: List[float] = field(default_factory=lambda: list(DEFAULT_PERCENTILES))
    max_samples: Optional[int] = None
    sweep_interval_seconds: Optional[float] = None

    def __post_init__(self):
        if not self.window_seconds > 0:
            raise InvalidConfiguration(
                f"window_seconds must be positive, got {self.window_seconds}"
            )

        if self.max_samples is not None and self.max_samples < 1:
            raise InvalidConfiguration(
                f"max_samples must be >= 1 when set, got {self.max_samples}"
            )

        if self.sweep_interval_seconds is not None and not self.sweep_interval_seconds > 0:
            raise InvalidConfiguration(
                f"sweep_interval_seconds must be positive when set, "
                f"got {self.sweep_interval_seconds}"
            )

        out_of_range = [p for p in self.percentiles if math.isnan(p) or not 0 <= p <= 100]
        if out_of_range:
            logger.warning(
                f"Percentile ranks {out_of_range} are outside 0-100 and will be skipped"
            )


@dataclass
class LoggingConfig:
    """Logging system configuration"""
    log_level: str = "INFO"
    log_dir: str = "logs"

    def __post_init__(self):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}. "
                f"Must be one of {valid_levels}"
            )


class AggregatorSchema(BaseModel):
    """Schema for the ``aggregator`` section of aggregator.yaml"""

    window_seconds: float = Field(60.0, gt=0, description="Trailing window length")
    percentiles: List[float] = Field(default_factory=lambda: list(DEFAULT_PERCENTILES))
    max_samples: Optional[int] = Field(None, ge=1)
    sweep_interval_seconds: Optional[float] = Field(None, gt=0)


class LoggingSchema(BaseModel):
    """Schema for the ``logging`` section of aggregator.yaml"""

    log_level: str = "INFO"
    log_dir: str = "logs"


class ConfigManager:
    """
    Manages aggregator configuration from files with environment overrides

    Sources (highest priority first):
        1. Environment: WINDOWSTATS_WINDOW_SECONDS, WINDOWSTATS_PERCENTILES,
           WINDOWSTATS_MAX_SAMPLES, WINDOWSTATS_LOG_LEVEL
        2. aggregator.yaml
        3. aggregator.ini
        4. Built-in defaults
    """

    INI_FILE = "aggregator.ini"
    YAML_FILE = "aggregator.yaml"

    def __init__(self, config_dir: str = "configs"):
        self.config_dir = Path(config_dir)
        self._aggregator_config: Optional[AggregatorConfig] = None
        self._logging_config: Optional[LoggingConfig] = None

        # Load configurations
        self._load_configs()

    def _load_configs(self):
        """Load all configuration sources"""
        raw = self._load_ini()
        yaml_data = self._load_yaml()
        for section, values in yaml_data.items():
            raw.setdefault(section, {}).update(values)
        self._apply_env_overrides(raw)

        try:
            self._aggregator_config = AggregatorConfig(**raw.get("aggregator", {}))
            self._logging_config = LoggingConfig(**raw.get("logging", {}))
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}") from e

    def _load_ini(self) -> Dict[str, Dict[str, Any]]:
        """Load aggregator.ini if present"""
        config_file = self.config_dir / self.INI_FILE
        if not config_file.exists():
            return {}

        config = ConfigParser()
        config.read(config_file)
        raw: Dict[str, Dict[str, Any]] = {}

        if "aggregator" in config:
            section = config["aggregator"]
            try:
                values: Dict[str, Any] = {
                    "window_seconds": section.getfloat("window_seconds", 60.0),
                }
                if "percentiles" in section:
                    values["percentiles"] = _parse_percentiles(section.get("percentiles"))
                if "max_samples" in section:
                    values["max_samples"] = section.getint("max_samples")
                if "sweep_interval_seconds" in section:
                    values["sweep_interval_seconds"] = section.getfloat(
                        "sweep_interval_seconds"
                    )
            except ValueError as e:
                raise ConfigurationError(f"Invalid {config_file}: {e}") from e
            raw["aggregator"] = values

        if "logging" in config:
            logging_section = config["logging"]
            raw["logging"] = {
                "log_level": logging_section.get("log_level", "INFO"),
                "log_dir": logging_section.get("log_dir", "logs"),
            }

        return raw

    def _load_yaml(self) -> Dict[str, Dict[str, Any]]:
        """
        Load aggregator.yaml if present

        Raises:
            ConfigurationError: On YAML syntax or schema errors
        """
        yaml_file = self.config_dir / self.YAML_FILE
        if not yaml_file.exists():
            return {}

        try:
            with open(yaml_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse {yaml_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{yaml_file} must contain a mapping at top level")

        raw: Dict[str, Dict[str, Any]] = {}
        try:
            if "aggregator" in data:
                schema = AggregatorSchema(**(data["aggregator"] or {}))
                raw["aggregator"] = schema.model_dump(exclude_unset=True)
            if "logging" in data:
                raw["logging"] = LoggingSchema(**(data["logging"] or {})).model_dump(
                    exclude_unset=True
                )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {yaml_file}: {e}") from e

        if not raw:
            logger.warning(f"YAML config {yaml_file} has no known sections, ignoring")
        return raw

    @staticmethod
    def _apply_env_overrides(raw: Dict[str, Dict[str, Any]]) -> None:
        """Environment variables win over file values"""
        aggregator = raw.setdefault("aggregator", {})
        logging_values = raw.setdefault("logging", {})

        try:
            window_env = os.getenv("WINDOWSTATS_WINDOW_SECONDS")
            if window_env:
                aggregator["window_seconds"] = float(window_env)

            percentiles_env = os.getenv("WINDOWSTATS_PERCENTILES")
            if percentiles_env:
                aggregator["percentiles"] = _parse_percentiles(percentiles_env)

            max_samples_env = os.getenv("WINDOWSTATS_MAX_SAMPLES")
            if max_samples_env:
                aggregator["max_samples"] = int(max_samples_env)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment override: {e}") from e

        log_level_env = os.getenv("WINDOWSTATS_LOG_LEVEL")
        if log_level_env:
            logging_values["log_level"] = log_level_env

    @property
    def aggregator_config(self) -> AggregatorConfig:
        """Get aggregator configuration"""
        return self._aggregator_config

    @property
    def logging_config(self) -> LoggingConfig:
        """Get logging configuration"""
        return self._logging_config


def _parse_percentiles(text: str) -> List[float]:
    """Parse '50, 95,99.9' into [50.0, 95.0, 99.9]"""
    return [float(part) for part in text.split(",") if part.strip()]
