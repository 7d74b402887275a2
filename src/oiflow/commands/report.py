"""Configuration loading for the report command.

Example config file (report.yaml):

    source:
      type: "file"            # "file" or "http"
      location: "processed_data.json"
      timeout: 30             # Optional, http only
    display:
      max_market_points: 30   # Optional
      top_symbol_limit: 10    # Optional
      moving_average: 2       # Optional
    logging:
      level: "INFO"           # Optional
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from oiflow.exceptions import ConfigError
from oiflow.types import DisplayConfig, DocumentSourceConfig, ReportConfig

# Valid document source types
VALID_SOURCE_TYPES = frozenset(["file", "http"])

# Valid log levels
VALID_LOG_LEVELS = frozenset(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])

DISPLAY_FIELDS = ("max_market_points", "top_symbol_limit", "moving_average")


def _parse_source(raw_source: Any) -> DocumentSourceConfig:
    """Validate the ``source`` section.

    :param raw_source: Parsed YAML value of the section.
    :returns: Source configuration.
    :raises ConfigError: If the section is malformed.
    """
    if not isinstance(raw_source, dict):
        raise ConfigError("'source' must be a mapping with 'type' and 'location'")

    location = raw_source.get("location")
    if not isinstance(location, str) or not location.strip():
        raise ConfigError("'source.location' must be a non-empty string")

    source_type = str(raw_source.get("type", "file")).lower()
    if source_type not in VALID_SOURCE_TYPES:
        raise ConfigError(
            f"Invalid source type '{source_type}'. "
            f"Valid options: {sorted(VALID_SOURCE_TYPES)}"
        )

    timeout = raw_source.get("timeout", 30.0)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("'source.timeout' must be a positive number")

    return DocumentSourceConfig(type=source_type, location=location, timeout=float(timeout))


def _parse_display(raw_display: Any) -> DisplayConfig:
    """Validate the optional ``display`` section."""
    if raw_display is None:
        return DisplayConfig()
    if not isinstance(raw_display, dict):
        raise ConfigError("'display' must be a mapping")

    values: dict[str, int] = {}
    for name in DISPLAY_FIELDS:
        if name not in raw_display:
            continue
        value = raw_display[name]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(f"'display.{name}' must be a positive integer")
        values[name] = value
    return DisplayConfig(**values)


def load_report_config(config_path: str | Path) -> ReportConfig:
    """Parse and validate a report configuration file.

    :param config_path: Path to YAML configuration file.
    :returns: Validated ReportConfig object.
    :raises ConfigError: If file cannot be read or config is invalid.
    """
    config_path = Path(config_path)

    # Read and parse YAML
    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError("Configuration must be a YAML mapping")

    if "source" not in raw_config:
        raise ConfigError("Missing required field: source")

    source = _parse_source(raw_config["source"])
    display = _parse_display(raw_config.get("display"))

    # Parse logging (optional)
    raw_logging = raw_config.get("logging", {}) or {}
    if not isinstance(raw_logging, dict):
        raise ConfigError("'logging' must be a mapping")

    log_level = str(raw_logging.get("level", "INFO")).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level '{log_level}'. "
            f"Valid options: {sorted(VALID_LOG_LEVELS)}"
        )

    return ReportConfig(source=source, display=display, log_level=log_level)
