"""Configuration loader for the CoffeeScript documenter.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"
_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class DocConfig:
    """Markers and conventions used while harvesting documentation."""

    tag_marker: str = "@"
    escape_marker: str = "#"
    private_prefix: str = "_"
    splat_suffix: str = "..."
    dependency_style: str = "commonjs"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = _DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    docs: DocConfig = field(default_factory=DocConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_doc_config(data: dict) -> DocConfig:
    """Build a DocConfig from a dictionary.

    Args:
        data: Dictionary with documenter settings.

    Returns:
        A configured DocConfig instance.
    """
    defaults = DocConfig()
    return DocConfig(
        tag_marker=data.get("tag_marker", defaults.tag_marker),
        escape_marker=data.get("escape_marker", defaults.escape_marker),
        private_prefix=data.get("private_prefix", defaults.private_prefix),
        splat_suffix=data.get("splat_suffix", defaults.splat_suffix),
        dependency_style=data.get("dependency_style", defaults.dependency_style),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values. The log level
    can be overridden with the COFFEEDOC_LOG_LEVEL environment variable.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file not found at %s, using defaults", path)
        raw = {}

    logging_data = raw.get("logging", {})
    logging_config = LoggingConfig(
        level=os.getenv("COFFEEDOC_LOG_LEVEL") or logging_data.get("level", "INFO"),
        format=logging_data.get("format", _DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        docs=_build_doc_config(raw.get("docs", {})),
        logging=logging_config,
    )
