"""
===============================================================================
SPATIAL - Configuration
===============================================================================
Loads library settings from YAML and configures logging.

The library itself never installs logging handlers; applications call
``setup_logging`` once at startup, the same way a simulation entry point
does, and every module logs through ``logging.getLogger(__name__)``.

The default file ships inside the package (spatial/data/spatial_config.yaml),
so it is found from a source checkout and from an installed wheel alike.

File layout (all keys optional):

    logging:
      level: WARNING
      format: "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
===============================================================================
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from spatial.constants import DEFAULT_LOG_FORMAT, DEFAULT_LOG_LEVEL

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = PACKAGE_DIR / 'data' / 'spatial_config.yaml'


@dataclass(frozen=True)
class SpatialConfig:
    """
    Library settings.

    Attributes
    ----------
    log_level : str
        Name of the logging level, e.g. ``"DEBUG"``.
    log_format : str
        ``logging`` format string.
    """
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT


def load_config(config_path: Optional[Union[str, Path]] = None) -> SpatialConfig:
    """
    Load the library configuration from a YAML file.

    Args:
        config_path: Path to YAML config. Defaults to the
            spatial/data/spatial_config.yaml file shipped with the package.

    Returns:
        SpatialConfig built from the file. Missing keys take their defaults;
        a missing file yields the default configuration.

    Raises:
        ValueError: If the document or its logging section is not a mapping,
            or the log level is unknown.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.debug(f"No configuration at {path}; using defaults")
        return SpatialConfig()

    logger.debug(f"Loading configuration from: {path}")
    with open(path, 'r') as f:
        raw = yaml.safe_load(f)

    if raw is None:
        return SpatialConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Configuration {path} must be a mapping, got {type(raw).__name__}")

    log_section = raw.get('logging') or {}
    if not isinstance(log_section, dict):
        raise ValueError(f"'logging' in {path} must be a mapping")

    level = str(log_section.get('level', DEFAULT_LOG_LEVEL)).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {level}")

    return SpatialConfig(
        log_level=level,
        log_format=str(log_section.get('format', DEFAULT_LOG_FORMAT)),
    )


def setup_logging(config: Optional[SpatialConfig] = None) -> None:
    """Configure the root logger from ``config`` (defaults if None)."""
    if config is None:
        config = SpatialConfig()

    logging.basicConfig(
        level=config.log_level,
        format=config.log_format,
    )
    logger.debug(f"Logging configured at {config.log_level}")
