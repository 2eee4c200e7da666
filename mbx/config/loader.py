import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError

from mbx.config.schema import MbxConfig
from mbx.config.urls import ConfigError
from mbx.constants import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)


def _warn_unknown_keys(model: BaseModel, config_path: Path) -> None:
    if model.model_extra:
        logger.warning("Unknown keys in %s: %s", config_path, list(model.model_extra.keys()))


def default_config_path() -> Path:
    """Config file location, overridable with `MBX_CONFIG_PATH`."""
    return Path(os.getenv("MBX_CONFIG_PATH", DEFAULT_CONFIG_PATH)).expanduser()


def load_config(path: Optional[Path] = None) -> MbxConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the mbx.yml file (defaults to `default_config_path()`).

    Returns:
        The validated configuration model. Defaults when the file is missing
        or unreadable.

    Raises:
        ConfigError: If the file parses but holds invalid values.
    """
    if path is None:
        path = default_config_path()
    if not path.exists():
        return MbxConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to read config file %s: %s", path, e)
        return MbxConfig()

    if not isinstance(raw, dict):
        logger.warning("Ignoring config file %s: top level must be a mapping", path)
        return MbxConfig()

    try:
        model = MbxConfig.model_validate(raw)
    except ValidationError as e:
        errors = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise ConfigError(f"invalid config file {path}: {errors}") from e
    _warn_unknown_keys(model, path)
    return model
