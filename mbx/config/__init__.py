"""Client configuration.

Settings resolve in order: CLI flags, environment (`MBX_API`, `MBX_USR`,
`MBX_PWD`, also read from `.env`), the YAML config file, then defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from mbx.config.loader import load_config
from mbx.config.schema import normalize_log_level
from mbx.config.urls import ConfigError, normalize_api_url

__all__ = ["ClientConfig", "ConfigError", "load_env", "normalize_api_url", "resolve_config"]


def load_env() -> None:
    """Load `.env` from `MBX_ENV_PATH` or the working directory."""
    env_path = os.getenv("MBX_ENV_PATH")
    if env_path:
        load_dotenv(Path(env_path).expanduser())
    else:
        load_dotenv(Path.cwd() / ".env")


@dataclass(frozen=True)
class ClientConfig:
    """Resolved settings for one CLI invocation."""

    api: str
    usr: str = ""
    pwd: str = ""
    table_height: int = 10
    log_level: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.usr and self.pwd)


def _first(*values: Optional[str]) -> str:
    for value in values:
        if value:
            return value
    return ""


def resolve_config(
    api: Optional[str] = None,
    usr: Optional[str] = None,
    pwd: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> ClientConfig:
    """Merge flag values with environment and file settings.

    Raises:
        ConfigError: If no valid API URL can be resolved, the config file
            holds invalid values, or `MBX_LOG_LEVEL` is not a level name.
    """
    file_config = load_config(config_path)
    log_level = file_config.log_level
    env_level = os.getenv("MBX_LOG_LEVEL")
    if env_level:
        try:
            log_level = normalize_log_level(env_level)
        except ValueError as e:
            raise ConfigError(f"MBX_LOG_LEVEL: {e}") from e
    return ClientConfig(
        api=normalize_api_url(_first(api, os.getenv("MBX_API"), file_config.api)),
        usr=_first(usr, os.getenv("MBX_USR"), file_config.usr),
        pwd=_first(pwd, os.getenv("MBX_PWD"), file_config.pwd),
        table_height=file_config.table_height,
        log_level=log_level,
    )
