from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mbx.constants import DEFAULT_TABLE_HEIGHT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def normalize_log_level(value: str) -> str:
    """Return the upper-cased level name, or raise ValueError if unknown."""
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {value}")
    return level


class MbxConfig(BaseModel):
    """Settings read from `~/.mbx/mbx.yml`."""

    model_config = ConfigDict(extra="allow")
    api: Optional[str] = None
    usr: Optional[str] = None
    pwd: Optional[str] = None
    table_height: int = Field(default=DEFAULT_TABLE_HEIGHT, ge=1)
    log_level: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return normalize_log_level(v)
