"""Constants used across mbx.

This module defines shared constants to ensure consistency.
"""

# Remote list endpoint page size (fixed server side)
BATCH_SIZE = 20

# Per-field character limits for the compose form
FROM_MAX_LEN = 32
SUBJECT_MAX_LEN = 64
MESSAGE_MAX_LEN = 10000

# Browse table layout
DEFAULT_TABLE_HEIGHT = 10
TABLE_COLUMNS: tuple[tuple[str, int], ...] = (
    ("ID", 5),
    ("From", 15),
    ("Subject", 15),
    ("Message", 30),
)

# Config/env locations
DEFAULT_CONFIG_PATH = "~/.mbx/mbx.yml"
DEFAULT_LOG_PATH = "~/.mbx/logs/mbx.log"
