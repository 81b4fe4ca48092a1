"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging setup (Loguru)
"""

# Configuration
from .config import (
    Config,
    LoggingConfig,
    ValidationConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    create_default_config,
)

# Output
from .output import setup_loguru, log

__all__ = [
    # Config
    "Config",
    "LoggingConfig",
    "ValidationConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "create_default_config",
    # Output
    "setup_loguru",
    "log",
]
