"""
Configuration management for the tunes importer
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

# Environment variable overriding [logging].level
LOG_LEVEL_ENV = "TUNES_IMPORTER_LOG_LEVEL"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/tunes-importer/tunes-importer.log)
    )
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class ValidationConfig:
    """Configuration for known-value validation."""

    similarity_cutoff: float = 0.75  # Similar knowns must score strictly above this
    auto_fix_on_edit: bool = True  # Apply immediate fixes before committing edits

    def validate(self) -> None:
        """Validate validation configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if not 0.0 <= self.similarity_cutoff <= 1.0:
            raise ValueError(
                f"Invalid similarity_cutoff: {self.similarity_cutoff}. "
                "Must be between 0.0 and 1.0"
            )


@dataclass
class Config:
    """Main configuration object."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tunes-importer"
    return Path.home() / ".config" / "tunes-importer"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Current working directory
    2. XDG_CONFIG_HOME/tunes-importer (or ~/.config/tunes-importer)
    """
    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tunes-importer"
    return Path.home() / ".local" / "share" / "tunes-importer"


def get_log_file_path(config: Config) -> Path:
    """Resolve the log file path, honoring a custom [logging].log_file."""
    if config.logging.log_file:
        return Path(config.logging.log_file).expanduser()
    return get_data_dir() / "tunes-importer.log"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Tunes Importer Configuration

[logging]
# Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/tunes-importer/tunes-importer.log)
# log_file = "/path/to/custom/tunes-importer.log"

# Also output logs to console (useful for debugging)
console_output = false

[validation]
# Known values scoring strictly above this similarity (0.0 - 1.0) are
# reported as similar
similarity_cutoff = 0.75

# Apply immediate auto-fixes (e.g. casing) before committing a field edit
auto_fix_on_edit = true
""".strip()


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - TUNES_IMPORTER_LOG_LEVEL
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()
    config = Config()

    if config_path.exists():
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level),
                log_file=logging_data.get("log_file"),
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )

        if "validation" in toml_data:
            validation_data = toml_data["validation"]
            config.validation = ValidationConfig(
                similarity_cutoff=float(
                    validation_data.get(
                        "similarity_cutoff", config.validation.similarity_cutoff
                    )
                ),
                auto_fix_on_edit=validation_data.get(
                    "auto_fix_on_edit", config.validation.auto_fix_on_edit
                ),
            )
            config.validation.validate()
    else:
        logger.debug(f"No config file at {config_path}, using defaults")

    env_level = os.environ.get(LOG_LEVEL_ENV)
    if env_level:
        config.logging.level = env_level.upper()

    return config
