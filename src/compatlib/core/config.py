"""
CompatLib Configuration Management

Provides centralized configuration with validation and environment support.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    file_path: Optional[str] = Field(default=None, description="Log file path")
    max_file_size: int = Field(
        default=10_000_000, description="Max log file size in bytes"
    )
    backup_count: int = Field(default=5, description="Number of backup log files")
    diagnostics_level: str = Field(
        default="INFO", description="Level for mirrored diagnostics entries"
    )

    @field_validator("level", "diagnostics_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


class DiagnosticsConfig(BaseModel):
    """Diagnostics sink configuration."""

    export_path: Optional[str] = Field(
        default=None, description="Default destination for JSON log exports"
    )
    mirror_to_logger: bool = Field(
        default=True, description="Echo diagnostics entries to the Python logger"
    )


class EngineConfig(BaseModel):
    """Compatibility engine configuration."""

    guard_dependency_cycles: bool = Field(
        default=True,
        description="Stop dependency recursion that re-enters an in-progress target",
    )


class CompatLibConfig(BaseSettings):
    """Main CompatLib configuration."""

    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)

    # Operator overrides: target id -> preferred handler description
    overrides: Dict[str, str] = Field(default_factory=dict)

    model_config = SettingsConfigDict(
        env_prefix="COMPATLIB_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("overrides")
    @classmethod
    def validate_overrides(cls, v: Dict[str, str]) -> Dict[str, str]:
        for target_id in v:
            if not target_id.strip():
                raise ValueError("Override target id must not be blank")
        return v


# Global configuration instance
_config: Optional[CompatLibConfig] = None


def get_config() -> CompatLibConfig:
    """
    Get the global configuration instance.

    Returns:
        The global CompatLibConfig instance
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def load_config(config_file: Optional[Path] = None) -> CompatLibConfig:
    """
    Load configuration from an env file and environment variables.

    Args:
        config_file: Optional path to a .env style configuration file

    Returns:
        Loaded configuration instance
    """
    if config_file and config_file.exists():
        return CompatLibConfig(_env_file=str(config_file))

    return CompatLibConfig()


def reload_config(config_file: Optional[Path] = None) -> CompatLibConfig:
    """
    Reload the global configuration.

    Args:
        config_file: Optional path to configuration file

    Returns:
        Reloaded configuration instance
    """
    global _config
    _config = load_config(config_file)
    return _config


def update_config(**kwargs: Any) -> None:
    """
    Update configuration values at runtime.

    Args:
        **kwargs: Configuration values to update
    """
    global _config
    if _config is None:
        _config = load_config()

    for key, value in kwargs.items():
        if hasattr(_config, key):
            setattr(_config, key, value)
        else:
            raise ConfigurationError(f"Unknown configuration key: {key}")


def get_export_path() -> Optional[Path]:
    """
    Get the configured diagnostics export path, if any.

    Returns:
        Path for JSON log exports or None
    """
    export_path = get_config().diagnostics.export_path
    return Path(export_path) if export_path else None
