"""
CompatLib Logging Configuration

Two logger trees are configured: ``compatlib`` for library activity and
``compatlib.diagnostics`` for the entries the diagnostics sink mirrors, which
get their own level and a compact console format. The root logger belongs to
the host and is left alone.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config import LoggingConfig, get_config

LIBRARY_LOGGER = "compatlib"
DIAGNOSTICS_LOGGER = "compatlib.diagnostics"


class StructuredFormatter(logging.Formatter):
    """Appends ``structured_data`` set by log_structured() to the message."""

    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, "structured_data"):
            record.msg = f"{record.msg} | Data: {record.structured_data}"
        return super().format(record)


def build_logging_config(
    logging_config: LoggingConfig,
    log_file: Optional[Path] = None,
    enable_structured: bool = True,
) -> Dict[str, Any]:
    """
    Build the dictConfig schema for CompatLib's loggers.

    Args:
        logging_config: Levels, log file and rotation settings
        log_file: Overrides ``logging_config.file_path`` when given
        enable_structured: Render structured data on console records

    Returns:
        Schema suitable for logging.config.dictConfig
    """
    if log_file is None and logging_config.file_path:
        log_file = Path(logging_config.file_path)

    console_formatter: Dict[str, Any] = {
        "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    }
    if enable_structured:
        console_formatter["()"] = StructuredFormatter

    schema: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": console_formatter,
            "diagnostics": {
                "format": "%(asctime)s [compat %(levelname)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "file": {
                "format": "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": sys.stdout,
            },
            "diagnostics": {
                "class": "logging.StreamHandler",
                "formatter": "diagnostics",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            LIBRARY_LOGGER: {
                "level": logging_config.level,
                "handlers": ["console"],
                "propagate": False,
            },
            DIAGNOSTICS_LOGGER: {
                "level": logging_config.diagnostics_level,
                "handlers": ["diagnostics"],
                "propagate": False,
            },
        },
    }

    if log_file:
        schema["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "file",
            "filename": str(log_file),
            "maxBytes": logging_config.max_file_size,
            "backupCount": logging_config.backup_count,
            "encoding": "utf-8",
        }
        for logger_config in schema["loggers"].values():
            logger_config["handlers"].append("file")

    return schema


def setup_logging(
    logging_config: Optional[LoggingConfig] = None,
    log_file: Optional[Path] = None,
    enable_structured: bool = True,
) -> Dict[str, Any]:
    """
    Apply CompatLib's logging configuration.

    Args:
        logging_config: Settings to apply (defaults to the global configuration)
        log_file: Overrides the configured log file
        enable_structured: Render structured data on console records

    Returns:
        The applied dictConfig schema
    """
    logging_config = logging_config or get_config().logging
    schema = build_logging_config(logging_config, log_file, enable_structured)

    if log_file or logging_config.file_path:
        Path(schema["handlers"]["file"]["filename"]).parent.mkdir(
            parents=True, exist_ok=True
        )

    logging.config.dictConfig(schema)
    return schema


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_structured(
    logger: logging.Logger, level: int, message: str, **structured_data: Any
) -> None:
    """
    Log a message carrying structured data for StructuredFormatter.

    Args:
        logger: Logger instance
        level: Logging level
        message: Log message
        **structured_data: Key/value data attached to the record
    """
    if not logger.isEnabledFor(level):
        return
    record = logger.makeRecord(logger.name, level, "", 0, message, (), None)
    record.structured_data = structured_data
    logger.handle(record)
