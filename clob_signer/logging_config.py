"""
Logging configuration for the CLOB signing client.

Provides structured logging for production use. Every handler carries the
credential redaction filter.
"""

import copy
import logging
import logging.config
from typing import Optional

from .config import get_settings


DEFAULT_LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "redact_credentials": {
            "()": "clob_signer.utils.structured_logging.CredentialRedactionFilter"
        }
    },
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S"
        },
        "detailed": {
            "format": (
                "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d "
                "- %(message)s (%(funcName)s)"
            ),
            "datefmt": "%Y-%m-%d %H:%M:%S"
        },
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s"
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "standard",
            "filters": ["redact_credentials"],
            "stream": "ext://sys.stdout"
        }
    },
    "loggers": {
        "clob_signer": {
            "level": "INFO",
            "handlers": ["console"],
            "propagate": False
        }
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"]
    }
}


def build_logging_config(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    json_format: bool = False
) -> dict:
    """
    Build a dictConfig mapping.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path (rotating, plus an _errors file)
        json_format: Use JSON formatting

    Returns:
        Config dict for logging.config.dictConfig
    """
    config = copy.deepcopy(DEFAULT_LOGGING_CONFIG)
    package_logger = config["loggers"]["clob_signer"]

    if level:
        package_logger["level"] = level.upper()

    if log_file:
        error_file = log_file.replace(".log", "_errors.log")
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filters": ["redact_credentials"],
            "filename": log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5
        }
        config["handlers"]["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filters": ["redact_credentials"],
            "filename": error_file,
            "maxBytes": 10485760,
            "backupCount": 5
        }
        package_logger["handlers"] = ["console", "file", "error_file"]

    if json_format:
        for handler in config["handlers"].values():
            handler["formatter"] = "json"

    return config


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    json_format: bool = False
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Log level (default: POLYMARKET_LOG_LEVEL)
        log_file: Optional log file path
        json_format: Use JSON formatting
    """
    if level is None:
        level = get_settings().log_level
    logging.config.dictConfig(build_logging_config(level, log_file, json_format))


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(f"clob_signer.{name}")
