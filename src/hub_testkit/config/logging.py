"""
Centralized logging configuration.

Provides a bootstrap_logging function that task and test entry points call to
configure logging consistently, using Python's native INI format.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
PACKAGE_LOGGER = 'hub_testkit'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory, then in a
    config/ subdirectory.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    for candidate in (Path('logging.ini'), Path('config/logging.ini')):
        if candidate.exists():
            return candidate
    return None


def _setup_environment_variables():
    """
    Set LOG_LEVEL to INFO if not already set, so the INI file has a valid value.
    """
    if 'LOG_LEVEL' not in os.environ:
        os.environ['LOG_LEVEL'] = 'INFO'

    log_level = os.environ['LOG_LEVEL'].strip().upper()
    if log_level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using INFO", file=sys.stderr)
        os.environ['LOG_LEVEL'] = 'INFO'


def _apply_level_override():
    """Apply the LOG_LEVEL environment variable to the root and package loggers."""
    env_level = os.environ.get('LOG_LEVEL', '').strip().upper()
    if env_level not in VALID_LEVELS:
        return

    level = getattr(logging, env_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging configuration using Python's native INI format.

    This function:
    1. Sets up LOG_LEVEL for INI file substitution
    2. Loads logging.ini with logging.config.fileConfig() when one is found
    3. Applies the LOG_LEVEL environment variable override after loading

    Args:
        name: Optional name for the logger reporting the configuration
    """
    _setup_environment_variables()

    config_path = _find_logging_config()

    if config_path is None:
        logging.basicConfig(
            level=getattr(logging, os.environ['LOG_LEVEL'].strip().upper()),
            format='%(levelname)s: %(name)s: %(message)s',
            stream=sys.stderr
        )
        _apply_level_override()
        return

    try:
        logging.config.fileConfig(
            str(config_path),
            defaults={'LOG_LEVEL': os.environ['LOG_LEVEL'].strip().upper()},
            disable_existing_loggers=False
        )
    except Exception as e:
        print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        print("Using basic logging configuration", file=sys.stderr)
        logging.basicConfig(
            level=logging.INFO,
            format='%(levelname)s: %(name)s: %(message)s',
            stream=sys.stderr
        )

    _apply_level_override()

    logging.getLogger(name).debug(f"Logging configured from {config_path}")
