"""
Hub configuration: settings, logging and configuration errors.
"""

from .settings import HubConfig, list_settings, print_settings_table, get_env_var_name
from .exceptions import ConfigException, MissingJwtKeyException, HubAuthFileException
from .logging import bootstrap_logging

__all__ = [
    'HubConfig',
    'list_settings',
    'print_settings_table',
    'get_env_var_name',
    'ConfigException',
    'MissingJwtKeyException',
    'HubAuthFileException',
    'bootstrap_logging',
]
