"""
Dev hub authentication for test sessions.
"""

from .strategy import AuthStrategy, get_auth_strategy
from .keys import format_jwt_key
from .hub import hub_auth, transfer_existing_auth, transfer_existing_auth_to_env, prepare_hub
from .exceptions import AuthError, ExternalToolError

__all__ = [
    'AuthStrategy',
    'get_auth_strategy',
    'format_jwt_key',
    'hub_auth',
    'transfer_existing_auth',
    'transfer_existing_auth_to_env',
    'prepare_hub',
    'AuthError',
    'ExternalToolError',
]
