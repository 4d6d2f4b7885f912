"""
Hub authentication strategy selection.
"""
from enum import Enum

from hub_testkit.config.settings import HubConfig


class AuthStrategy(str, Enum):
    """How the dev hub gets authenticated."""
    JWT = 'JWT'
    AUTH_URL = 'AUTH_URL'
    REUSE = 'REUSE'
    NONE = 'NONE'


def get_auth_strategy(config: HubConfig) -> AuthStrategy:
    """Pick the strategy for a hub configuration.

    Complete JWT inputs win over an auth url, and an auth url wins over
    reusing an existing login. A username alone means reuse.
    """
    if config.jwt_client_id and config.hub_username and config.jwt_key:
        return AuthStrategy.JWT
    if config.auth_url:
        return AuthStrategy.AUTH_URL
    if config.hub_username:
        return AuthStrategy.REUSE
    return AuthStrategy.NONE
