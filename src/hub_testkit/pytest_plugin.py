"""
Pytest plugin that authenticates a dev hub for test sessions.

Tests that need an authenticated hub request the authenticated_hub fixture.
Settings come from TESTKIT_* environment variables; when no hub is configured,
or the configuration is incomplete, those tests are skipped with guidance.
"""

import logging
from pathlib import Path

import pytest

from hub_testkit.auth import AuthStrategy, ExternalToolError, get_auth_strategy, prepare_hub
from hub_testkit.config import ConfigException, HubConfig

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    """Add custom command line options for pytest."""
    parser.addoption(
        "--hub-home",
        action="store",
        default=None,
        help="Directory where hub credential files are written (default: a session temp dir)"
    )


@pytest.fixture(scope="function")
def hub_config():
    """Hub settings read from the current environment."""
    return HubConfig.from_env()


@pytest.fixture(scope="session")
def authenticated_hub(request, tmp_path_factory):
    """
    Authenticate the dev hub once per session and return the resolved HubConfig.

    Reused hubs have their credentials exported to the environment so
    subprocesses started by tests authenticate the same way.
    """
    hub_home = request.config.getoption("--hub-home")
    home_dir = Path(hub_home) if hub_home else tmp_path_factory.mktemp("hub")

    if get_auth_strategy(HubConfig.from_env()) == AuthStrategy.NONE:
        pytest.skip("Test requires a dev hub but none is configured. "
                    "Set TESTKIT_AUTH_URL, TESTKIT_HUB_USERNAME or the TESTKIT_JWT_* variables.")

    try:
        config = prepare_hub(home_dir)
    except ConfigException as e:
        pytest.skip(f"Test requires a dev hub but configuration is incomplete: {e.guidance}")
    except ExternalToolError as e:
        pytest.fail(f"Dev hub authentication failed: {e}", pytrace=False)

    logger.info(f"Dev hub ready: {config.hub_username or 'from auth url'}")
    return config
