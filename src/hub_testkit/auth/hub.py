"""
Dev hub authentication for test sessions.

hub_auth authenticates a hub from a HubConfig using whichever strategy the
config supports. transfer_existing_auth turns a config that only names an
already-authenticated hub (the REUSE strategy) into one carrying JWT or auth
url credentials, so that later steps, including other processes that only see
the environment, authenticate the same way.
"""
import json
import logging
from pathlib import Path
from typing import MutableMapping, Optional, Union

from pydantic import ValidationError

from hub_testkit.config.exceptions import HubAuthFileException
from hub_testkit.config.settings import HubConfig
from .keys import format_jwt_key
from .models import AuthFile
from .sfdx import DEFAULT_INSTANCE_URL, Runner, jwt_grant, org_display, run_sfdx, sfdxurl_store
from .strategy import AuthStrategy, get_auth_strategy

logger = logging.getLogger(__name__)

JWT_KEY_FILENAME = 'jwtKey'
AUTH_URL_FILENAME = 'tmpUrl'


def hub_auth(home_dir: Union[str, Path], config: HubConfig,
             runner: Optional[Runner] = None) -> AuthStrategy:
    """
    Authenticate the dev hub described by config and make it the default hub.

    Args:
        home_dir: Test session directory where credential files are written
        config: Hub settings, already transferred if the hub is being reused
        runner: sfdx command runner, defaults to run_sfdx

    Returns:
        The strategy that was used. REUSE and NONE do nothing.

    Raises:
        MissingJwtKeyException: If the JWT key cannot be formatted
        ExternalToolError: If the sfdx command fails
    """
    runner = runner or run_sfdx
    home_dir = Path(home_dir)
    strategy = get_auth_strategy(config)

    if strategy == AuthStrategy.JWT:
        logger.debug("trying jwt auth")
        jwt_key = home_dir / JWT_KEY_FILENAME
        jwt_key.write_text(format_jwt_key(config))
        jwt_key.chmod(0o600)

        jwt_grant(
            config.hub_username,
            config.jwt_client_id,
            jwt_key,
            config.hub_instance or DEFAULT_INSTANCE_URL,
            runner=runner,
        )
        logger.info(f"Authenticated hub {config.hub_username} with JWT")
        return strategy

    if strategy == AuthStrategy.AUTH_URL:
        logger.debug("trying to authenticate with AuthUrl")
        tmp_url = home_dir / AUTH_URL_FILENAME
        tmp_url.write_text(config.auth_url)

        result = sfdxurl_store(tmp_url, runner=runner)
        logger.debug(result.stdout)
        logger.info("Authenticated hub with auth url")
        return strategy

    logger.debug("no hub configured")
    return strategy


def get_auth_file_path(config: HubConfig) -> Path:
    """Location of the sfdx auth file for the configured hub username."""
    return config.resolve_home() / '.sfdx' / f"{config.hub_username}.json"


def read_auth_file(config: HubConfig) -> AuthFile:
    """
    Read the sfdx auth record for the configured hub username.

    Raises:
        HubAuthFileException: If the file is missing or is not a valid auth record
    """
    auth_file_path = get_auth_file_path(config)
    logger.debug(f"reading {auth_file_path.name}")

    if not auth_file_path.exists():
        raise HubAuthFileException(
            f"Unable to reuse existing hub {config.hub_username}. "
            f"Auth file {auth_file_path} not found",
            username=config.hub_username,
            file_path=str(auth_file_path),
        )

    try:
        with open(auth_file_path, 'r') as f:
            return AuthFile.model_validate(json.load(f))
    except (json.JSONDecodeError, ValidationError) as e:
        raise HubAuthFileException(
            f"Unable to reuse existing hub {config.hub_username}. "
            f"Check file {auth_file_path.name}: {e}",
            username=config.hub_username,
            file_path=str(auth_file_path),
        )


def transfer_existing_auth(config: HubConfig, runner: Optional[Runner] = None) -> HubConfig:
    """
    Resolve a REUSE config into JWT or auth url credentials.

    Configs with any other strategy are returned unchanged.

    Returns:
        A new HubConfig with jwt_key, jwt_client_id and hub_instance set when the
        existing auth used JWT, or with auth_url set when it used a refresh token.

    Raises:
        HubAuthFileException: If the auth file cannot be used to re-authenticate
        ExternalToolError: If sfdx force:org:display fails
    """
    if get_auth_strategy(config) != AuthStrategy.REUSE:
        return config

    runner = runner or run_sfdx
    auth_file = read_auth_file(config)
    auth_file_path = get_auth_file_path(config)

    if auth_file.private_key:
        logger.debug("copying variables from AuthFile for JWT")
        try:
            jwt_key = Path(auth_file.private_key).read_text(encoding='utf-8')
        except OSError as e:
            raise HubAuthFileException(
                f"Unable to reuse existing hub {config.hub_username}. "
                f"Cannot read private key file {auth_file.private_key}: {e.strerror or e}",
                username=config.hub_username,
                file_path=auth_file.private_key,
            )
        transferred = config.model_copy(update={
            'jwt_key': jwt_key,
            'jwt_client_id': auth_file.client_id,
            'hub_instance': auth_file.instance_url,
        })
    elif auth_file.refresh_token:
        logger.debug("copying variables from org:display for AuthUrl")
        display = org_display(config.hub_username, runner=runner)
        logger.debug(f"found auth url: {display.result.sfdx_auth_url is not None}")
        transferred = config.model_copy(update={'auth_url': display.result.sfdx_auth_url})
    else:
        raise HubAuthFileException(
            f"Unable to reuse existing hub {config.hub_username}.  Check file {auth_file_path.name}",
            username=config.hub_username,
            file_path=str(auth_file_path),
        )

    if get_auth_strategy(transferred) == AuthStrategy.REUSE:
        raise HubAuthFileException(
            f"Unable to reuse existing hub {config.hub_username}. "
            f"File {auth_file_path.name} did not provide complete credentials",
            username=config.hub_username,
            file_path=str(auth_file_path),
        )

    logger.info(f"Reusing hub {config.hub_username} via {get_auth_strategy(transferred).value}")
    return transferred


def transfer_existing_auth_to_env(environ: Optional[MutableMapping[str, str]] = None,
                                  runner: Optional[Runner] = None) -> HubConfig:
    """
    Load hub settings from the environment, transfer an existing hub's auth,
    and write the republished variables back to the environment.

    Returns:
        The resolved HubConfig
    """
    config = HubConfig.from_env(environ)
    transferred = transfer_existing_auth(config, runner=runner)
    if transferred is not config:
        transferred.export_env(environ)
    return transferred


def prepare_hub(home_dir: Union[str, Path], config: Optional[HubConfig] = None,
                runner: Optional[Runner] = None,
                environ: Optional[MutableMapping[str, str]] = None) -> HubConfig:
    """
    Transfer (when reusing) and authenticate the dev hub in one step.

    When config is not given it is loaded from the environment and the
    transferred settings are exported back to it.

    Returns:
        The resolved HubConfig that was used to authenticate
    """
    if config is None:
        config = transfer_existing_auth_to_env(environ, runner=runner)
    else:
        config = transfer_existing_auth(config, runner=runner)
    hub_auth(home_dir, config, runner=runner)
    return config
