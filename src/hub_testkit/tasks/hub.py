"""Hub authentication tasks - authenticate, transfer and inspect dev hub settings.

All tasks read their settings from TESTKIT_* environment variables.
"""

import shlex
import sys
from pathlib import Path
from invoke import task

from hub_testkit.auth import AuthStrategy, ExternalToolError, get_auth_strategy, prepare_hub, transfer_existing_auth
from hub_testkit.config import ConfigException, HubConfig, bootstrap_logging, print_settings_table


def _bootstrap(debug):
    if debug:
        import os
        os.environ['LOG_LEVEL'] = 'DEBUG'
    bootstrap_logging()


@task(help={
    'home_dir': 'Directory where temporary credential files are written (default: current directory)',
    'debug': 'Enable debug logging (sets LOG_LEVEL=DEBUG)'
})
def hub_auth(ctx, home_dir=None, debug=False):
    """
    Authenticate the dev hub and set it as the default hub.

    Reuses an already-authenticated hub when only TESTKIT_HUB_USERNAME is set.

    Examples:
        invoke hub-auth --home-dir=/tmp/session
        TESTKIT_AUTH_URL=force://... invoke hub-auth
    """
    _bootstrap(debug)
    home = Path(home_dir) if home_dir else Path.cwd()

    try:
        config = HubConfig.from_env()
        print(f"🔑 Authenticating hub using: {get_auth_strategy(config).value}", file=sys.stderr)
        config = prepare_hub(home, config)
    except ConfigException as e:
        print(e.guidance, file=sys.stderr)
        sys.exit(1)
    except ExternalToolError as e:
        print(f"❌ Hub authentication failed: {e}", file=sys.stderr)
        sys.exit(1)

    strategy = get_auth_strategy(config)
    if strategy == AuthStrategy.NONE:
        print("⚠️  No hub configured", file=sys.stderr)
    else:
        print(f"✅ Hub authenticated with {strategy.value}", file=sys.stderr)
    return True


@task(help={
    'debug': 'Enable debug logging (sets LOG_LEVEL=DEBUG)'
})
def hub_transfer(ctx, debug=False):
    """
    Print export lines that let later steps authenticate like an existing hub.

    Values go to stdout so the output can be evaluated by a shell.

    Examples:
        eval "$(invoke hub-transfer)"
    """
    _bootstrap(debug)

    try:
        config = HubConfig.from_env()
        transferred = transfer_existing_auth(config)
    except ConfigException as e:
        print(e.guidance, file=sys.stderr)
        sys.exit(1)
    except ExternalToolError as e:
        print(f"❌ Hub transfer failed: {e}", file=sys.stderr)
        sys.exit(1)

    if transferred is config:
        print(f"ℹ️  Nothing to transfer (strategy: {get_auth_strategy(config).value})", file=sys.stderr)
        return True

    for name, value in transferred.to_env().items():
        print(f"export {name}={shlex.quote(value)}")
    print(f"✅ Transferred hub {config.hub_username}", file=sys.stderr)
    return True


@task
def hub_strategy(ctx):
    """Print the authentication strategy the current environment resolves to."""
    print(get_auth_strategy(HubConfig.from_env()).value)


@task
def hub_settings(ctx):
    """Print hub settings read from the environment, with secrets masked."""
    print_settings_table(HubConfig.from_env())
