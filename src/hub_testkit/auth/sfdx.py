"""
Thin wrappers around the sfdx CLI commands used for hub authentication.

Every command runs synchronously without a shell. A nonzero exit raises
ExternalToolError with the captured output.
"""
import json
import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Union

from pydantic import ValidationError

from .exceptions import ExternalToolError
from .models import OrgDisplayResult

logger = logging.getLogger(__name__)

SFDX_EXECUTABLE = 'sfdx'
DEFAULT_INSTANCE_URL = 'https://login.salesforce.com'

Runner = Callable[[List[str]], subprocess.CompletedProcess]


def run_sfdx(args: List[str]) -> subprocess.CompletedProcess:
    """
    Run an sfdx command and return the completed process.

    Args:
        args: Arguments after the executable name

    Raises:
        ExternalToolError: If sfdx is missing or exits nonzero
    """
    cmd = [SFDX_EXECUTABLE, *args]
    logger.debug(f"Running: {' '.join(cmd[:2])}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise ExternalToolError(cmd, 127, stderr=str(e))

    if result.returncode != 0:
        raise ExternalToolError(cmd, result.returncode, stderr=result.stderr, stdout=result.stdout)
    return result


def jwt_grant(username: str, client_id: str, key_file: Union[str, Path],
              instance_url: str = DEFAULT_INSTANCE_URL,
              runner: Runner = run_sfdx) -> subprocess.CompletedProcess:
    """Authenticate a hub with a JWT grant and set it as the default hub."""
    return runner([
        'auth:jwt:grant', '-d',
        '-u', username,
        '-i', client_id,
        '-f', str(key_file),
        '-r', instance_url,
    ])


def sfdxurl_store(url_file: Union[str, Path],
                  runner: Runner = run_sfdx) -> subprocess.CompletedProcess:
    """Authenticate a hub from a file holding an sfdx auth url and set it as the default hub."""
    return runner(['auth:sfdxurl:store', '-d', '-f', str(url_file)])


def org_display(username: str, runner: Runner = run_sfdx) -> OrgDisplayResult:
    """
    Fetch verbose org details, including the sfdx auth url.

    Raises:
        ExternalToolError: If the command fails or its output is not the expected JSON
    """
    args = ['force:org:display', '-u', username, '--verbose', '--json']
    result = runner(args)
    try:
        return OrgDisplayResult.model_validate(json.loads(result.stdout))
    except (TypeError, json.JSONDecodeError, ValidationError) as e:
        raise ExternalToolError(
            [SFDX_EXECUTABLE, *args], result.returncode, stderr=result.stderr, stdout=result.stdout,
            message=f"Unexpected output from sfdx force:org:display for {username}: {e}"
        )
