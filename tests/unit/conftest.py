"""
Unit test fixtures for hub-testkit.

Every test starts from an environment with no TESTKIT_* variables and a
HOME pointing at a temporary directory, so a developer's real sfdx auth
files are never read.
"""

import json
import subprocess
from unittest.mock import MagicMock

import pytest

from hub_testkit.config.settings import clear_cache

TESTKIT_VARS = [
    'TESTKIT_JWT_CLIENT_ID',
    'TESTKIT_HUB_USERNAME',
    'TESTKIT_JWT_KEY',
    'TESTKIT_AUTH_URL',
    'TESTKIT_HUB_INSTANCE',
]

HUB_USERNAME = 'hub@example.com'


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Remove hub variables and point HOME at an empty temp directory."""
    for name in TESTKIT_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setenv('HOME', str(home))
    clear_cache()
    yield home
    clear_cache()


@pytest.fixture
def home_dir(clean_env):
    """The temporary HOME directory."""
    return clean_env


@pytest.fixture
def session_dir(tmp_path):
    """Directory where credential files get written."""
    path = tmp_path / 'session'
    path.mkdir()
    return path


def _completed(stdout='', returncode=0, stderr=''):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def completed():
    """Factory for CompletedProcess results like subprocess.run returns."""
    return _completed


@pytest.fixture
def runner():
    """A stand-in for run_sfdx that succeeds with empty output."""
    return MagicMock(return_value=_completed())


@pytest.fixture
def write_auth_file(home_dir):
    """Write ~/.sfdx/<username>.json with the given contents and return its path."""
    def _write(contents, username=HUB_USERNAME):
        sfdx_dir = home_dir / '.sfdx'
        sfdx_dir.mkdir(exist_ok=True)
        auth_file = sfdx_dir / f'{username}.json'
        auth_file.write_text(json.dumps(contents))
        return auth_file
    return _write
