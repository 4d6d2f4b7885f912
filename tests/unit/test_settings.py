"""Tests for HubConfig loading, export and display."""

import io

import pytest

from hub_testkit.config.exceptions import SettingNotDefinedException
from hub_testkit.config.settings import (
    MASKED_VALUE,
    HubConfig,
    get_env_var_name,
    list_settings,
    print_settings_table,
)


def test_from_env_reads_manifest_variables(monkeypatch, home_dir):
    monkeypatch.setenv('TESTKIT_JWT_CLIENT_ID', 'client')
    monkeypatch.setenv('TESTKIT_HUB_USERNAME', 'hub@example.com')
    monkeypatch.setenv('TESTKIT_HUB_INSTANCE', 'https://test.salesforce.com')

    config = HubConfig.from_env()

    assert config.jwt_client_id == 'client'
    assert config.hub_username == 'hub@example.com'
    assert config.hub_instance == 'https://test.salesforce.com'
    assert config.jwt_key is None
    assert config.auth_url is None
    assert config.home == str(home_dir)


def test_from_env_accepts_explicit_mapping():
    config = HubConfig.from_env({'TESTKIT_AUTH_URL': 'force://token@example.com', 'TESTKIT_JWT_KEY': ''})

    assert config.auth_url == 'force://token@example.com'
    assert config.jwt_key is None
    assert config.home is None


def test_to_env_only_includes_exported_values():
    config = HubConfig(
        hub_username='hub@example.com',
        jwt_client_id='client',
        jwt_key='key',
        home='/home/ci',
    )

    assert config.to_env() == {
        'TESTKIT_JWT_CLIENT_ID': 'client',
        'TESTKIT_JWT_KEY': 'key',
    }


def test_export_env_updates_mapping():
    environ = {'TESTKIT_HUB_USERNAME': 'hub@example.com'}

    written = HubConfig(auth_url='force://token@example.com').export_env(environ)

    assert written == {'TESTKIT_AUTH_URL': 'force://token@example.com'}
    assert environ == {
        'TESTKIT_HUB_USERNAME': 'hub@example.com',
        'TESTKIT_AUTH_URL': 'force://token@example.com',
    }


def test_resolve_home_falls_back_to_user_home(monkeypatch, tmp_path):
    monkeypatch.setattr('pathlib.Path.home', lambda: tmp_path)

    assert HubConfig().resolve_home() == tmp_path
    assert HubConfig(home='/home/ci').resolve_home().as_posix() == '/home/ci'


def test_env_var_names_come_from_manifest():
    assert get_env_var_name('jwt_key') == 'TESTKIT_JWT_KEY'
    assert get_env_var_name('home') == 'HOME'

    with pytest.raises(SettingNotDefinedException) as exc_info:
        get_env_var_name('project_id')
    assert 'jwt_key' in str(exc_info.value)


def test_list_settings_masks_secrets():
    config = HubConfig(jwt_key='secret-key', auth_url='force://secret', hub_username='hub@example.com')

    settings = {s['name']: s for s in list_settings(config)}

    assert settings['jwt_key']['value'] == MASKED_VALUE
    assert settings['auth_url']['value'] == MASKED_VALUE
    assert settings['hub_username']['value'] == 'hub@example.com'
    assert settings['jwt_client_id']['value'] is None


def test_print_settings_table_never_shows_secrets():
    out = io.StringIO()

    print_settings_table(HubConfig(jwt_key='secret-key', hub_username='hub@example.com'), file=out)

    table = out.getvalue()
    assert 'secret-key' not in table
    assert 'hub@example.com' in table
    assert '<NOT SET>' in table
