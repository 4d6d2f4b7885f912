"""
Hub Settings Management

Provides the HubConfig object that carries every hub authentication setting.
Setting names and their environment variable sources come from
settings_manifest.yaml, so no variable name is hardcoded outside the manifest.
"""
import os
import sys
import logging
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional, List, MutableMapping, Mapping

from pydantic import BaseModel

from .exceptions import SettingNotDefinedException

logger = logging.getLogger(__name__)

MASKED_VALUE = "***MASKED***"


@dataclass
class SettingDefinition:
    """Definition of a hub setting from the manifest."""
    name: str
    source: str
    secret: bool
    description: str
    exported: bool = False

    @property
    def env_var(self) -> str:
        """Name of the environment variable backing this setting."""
        source_type, source_param = self.source.split(':', 1)
        if source_type != 'env-var':
            raise ValueError(f"Unknown source type '{source_type}' for setting '{self.name}'")
        return source_param


# Global cache for the settings manifest
_settings_manifest: Optional[List[SettingDefinition]] = None


def _load_settings_manifest() -> List[SettingDefinition]:
    """Load and cache the settings manifest from YAML."""
    global _settings_manifest

    if _settings_manifest is not None:
        return _settings_manifest

    manifest_path = Path(__file__).parent / "settings_manifest.yaml"

    if not manifest_path.exists():
        raise FileNotFoundError(f"Settings manifest not found at {manifest_path}")

    try:
        with open(manifest_path, 'r') as f:
            manifest_data = yaml.safe_load(f)

        if not isinstance(manifest_data, dict) or 'settings' not in manifest_data:
            raise ValueError("Invalid manifest format: missing 'settings' key")

        settings_list = []
        for setting_data in manifest_data['settings']:
            settings_list.append(SettingDefinition(
                name=setting_data['name'],
                source=setting_data['source'],
                secret=setting_data.get('secret', False),
                description=setting_data.get('description', ''),
                exported=setting_data.get('exported', False)
            ))

        _settings_manifest = settings_list
        logger.debug(f"Loaded {len(settings_list)} settings from manifest")
        return _settings_manifest

    except Exception as e:
        raise RuntimeError(f"Failed to load settings manifest: {e}")


def get_setting_definition(name: str) -> SettingDefinition:
    """Look up a setting definition by its HubConfig field name.

    Raises:
        SettingNotDefinedException: If the name is not in the manifest
    """
    manifest = _load_settings_manifest()
    for setting in manifest:
        if setting.name == name:
            return setting
    raise SettingNotDefinedException(name, [s.name for s in manifest])


def get_env_var_name(name: str) -> str:
    """Get the environment variable a setting is read from."""
    return get_setting_definition(name).env_var


class HubConfig(BaseModel):
    """Hub authentication settings, populated once and passed explicitly.

    Unset and empty values are both represented as None.
    """
    jwt_client_id: Optional[str] = None
    hub_username: Optional[str] = None
    jwt_key: Optional[str] = None
    auth_url: Optional[str] = None
    hub_instance: Optional[str] = None
    home: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'HubConfig':
        """Create a HubConfig from environment variables.

        Args:
            environ: Mapping to read from, defaults to os.environ
        """
        if environ is None:
            environ = os.environ

        values: Dict[str, Any] = {}
        for setting in _load_settings_manifest():
            value = environ.get(setting.env_var)
            values[setting.name] = value if value else None
        return cls(**values)

    def to_env(self) -> Dict[str, str]:
        """Environment variables a later step needs to authenticate the same way.

        Only exported settings that have a value are included.
        """
        env: Dict[str, str] = {}
        for setting in _load_settings_manifest():
            if not setting.exported:
                continue
            value = getattr(self, setting.name)
            if value:
                env[setting.env_var] = value
        return env

    def export_env(self, environ: Optional[MutableMapping[str, str]] = None) -> Dict[str, str]:
        """Write exported settings into the environment and return what was written."""
        if environ is None:
            environ = os.environ
        env = self.to_env()
        environ.update(env)
        logger.debug(f"Exported hub settings to environment: {', '.join(sorted(env))}")
        return env

    def resolve_home(self) -> Path:
        """Home directory holding .sfdx, falling back to the user's home."""
        return Path(self.home) if self.home else Path.home()


def list_settings(config: HubConfig) -> List[Dict[str, Any]]:
    """
    List all hub settings with their metadata.

    Secret values are masked; unset values are reported as None.
    """
    settings_info = []
    for setting in _load_settings_manifest():
        value = getattr(config, setting.name)
        if value is not None and setting.secret:
            value = MASKED_VALUE
        settings_info.append({
            'name': setting.name,
            'value': value,
            'source': setting.source,
            'secret': setting.secret,
            'description': setting.description,
        })
    return settings_info


def print_settings_table(config: HubConfig, file=None):
    """
    Print a formatted table of hub settings to stderr (or specified file).
    """
    if file is None:
        file = sys.stderr

    print("\n" + "=" * 85, file=file)
    print("🔧 HUB SETTINGS", file=file)
    print("=" * 85, file=file)
    print(f"{'SETTING':<25} {'VALUE':<34} {'SOURCE':<24}", file=file)
    print("-" * 85, file=file)

    for setting in list_settings(config):
        display_value = str(setting['value']) if setting['value'] is not None else "<NOT SET>"
        if len(display_value) > 34:
            display_value = display_value[:31] + "..."
        print(f"{setting['name']:<25} {display_value:<34} {setting['source']:<24}", file=file)

    print("=" * 85, file=file)


def clear_cache():
    """Clear the cached manifest. Useful for testing."""
    global _settings_manifest
    _settings_manifest = None
