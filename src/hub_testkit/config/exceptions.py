"""
Exception classes with built-in guidance for hub configuration.
"""
import sys


class ConfigException(Exception):
    """Base exception for all configuration errors."""
    def __init__(self, message: str, error_type: str = None, variable_name: str = None,
                 username: str = None, file_path: str = None):
        super().__init__(message)
        self.error_type = error_type
        self.variable_name = variable_name
        self.username = username
        self.file_path = file_path
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            else:
                return executable
        return "unknown command"

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Configuration error: {self}
💡 Check your configuration and try again
"""


class MissingJwtKeyException(ConfigException):
    """Raised when a JWT key is needed but TESTKIT_JWT_KEY is not set."""
    def __init__(self, message: str = "env var TESTKIT_JWT_KEY is undefined", **kwargs):
        kwargs.setdefault('variable_name', 'TESTKIT_JWT_KEY')
        super().__init__(message, error_type="missing_jwt_key", **kwargs)

    def _generate_guidance(self):
        return f"""
❌ JWT key required but {self.variable_name} is not set
💡 Resolve this in one of the following ways:
   1. Export the private key contents: export {self.variable_name}="$(cat server.key)"
   2. Or unset TESTKIT_JWT_CLIENT_ID to authenticate with TESTKIT_AUTH_URL instead
"""


class HubAuthFileException(ConfigException):
    """Raised when an existing hub auth file cannot be reused."""
    def __init__(self, message: str, username: str, file_path: str = None, **kwargs):
        super().__init__(message, error_type="hub_auth_file", username=username,
                         file_path=file_path, **kwargs)

    def _generate_guidance(self):
        command = self._get_current_command()
        file_path = self.file_path or f"~/.sfdx/{self.username}.json"
        return f"""
❌ Unable to reuse existing hub '{self.username}': {self}
💡 Check {file_path}. The hub's auth file must contain either a privateKey
   naming a readable key file or a refreshToken.
   Resolve this in one of the following ways, then rerun: {command}
   1. Re-authenticate the hub: sfdx auth:web:login -u {self.username}
   2. Or provide credentials directly: export TESTKIT_AUTH_URL=<sfdx auth url>
   3. Or configure JWT: export TESTKIT_JWT_CLIENT_ID=<id> TESTKIT_JWT_KEY=<key>
"""


class SettingNotDefinedException(ConfigException):
    """Raised when a setting name is not defined in the settings manifest."""
    def __init__(self, setting_name: str, available_settings: list):
        self.setting_name = setting_name
        self.available_settings = available_settings
        super().__init__(
            f"Setting '{setting_name}' is not defined in the settings manifest. "
            f"Available settings: {', '.join(sorted(available_settings))}",
            error_type="setting_not_defined"
        )
