"""
Custom exceptions for the hub authentication module.
"""
from typing import List, Optional


class AuthError(Exception):
    """Base exception for all hub authentication errors."""
    pass


class ExternalToolError(AuthError):
    """Raised when an external CLI command exits with a nonzero status."""

    def __init__(self, command: List[str], exit_code: int, stderr: str = "",
                 stdout: str = "", message: Optional[str] = None):
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr or ""
        self.stdout = stdout or ""
        if message is None:
            message = f"Command '{' '.join(self.command)}' failed with exit code {exit_code}"
            detail = self.stderr.strip() or self.stdout.strip()
            if detail:
                message += f": {detail}"
        super().__init__(message)
