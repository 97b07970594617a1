"""Error hierarchy for dev-kit.

Every error raised towards the CLI is a ``CLIError``. It carries a short
machine-readable ``code`` and an optional ``suggestion`` shown to the user
below the message.
"""

from __future__ import annotations

from typing import Iterable, Optional

from utils import terminal_ui


class CLIError(Exception):
    """Base class for errors reported to the user."""

    def __init__(self, message: str, code: str = "CLI_ERROR", suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestion = suggestion

    def format_message(self) -> str:
        """Message plus suggestion, as printed by the CLI."""
        text = self.message
        if self.suggestion:
            text += f"\n\nSuggestion: {self.suggestion}"
        return text


class UserError(CLIError):
    """Error caused by user input or the user's environment."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message, "USER_ERROR", suggestion)


class DevKitSystemError(CLIError):
    """Unexpected failure inside dev-kit or the operating system."""

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message, "SYSTEM_ERROR", suggestion)
        self.cause = cause


class ValidationError(CLIError):
    """Input that failed validation, with the individual issues."""

    def __init__(self, message: str, issues: Iterable[str] = (), suggestion: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR", suggestion)
        self.issues = list(issues)

    def format_message(self) -> str:
        text = self.message
        if self.issues:
            text += "\n" + "\n".join(f"  - {issue}" for issue in self.issues)
        if self.suggestion:
            text += f"\n\nSuggestion: {self.suggestion}"
        return text


class AgentNotInstalledError(UserError):
    def __init__(self, agent: str, path: str):
        super().__init__(
            f"{agent} not detected at {path}",
            f"Install {agent} or verify installation path",
        )
        self.agent = agent
        self.path = path


class InvalidAgentError(UserError):
    def __init__(self, agent: str, supported: Iterable[str]):
        supported = list(supported)
        super().__init__(
            f'Agent "{agent}" is not supported',
            f"Supported agents: {', '.join(supported)}",
        )
        self.agent = agent
        self.supported = supported


class PermissionDeniedError(UserError):
    def __init__(self, operation: str, path: str):
        super().__init__(
            f"Permission denied: Cannot {operation} {path}",
            "Fix file permissions or run with appropriate privileges",
        )
        self.operation = operation
        self.path = path


class ConfigurationError(UserError):
    """Invalid value in ~/.dev-kit/config."""

    pass


class SkillInstallationError(DevKitSystemError):
    def __init__(
        self,
        skill: str,
        agent: str,
        cause: Optional[BaseException] = None,
        operation: str = "install",
    ):
        super().__init__(f'Failed to {operation} skill "{skill}" for {agent}', cause)
        self.skill = skill
        self.agent = agent


class MissingFileError(DevKitSystemError):
    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(f"File not found: {path}", cause)
        self.path = path


class SkillValidationError(ValidationError):
    def __init__(self, skill: str, issues: Iterable[str] = ()):
        super().__init__(f'Invalid skill structure for "{skill}"', issues)
        self.skill = skill


def to_cli_error(error: BaseException) -> CLIError:
    """Wrap any exception into a CLIError."""
    if isinstance(error, CLIError):
        return error
    if isinstance(error, PermissionError):
        return PermissionDeniedError("access", error.filename or "unknown path")
    if isinstance(error, FileNotFoundError):
        return MissingFileError(error.filename or str(error), error)
    return DevKitSystemError(str(error) or error.__class__.__name__, error)


def handle_error(error: BaseException) -> int:
    """Print an error for the user and return the process exit code."""
    cli_error = to_cli_error(error)
    terminal_ui.print_error(cli_error.format_message(), title=cli_error.code.replace("_", " ").title())
    return 1
