from errors import (
    AgentNotInstalledError,
    CLIError,
    ConfigurationError,
    DevKitSystemError,
    InvalidAgentError,
    MissingFileError,
    PermissionDeniedError,
    SkillInstallationError,
    SkillValidationError,
    UserError,
    ValidationError,
    handle_error,
    to_cli_error,
)
from utils import terminal_ui


def test_cli_error_format_includes_suggestion() -> None:
    err = CLIError("Something broke", "CUSTOM", "Try again")
    assert err.code == "CUSTOM"
    assert err.format_message() == "Something broke\n\nSuggestion: Try again"


def test_cli_error_format_without_suggestion() -> None:
    assert CLIError("plain").format_message() == "plain"


def test_error_codes_by_family() -> None:
    assert UserError("x").code == "USER_ERROR"
    assert DevKitSystemError("x").code == "SYSTEM_ERROR"
    assert ValidationError("x").code == "VALIDATION_ERROR"
    assert isinstance(ConfigurationError("bad"), UserError)
    assert isinstance(SkillInstallationError("s", "a"), DevKitSystemError)
    assert isinstance(MissingFileError("/p"), DevKitSystemError)
    assert isinstance(SkillValidationError("s"), ValidationError)


def test_agent_not_installed_message() -> None:
    err = AgentNotInstalledError("Claude Code", "/home/u/.claude/skills")
    assert err.message == "Claude Code not detected at /home/u/.claude/skills"
    assert err.suggestion == "Install Claude Code or verify installation path"


def test_invalid_agent_lists_supported() -> None:
    err = InvalidAgentError("vim", ["claude-code", "cursor"])
    assert err.message == 'Agent "vim" is not supported'
    assert err.suggestion == "Supported agents: claude-code, cursor"


def test_permission_denied_message() -> None:
    err = PermissionDeniedError("write", "/x")
    assert err.message == "Permission denied: Cannot write /x"
    assert "permissions" in err.suggestion


def test_system_error_keeps_cause() -> None:
    cause = OSError("disk full")
    err = SkillInstallationError("dev-kit-init", "Cursor", cause)
    assert err.cause is cause
    assert err.message == 'Failed to install skill "dev-kit-init" for Cursor'


def test_validation_error_lists_issues() -> None:
    err = SkillValidationError("demo", ["frontmatter: missing", "files: SKILL.md"])
    text = err.format_message()
    assert text.startswith('Invalid skill structure for "demo"')
    assert "  - frontmatter: missing" in text
    assert "  - files: SKILL.md" in text


def test_to_cli_error_wraps_foreign_exceptions() -> None:
    user = UserError("keep me")
    assert to_cli_error(user) is user

    denied = to_cli_error(PermissionError(13, "Permission denied", "/root/x"))
    assert isinstance(denied, PermissionDeniedError)
    assert denied.path == "/root/x"

    missing = to_cli_error(FileNotFoundError(2, "No such file", "/nope"))
    assert isinstance(missing, MissingFileError)

    other = to_cli_error(RuntimeError("boom"))
    assert isinstance(other, DevKitSystemError)
    assert other.message == "boom"
    assert isinstance(other.cause, RuntimeError)


def test_handle_error_prints_and_returns_exit_code(monkeypatch) -> None:
    printed = []
    monkeypatch.setattr(
        terminal_ui, "print_error", lambda msg, title="Error": printed.append((title, msg))
    )

    assert handle_error(UserError("bad input", "fix it")) == 1
    assert printed == [("User Error", "bad input\n\nSuggestion: fix it")]
