import pytest

import main as dev_kit_main
from config import Config
from errors import UserError


class _DummyConsole:
    def __init__(self):
        self.lines: list[str] = []

    def print(self, *args, **kwargs):  # noqa: ARG002
        self.lines.append(" ".join(str(a) for a in args))


def _setup_common(monkeypatch):
    calls = {"error": [], "info": [], "success": [], "warning": [], "logger": []}
    console = _DummyConsole()

    monkeypatch.setattr(dev_kit_main, "ensure_runtime_dirs", lambda create_logs=False: None)
    monkeypatch.setattr(dev_kit_main, "ensure_config", lambda: None)
    monkeypatch.setattr(
        dev_kit_main,
        "setup_logger",
        lambda log_to_console=False, command=None: calls["logger"].append((log_to_console, command)),
    )
    monkeypatch.setattr(dev_kit_main, "get_log_file_path", lambda: None)

    monkeypatch.setattr(
        dev_kit_main.terminal_ui,
        "print_error",
        lambda msg, title="Error": calls["error"].append((title, msg)),
    )
    monkeypatch.setattr(dev_kit_main.terminal_ui, "print_info", lambda msg: calls["info"].append(msg))
    monkeypatch.setattr(
        dev_kit_main.terminal_ui, "print_success", lambda msg: calls["success"].append(msg)
    )
    monkeypatch.setattr(
        dev_kit_main.terminal_ui, "print_warning", lambda msg: calls["warning"].append(msg)
    )
    monkeypatch.setattr(dev_kit_main.terminal_ui, "console", console)

    return calls, console


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        dev_kit_main.main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("dev-kit ")


def test_no_command_prints_help(monkeypatch, capsys) -> None:
    _setup_common(monkeypatch)
    assert dev_kit_main.main([]) == 0
    assert "usage: dev-kit" in capsys.readouterr().out


def test_init_arguments_are_forwarded(monkeypatch) -> None:
    _setup_common(monkeypatch)
    seen = {}

    async def fake_execute(self, agent_name=None, force=False, verify=False, yes=False):
        seen.update(agent=agent_name, force=force, verify=verify, yes=yes)

    monkeypatch.setattr(dev_kit_main.InitCommand, "execute", fake_execute)

    assert dev_kit_main.main(["init", "claude-code", "--force", "--verify", "-y"]) == 0
    assert seen == {"agent": "claude-code", "force": True, "verify": True, "yes": True}


def test_onboard_arguments_are_forwarded(monkeypatch) -> None:
    _setup_common(monkeypatch)
    seen = {}

    async def fake_execute(self, **kwargs):
        seen.update(kwargs)
        return True

    monkeypatch.setattr(dev_kit_main.OnboardCommand, "execute", fake_execute)

    assert dev_kit_main.main(["onboard", "--output", "json", "--section", "faq", "--no-pager"]) == 0
    assert seen == {
        "output": "json",
        "section": "faq",
        "open_browser": False,
        "update": False,
        "pager": False,
    }


def test_onboard_rejects_unknown_format(monkeypatch) -> None:
    _setup_common(monkeypatch)
    with pytest.raises(SystemExit) as excinfo:
        dev_kit_main.main(["onboard", "--output", "html"])
    assert excinfo.value.code == 2


def test_cli_error_exit_code(monkeypatch) -> None:
    calls, _ = _setup_common(monkeypatch)

    async def fake_execute(self, **kwargs):
        raise UserError("No agents detected", "Install a code agent and try again")

    monkeypatch.setattr(dev_kit_main.InitCommand, "execute", fake_execute)

    assert dev_kit_main.main(["init"]) == 1
    title, message = calls["error"][0]
    assert title == "User Error"
    assert "No agents detected" in message
    assert "Install a code agent" in message


def test_unexpected_error_is_wrapped(monkeypatch) -> None:
    calls, _ = _setup_common(monkeypatch)

    async def boom(registry=None):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(dev_kit_main, "detect_agents", boom)

    assert dev_kit_main.main(["detect"]) == 1
    assert calls["error"] == [("System Error", "unexpected")]


def test_keyboard_interrupt_exit_code(monkeypatch) -> None:
    calls, _ = _setup_common(monkeypatch)

    async def interrupted(registry=None):
        raise KeyboardInterrupt

    monkeypatch.setattr(dev_kit_main, "detect_agents", interrupted)

    assert dev_kit_main.main(["detect"]) == 130
    assert calls["warning"] == ["Interrupted"]


def test_invalid_config_is_reported(monkeypatch) -> None:
    calls, _ = _setup_common(monkeypatch)
    monkeypatch.setattr(Config, "TUI_THEME", "neon")

    assert dev_kit_main.main(["detect"]) == 1
    assert calls["error"][0][0] == "Configuration Error"
    assert "TUI_THEME" in calls["error"][0][1]


@pytest.mark.parametrize("flags, to_console", [(["-v"], False), (["--debug"], True)])
def test_logging_flags(monkeypatch, flags, to_console) -> None:
    calls, _ = _setup_common(monkeypatch)

    async def quiet(registry=None):
        return []

    monkeypatch.setattr(dev_kit_main, "detect_agents", quiet)

    assert dev_kit_main.main([*flags, "detect"]) == 0
    assert calls["logger"] == [(to_console, "detect")]


def test_logging_disabled_by_default(monkeypatch) -> None:
    calls, _ = _setup_common(monkeypatch)

    async def quiet(registry=None):
        return []

    monkeypatch.setattr(dev_kit_main, "detect_agents", quiet)

    dev_kit_main.main(["detect"])
    assert calls["logger"] == []


def test_detect_list_uninstall_end_to_end(home, monkeypatch) -> None:
    calls, console = _setup_common(monkeypatch)
    monkeypatch.setattr(Config, "PREFERRED_AGENTS", [])
    skill_dir = home / ".claude" / "skills" / "dev-kit-init"
    skill_dir.mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text("---\nname: dev-kit-init\n---\n")

    assert dev_kit_main.main(["detect"]) == 0
    assert calls["info"][-1].startswith("1 agent(s) detected")

    assert dev_kit_main.main(["list", "claude-code"]) == 0
    assert any("dev-kit-init" in line for line in console.lines)

    assert dev_kit_main.main(["uninstall", "claude-code", "dev-kit-init"]) == 0
    assert calls["success"] == ["Removed dev-kit-init from Claude Code"]
    assert not skill_dir.exists()

    assert dev_kit_main.main(["uninstall", "claude-code", "dev-kit-init"]) == 1
    assert dev_kit_main.main(["list", "opencode"]) == 1
    assert dev_kit_main.main(["list", "vim"]) == 1
