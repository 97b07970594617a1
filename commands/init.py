"""`dev-kit init`: install the dev-kit skills for an agent."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from pathlib import Path

import aiofiles.os

from agents import AgentRegistry, BaseAgent, create_agent_registry
from config import Config
from errors import AgentNotInstalledError, CLIError, UserError
from installer import InstallOptions
from skills import load_dev_kit_skills
from utils import get_logger, terminal_ui
from utils.runtime import PROJECT_SUBDIRS, get_project_dir

logger = get_logger(__name__)

AGENT_INSTALL_HINTS = [
    ("Claude Code", "https://code.claude.com"),
    ("GitHub Copilot", "https://github.com/features/copilot"),
]


@dataclass
class InitReport:
    agent: str
    installed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    cancelled: bool = False
    duration: float = 0.0


class InitCommand:
    """Install the bundled skills into one agent and prepare ./.dev-kit."""

    def __init__(self, registry: AgentRegistry | None = None, cwd: str | None = None):
        self.registry = registry or create_agent_registry()
        self.cwd = cwd or os.getcwd()

    async def execute(
        self,
        agent_name: str | None = None,
        force: bool = False,
        verify: bool = False,
        yes: bool = False,
    ) -> InitReport:
        started = time.monotonic()
        yes = yes or not Config.CONFIRM_BEFORE_INSTALL

        if not agent_name:
            agent_name = await self.select_agent()

        agent = self.registry.get_or_raise(agent_name.strip().lower())
        if not agent.supported:
            raise CLIError(
                f"Cannot initialize dev-kit for {agent.display_name}",
                "SYSTEM_ERROR",
                agent.unsupported_reason,
            )
        if not await agent.detect():
            raise AgentNotInstalledError(agent.display_name, str(agent.skill_path))

        terminal_ui.print_header("dev-kit init", f"Installing workflow skills for {agent.display_name}")
        terminal_ui.print_success(f"{agent.display_name} detected at {agent.skill_path}")
        logger.info(f"Initializing dev-kit for {agent.name.value}")

        await self.create_project_dirs()

        skills = await load_dev_kit_skills()
        terminal_ui.print_info(f"Found {len(skills)} dev-kit skills to install")

        report = InitReport(agent=agent.name.value)
        installed = set(await agent.get_installed_skills())
        conflicts = [s.name for s in skills if s.name in installed]
        if conflicts and not force:
            terminal_ui.print_warning(
                f"The following skills are already installed: {', '.join(conflicts)}"
            )
            terminal_ui.print_info("Use --force to overwrite existing skills")
            if not yes:
                if terminal_ui.confirm("Skip existing skills and install only new ones?", default=False):
                    terminal_ui.print_info("Skipping existing skills...")
                    skills = [s for s in skills if s.name not in installed]
                    report.skipped.extend(conflicts)
                else:
                    terminal_ui.print_info("Installation cancelled")
                    report.cancelled = True
                    return report

        await self._install_skills(agent, skills, report, force=force, verify=verify)
        report.duration = time.monotonic() - started

        if report.failed:
            terminal_ui.print_error(
                f"Installed: {len(report.installed)}  Skipped: {len(report.skipped)}  "
                f"Failed: {len(report.failed)}",
                title=f"Installation completed with {len(report.failed)} error(s)",
            )
            raise CLIError(
                "Installation completed with errors",
                "SYSTEM_ERROR",
                "Check error messages above and try again",
            )

        await agent.installer.discard_backups()
        terminal_ui.console.print()
        terminal_ui.print_success(f"dev-kit initialized successfully in {report.duration:.2f}s")
        terminal_ui.print_info(f"Installed: {len(report.installed)} skills")
        if report.skipped:
            terminal_ui.print_info(f"Skipped: {len(report.skipped)} skills")
        self.print_next_steps()
        return report

    async def _install_skills(
        self, agent: BaseAgent, skills, report: InitReport, force: bool, verify: bool
    ) -> None:
        options = InstallOptions(overwrite=force, backup=True)
        for skill in skills:
            try:
                result = await agent.install(skill, options)
            except CLIError as e:
                report.failed.append(skill.name)
                terminal_ui.print_warning(f"✗ Failed to install {skill.name}: {e.message}")
                continue

            if not result.success:
                report.failed.append(skill.name)
                for error in result.errors:
                    terminal_ui.print_warning(f"✗ {error}")
                continue

            report.installed.extend(result.installed_skills)
            report.skipped.extend(result.skipped_skills)
            for name in result.installed_skills:
                terminal_ui.print_success(name)
            for name in result.skipped_skills:
                terminal_ui.print_info(f"{name} (skipped)")

            if verify and result.installed_skills:
                if await agent.verify(skill.name):
                    terminal_ui.print_success(f"{skill.name}: verification passed")
                else:
                    terminal_ui.print_warning(f"{skill.name}: verification failed")

    async def select_agent(self) -> str:
        """Choose among the detected agents, preferred ones first."""
        detected = await self.registry.detect_all()
        if not detected:
            terminal_ui.print_error("No supported agents detected on your system.")
            terminal_ui.print_info("Please install one of the following agents:")
            for name, url in AGENT_INSTALL_HINTS:
                terminal_ui.console.print(f"  • {name}: {url}")
            raise UserError("No agents detected", "Install a code agent and try again")

        names = rank_agents([agent.name.value for agent in detected], Config.PREFERRED_AGENTS)
        terminal_ui.print_info("Detected agents:")
        for agent in detected:
            terminal_ui.console.print(f"  • {agent.display_name} ({agent.name.value})")

        return terminal_ui.ask("Select agent", default=names[0], choices=names)

    async def create_project_dirs(self) -> Path:
        project_dir = Path(get_project_dir(self.cwd))
        for subdir in PROJECT_SUBDIRS:
            await aiofiles.os.makedirs(project_dir / subdir, exist_ok=True)
        logger.debug(f"Created project directories under {project_dir}")
        return project_dir

    def print_next_steps(self) -> None:
        terminal_ui.console.print()
        terminal_ui.print_markdown(
            "**Next steps**\n\n"
            "1. Try dev-kit workflows:\n"
            "   - `/dev-kit.init \"My project description\"`\n"
            "   - `/dev-kit.ticket \"Add user authentication\"`\n"
            "   - `/dev-kit.work ticket=DKIT-001`\n"
            "2. View the onboarding guide: `dev-kit onboard`\n"
            f"3. Learn more: {Config.DOCS_URL}\n"
        )


def rank_agents(names: list[str], preferred: list[str]) -> list[str]:
    """Order agent names so preferred ones come first, keeping the rest in order."""
    ranked = [name for name in preferred if name in names]
    return ranked + [name for name in names if name not in ranked]
