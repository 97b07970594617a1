"""Base agent interface shared by every AI coding agent adapter."""

from __future__ import annotations

import asyncio
import dataclasses
import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

import aiofiles
import aiofiles.os

from errors import (
    AgentNotInstalledError,
    PermissionDeniedError,
    SkillInstallationError,
    UserError,
)
from installer import InstallOptions, InstallResult, SkillInstaller
from skills.types import Skill
from utils import get_logger

from .types import AgentConfig, AgentType


class BaseAgent(ABC):
    """Abstract base class for AI coding agents.

    Subclasses only describe themselves through ``build_config``. Detection
    probes the skill directory; install, verify and uninstall work on
    ``<skill_path>/<skill name>/``.
    """

    def __init__(self, installer: SkillInstaller | None = None):
        self._config = self.build_config()
        self.logger = get_logger(f"agents.{self._config.name.value}")
        self._installer = installer

    @abstractmethod
    def build_config(self) -> AgentConfig:
        """Return the static descriptor for this agent."""
        raise NotImplementedError

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def name(self) -> AgentType:
        return self._config.name

    @property
    def display_name(self) -> str:
        return self._config.display_name

    @property
    def skill_path(self) -> Path | None:
        return self._config.skill_path

    @property
    def supported(self) -> bool:
        return self._config.supported

    @property
    def unsupported_reason(self) -> str | None:
        return self._config.unsupported_reason

    @property
    def installer(self) -> SkillInstaller:
        if self._installer is None:
            self._installer = SkillInstaller()
        return self._installer

    def get_skill_path(self) -> Path | None:
        return self._config.skill_path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name.value!r}, skill_path={self.skill_path!r})"

    async def detect(self) -> bool:
        """Report whether the agent's skill directory is present.

        Never raises: a missing, unreadable or otherwise failing path counts
        as not detected.
        """
        if not self.supported or self.skill_path is None:
            self.logger.debug(f"{self.display_name} is not supported: {self.unsupported_reason}")
            return False

        self.logger.debug(f"Detecting {self.display_name} at {self.skill_path}")
        try:
            await aiofiles.os.stat(self.skill_path)
        except OSError as e:
            self.logger.debug(f"{self.display_name} not detected: {e}")
            return False

        self.logger.debug(f"{self.display_name} detected")
        return True

    async def install(self, skill: Skill, options: InstallOptions | None = None) -> InstallResult:
        """Install a skill into this agent's skill directory.

        Raises:
            AgentNotInstalledError: If the agent is not detected
        """
        self.logger.info(f'Installing skill "{skill.name}" for {self.display_name}')
        if not await self.detect():
            raise AgentNotInstalledError(self.display_name, str(self.skill_path))

        options = options or InstallOptions()
        user_progress = options.on_progress

        def _on_progress(current: int, total: int, filename: str) -> None:
            self.logger.debug(f"[{current}/{total}] {filename}")
            if user_progress:
                user_progress(current, total, filename)

        options = dataclasses.replace(options, backup=True, on_progress=_on_progress)
        return await self.installer.install(skill, self.skill_path, options)

    async def verify(self, skill_name: str) -> bool:
        """Check that an installed SKILL.md exists and carries frontmatter."""
        skill_file = self.skill_path / skill_name / "SKILL.md"
        try:
            async with aiofiles.open(skill_file, encoding="utf-8") as handle:
                content = await handle.read()
        except FileNotFoundError:
            self.logger.debug(f'Skill "{skill_name}" not found at {skill_file}')
            return False
        except PermissionError as e:
            raise PermissionDeniedError("read", str(skill_file)) from e

        if "---" not in content:
            self.logger.debug(f'Skill "{skill_name}" missing YAML frontmatter')
            return False
        if "name:" not in content:
            self.logger.debug(f'Skill "{skill_name}" missing name in frontmatter')
            return False
        return True

    async def uninstall(self, skill_name: str) -> None:
        """Remove ``<skill_path>/<skill_name>``; a missing skill is not an error.

        Symlinks and stray files are unlinked, never followed.

        Raises:
            UserError: If the name would resolve outside the skill directory
        """
        if skill_name in ("", ".", "..") or any(sep and sep in skill_name for sep in (os.sep, os.altsep)):
            raise UserError(
                f'Invalid skill name "{skill_name}"',
                "Use the name of a skill directory, as shown by `dev-kit list`",
            )

        skill_dir = self.skill_path / skill_name
        self.logger.info(f'Uninstalling skill "{skill_name}" from {self.display_name}')
        try:
            if await aiofiles.os.path.islink(skill_dir) or await aiofiles.os.path.isfile(skill_dir):
                await aiofiles.os.unlink(skill_dir)
            else:
                await asyncio.to_thread(shutil.rmtree, skill_dir)
        except FileNotFoundError:
            self.logger.debug(f'Skill "{skill_name}" not installed at {skill_dir}')
        except PermissionError as e:
            raise PermissionDeniedError("remove", str(skill_dir)) from e
        except OSError as e:
            raise SkillInstallationError(skill_name, self.display_name, e, operation="uninstall") from e

    async def get_installed_skills(self) -> list[str]:
        """Names of the skill directories under the agent's skill path."""
        try:
            entries = await aiofiles.os.scandir(self.skill_path)
        except FileNotFoundError:
            return []
        except PermissionError as e:
            raise PermissionDeniedError("read", str(self.skill_path)) from e

        with entries:
            names = [entry.name for entry in entries if entry.is_dir()]
        return sorted(names)
