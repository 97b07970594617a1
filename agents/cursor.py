"""Cursor agent.

Cursor loads extensions as packaged ``.vsix`` archives. Packaging is not
implemented, so skills are installed as plain directories under
``~/.cursor/extensions``.
"""

from __future__ import annotations

from pathlib import Path

from installer import InstallOptions, InstallResult
from skills.types import Skill

from .base import BaseAgent
from .types import AgentConfig, AgentType

VSIX_WARNING = (
    "Cursor expects skills packaged as .vsix extensions; "
    "installing as a plain directory instead"
)


class CursorAgent(BaseAgent):
    def build_config(self) -> AgentConfig:
        return AgentConfig(
            name=AgentType.CURSOR,
            display_name="Cursor",
            skill_path=Path.home() / ".cursor" / "extensions",
            supported=True,
        )

    async def install(self, skill: Skill, options: InstallOptions | None = None) -> InstallResult:
        self.logger.warning(VSIX_WARNING)
        return await super().install(skill, options)
