"""OpenCode agent (not supported)."""

from __future__ import annotations

from errors import UserError
from installer import InstallOptions, InstallResult
from skills.types import Skill

from .base import BaseAgent
from .types import AgentConfig, AgentType

UNSUPPORTED_REASON = (
    "OpenCode does not have a documented skills API. "
    "Use the dev-kit CLI directly via the Bash tool instead."
)


class OpenCodeAgent(BaseAgent):
    """OpenCode has no skill directory; every skill operation is refused."""

    def build_config(self) -> AgentConfig:
        return AgentConfig(
            name=AgentType.OPENCODE,
            display_name="OpenCode",
            skill_path=None,
            supported=False,
            unsupported_reason=UNSUPPORTED_REASON,
        )

    async def install(self, skill: Skill, options: InstallOptions | None = None) -> InstallResult:
        raise UserError(
            "OpenCode skills are not supported",
            "Use dev-kit CLI directly via Bash tool: dev-kit init",
        )

    async def verify(self, skill_name: str) -> bool:
        self.logger.warning(f'Cannot verify "{skill_name}": OpenCode skills are not supported')
        return False

    async def uninstall(self, skill_name: str) -> None:
        self.logger.warning(f'Cannot uninstall "{skill_name}": OpenCode skills are not supported')

    async def get_installed_skills(self) -> list[str]:
        return []
