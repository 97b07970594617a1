"""GitHub Copilot agent."""

from pathlib import Path

from .base import BaseAgent
from .types import AgentConfig, AgentType


class GitHubCopilotAgent(BaseAgent):
    def build_config(self) -> AgentConfig:
        return AgentConfig(
            name=AgentType.GITHUB_COPILOT,
            display_name="GitHub Copilot",
            skill_path=Path.home() / ".copilot-skills",
            supported=True,
        )
