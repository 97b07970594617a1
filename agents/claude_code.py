"""Claude Code agent."""

from pathlib import Path

from .base import BaseAgent
from .types import AgentConfig, AgentType


class ClaudeCodeAgent(BaseAgent):
    """Anthropic's Claude Code CLI; skills live in ``~/.claude/skills``."""

    def build_config(self) -> AgentConfig:
        return AgentConfig(
            name=AgentType.CLAUDE_CODE,
            display_name="Claude Code",
            skill_path=Path.home() / ".claude" / "skills",
            supported=True,
        )
