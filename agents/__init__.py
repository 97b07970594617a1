"""AI coding agents that dev-kit can install skills into."""

from .base import BaseAgent
from .claude_code import ClaudeCodeAgent
from .cursor import CursorAgent
from .github_copilot import GitHubCopilotAgent
from .opencode import OpenCodeAgent
from .registry import AgentRegistry, create_agent_registry
from .types import AgentConfig, AgentStatus, AgentType

__all__ = [
    "AgentConfig",
    "AgentRegistry",
    "AgentStatus",
    "AgentType",
    "BaseAgent",
    "ClaudeCodeAgent",
    "CursorAgent",
    "GitHubCopilotAgent",
    "OpenCodeAgent",
    "create_agent_registry",
]
