"""Data models for AI coding agents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class AgentType(str, Enum):
    CLAUDE_CODE = "claude-code"
    GITHUB_COPILOT = "github-copilot"
    CURSOR = "cursor"
    OPENCODE = "opencode"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AgentConfig:
    """Static description of an agent, fixed when the agent is created."""

    name: AgentType
    display_name: str
    # None only for agents without a known skill directory
    skill_path: Path | None
    supported: bool
    unsupported_reason: str | None = None


@dataclass(frozen=True)
class AgentStatus:
    name: str
    display_name: str
    skill_path: str | None
    supported: bool
    detected: bool
    unsupported_reason: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "skill_path": self.skill_path,
            "supported": self.supported,
            "detected": self.detected,
            "unsupported_reason": self.unsupported_reason,
        }
