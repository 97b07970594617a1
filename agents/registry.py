"""Registry of the AI coding agents dev-kit knows about."""

from __future__ import annotations

import asyncio
from typing import Iterator

from errors import InvalidAgentError
from utils import get_logger

from .base import BaseAgent
from .claude_code import ClaudeCodeAgent
from .cursor import CursorAgent
from .github_copilot import GitHubCopilotAgent
from .opencode import OpenCodeAgent
from .types import AgentStatus

logger = get_logger(__name__)


class AgentRegistry:
    """Agents keyed by name, kept in registration order."""

    def __init__(self) -> None:
        self._agents: dict[str, BaseAgent] = {}

    def register(self, agent: BaseAgent) -> None:
        """Add an agent.

        Raises:
            ValueError: If an agent with the same name is already registered
        """
        name = agent.name.value
        if name in self._agents:
            raise ValueError(f"Agent {name} is already registered")
        self._agents[name] = agent
        logger.debug(f"Registered agent {name}")

    def get(self, name: str) -> BaseAgent | None:
        return self._agents.get(str(name))

    def get_or_raise(self, name: str) -> BaseAgent:
        agent = self.get(name)
        if agent is None:
            raise InvalidAgentError(str(name), self.get_supported_names())
        return agent

    def has(self, name: str) -> bool:
        return str(name) in self._agents

    def get_all(self) -> list[BaseAgent]:
        return list(self._agents.values())

    def get_supported(self) -> list[BaseAgent]:
        return [agent for agent in self._agents.values() if agent.supported]

    def get_supported_names(self) -> list[str]:
        return [agent.name.value for agent in self.get_supported()]

    async def detect_statuses(self) -> list[tuple[BaseAgent, bool]]:
        """Run every agent's ``detect()`` concurrently, in registration order."""
        agents = self.get_all()
        results = await asyncio.gather(*(agent.detect() for agent in agents))
        return list(zip(agents, results))

    async def detect_all(self) -> list[BaseAgent]:
        """Return the agents whose skill directories were found."""
        statuses = await self.detect_statuses()
        detected = [agent for agent, found in statuses if found]
        logger.info(f"Detected {len(detected)}/{len(statuses)} agents")
        return detected

    async def get_detected(self) -> list[BaseAgent]:
        return await self.detect_all()

    async def get_agent_info(
        self, statuses: list[tuple[BaseAgent, bool]] | None = None
    ) -> list[AgentStatus]:
        if statuses is None:
            statuses = await self.detect_statuses()
        return [
            AgentStatus(
                name=agent.name.value,
                display_name=agent.display_name,
                skill_path=str(agent.skill_path) if agent.skill_path else None,
                supported=agent.supported,
                detected=found,
                unsupported_reason=agent.unsupported_reason,
            )
            for agent, found in statuses
        ]

    def clear(self) -> None:
        self._agents.clear()

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, name: object) -> bool:
        return str(name) in self._agents

    def __iter__(self) -> Iterator[BaseAgent]:
        return iter(list(self._agents.values()))


def create_agent_registry() -> AgentRegistry:
    """Registry with every built-in agent."""
    registry = AgentRegistry()
    registry.register(ClaudeCodeAgent())
    registry.register(GitHubCopilotAgent())
    registry.register(CursorAgent())
    registry.register(OpenCodeAgent())
    return registry
