"""`dev-kit detect`, `dev-kit list` and `dev-kit uninstall`."""

from __future__ import annotations

from agents import AgentRegistry, AgentStatus, BaseAgent, create_agent_registry
from errors import CLIError
from utils import get_logger, terminal_ui

logger = get_logger(__name__)


def _supported_agent(registry: AgentRegistry, name: str) -> BaseAgent:
    agent = registry.get_or_raise(name.strip().lower())
    if not agent.supported:
        raise CLIError(
            f"{agent.display_name} skills are not supported",
            "USER_ERROR",
            agent.unsupported_reason,
        )
    return agent


async def detect_agents(registry: AgentRegistry | None = None) -> list[AgentStatus]:
    """Detect every agent and print the result as a table."""
    registry = registry or create_agent_registry()
    statuses = await registry.get_agent_info()
    terminal_ui.print_agent_table(status.to_dict() for status in statuses)

    detected = sum(1 for status in statuses if status.detected)
    if detected:
        terminal_ui.print_info(f"{detected} agent(s) detected. Run `dev-kit init <agent>` to install skills.")
    else:
        terminal_ui.print_warning("No agents detected")
    return statuses


async def list_skills(agent_name: str, registry: AgentRegistry | None = None) -> list[str]:
    """Print the skills installed for an agent."""
    registry = registry or create_agent_registry()
    agent = _supported_agent(registry, agent_name)
    names = await agent.get_installed_skills()
    terminal_ui.print_skill_list(f"{agent.display_name} skills ({agent.skill_path})", names)
    return names


async def uninstall_skill(
    agent_name: str, skill_name: str, registry: AgentRegistry | None = None
) -> bool:
    """Remove one skill from an agent.

    Returns:
        True if the skill was installed and has been removed
    """
    registry = registry or create_agent_registry()
    agent = _supported_agent(registry, agent_name)
    if skill_name not in await agent.get_installed_skills():
        terminal_ui.print_warning(f"Skill '{skill_name}' is not installed for {agent.display_name}")
        return False

    await agent.uninstall(skill_name)
    terminal_ui.print_success(f"Removed {skill_name} from {agent.display_name}")
    return True
