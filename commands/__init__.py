"""CLI command implementations."""

from .manage import detect_agents, list_skills, uninstall_skill
from .init import InitCommand, InitReport
from .onboard import OUTPUT_FORMATS, OnboardCommand

__all__ = [
    "InitCommand",
    "InitReport",
    "OUTPUT_FORMATS",
    "OnboardCommand",
    "detect_agents",
    "list_skills",
    "uninstall_skill",
]
