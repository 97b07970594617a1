"""The dev-kit skills shipped with the package."""

from __future__ import annotations

from pathlib import Path

from errors import UserError
from utils import get_logger

from .parser import read_text, split_frontmatter
from .types import Skill

logger = get_logger(__name__)

# System skills are bundled with dev-kit
SYSTEM_SKILLS_DIR = Path(__file__).parent / "system"

# Install order
DEV_KIT_SKILLS: list[str] = [
    "dev-kit-init",
    "dev-kit-ticket",
    "dev-kit-research",
    "dev-kit-work",
    "dev-kit-refine",
    "dev-kit-review",
]

COMPATIBLE_AGENTS = ["claude-code", "github-copilot"]


def get_all_skill_names() -> list[str]:
    return list(DEV_KIT_SKILLS)


def get_skill_dir(name: str) -> Path:
    if name not in DEV_KIT_SKILLS:
        raise UserError(
            f"Skill not found: {name}",
            f"Available skills: {', '.join(DEV_KIT_SKILLS)}",
        )
    return SYSTEM_SKILLS_DIR / name


def get_skill_content(name: str) -> str:
    """Return the raw SKILL.md text of a bundled skill.

    Raises:
        UserError: If no bundled skill has that name
    """
    return (get_skill_dir(name) / "SKILL.md").read_text(encoding="utf-8")


async def load_dev_kit_skills() -> list[Skill]:
    """Load every bundled skill, in install order."""
    skills: list[Skill] = []
    for name in DEV_KIT_SKILLS:
        skill_dir = get_skill_dir(name)
        content = await read_text(skill_dir / "SKILL.md")
        frontmatter, _ = split_frontmatter(content)
        skills.append(
            Skill(
                name=name,
                description=str(frontmatter.get("description", "")).strip(),
                source_path=skill_dir,
                compatible_agents=list(COMPATIBLE_AGENTS),
                frontmatter=frontmatter,
            )
        )
    logger.debug(f"Loaded {len(skills)} bundled skills from {SYSTEM_SKILLS_DIR}")
    return skills
