"""Bundled dev-kit skills."""

from .bundled import (
    DEV_KIT_SKILLS,
    SYSTEM_SKILLS_DIR,
    get_all_skill_names,
    get_skill_content,
    load_dev_kit_skills,
)
from .parser import FrontmatterError, parse_frontmatter, split_frontmatter
from .types import Skill

__all__ = [
    "DEV_KIT_SKILLS",
    "FrontmatterError",
    "Skill",
    "SYSTEM_SKILLS_DIR",
    "get_all_skill_names",
    "get_skill_content",
    "load_dev_kit_skills",
    "parse_frontmatter",
    "split_frontmatter",
]
