"""Data models for skills."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Skill:
    name: str
    description: str = ""
    # Directory holding SKILL.md and any helper files
    source_path: Path | None = None
    # Embedded SKILL.md text; wins over source_path when both are set
    content: str | None = None
    required_files: list[str] = field(default_factory=lambda: ["SKILL.md"])
    dependencies: list[str] = field(default_factory=list)
    compatible_agents: list[str] = field(default_factory=list)
    frontmatter: dict[str, object] = field(default_factory=dict)
