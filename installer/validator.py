"""Structural checks for skills before and after installation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import aiofiles.os

from skills.parser import FrontmatterError, parse_frontmatter, read_text
from skills.types import Skill
from utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    issue: str
    severity: str = "error"  # "error" or "warning"

    def __str__(self) -> str:
        return f"{self.field}: {self.issue}"


@dataclass
class ValidationResult:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, issue: str) -> None:
        self.errors.append(ValidationIssue(field_name, issue, "error"))

    def add_warning(self, field_name: str, issue: str) -> None:
        self.warnings.append(ValidationIssue(field_name, issue, "warning"))

    def has_warning(self, field_name: str) -> bool:
        return any(w.field == field_name for w in self.warnings)


class SkillValidator:
    """Validate skill sources and installed skill directories."""

    async def validate(
        self,
        skill: Skill,
        target_path: Path | None = None,
        check_conflicts: bool = False,
    ) -> ValidationResult:
        """Validate a skill before installing it.

        Args:
            skill: Skill to check. Embedded ``content`` is checked as text;
                otherwise the files under ``source_path`` are checked.
            target_path: Agent skill directory the skill will be installed into
            check_conflicts: Report an existing ``<target_path>/<name>``

        Returns:
            ValidationResult with errors and warnings
        """
        result = ValidationResult()

        if skill.content is not None:
            self._validate_content(skill.content, result)
        elif skill.source_path is None:
            result.add_error("source", "Skill has neither embedded content nor a source directory")
        else:
            await self._validate_source(skill, result)

        if check_conflicts and target_path is not None:
            await self._check_conflicts(skill, target_path, result)

        logger.debug(
            f"Validated {skill.name}: {len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result

    async def validate_skill_at_path(self, path: Path) -> ValidationResult:
        """Validate an installed skill directory."""
        result = ValidationResult()
        skill_file = path / "SKILL.md"
        if not await aiofiles.os.path.isfile(skill_file):
            result.add_error("files", f"SKILL.md not found in {path}")
            return result
        self._validate_content(await read_text(skill_file), result)
        return result

    async def _validate_source(self, skill: Skill, result: ValidationResult) -> None:
        source = skill.source_path
        if not await aiofiles.os.path.isdir(source):
            result.add_error("source", f"Source directory not found: {source}")
            return

        required = skill.required_files or ["SKILL.md"]
        if "SKILL.md" not in required:
            required = ["SKILL.md", *required]
        for name in required:
            if not await aiofiles.os.path.exists(source / name):
                result.add_error("files", f"Required file missing: {name}")

        skill_file = source / "SKILL.md"
        if await aiofiles.os.path.isfile(skill_file):
            self._validate_content(await read_text(skill_file), result)

    def _validate_content(self, content: str, result: ValidationResult) -> None:
        try:
            frontmatter, _ = parse_frontmatter(content)
        except FrontmatterError as e:
            result.add_error("frontmatter", str(e))
            return

        if not frontmatter.get("name") and not frontmatter.get("description"):
            result.add_warning("frontmatter", "Frontmatter should define name and description")

    async def _check_conflicts(self, skill: Skill, target_path: Path, result: ValidationResult) -> None:
        skill_target = target_path / skill.name
        if not await aiofiles.os.path.exists(skill_target):
            return
        if await aiofiles.os.path.isfile(skill_target / "SKILL.md"):
            result.add_warning("naming", f'Skill "{skill.name}" already exists at {skill_target}')
        else:
            result.add_error("naming", f"{skill_target} exists but is not a skill directory")
