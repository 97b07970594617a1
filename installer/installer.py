"""Install skills into an agent's skill directory."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Iterable

from errors import SkillInstallationError, SkillValidationError
from skills.types import Skill
from utils import get_logger

from .file_ops import CopyOptions, FileOperations, ProgressCallback
from .rollback import RollbackManager
from .validator import SkillValidator

logger = get_logger(__name__)

RollbackFn = Callable[[], Awaitable[None]]


@dataclass
class InstallOptions:
    overwrite: bool = False
    backup: bool = True
    backup_dir: Path | None = None
    dry_run: bool = False
    skip_validation: bool = False
    on_progress: ProgressCallback | None = None


@dataclass(frozen=True)
class SkillError:
    skill: str
    error: BaseException

    def __str__(self) -> str:
        message = getattr(self.error, "message", None) or str(self.error)
        return f"{self.skill}: {message}"


@dataclass
class InstallResult:
    success: bool
    installed_skills: list[str] = field(default_factory=list)
    skipped_skills: list[str] = field(default_factory=list)
    errors: list[SkillError] = field(default_factory=list)
    duration: float = 0.0
    rollback: RollbackFn | None = None


async def _noop() -> None:
    return None


class SkillInstaller:
    """Validate, back up, copy and verify skills.

    Failures are reported through ``InstallResult.errors``; ``install`` does
    not raise for a broken skill.
    """

    def __init__(
        self,
        file_ops: FileOperations | None = None,
        validator: SkillValidator | None = None,
        rollback_manager: RollbackManager | None = None,
    ):
        self.file_ops = file_ops or FileOperations()
        self.validator = validator or SkillValidator()
        self.rollback_manager = rollback_manager or RollbackManager(file_ops=self.file_ops)
        self._managers: dict[Path, RollbackManager] = {}

    def _manager_for(self, options: InstallOptions) -> RollbackManager:
        if options.backup_dir is None:
            return self.rollback_manager
        key = Path(options.backup_dir)
        if key not in self._managers:
            self._managers[key] = RollbackManager(key, self.file_ops)
        return self._managers[key]

    async def install(
        self, skill: Skill, target_dir: Path, options: InstallOptions | None = None
    ) -> InstallResult:
        """Install one skill into ``<target_dir>/<skill.name>``."""
        options = options or InstallOptions()
        started = time.monotonic()
        skill_target = Path(target_dir) / skill.name
        manager = self._manager_for(options)
        rollback_id: str | None = None
        existed = True

        def _done(**kwargs) -> InstallResult:
            return InstallResult(duration=time.monotonic() - started, **kwargs)

        try:
            if not options.skip_validation:
                validation = await self.validator.validate(
                    skill, Path(target_dir), check_conflicts=not options.overwrite
                )
                for warning in validation.warnings:
                    logger.warning(f"{skill.name}: {warning}")
                if not validation.is_valid():
                    raise SkillValidationError(skill.name, [str(e) for e in validation.errors])
                if validation.has_warning("naming") and not options.overwrite:
                    logger.info(f"Skipping {skill.name}: already installed at {skill_target}")
                    return _done(success=True, skipped_skills=[skill.name])

            if options.dry_run:
                logger.info(f"[dry-run] Would install {skill.name} to {skill_target}")
                return _done(success=True, installed_skills=[skill.name], rollback=_noop)

            existed = await self.file_ops.path_exists(skill_target)
            if existed and (options.backup or options.overwrite):
                rollback_id = await manager.create_rollback_point(skill_target)

            copy_options = CopyOptions(overwrite=options.overwrite, on_progress=options.on_progress)
            if skill.content is not None:
                await self.file_ops.write_skill_content(skill_target, skill.content, copy_options)
            elif skill.source_path is not None:
                await self.file_ops.copy_directory(Path(skill.source_path), skill_target, copy_options)
            else:
                raise SkillInstallationError(skill.name, str(target_dir))

            verification = await self.validator.validate_skill_at_path(skill_target)
            if not verification.is_valid():
                raise SkillValidationError(skill.name, [str(e) for e in verification.errors])

        except Exception as e:
            logger.error(f"Failed to install {skill.name} to {skill_target}: {e}")
            if rollback_id is not None:
                await manager.rollback(rollback_id)
            elif not existed:
                await self.file_ops.remove_directory(skill_target)
            return _done(success=False, errors=[SkillError(skill.name, e)])

        logger.info(f"Installed {skill.name} to {skill_target}")

        async def _undo() -> None:
            if rollback_id is not None:
                await manager.rollback(rollback_id)
            else:
                await self.file_ops.remove_directory(skill_target)

        return _done(success=True, installed_skills=[skill.name], rollback=_undo)

    async def install_many(
        self, skills: Iterable[Skill], target_dir: Path, options: InstallOptions | None = None
    ) -> InstallResult:
        """Install skills in order; a failure undoes the earlier installs."""
        started = time.monotonic()
        results: list[InstallResult] = []

        for skill in skills:
            result = await self.install(skill, target_dir, options)
            if not result.success:
                for previous in reversed(results):
                    if previous.rollback is not None:
                        await previous.rollback()
                return InstallResult(
                    success=False,
                    skipped_skills=[s for r in results for s in r.skipped_skills],
                    errors=result.errors,
                    duration=time.monotonic() - started,
                )
            results.append(result)

        async def _undo_all() -> None:
            for previous in reversed(results):
                if previous.rollback is not None:
                    await previous.rollback()

        return InstallResult(
            success=True,
            installed_skills=[s for r in results for s in r.installed_skills],
            skipped_skills=[s for r in results for s in r.skipped_skills],
            duration=time.monotonic() - started,
            rollback=_undo_all,
        )

    async def discard_backups(self) -> None:
        """Drop every rollback point taken so far."""
        await self.rollback_manager.cleanup_all()
        for manager in self._managers.values():
            await manager.cleanup_all()
