"""Async file operations used to install skills."""

from __future__ import annotations

import asyncio
import fnmatch
import os
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import aiofiles
import aiofiles.os

from errors import MissingFileError, PermissionDeniedError
from utils import get_logger

logger = get_logger(__name__)

FILE_MODE = 0o644
DIR_MODE = 0o755

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class CopyOptions:
    overwrite: bool = False
    preserve_permissions: bool = False
    # fnmatch patterns, matched against the entry name and its relative path
    exclude: list[str] = field(default_factory=list)
    on_progress: ProgressCallback | None = None


def _is_excluded(rel: str, patterns: list[str]) -> bool:
    name = rel.rsplit("/", 1)[-1]
    return any(fnmatch.fnmatch(name, p) or fnmatch.fnmatch(rel, p) for p in patterns)


class FileOperations:
    """Copy, back up and remove skill directories."""

    async def path_exists(self, path: Path) -> bool:
        return await aiofiles.os.path.exists(path)

    async def copy_file(self, source: Path, target: Path, options: CopyOptions | None = None) -> bool:
        """Copy a single file.

        Returns:
            True if the file was written, False if an existing target was kept
        """
        options = options or CopyOptions()
        if not options.overwrite and await aiofiles.os.path.exists(target):
            logger.debug(f"Skipping existing file {target}")
            return False

        try:
            await aiofiles.os.makedirs(target.parent, mode=DIR_MODE, exist_ok=True)
            async with aiofiles.open(source, "rb") as reader, aiofiles.open(target, "wb") as writer:
                while True:
                    chunk = await reader.read(1024 * 128)
                    if not chunk:
                        break
                    await writer.write(chunk)
            if options.preserve_permissions:
                await asyncio.to_thread(shutil.copymode, source, target)
            else:
                await asyncio.to_thread(os.chmod, target, FILE_MODE)
        except PermissionError as e:
            raise PermissionDeniedError("write", str(target)) from e
        except FileNotFoundError as e:
            raise MissingFileError(str(source), e) from e
        return True

    async def write_skill_content(
        self, target_dir: Path, content: str, options: CopyOptions | None = None
    ) -> bool:
        """Write embedded SKILL.md text into ``target_dir``."""
        options = options or CopyOptions()
        target = target_dir / "SKILL.md"
        if not options.overwrite and await aiofiles.os.path.exists(target):
            logger.debug(f"Skipping existing file {target}")
            return False

        try:
            await aiofiles.os.makedirs(target_dir, mode=DIR_MODE, exist_ok=True)
            async with aiofiles.open(target, "w", encoding="utf-8") as handle:
                await handle.write(content)
            await asyncio.to_thread(os.chmod, target, FILE_MODE)
        except PermissionError as e:
            raise PermissionDeniedError("write", str(target)) from e

        if options.on_progress:
            options.on_progress(1, 1, "SKILL.md")
        return True

    async def copy_directory(
        self, source: Path, target: Path, options: CopyOptions | None = None
    ) -> int:
        """Recursively copy ``source`` into ``target``.

        Symlinks and special files are skipped.

        Returns:
            Number of files copied
        """
        options = options or CopyOptions()
        if not await aiofiles.os.path.exists(source):
            raise MissingFileError(str(source))

        def _walk() -> tuple[list[str], list[str], list[str]]:
            dirs_out: list[str] = []
            files_out: list[str] = []
            skipped: list[str] = []
            for root, dirs, files in os.walk(source):
                root_path = Path(root)
                rel_root = root_path.relative_to(source)
                kept = []
                for d in sorted(dirs):
                    rel = (rel_root / d).as_posix()
                    if _is_excluded(rel, options.exclude):
                        continue
                    if (root_path / d).is_symlink():
                        skipped.append(rel)
                        continue
                    kept.append(d)
                    dirs_out.append(rel)
                dirs[:] = kept
                for f in sorted(files):
                    rel = (rel_root / f).as_posix()
                    if _is_excluded(rel, options.exclude):
                        continue
                    full = root_path / f
                    if full.is_symlink() or not full.is_file():
                        skipped.append(rel)
                        continue
                    files_out.append(rel)
            return dirs_out, files_out, skipped

        try:
            dirs, files, skipped = await asyncio.to_thread(_walk)
        except PermissionError as e:
            raise PermissionDeniedError("read", str(source)) from e

        for rel in skipped:
            logger.warning(f"Skipping symlink or special file: {source / rel}")

        try:
            await aiofiles.os.makedirs(target, mode=DIR_MODE, exist_ok=True)
            for rel in dirs:
                await aiofiles.os.makedirs(target / rel, mode=DIR_MODE, exist_ok=True)
        except PermissionError as e:
            raise PermissionDeniedError("create", str(target)) from e

        copied = 0
        total = len(files)
        for i, rel in enumerate(files, start=1):
            if await self.copy_file(source / rel, target / rel, options):
                copied += 1
            if options.on_progress:
                options.on_progress(i, total, rel)

        logger.debug(f"Copied {copied}/{total} files from {source} to {target}")
        return copied

    async def count_files(self, path: Path) -> int:
        if not await aiofiles.os.path.exists(path):
            return 0

        def _count() -> int:
            return sum(len(files) for _, _, files in os.walk(path))

        return await asyncio.to_thread(_count)

    async def remove_directory(self, path: Path) -> None:
        if not await aiofiles.os.path.exists(path):
            return
        try:
            await asyncio.to_thread(shutil.rmtree, path)
        except PermissionError as e:
            raise PermissionDeniedError("remove", str(path)) from e

    async def backup_directory(self, source: Path, backup_dir: Path) -> Path:
        """Copy ``source`` to ``<backup_dir>/<name>-<ms timestamp>``."""
        backup_path = backup_dir / f"{source.name}-{int(time.time() * 1000)}"
        await self.copy_directory(
            source, backup_path, CopyOptions(overwrite=True, preserve_permissions=True)
        )
        logger.debug(f"Backed up {source} to {backup_path}")
        return backup_path

    async def restore_backup(self, backup: Path, target: Path) -> None:
        if not await aiofiles.os.path.exists(backup):
            raise MissingFileError(str(backup))
        await self.remove_directory(target)
        await self.copy_directory(
            backup, target, CopyOptions(overwrite=True, preserve_permissions=True)
        )
        logger.debug(f"Restored {target} from {backup}")
