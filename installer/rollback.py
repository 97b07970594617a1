"""Rollback points for skill installation."""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass
from pathlib import Path

import aiofiles.os

from config import Config
from utils import get_logger

from .file_ops import DIR_MODE, CopyOptions, FileOperations

logger = get_logger(__name__)


@dataclass
class RollbackState:
    id: str
    timestamp: int  # milliseconds since the epoch
    original_path: Path
    backup_path: Path
    completed: bool = False


def _new_rollback_id(timestamp: int) -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"rollback-{timestamp}-{suffix}"


class RollbackManager:
    """Snapshot directories before they change and restore them on failure."""

    def __init__(self, backup_root: Path | None = None, file_ops: FileOperations | None = None):
        self.backup_root = Path(backup_root or Config.BACKUP_DIR)
        self.file_ops = file_ops or FileOperations()
        self._states: dict[str, RollbackState] = {}

    async def create_rollback_point(self, target: Path) -> str:
        """Snapshot ``target`` and return the rollback id.

        A target that does not exist yet is recorded with an empty backup, so
        rolling back removes whatever was created there.
        """
        timestamp = int(time.time() * 1000)
        rollback_id = _new_rollback_id(timestamp)
        backup_path = self.backup_root / rollback_id

        if await self.file_ops.path_exists(target):
            await self.file_ops.copy_directory(
                target, backup_path, CopyOptions(overwrite=True, preserve_permissions=True)
            )
        else:
            await aiofiles.os.makedirs(backup_path, mode=DIR_MODE, exist_ok=True)

        self._states[rollback_id] = RollbackState(
            id=rollback_id,
            timestamp=timestamp,
            original_path=target,
            backup_path=backup_path,
        )
        logger.debug(f"Created rollback point {rollback_id} for {target}")
        return rollback_id

    async def rollback(self, rollback_id: str, cleanup: bool = True) -> None:
        """Restore the snapshot taken for ``rollback_id``.

        Raises:
            KeyError: If the id is unknown
        """
        state = self._states.get(rollback_id)
        if state is None:
            raise KeyError(f"Rollback point not found: {rollback_id}")
        if state.completed:
            logger.warning(f"Rollback {rollback_id} already completed")
            return

        if await self.file_ops.count_files(state.backup_path) == 0:
            await self.file_ops.remove_directory(state.original_path)
        else:
            await self.file_ops.restore_backup(state.backup_path, state.original_path)

        state.completed = True
        logger.info(f"Rolled back {state.original_path} ({rollback_id})")

        if cleanup:
            await self.cleanup(rollback_id)

    async def cleanup(self, rollback_id: str) -> None:
        """Delete the backup files of a rollback point; the state is kept."""
        state = self._states.get(rollback_id)
        if state is None:
            return
        await self.file_ops.remove_directory(state.backup_path)

    async def cleanup_all(self) -> None:
        for rollback_id in list(self._states):
            await self.cleanup(rollback_id)
        self._states.clear()

    def get_state(self, rollback_id: str) -> RollbackState | None:
        return self._states.get(rollback_id)

    def get_all_states(self) -> list[RollbackState]:
        return list(self._states.values())

    def mark_complete(self, rollback_id: str) -> None:
        state = self._states.get(rollback_id)
        if state is not None:
            state.completed = True
