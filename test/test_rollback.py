import logging
import re

import pytest

from conftest import write_skill
from installer import RollbackManager


@pytest.fixture
def manager(tmp_path) -> RollbackManager:
    return RollbackManager(backup_root=tmp_path / "backups")


@pytest.mark.asyncio
async def test_rollback_restores_existing_directory(tmp_path, manager) -> None:
    target = write_skill(tmp_path / "agent", "demo", body="original")
    rollback_id = await manager.create_rollback_point(target)

    assert re.fullmatch(r"rollback-\d+-[a-z0-9]{7}", rollback_id)
    state = manager.get_state(rollback_id)
    assert state.original_path == target
    assert state.backup_path == tmp_path / "backups" / rollback_id
    assert not state.completed

    (target / "SKILL.md").write_text("broken")
    (target / "junk.txt").write_text("junk")

    await manager.rollback(rollback_id)

    assert "original" in (target / "SKILL.md").read_text()
    assert not (target / "junk.txt").exists()
    assert manager.get_state(rollback_id).completed
    assert not state.backup_path.exists()


@pytest.mark.asyncio
async def test_rollback_of_new_directory_removes_it(tmp_path, manager) -> None:
    target = tmp_path / "agent" / "fresh"
    rollback_id = await manager.create_rollback_point(target)
    assert manager.get_state(rollback_id).backup_path.is_dir()

    write_skill(tmp_path / "agent", "fresh")
    await manager.rollback(rollback_id)

    assert not target.exists()


@pytest.mark.asyncio
async def test_rollback_without_cleanup_keeps_backup(tmp_path, manager) -> None:
    target = write_skill(tmp_path / "agent", "demo")
    rollback_id = await manager.create_rollback_point(target)

    await manager.rollback(rollback_id, cleanup=False)
    assert manager.get_state(rollback_id).backup_path.exists()


@pytest.mark.asyncio
async def test_second_rollback_is_noop(tmp_path, manager, caplog) -> None:
    target = write_skill(tmp_path / "agent", "demo")
    rollback_id = await manager.create_rollback_point(target)
    await manager.rollback(rollback_id)

    (target / "SKILL.md").write_text("edited after rollback")
    with caplog.at_level(logging.WARNING):
        await manager.rollback(rollback_id)

    assert (target / "SKILL.md").read_text() == "edited after rollback"
    assert any("already completed" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_unknown_rollback_id(manager) -> None:
    with pytest.raises(KeyError):
        await manager.rollback("rollback-0-missing")


@pytest.mark.asyncio
async def test_mark_complete_prevents_restore(tmp_path, manager) -> None:
    target = write_skill(tmp_path / "agent", "demo", body="original")
    rollback_id = await manager.create_rollback_point(target)
    (target / "SKILL.md").write_text("kept")

    manager.mark_complete(rollback_id)
    await manager.rollback(rollback_id)

    assert (target / "SKILL.md").read_text() == "kept"


@pytest.mark.asyncio
async def test_cleanup_all(tmp_path, manager) -> None:
    first = await manager.create_rollback_point(write_skill(tmp_path / "agent", "a"))
    second = await manager.create_rollback_point(write_skill(tmp_path / "agent", "b"))
    backups = [manager.get_state(i).backup_path for i in (first, second)]
    assert len(manager.get_all_states()) == 2

    await manager.cleanup_all()

    assert manager.get_all_states() == []
    assert not any(path.exists() for path in backups)
