import pytest

from conftest import write_skill
from installer import SkillValidator
from skills import Skill


@pytest.mark.asyncio
async def test_valid_source_skill(make_skill) -> None:
    result = await SkillValidator().validate(make_skill("demo"))
    assert result.is_valid()
    assert result.warnings == []


@pytest.mark.asyncio
async def test_missing_skill_md(tmp_path) -> None:
    (tmp_path / "empty").mkdir()
    result = await SkillValidator().validate(Skill(name="empty", source_path=tmp_path / "empty"))

    assert not result.is_valid()
    assert result.errors[0].field == "files"
    assert "SKILL.md" in result.errors[0].issue


@pytest.mark.asyncio
async def test_missing_required_file(make_skill) -> None:
    skill = make_skill("demo")
    skill.required_files = ["SKILL.md", "scripts/run.sh"]

    result = await SkillValidator().validate(skill)
    assert [e.issue for e in result.errors] == ["Required file missing: scripts/run.sh"]


@pytest.mark.asyncio
async def test_missing_source_directory(tmp_path) -> None:
    result = await SkillValidator().validate(Skill(name="x", source_path=tmp_path / "nope"))
    assert result.errors[0].field == "source"


@pytest.mark.asyncio
async def test_skill_without_source_or_content() -> None:
    result = await SkillValidator().validate(Skill(name="x"))
    assert not result.is_valid()


@pytest.mark.parametrize(
    "content, message",
    [
        ("no frontmatter here", "must start with YAML frontmatter"),
        ("---\nname: x\n", "must end with ---"),
        ("---\nname: [unclosed\n---\n", "Invalid YAML"),
        ("---\n- a\n- b\n---\n", "YAML mapping"),
    ],
)
@pytest.mark.asyncio
async def test_embedded_content_errors(content, message) -> None:
    result = await SkillValidator().validate(Skill(name="x", content=content))
    assert not result.is_valid()
    assert message in result.errors[0].issue
    assert result.errors[0].severity == "error"


@pytest.mark.asyncio
async def test_embedded_content_is_checked_without_files() -> None:
    result = await SkillValidator().validate(
        Skill(name="x", content="---\nname: x\ndescription: y\n---\nbody")
    )
    assert result.is_valid()


@pytest.mark.asyncio
async def test_warns_without_name_and_description() -> None:
    result = await SkillValidator().validate(Skill(name="x", content="---\nversion: 1\n---\n"))
    assert result.is_valid()
    assert [w.field for w in result.warnings] == ["frontmatter"]
    assert result.warnings[0].severity == "warning"


@pytest.mark.asyncio
async def test_conflict_with_installed_skill_is_warning(tmp_path, make_skill) -> None:
    target = tmp_path / "agent"
    write_skill(target, "demo")

    result = await SkillValidator().validate(make_skill("demo"), target, check_conflicts=True)
    assert result.is_valid()
    assert result.has_warning("naming")


@pytest.mark.asyncio
async def test_conflict_with_non_skill_directory_is_error(tmp_path, make_skill) -> None:
    target = tmp_path / "agent"
    (target / "demo").mkdir(parents=True)

    result = await SkillValidator().validate(make_skill("demo"), target, check_conflicts=True)
    assert not result.is_valid()
    assert result.errors[0].field == "naming"


@pytest.mark.asyncio
async def test_conflicts_ignored_unless_requested(tmp_path, make_skill) -> None:
    target = tmp_path / "agent"
    write_skill(target, "demo")

    result = await SkillValidator().validate(make_skill("demo"), target)
    assert result.warnings == []


@pytest.mark.asyncio
async def test_validate_skill_at_path(tmp_path) -> None:
    validator = SkillValidator()
    assert (await validator.validate_skill_at_path(write_skill(tmp_path, "ok"))).is_valid()
    assert not (await validator.validate_skill_at_path(tmp_path / "missing")).is_valid()
