import os
import textwrap

import pytest

from errors import UserError
from skills import (
    DEV_KIT_SKILLS,
    SYSTEM_SKILLS_DIR,
    FrontmatterError,
    get_all_skill_names,
    get_skill_content,
    load_dev_kit_skills,
    parse_frontmatter,
    split_frontmatter,
)


def test_skill_names_in_install_order() -> None:
    assert get_all_skill_names() == [
        "dev-kit-init",
        "dev-kit-ticket",
        "dev-kit-research",
        "dev-kit-work",
        "dev-kit-refine",
        "dev-kit-review",
    ]
    assert get_all_skill_names() is not DEV_KIT_SKILLS


@pytest.mark.parametrize("name", DEV_KIT_SKILLS)
def test_bundled_skill_frontmatter(name) -> None:
    frontmatter, body = split_frontmatter(get_skill_content(name))
    assert frontmatter["name"] == name
    assert frontmatter["description"]
    assert body.strip()


def test_unknown_skill() -> None:
    with pytest.raises(UserError):
        get_skill_content("dev-kit-deploy")


def test_ticket_script_is_bundled() -> None:
    script = SYSTEM_SKILLS_DIR / "dev-kit-ticket" / "scripts" / "get_latest_ticket_number.sh"
    assert script.is_file()
    assert script.read_text().startswith("#!/bin/bash")
    assert os.access(script, os.R_OK)


@pytest.mark.asyncio
async def test_load_dev_kit_skills() -> None:
    skills = await load_dev_kit_skills()

    assert [s.name for s in skills] == DEV_KIT_SKILLS
    for skill in skills:
        assert skill.source_path == SYSTEM_SKILLS_DIR / skill.name
        assert skill.content is None
        assert skill.frontmatter["name"] == skill.name
        assert skill.description
        assert "claude-code" in skill.compatible_agents


def test_split_frontmatter() -> None:
    text = textwrap.dedent(
        """
        ---
        name: lint
        description: Run lint checks.
        argument-hint: "<path>"
        ---

        Run lint and report issues.
        """
    ).strip()

    frontmatter, body = split_frontmatter(text)
    assert frontmatter == {
        "name": "lint",
        "description": "Run lint checks.",
        "argument-hint": "<path>",
    }
    assert body.strip() == "Run lint and report issues."


def test_split_frontmatter_is_lenient() -> None:
    assert split_frontmatter("plain text") == ({}, "plain text")
    assert split_frontmatter("---\nname: x\n") == ({}, "---\nname: x\n")


def test_parse_frontmatter_is_strict() -> None:
    with pytest.raises(FrontmatterError, match="must start"):
        parse_frontmatter("plain text")
    with pytest.raises(FrontmatterError, match="must end"):
        parse_frontmatter("---\nname: x\n")
