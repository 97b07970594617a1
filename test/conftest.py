import textwrap
from pathlib import Path

import pytest

from skills import Skill


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    """Point HOME at an empty temporary directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


def write_skill(root: Path, name: str, body: str = "Do the thing.") -> Path:
    """Create <root>/<name>/SKILL.md with valid frontmatter."""
    skill_dir = root / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / "SKILL.md").write_text(
        textwrap.dedent(
            f"""
            ---
            name: {name}
            description: Test skill {name}.
            ---

            {body}
            """
        ).strip()
    )
    return skill_dir


@pytest.fixture
def make_skill(tmp_path):
    source_root = tmp_path / "sources"

    def _make(name: str = "demo", body: str = "Do the thing.") -> Skill:
        return Skill(name=name, description=f"Test skill {name}.", source_path=write_skill(source_root, name, body))

    return _make
