"""Parsing helpers for SKILL.md files."""

from __future__ import annotations

from pathlib import Path

import aiofiles
import yaml


class FrontmatterError(ValueError):
    """SKILL.md frontmatter is present but malformed."""

    pass


def split_frontmatter(text: str) -> tuple[dict[str, object], str]:
    """Split YAML frontmatter from the markdown body.

    Text without a well-formed frontmatter block yields an empty mapping and
    the text unchanged.
    """
    try:
        return parse_frontmatter(text)
    except FrontmatterError:
        return {}, text


def parse_frontmatter(text: str) -> tuple[dict[str, object], str]:
    """Strict variant of ``split_frontmatter``.

    Raises:
        FrontmatterError: If the opening or closing delimiter is missing, the
            YAML does not parse, or it is not a mapping.
    """
    lines = text.splitlines()
    if not lines or lines[0].strip() != "---":
        raise FrontmatterError("SKILL.md must start with YAML frontmatter (---)")

    end_idx = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end_idx = i
            break

    if end_idx is None:
        raise FrontmatterError("SKILL.md frontmatter must end with ---")

    yaml_text = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    try:
        data = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise FrontmatterError("SKILL.md frontmatter must be a YAML mapping")

    return data, body


async def read_text(path: Path) -> str:
    async with aiofiles.open(path, encoding="utf-8") as handle:
        return await handle.read()

