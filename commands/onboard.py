"""`dev-kit onboard`: show the onboarding guide."""

from __future__ import annotations

import os
import re
import webbrowser
from pathlib import Path

import aiofiles

from config import Config
from utils import get_logger, terminal_ui

logger = get_logger(__name__)

OUTPUT_FORMATS = ("terminal", "markdown", "plain", "json")

GUIDE_TITLE = "dev-kit Onboarding Guide"
BUNDLED_GUIDE = Path(__file__).parent / "guides" / "ONBOARDING.md"

# Friendly section names accepted by --section
SECTION_ALIASES = {
    "quick-start": "Quick Start",
    "quickstart": "Quick Start",
    "overview": "Overview",
    "workflows": "Workflow Overview",
    "workflow": "Workflow Overview",
    "examples": "Example Workflows",
    "example": "Example Workflows",
    "faq": "FAQ",
    "troubleshooting": "Troubleshooting",
    "next-steps": "Next Steps",
}

_HEADING_RE = re.compile(r"^(#+)\s*(.*)$")


def guide_candidates(cwd: str) -> list[Path]:
    base = Path(cwd)
    return [
        base / "docs" / "ONBOARDING.md",
        base.parent / "docs" / "ONBOARDING.md",
        base.parent.parent / "docs" / "ONBOARDING.md",
        base / "ONBOARDING.md",
    ]


def extract_section(content: str, section: str) -> str | None:
    """Return a heading and its body, up to the next heading of the same or higher level."""
    wanted = SECTION_ALIASES.get(section.lower(), section).lower()
    lines = content.splitlines()

    start = None
    level = 0
    for i, line in enumerate(lines):
        match = _HEADING_RE.match(line)
        if not match:
            continue
        if start is None:
            if wanted in match.group(2).lower():
                start, level = i, len(match.group(1))
        elif len(match.group(1)) <= level:
            return "\n".join(lines[start:i]).rstrip()

    if start is None:
        return None
    return "\n".join(lines[start:]).rstrip()


def list_sections(content: str) -> list[str]:
    return [m.group(2).strip() for m in map(_HEADING_RE.match, content.splitlines()) if m and m.group(2)]


def strip_markdown(content: str) -> str:
    """Reduce markdown to plain text."""
    text = re.sub(r"^#+\s+", "", content, flags=re.MULTILINE)
    text = re.sub(r"^\s*```.*$\n?", "", text, flags=re.MULTILINE)
    text = re.sub(r"`([^`]+)`", r"\1", text)
    text = re.sub(r"\*\*([^*]+)\*\*", r"\1", text)
    text = re.sub(r"\*([^*]+)\*", r"\1", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    return text


class OnboardCommand:
    def __init__(self, cwd: str | None = None):
        self.cwd = cwd or os.getcwd()

    async def load_guide(self) -> tuple[str, Path]:
        """Read the first onboarding guide found, falling back to the bundled one."""
        for candidate in [*guide_candidates(self.cwd), BUNDLED_GUIDE]:
            try:
                async with aiofiles.open(candidate, encoding="utf-8") as handle:
                    content = await handle.read()
            except OSError:
                continue
            logger.debug(f"Loaded onboarding guide from {candidate}")
            return content, candidate
        raise FileNotFoundError(f"Onboarding guide not found: {BUNDLED_GUIDE}")

    async def execute(
        self,
        output: str = "terminal",
        section: str | None = None,
        open_browser: bool = False,
        update: bool = False,
        pager: bool = True,
    ) -> bool:
        """Display the guide.

        Returns:
            False if the requested section does not exist, True otherwise
        """
        if open_browser:
            self.open_in_browser()
            return True

        content, _ = await self.load_guide()

        if update:
            terminal_ui.print_info("Fetching latest onboarding guide...")
            terminal_ui.print_warning("Remote updates not yet implemented")

        if section:
            selected = extract_section(content, section)
            if selected is None:
                terminal_ui.print_error(f'Section "{section}" not found')
                terminal_ui.print_info("Available sections:")
                for name in list_sections(content):
                    terminal_ui.console.print(f"  • {name}")
                return False
            self.render(selected, output, pager=False, section=section)
            return True

        self.render(content, output, pager=pager)
        return True

    def render(self, content: str, output: str, pager: bool, section: str | None = None) -> None:
        if output == "markdown":
            terminal_ui.print_raw(content)
        elif output == "plain":
            terminal_ui.print_raw(strip_markdown(content))
        elif output == "json":
            if section:
                terminal_ui.print_json({"section": section, "content": content})
            else:
                terminal_ui.print_json(
                    {
                        "title": GUIDE_TITLE,
                        "content": content,
                        "format": "markdown",
                        "length": len(content),
                    }
                )
        else:
            terminal_ui.print_markdown(content, use_pager=pager and terminal_ui.should_page(content))

    def open_in_browser(self) -> bool:
        url = Config.onboarding_url()
        terminal_ui.print_info("Opening onboarding guide in browser...")
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            logger.warning(f"Failed to open browser: {e}")
            opened = False

        if opened:
            terminal_ui.print_success(f"Opened: {url}")
        else:
            terminal_ui.print_error("Failed to open browser")
            terminal_ui.print_info(f"Visit: {url}")
        return opened
