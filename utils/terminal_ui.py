"""Terminal UI utilities using Rich library for beautiful output.

This module provides a unified interface for terminal output, integrating
with the theme system for consistent styling.
"""

import sys
from typing import Any, Dict, Iterable, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from config import Config
from utils.tui.theme import Theme, set_theme

# Initialize theme from config
try:
    set_theme(Config.TUI_THEME)
except ValueError:
    # Config.validate() reports the bad value; keep the default palette meanwhile
    pass

# Global console instance with theme support
console = Console(theme=Theme.get_rich_theme(), no_color=not Config.COLOR_OUTPUT)


def _get_colors():
    """Get current theme colors."""
    return Theme.get_colors()


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header panel.

    Args:
        title: Main title text
        subtitle: Optional subtitle text
    """
    colors = _get_colors()
    content = f"[bold {colors.primary}]{title}[/bold {colors.primary}]"
    if subtitle:
        content += f"\n[{colors.text_secondary}]{subtitle}[/{colors.text_secondary}]"

    console.print(Panel(content, border_style=colors.primary, box=box.DOUBLE, padding=(1, 2)))


def print_agent_table(rows: Iterable[Dict[str, Any]]) -> None:
    """Print agents with their support and detection status.

    Args:
        rows: Dicts with name, display_name, skill_path, supported and detected keys
    """
    colors = _get_colors()
    table = Table(
        show_header=True,
        header_style=f"bold {colors.primary}",
        box=box.ROUNDED,
        border_style=colors.text_muted,
    )
    table.add_column("Agent", style="agent")
    table.add_column("Name")
    table.add_column("Skill path", style="path")
    table.add_column("Supported", justify="center")
    table.add_column("Detected", justify="center")

    for row in rows:
        supported = row.get("supported")
        detected = row.get("detected")
        table.add_row(
            row["name"],
            row["display_name"],
            row.get("skill_path") or "-",
            f"[{colors.success}]yes[/{colors.success}]" if supported else f"[{colors.text_muted}]no[/{colors.text_muted}]",
            _status_cell(detected),
        )

    console.print(table)


def _status_cell(detected: Optional[bool]) -> str:
    colors = _get_colors()
    if detected is None:
        return f"[{colors.text_muted}]?[/{colors.text_muted}]"
    if detected:
        return f"[{colors.success}]✓[/{colors.success}]"
    return f"[{colors.error}]✗[/{colors.error}]"


def print_skill_list(title: str, names: Sequence[str]) -> None:
    """Print a titled bullet list of skill names.

    Args:
        title: Heading printed above the list
        names: Skill names
    """
    colors = _get_colors()
    console.print(f"[bold {colors.primary}]{title}[/bold {colors.primary}]")
    if not names:
        console.print(f"  [{colors.text_muted}](no skills installed)[/{colors.text_muted}]")
        return
    for name in names:
        console.print(f"  • [{colors.secondary}]{name}[/{colors.secondary}]")


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message.

    Args:
        message: Error message
        title: Error title (default: "Error")
    """
    colors = _get_colors()
    console.print(
        Panel(
            f"[{colors.error}]{message}[/{colors.error}]",
            title=f"[bold {colors.error}]{title}[/bold {colors.error}]",
            border_style=colors.error,
            box=box.ROUNDED,
        )
    )


def print_warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: Warning message
    """
    colors = _get_colors()
    console.print(f"[{colors.warning}]⚠ {message}[/{colors.warning}]")


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message
    """
    colors = _get_colors()
    console.print(f"[{colors.success}]✓ {message}[/{colors.success}]")


def print_info(message: str) -> None:
    """Print an info message.

    Args:
        message: Info message
    """
    colors = _get_colors()
    console.print(f"[{colors.primary}]ℹ {message}[/{colors.primary}]")


def print_log_location(log_file: str) -> None:
    """Print log file location.

    Args:
        log_file: Path to log file
    """
    colors = _get_colors()
    console.print()
    console.print(f"[{colors.text_muted}]Detailed logs: {log_file}[/{colors.text_muted}]")


def print_markdown(markdown_text: str, use_pager: bool = False) -> None:
    """Print formatted markdown.

    Args:
        markdown_text: Markdown text to render
        use_pager: Page the output through the system pager
    """
    md = Markdown(markdown_text)
    if use_pager:
        with console.pager(styles=True):
            console.print(md)
        return
    console.print(md)


def print_raw(text: str) -> None:
    """Print text as-is: no markup, highlighting or wrapping."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_json(data: Any) -> None:
    """Print data as indented JSON."""
    console.print_json(data=data, indent=2)


def should_page(text: str) -> bool:
    """Whether text is taller than the terminal it would be shown in."""
    return console.is_terminal and len(text.splitlines()) > console.height


def is_interactive() -> bool:
    """Whether prompts can be shown (stdin attached to a terminal)."""
    return sys.stdin.isatty()


def ask(question: str, default: str = "", choices: Optional[Sequence[str]] = None) -> str:
    """Ask the user for a value; returns the default when not interactive.

    Args:
        question: Prompt text
        default: Value used for empty answers and non-interactive sessions
        choices: Optional list of accepted answers

    Returns:
        The user's answer, stripped
    """
    if not is_interactive():
        return default
    answer = Prompt.ask(
        question,
        console=console,
        default=default,
        choices=list(choices) if choices else None,
    )
    return (answer or default).strip()


def confirm(question: str, default: bool = False) -> bool:
    """Ask a yes/no question; returns the default when not interactive."""
    if not is_interactive():
        return default
    return Confirm.ask(question, console=console, default=default)
