"""Terminal styling for dev-kit."""

from utils.tui.theme import Theme, set_theme

__all__ = [
    "Theme",
    "set_theme",
]
