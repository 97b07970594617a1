"""Configuration management for dev-kit."""

import os
import tempfile

# Define path constants directly to avoid circular imports with utils
# (utils.terminal_ui imports Config, and utils.runtime is in the utils package)
_RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".dev-kit")
_CONFIG_FILE = os.path.join(_RUNTIME_DIR, "config")

_KNOWN_AGENTS = ("claude-code", "github-copilot", "cursor", "opencode")
_KNOWN_THEMES = ("dark", "light")

# Default configuration template
_DEFAULT_CONFIG = """\
# dev-kit Configuration

# Logging level used when --verbose or --debug is given
LOG_LEVEL=DEBUG

# Terminal output
TUI_THEME=dark
COLOR_OUTPUT=true

# Ask before skipping or overwriting installed skills
CONFIRM_BEFORE_INSTALL=true

# Where skill backups are kept during installation (empty = system temp dir)
BACKUP_DIR=

# Agents offered first during interactive selection (comma separated)
PREFERRED_AGENTS=claude-code,github-copilot

DOCS_URL=https://github.com/user/dev-kit
"""


def _load_config(path: str) -> dict[str, str]:
    """Parse a KEY=VALUE config file, skipping comments and blank lines."""
    cfg: dict[str, str] = {}
    if not os.path.isfile(path):
        return cfg
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            # Strip inline comments (# ...) from the value
            if "#" in value:
                value = value[: value.index("#")]
            cfg[key.strip()] = value.strip()
    return cfg


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def ensure_config() -> str:
    """Ensure ~/.dev-kit/config exists, create with defaults if not.

    Returns:
        Path to the configuration file
    """
    if not os.path.exists(_CONFIG_FILE):
        os.makedirs(_RUNTIME_DIR, exist_ok=True)
        with open(_CONFIG_FILE, "w", encoding="utf-8") as f:
            f.write(_DEFAULT_CONFIG)
    return _CONFIG_FILE


_cfg = _load_config(_CONFIG_FILE)


class Config:
    """Configuration for dev-kit.

    All configuration is centralized here. Access config values directly via Config.XXX.
    """

    # Logging Configuration
    # Note: Logging is controlled via the --verbose / --debug flags
    LOG_LEVEL = _cfg.get("LOG_LEVEL", "DEBUG").upper()

    # Terminal output
    TUI_THEME = _cfg.get("TUI_THEME", "dark")  # "dark" or "light"
    COLOR_OUTPUT = _cfg.get("COLOR_OUTPUT", "true").lower() == "true"

    # Installation behaviour
    CONFIRM_BEFORE_INSTALL = _cfg.get("CONFIRM_BEFORE_INSTALL", "true").lower() == "true"
    BACKUP_DIR = _cfg.get("BACKUP_DIR") or os.path.join(tempfile.gettempdir(), "dev-kit-rollbacks")

    # Agent selection
    PREFERRED_AGENTS = _split_list(_cfg.get("PREFERRED_AGENTS", "claude-code,github-copilot"))

    DOCS_URL = _cfg.get("DOCS_URL") or "https://github.com/user/dev-kit"

    @classmethod
    def onboarding_url(cls) -> str:
        """URL of the hosted onboarding guide."""
        return f"{cls.DOCS_URL.rstrip('/')}/blob/main/docs/ONBOARDING.md"

    @classmethod
    def validate(cls):
        """Validate configuration values.

        Raises:
            ValueError: If a configuration value is not recognised
        """
        if cls.TUI_THEME not in _KNOWN_THEMES:
            raise ValueError(
                f"TUI_THEME '{cls.TUI_THEME}' is not valid. Please set it in {_CONFIG_FILE}.\n"
                f"Available: {', '.join(_KNOWN_THEMES)}"
            )

        unknown = [name for name in cls.PREFERRED_AGENTS if name not in _KNOWN_AGENTS]
        if unknown:
            raise ValueError(
                f"PREFERRED_AGENTS contains unknown agents: {', '.join(unknown)}.\n"
                f"Supported agents: {', '.join(_KNOWN_AGENTS)}"
            )
