"""Runtime directory management for dev-kit.

All runtime data is stored under ~/.dev-kit/ directory:
- config: Configuration file (created on first run by main)
- logs/: Log files (only created with --verbose or --debug)

Project-local workflow data lives under ./.dev-kit/ (created by `dev-kit init`).
"""

import os

PROJECT_SUBDIRS = ("docs", "knowledge", "tickets")


def get_runtime_dir() -> str:
    """Get the runtime directory path.

    Returns:
        Path to ~/.dev-kit directory
    """
    return os.path.join(os.path.expanduser("~"), ".dev-kit")


def get_config_file() -> str:
    """Get the configuration file path.

    Returns:
        Path to ~/.dev-kit/config
    """
    return os.path.join(get_runtime_dir(), "config")


def get_log_dir() -> str:
    """Get the log directory path.

    Returns:
        Path to ~/.dev-kit/logs/
    """
    return os.path.join(get_runtime_dir(), "logs")


def get_project_dir(cwd: str | None = None) -> str:
    """Get the project-local .dev-kit directory.

    Args:
        cwd: Project root (defaults to the current working directory)

    Returns:
        Path to <cwd>/.dev-kit
    """
    return os.path.join(cwd or os.getcwd(), ".dev-kit")


def ensure_runtime_dirs(create_logs: bool = False) -> None:
    """Ensure runtime directories exist.

    Creates:
    - ~/.dev-kit/
    - ~/.dev-kit/logs/ (only if create_logs=True)

    Args:
        create_logs: Whether to create the logs directory (for --verbose mode)
    """
    os.makedirs(get_runtime_dir(), exist_ok=True)

    if create_logs:
        os.makedirs(get_log_dir(), exist_ok=True)
