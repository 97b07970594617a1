"""Logging configuration for dev-kit."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .runtime import get_log_dir

# Global flag to track if logging has been initialized
_logging_initialized = False
_log_file_path = None


def setup_logger(
    log_dir: Optional[str] = None,
    log_level: Optional[str] = None,
    log_to_console: bool = False,
    command: Optional[str] = None,
) -> None:
    """Configure the logging system globally.

    This should be called once at the start of the application when --verbose
    or --debug is enabled. Logging is written to ~/.dev-kit/logs/ by default.

    Args:
        log_dir: Directory to store log files (default: ~/.dev-kit/logs/)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_console: Whether to also log to console at the same level
        command: Subcommand being run; becomes part of the log file name
    """
    global _logging_initialized, _log_file_path

    if _logging_initialized:
        return

    # Use runtime log directory by default
    if log_dir is None:
        log_dir = get_log_dir()

    # Get log level from Config if not provided
    if log_level is None:
        try:
            from config import Config

            log_level = Config.LOG_LEVEL
        except ImportError:
            log_level = "DEBUG"

    # Set root logger level
    level = getattr(logging, log_level.upper(), logging.DEBUG)
    logging.root.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True, parents=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    prefix = f"dev-kit-{command}" if command else "dev-kit"
    log_file = log_path / f"{prefix}_{timestamp}.log"
    _log_file_path = str(log_file)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logging.root.addHandler(file_handler)

    # --debug mirrors everything to stderr
    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logging.root.addHandler(console_handler)

    _logging_initialized = True

    logging.info(f"Logging initialized. Level: {log_level}, File: {_log_file_path}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Logging is only enabled when --verbose or --debug is used and
    setup_logger() is called explicitly. Without it, logs go nowhere.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def get_log_file_path() -> Optional[str]:
    """Get the path to the current log file.

    Returns:
        Path to log file, or None if logging to file is disabled
    """
    return _log_file_path
