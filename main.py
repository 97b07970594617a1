"""Main entry point for dev-kit."""

import argparse
import asyncio
import importlib.metadata
from typing import List, Optional

from commands import (
    OUTPUT_FORMATS,
    InitCommand,
    OnboardCommand,
    detect_agents,
    list_skills,
    uninstall_skill,
)
from config import Config, ensure_config
from errors import CLIError, ConfigurationError, handle_error
from utils import get_log_file_path, get_logger, setup_logger, terminal_ui
from utils.runtime import ensure_runtime_dirs, get_config_file

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dev-kit",
        description="Install dev-kit workflow skills into AI coding agents",
    )

    try:
        version = importlib.metadata.version("dev-kit")
    except importlib.metadata.PackageNotFoundError:
        version = "dev"
    parser.add_argument("--version", "-V", action="version", version=f"dev-kit {version}")

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging to ~/.dev-kit/logs/",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Like --verbose, and also print debug logs to the console",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    init_parser = subparsers.add_parser("init", help="Install dev-kit skills for an agent")
    init_parser.add_argument(
        "agent",
        nargs="?",
        help="Agent to initialize (claude-code, github-copilot, cursor). Prompts when omitted.",
    )
    init_parser.add_argument("--force", action="store_true", help="Overwrite installed skills")
    init_parser.add_argument("--verify", action="store_true", help="Verify each skill after install")
    init_parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    onboard_parser = subparsers.add_parser("onboard", help="Show the onboarding guide")
    onboard_parser.add_argument(
        "--output",
        "-o",
        choices=OUTPUT_FORMATS,
        default="terminal",
        help="Output format (default: terminal)",
    )
    onboard_parser.add_argument("--section", "-s", help="Only show one section (e.g. quick-start, faq)")
    onboard_parser.add_argument("--open", action="store_true", help="Open the guide in a browser")
    onboard_parser.add_argument("--update", action="store_true", help="Fetch the latest guide")
    onboard_parser.add_argument("--no-pager", action="store_true", help="Never page long output")

    subparsers.add_parser("detect", help="Show which agents are installed")

    list_parser = subparsers.add_parser("list", help="List the skills installed for an agent")
    list_parser.add_argument("agent", help="Agent name")

    uninstall_parser = subparsers.add_parser("uninstall", help="Remove a skill from an agent")
    uninstall_parser.add_argument("agent", help="Agent name")
    uninstall_parser.add_argument("skill", help="Skill name")

    return parser


async def run_command(args: argparse.Namespace) -> int:
    """Dispatch a parsed command line; returns the exit code."""
    if args.command == "init":
        await InitCommand().execute(
            agent_name=args.agent,
            force=args.force,
            verify=args.verify,
            yes=args.yes,
        )
        return 0

    if args.command == "onboard":
        shown = await OnboardCommand().execute(
            output=args.output,
            section=args.section,
            open_browser=args.open,
            update=args.update,
            pager=not args.no_pager,
        )
        return 0 if shown else 1

    if args.command == "detect":
        await detect_agents()
        return 0

    if args.command == "list":
        await list_skills(args.agent)
        return 0

    if args.command == "uninstall":
        removed = await uninstall_skill(args.agent, args.skill)
        return 0 if removed else 1

    raise CLIError(f"Unknown command: {args.command}", "USER_ERROR", "Run dev-kit --help")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    verbose = args.verbose or args.debug

    # Initialize runtime directories (create logs dir only in verbose mode)
    ensure_runtime_dirs(create_logs=verbose)
    ensure_config()

    # Initialize logging only in verbose mode
    if verbose:
        setup_logger(log_to_console=args.debug, command=args.command)

    # Validate config
    try:
        Config.validate()
    except ValueError as e:
        error = ConfigurationError(str(e), f"Edit {get_config_file()}")
        terminal_ui.print_error(error.format_message(), title="Configuration Error")
        return 1

    try:
        return asyncio.run(run_command(args))
    except KeyboardInterrupt:
        terminal_ui.print_warning("Interrupted")
        return 130
    except Exception as e:
        logger.error(f"{type(e).__name__}: {e}", exc_info=not isinstance(e, CLIError))
        exit_code = handle_error(e)
        log_file = get_log_file_path()
        if log_file:
            terminal_ui.print_log_location(log_file)
        return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
