"""Command-line interface for git-workspace-keeper"""

import argparse
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from git_workspace_keeper.cli.args import parse_args
from git_workspace_keeper.config import Config
from git_workspace_keeper.core import WorkspaceKeeper
from git_workspace_keeper.exceptions import WorkspaceKeeperError
from git_workspace_keeper.logging_config import setup_logging
from git_workspace_keeper.services.registry import find_workspace_root
from git_workspace_keeper.utils.threading import get_threading_info

console = Console()
err_console = Console(stderr=True)


def build_config(parsed_args: argparse.Namespace) -> Config:
    """Build config from parsed arguments."""
    command = parsed_args.command
    return Config(
        check_dirty=getattr(parsed_args, "check_dirty", True),
        show_name=getattr(parsed_args, "show_name", False),
        show_branches=command == "list" and parsed_args.branches,
        no_pristine=getattr(parsed_args, "nopristine", False),
        delete_all_branches=command == "clean" and parsed_args.branches,
        verbose=parsed_args.verbose,
        debug=parsed_args.debug,
        sequential=parsed_args.sequential,
        workers=parsed_args.workers,
    )


def run_command(keeper: WorkspaceKeeper, parsed_args: argparse.Namespace) -> int:
    """Run the selected subcommand and print its output."""
    command = parsed_args.command

    if command == "list":
        for line in keeper.list_projects():
            console.out(line, highlight=False)

    elif command == "shell-prompt":
        console.out(keeper.shell_prompt(), highlight=False)

    elif command == "clean":
        errors = keeper.clean(parsed_args.projects)
        for identifier, error in errors:
            err_console.print(
                f"[red]Error finding local project {escape(repr(identifier))}: {escape(str(error))}.[/red]",
                highlight=False,
                soft_wrap=True,
            )

    elif command == "poll":
        output = keeper.poll_json(parsed_args.tests)
        if output is not None:
            console.out(output, highlight=False)

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        # Setup logging before creating WorkspaceKeeper
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        config = build_config(parsed_args)

        if parsed_args.debug:
            err_console.print("[yellow]Debug mode enabled[/yellow]")

            threading_info = get_threading_info()
            err_console.print("[yellow]Threading Information:[/yellow]")
            err_console.print(f"  Python version: {threading_info['python_version']}")
            err_console.print(f"  Threading mode: {threading_info['mode']}")
            err_console.print(f"  CPU count: {threading_info['cpu_count']}")
            err_console.print(f"  Optimal workers: {threading_info['optimal_workers']}")

            err_console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                err_console.print(f"  {key}: {value}")
            err_console.print("[dim]Note: Debug mode forces sequential processing for readable logs[/dim]")

        root = parsed_args.root or find_workspace_root(metadata_dir=config.metadata_dir)
        keeper = WorkspaceKeeper(root, config)
        return run_command(keeper, parsed_args)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (WorkspaceKeeperError, ValueError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        if parsed_args is not None and parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
