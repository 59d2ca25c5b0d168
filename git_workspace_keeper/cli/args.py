"""Command-line argument parsing for git-workspace-keeper."""

import argparse
from typing import Optional, Sequence

from git_workspace_keeper.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="git-workspace-keeper",
        description="Manage the projects of a multi-repository workspace",
        epilog="The workspace root is the closest parent directory containing "
        ".workspace/manifest.toml, or $WORKSPACE_ROOT when set.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--version", action="version", version=f"git-workspace-keeper {__version__}"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--root", help="Workspace root directory (default: auto-detect)")
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel workers for per-project queries (default: auto-detect)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Force sequential processing (disable parallelism)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    list_parser = subparsers.add_parser(
        "list",
        help="List existing projects and branches",
        description="Inspect the local filesystem and list the existing projects and branches.",
    )
    list_parser.add_argument("--branches", action="store_true", help="Show project branches")
    list_parser.add_argument(
        "--nopristine",
        action="store_true",
        help="Omit pristine projects, i.e. projects with a clean master branch and no other branches",
    )

    prompt_parser = subparsers.add_parser(
        "shell-prompt",
        help="Print a succinct status of projects suitable for shell prompts",
        description="Report current branches of projects as well as an indication of each "
        "project's status: '*' marks uncommitted changes, '%' marks untracked files.",
    )
    prompt_parser.add_argument(
        "--check-dirty",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Check for uncommitted changes or untracked files. Disabling this is dangerous: "
        "dirty master branches will not appear in the output",
    )
    prompt_parser.add_argument(
        "--show-name", action="store_true", help="Show the name of the current project"
    )

    clean_parser = subparsers.add_parser(
        "clean",
        help="Restore projects to their pristine state",
        description="Restore projects back to their master branches and get rid of all "
        "local changes, and with --branches all local branches.",
    )
    clean_parser.add_argument(
        "--branches", action="store_true", help="Delete all non-master branches"
    )
    clean_parser.add_argument(
        "projects", nargs="*", metavar="project", help="Projects to clean up (default: all)"
    )

    poll_parser = subparsers.add_parser(
        "poll",
        help="Poll projects for remote changes",
        description="Poll the projects that can affect the outcome of the given tests and "
        "report whether any new changes exist remotely. With no tests, all projects are polled.",
    )
    poll_parser.add_argument(
        "tests", nargs="*", metavar="test", help="Tests that determine which projects to poll"
    )

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
