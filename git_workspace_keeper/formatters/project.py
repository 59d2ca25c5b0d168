"""Project listing formatting utilities."""

import json
from typing import List, Mapping

from git_workspace_keeper.constants import (
    LISTING_INDENT,
    REVIEW_EXPORTED_NOTE,
    SYMBOL_CURRENT_BRANCH,
)
from git_workspace_keeper.models.project import Project, ProjectKey
from git_workspace_keeper.models.state import Branch, ProjectState


def format_project_line(project: Project) -> str:
    """
    Format the identity line of a project.

    Args:
        project: Project to describe

    Returns:
        ``name="..." remote="..." path="..."`` with each value quoted and escaped
    """
    return (
        f"name={json.dumps(project.name)} "
        f"remote={json.dumps(project.remote)} "
        f"path={json.dumps(project.path)}"
    )


def format_branch_line(branch: Branch) -> str:
    """
    Format a branch line for the listing.

    Args:
        branch: Branch to describe

    Returns:
        Indented branch name, marked ``*`` when current and annotated when
        the branch was exported for review
    """
    line = LISTING_INDENT
    if branch.is_current:
        line += SYMBOL_CURRENT_BRANCH
    line += branch.name
    if branch.has_review_marker:
        line += REVIEW_EXPORTED_NOTE
    return line


def format_project_listing(
    states: Mapping[ProjectKey, ProjectState], show_branches: bool = False
) -> List[str]:
    """
    Format project states as listing lines, in key order.

    Args:
        states: Project states by key
        show_branches: Add one line per local branch under each project

    Returns:
        Lines to print
    """
    lines = []
    for key in sorted(states):
        state = states[key]
        lines.append(format_project_line(state.project))
        if show_branches:
            lines.extend(format_branch_line(branch) for branch in state.branches)
    return lines
