"""Service for summarizing project states into a shell prompt"""

import os
from typing import List, Mapping, Optional

from git_workspace_keeper.constants import (
    DEFAULT_BRANCH,
    PROMPT_SEPARATOR,
    SYMBOL_UNCOMMITTED,
    SYMBOL_UNTRACKED,
)
from git_workspace_keeper.models.project import ProjectKey
from git_workspace_keeper.models.state import ProjectState


def is_prompt_pristine(
    state: ProjectState, check_dirty: bool = True, default_branch: str = DEFAULT_BRANCH
) -> bool:
    """Check if a project is uninteresting enough to leave out of the prompt.

    Unlike the listing predicate, extra local branches do not matter here:
    only the checked-out branch and, when checking, the dirty flags.
    """
    pristine = state.current_branch == default_branch
    if check_dirty:
        pristine = pristine and not state.has_uncommitted and not state.has_untracked
    return pristine


def format_status_suffix(state: ProjectState, check_dirty: bool = True) -> str:
    """Get the dirty markers for a project: "*" uncommitted, then "%" untracked."""
    if not check_dirty:
        return ""
    suffix = ""
    if state.has_uncommitted:
        suffix += SYMBOL_UNCOMMITTED
    if state.has_untracked:
        suffix += SYMBOL_UNTRACKED
    return suffix


def summarize(
    states: Mapping[ProjectKey, ProjectState],
    current_key: Optional[ProjectKey],
    check_dirty: bool = True,
    show_name: bool = False,
    default_branch: str = DEFAULT_BRANCH,
) -> List[str]:
    """Build the prompt entries for a set of project states.

    Projects are visited in key order. The current project always comes
    first, as ``branch`` (or ``name:branch`` with show_name). Other projects
    follow as ``name:branch`` unless they are prompt-pristine.
    """
    statuses: List[str] = []
    for key in sorted(states):
        state = states[key]
        short = state.current_branch + format_status_suffix(state, check_dirty)
        long = f"{os.path.basename(state.project.name)}:{short}"

        if key == current_key:
            statuses.insert(0, long if show_name else short)
        elif not is_prompt_pristine(state, check_dirty, default_branch):
            statuses.append(long)
    return statuses


def format_shell_prompt(statuses: List[str]) -> str:
    """Join prompt entries into a single line."""
    return PROMPT_SEPARATOR.join(statuses)
