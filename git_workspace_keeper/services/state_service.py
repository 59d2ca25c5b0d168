"""Service for aggregating per-project branch and working tree state"""

from dataclasses import replace
from typing import Dict, Mapping, Optional

from git_workspace_keeper.constants import DEFAULT_BRANCH
from git_workspace_keeper.exceptions import BackendError
from git_workspace_keeper.models.project import Project, ProjectKey
from git_workspace_keeper.models.state import ProjectState
from git_workspace_keeper.services.backend import RepositoryBackend
from git_workspace_keeper.utils.threading import run_batch
from git_workspace_keeper.logging_config import get_logger

logger = get_logger(__name__)


def is_pristine(state: ProjectState, default_branch: str = DEFAULT_BRANCH) -> bool:
    """Check if a project is on its only branch, the default one, with a clean tree.

    This is the predicate used when listing projects.
    """
    return (
        len(state.branches) == 1
        and state.branches[0].name == default_branch
        and state.current_branch == default_branch
        and not state.has_uncommitted
        and not state.has_untracked
    )


def get_project_state(
    project: Project, backend: RepositoryBackend, check_dirty: bool = True
) -> ProjectState:
    """Query the backend for one project's state.

    Raises:
        BackendError: If any backend query fails, identifying the project
    """
    logger.debug(f"Collecting state for {project.name}")
    try:
        current_branch = backend.current_branch(project)
        branches = tuple(
            replace(branch, is_current=branch.name == current_branch)
            for branch in backend.branches(project)
        )
        has_uncommitted = check_dirty and backend.has_uncommitted_changes(project)
        has_untracked = check_dirty and backend.has_untracked_files(project)
    except BackendError:
        raise
    except Exception as e:
        raise BackendError("get_state", project.name, str(e)) from e

    return ProjectState(
        project=project,
        current_branch=current_branch,
        branches=branches,
        has_uncommitted=has_uncommitted,
        has_untracked=has_untracked,
    )


def get_states(
    projects: Mapping[ProjectKey, Project],
    backend: RepositoryBackend,
    filter_pristine: bool = False,
    check_dirty: bool = True,
    default_branch: str = DEFAULT_BRANCH,
    workers: Optional[int] = None,
    sequential: bool = False,
) -> Dict[ProjectKey, ProjectState]:
    """Collect the state of every project.

    The call is all-or-nothing: a backend failure for any project raises
    BackendError and no states are returned. Result order is unspecified;
    sort by key for deterministic output.

    Args:
        projects: Projects to query, by key
        backend: Repository backend
        filter_pristine: Omit pristine projects (dirty flags are always checked then)
        check_dirty: Query uncommitted/untracked state
        default_branch: Branch a pristine project is on
        workers: Number of parallel workers (None = auto-detect)
        sequential: Query projects one at a time
    """
    check_dirty = check_dirty or filter_pristine
    states = run_batch(
        sorted(projects.items()),
        lambda project: get_project_state(project, backend, check_dirty),
        workers=workers,
        sequential=sequential,
    )

    if filter_pristine:
        states = {
            key: state for key, state in states.items()
            if not is_pristine(state, default_branch)
        }
        logger.debug(f"{len(projects) - len(states)} pristine projects omitted")

    return states
