"""Service for restoring projects to their pristine state"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from git_workspace_keeper.constants import DEFAULT_BRANCH
from git_workspace_keeper.exceptions import CleanupError, WorkspaceKeeperError
from git_workspace_keeper.models.project import Project, ProjectKey
from git_workspace_keeper.services.backend import RepositoryBackend
from git_workspace_keeper.services.registry import ProjectRegistry
from git_workspace_keeper.utils.threading import run_batch
from git_workspace_keeper.logging_config import get_logger

logger = get_logger(__name__)


def select_projects(
    registry: ProjectRegistry, identifiers: Sequence[str]
) -> Tuple[Dict[ProjectKey, Project], List[Tuple[str, WorkspaceKeeperError]]]:
    """Resolve the projects to clean up.

    With no identifiers every project is selected. Otherwise each identifier
    is resolved on its own: a failed lookup is returned alongside the
    identifier and does not stop the others from being resolved.

    Returns:
        Tuple of (selected projects by key, [(identifier, error), ...])
    """
    if not identifiers:
        return registry.scan(), []

    selected: Dict[ProjectKey, Project] = {}
    errors: List[Tuple[str, WorkspaceKeeperError]] = []
    for identifier in identifiers:
        try:
            project = registry.find_unique(identifier)
        except WorkspaceKeeperError as e:
            logger.debug(f"Could not resolve '{identifier}': {e}")
            errors.append((identifier, e))
            continue
        selected[project.key] = project
    return selected, errors


def cleanup_project(
    project: Project,
    backend: RepositoryBackend,
    delete_all_branches: bool = False,
    default_branch: str = DEFAULT_BRANCH,
) -> None:
    """Reset one project to its default branch, then optionally prune branches.

    Raises:
        CleanupError: Wrapping the backend failure
    """
    logger.info(f"Cleaning up {project.name}")
    try:
        backend.reset_to_default_branch(project)
        if delete_all_branches:
            backend.delete_local_branches(project, {default_branch})
    except Exception as e:
        raise CleanupError(project.name, e) from e


def cleanup(
    projects: Mapping[ProjectKey, Project],
    backend: RepositoryBackend,
    delete_all_branches: bool = False,
    default_branch: str = DEFAULT_BRANCH,
    workers: Optional[int] = None,
    sequential: bool = False,
) -> None:
    """Restore every given project to its pristine default-branch state.

    This discards local changes and, with delete_all_branches, deletes every
    local branch except the default one. Projects are independent and may be
    cleaned in parallel; the first failure aborts the batch.

    Raises:
        CleanupError: For the first project whose cleanup failed
    """
    run_batch(
        sorted(projects.items()),
        lambda project: cleanup_project(project, backend, delete_all_branches, default_branch),
        workers=workers,
        sequential=sequential,
        fail_fast=True,
    )
    logger.info(f"Cleaned up {len(projects)} projects")
