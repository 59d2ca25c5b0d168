"""Service for polling projects for remote changes"""

from typing import AbstractSet, Dict, Iterable, List, Mapping, Optional, Set

from git_workspace_keeper.exceptions import BackendError, UnknownTestError
from git_workspace_keeper.models.project import Project, ProjectKey
from git_workspace_keeper.models.state import Change
from git_workspace_keeper.services.backend import RepositoryBackend
from git_workspace_keeper.utils.threading import run_batch
from git_workspace_keeper.logging_config import get_logger

logger = get_logger(__name__)


def build_test_projects(project_tests: Mapping[str, Iterable[str]]) -> Dict[str, List[str]]:
    """Invert a project -> tests table into test -> projects."""
    test_projects: Dict[str, List[str]] = {}
    for project in sorted(project_tests):
        for test in project_tests[project]:
            projects = test_projects.setdefault(test, [])
            if project not in projects:
                projects.append(project)
    return test_projects


def resolve_test_projects(
    tests: Iterable[str], test_projects: Mapping[str, Iterable[str]]
) -> Set[str]:
    """Get the names of the projects that can affect any of the given tests.

    Raises:
        UnknownTestError: If a test has no project mapping
    """
    project_names: Set[str] = set()
    for test in tests:
        if test not in test_projects:
            raise UnknownTestError(test)
        project_names.update(test_projects[test])
    return project_names


def get_project_changes(project: Project, backend: RepositoryBackend) -> List[Change]:
    """Query the backend for one project's remote changes.

    Raises:
        BackendError: If the query fails, identifying the project
    """
    try:
        return list(backend.remote_divergence(project))
    except BackendError:
        raise
    except Exception as e:
        raise BackendError("remote_divergence", project.name, str(e)) from e


def poll(
    projects: Mapping[ProjectKey, Project],
    backend: RepositoryBackend,
    project_names: AbstractSet[str] = frozenset(),
    workers: Optional[int] = None,
    sequential: bool = False,
) -> Dict[str, List[Change]]:
    """Find remote changes that are not present locally.

    Args:
        projects: Registered projects, by key
        backend: Repository backend
        project_names: Names of the projects to poll; empty polls all of them
        workers: Number of parallel workers (None = auto-detect)
        sequential: Poll projects one at a time

    Returns:
        Changes by project name, only for projects with at least one change.
        Projects sharing a name (different remotes) are merged in key order.

    Raises:
        BackendError: If polling any selected project fails
    """
    selected = {
        key: project for key, project in projects.items()
        if not project_names or project.name in project_names
    }
    logger.debug(f"Polling {len(selected)} of {len(projects)} projects")

    changes = run_batch(
        sorted(selected.items()),
        lambda project: get_project_changes(project, backend),
        workers=workers,
        sequential=sequential,
    )

    update: Dict[str, List[Change]] = {}
    for key in sorted(changes):
        if not changes[key]:
            continue
        name = selected[key].name
        if name in update:
            logger.warning(f"Several projects named {name} have changes; merging them")
        update.setdefault(name, []).extend(changes[key])
    return update
