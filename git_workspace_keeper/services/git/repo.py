"""Repository access helpers shared by the git services."""

from contextlib import contextmanager

import git

from git_workspace_keeper.exceptions import BackendError
from git_workspace_keeper.models.project import Project


def open_repo(project: Project) -> git.Repo:
    """Open a fresh git.Repo instance for a project.

    A new instance is created for each call so that concurrent workers never
    share one. GitPython repos are lightweight: opening one does not clone.
    """
    return git.Repo(project.path)


@contextmanager
def git_operation(operation: str, project: Project):
    """Raise git failures inside the block as BackendError for the project."""
    try:
        yield
    except git.exc.GitCommandError as e:
        stderr = (e.stderr or "").strip()
        if stderr:
            message = f"'{' '.join(map(str, e.command))}' failed (exit {e.status}): {stderr}"
        else:
            message = f"'{' '.join(map(str, e.command))}' failed with exit code {e.status}"
        raise BackendError(operation, project.name, message) from e
    except git.exc.InvalidGitRepositoryError as e:
        raise BackendError(operation, project.name, f"not a git repository: {e}") from e
    except (git.exc.GitError, OSError, ValueError) as e:
        raise BackendError(operation, project.name, str(e) or type(e).__name__) from e
