"""Custom exceptions for git-workspace-keeper"""

from typing import Optional, Sequence


class WorkspaceKeeperError(Exception):
    """Base exception for all git-workspace-keeper errors."""
    pass


class DiscoveryError(WorkspaceKeeperError):
    """Exception raised when the workspace manifest cannot be read or is malformed."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path

        error_msg = "Workspace discovery failed"
        if path:
            error_msg += f" for '{path}'"
        error_msg += f": {message}"

        super().__init__(error_msg)


class NotFoundError(WorkspaceKeeperError):
    """Exception raised when no project matches an identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No project matches '{identifier}'")


class AmbiguousMatchError(WorkspaceKeeperError):
    """Exception raised when several projects match an identifier."""

    def __init__(self, identifier: str, matches: Sequence[str]):
        self.identifier = identifier
        self.matches = list(matches)
        super().__init__(
            f"Identifier '{identifier}' matches multiple projects: {', '.join(self.matches)}"
        )


class NotInProjectError(WorkspaceKeeperError):
    """Exception raised when the working directory is not inside any project."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"'{path}' is not inside any workspace project")


class BackendError(WorkspaceKeeperError):
    """Exception raised when a repository backend operation fails for a project."""

    def __init__(self, operation: str, project: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.project = project
        self.message = message

        error_msg = f"Backend operation '{operation}' failed"
        if project:
            error_msg += f" for project '{project}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class UnknownTestError(WorkspaceKeeperError):
    """Exception raised when a test name has no project mapping."""

    def __init__(self, test: str):
        self.test = test
        super().__init__(f"Failed to find any projects for test '{test}'")


class CleanupError(WorkspaceKeeperError):
    """Exception raised when cleaning up a project fails."""

    def __init__(self, project: str, cause: Exception):
        self.project = project
        self.cause = cause
        super().__init__(f"Cleanup of project '{project}' failed: {cause}")
