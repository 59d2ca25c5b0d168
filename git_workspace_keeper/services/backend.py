"""Repository backend interface consumed by the workspace engines."""

from abc import ABC, abstractmethod
from typing import AbstractSet, List

from git_workspace_keeper.models.project import Project
from git_workspace_keeper.models.state import Branch, Change


class RepositoryBackend(ABC):
    """Version-control operations the engines need for a single project.

    Implementations raise BackendError when an operation fails.
    """

    @abstractmethod
    def current_branch(self, project: Project) -> str:
        """Name of the branch checked out in the project."""

    @abstractmethod
    def branches(self, project: Project) -> List[Branch]:
        """Local branches of the project, in backend order."""

    @abstractmethod
    def has_uncommitted_changes(self, project: Project) -> bool:
        """True if the working tree or index has uncommitted changes."""

    @abstractmethod
    def has_untracked_files(self, project: Project) -> bool:
        """True if the working tree contains untracked files."""

    @abstractmethod
    def remote_divergence(self, project: Project) -> List[Change]:
        """Remote changes that are not present locally, empty when up to date."""

    @abstractmethod
    def reset_to_default_branch(self, project: Project) -> None:
        """Check out the default branch and discard local modifications."""

    @abstractmethod
    def delete_local_branches(self, project: Project, keep: AbstractSet[str]) -> None:
        """Delete every local branch whose name is not in ``keep``."""
