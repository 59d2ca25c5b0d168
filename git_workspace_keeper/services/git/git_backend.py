"""Git implementation of the repository backend."""

from typing import AbstractSet, List, Union, TYPE_CHECKING

from git_workspace_keeper.models.project import Project
from git_workspace_keeper.models.state import Branch, Change
from git_workspace_keeper.services.backend import RepositoryBackend
from git_workspace_keeper.services.git.branch_queries import BranchQueries
from git_workspace_keeper.services.git.operations import GitOperations

if TYPE_CHECKING:
    from git_workspace_keeper.config import Config


class GitBackend(RepositoryBackend):
    """Repository backend for projects checked out with git."""

    def __init__(self, config: Union["Config", dict]):
        self.config = config
        self.branch_queries = BranchQueries(config)
        self.operations = GitOperations(config)

    def current_branch(self, project: Project) -> str:
        return self.branch_queries.get_current_branch(project)

    def branches(self, project: Project) -> List[Branch]:
        return self.branch_queries.get_branches(project)

    def has_uncommitted_changes(self, project: Project) -> bool:
        return self.branch_queries.has_uncommitted_changes(project)

    def has_untracked_files(self, project: Project) -> bool:
        return self.branch_queries.has_untracked_files(project)

    def remote_divergence(self, project: Project) -> List[Change]:
        return self.operations.get_remote_changes(project)

    def reset_to_default_branch(self, project: Project) -> None:
        self.operations.reset_to_default_branch(project)

    def delete_local_branches(self, project: Project, keep: AbstractSet[str]) -> None:
        self.operations.delete_local_branches(project, keep)
