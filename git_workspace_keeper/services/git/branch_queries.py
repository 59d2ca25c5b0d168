"""Branch query service for git-workspace-keeper."""

from pathlib import Path
from typing import List, Union, TYPE_CHECKING

from git_workspace_keeper.constants import REVIEW_MESSAGE_FILE
from git_workspace_keeper.models.project import Project
from git_workspace_keeper.models.state import Branch
from git_workspace_keeper.services.git.repo import git_operation, open_repo
from git_workspace_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_workspace_keeper.config import Config

logger = get_logger(__name__)

DETACHED_HEAD = "HEAD"


class BranchQueries:
    """Service for querying branch and working tree information."""

    def __init__(self, config: Union["Config", dict]):
        """Initialize the branch queries service.

        Args:
            config: Configuration dictionary or Config object
        """
        self.config = config
        self.metadata_dir = config.get("metadata_dir", ".workspace")

        logger.debug("Branch queries service initialized")

    def get_current_branch(self, project: Project) -> str:
        """Get the checked-out branch, or "HEAD" when detached."""
        with git_operation("current_branch", project):
            repo = open_repo(project)
            try:
                return repo.active_branch.name
            except TypeError:
                logger.debug(f"{project.name} is in detached HEAD state")
                return DETACHED_HEAD

    def get_branches(self, project: Project) -> List[Branch]:
        """Get local branches in the order git reports them."""
        with git_operation("branches", project):
            repo = open_repo(project)
            branches = [
                Branch(
                    name=head.name,
                    has_review_marker=self.has_review_marker(project, head.name),
                )
                for head in repo.heads
            ]
            logger.debug(f"{project.name}: found {len(branches)} local branches")
            return branches

    def has_review_marker(self, project: Project, branch_name: str) -> bool:
        """Check if the branch was exported for code review.

        Exporting a branch leaves its review commit message in
        ``<project>/<metadata_dir>/<branch>/.gerrit_commit_message``.
        """
        marker = Path(project.path) / self.metadata_dir / branch_name / REVIEW_MESSAGE_FILE
        return marker.is_file()

    def has_uncommitted_changes(self, project: Project) -> bool:
        """Check for staged or unstaged changes to tracked files."""
        with git_operation("uncommitted_changes", project):
            repo = open_repo(project)
            return repo.is_dirty(index=True, working_tree=True, untracked_files=False)

    def has_untracked_files(self, project: Project) -> bool:
        """Check for untracked files in the working tree, ignoring workspace metadata."""
        with git_operation("untracked_files", project):
            repo = open_repo(project)
            metadata_prefix = f"{self.metadata_dir}/"
            return any(not path.startswith(metadata_prefix) for path in repo.untracked_files)

