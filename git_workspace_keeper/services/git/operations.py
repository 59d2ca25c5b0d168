"""Git operations service"""

from typing import AbstractSet, List, Union, TYPE_CHECKING

from git_workspace_keeper.models.project import Project
from git_workspace_keeper.models.state import Change
from git_workspace_keeper.services.git.repo import git_operation, open_repo
from git_workspace_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_workspace_keeper.config import Config

logger = get_logger(__name__)


class GitOperations:
    """Service for remote queries and working tree mutations."""

    def __init__(self, config: Union["Config", dict]):
        """Initialize the service.

        Args:
            config: Configuration dictionary or Config object
        """
        self.config = config
        self.remote_name = config.get("remote_name", "origin")
        self.default_branch = config.get("default_branch", "master")
        self.metadata_dir = config.get("metadata_dir", ".workspace")

        logger.debug("Git operations initialized")

    def get_remote_changes(self, project: Project) -> List[Change]:
        """Fetch the remote and list default-branch commits missing locally.

        Commits are returned newest first, as git log reports them.
        """
        with git_operation("remote_divergence", project):
            repo = open_repo(project)
            remote = repo.remote(self.remote_name)
            logger.debug(f"Fetching {self.remote_name} for {project.name}...")
            remote.fetch()

            remote_ref = f"{self.remote_name}/{self.default_branch}"
            commits = repo.iter_commits(f"{self.default_branch}..{remote_ref}")
            changes = [
                Change(
                    revision=commit.hexsha,
                    author=commit.author.name or "",
                    email=commit.author.email or "",
                    description=str(commit.summary),
                )
                for commit in commits
            ]
            logger.debug(f"{project.name}: {len(changes)} remote changes on {remote_ref}")
            return changes

    def reset_to_default_branch(self, project: Project) -> None:
        """Check out the default branch and discard all local modifications.

        Files under the project's metadata directory are kept.
        """
        with git_operation("reset_to_default_branch", project):
            repo = open_repo(project)
            logger.debug(f"Resetting {project.name} to {self.default_branch}")
            repo.git.checkout("-f", self.default_branch)
            # Review markers live under the metadata directory
            repo.git.clean("-f", "-d", "-e", f"/{self.metadata_dir}/")
            repo.git.reset("--hard", "HEAD")

    def delete_local_branches(self, project: Project, keep: AbstractSet[str]) -> None:
        """Force-delete every local branch not listed in keep."""
        with git_operation("delete_local_branches", project):
            repo = open_repo(project)
            try:
                current = repo.active_branch.name
            except TypeError:
                current = None  # Detached HEAD

            for head in list(repo.heads):
                if head.name in keep:
                    continue
                if head.name == current:
                    logger.warning(
                        f"Not deleting checked-out branch {head.name} in {project.name}"
                    )
                    continue
                logger.debug(f"Deleting branch {head.name} in {project.name}")
                repo.delete_head(head, force=True)
