"""Core functionality for git-workspace-keeper"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from git_workspace_keeper.config import Config, load_project_tests
from git_workspace_keeper.exceptions import WorkspaceKeeperError
from git_workspace_keeper.formatters import format_poll_json, format_project_listing
from git_workspace_keeper.models.project import ProjectKey
from git_workspace_keeper.models.state import Change, ProjectState
from git_workspace_keeper.services.backend import RepositoryBackend
from git_workspace_keeper.services.cleanup_service import cleanup, select_projects
from git_workspace_keeper.services.git import GitBackend
from git_workspace_keeper.services.poll_service import (
    build_test_projects,
    poll,
    resolve_test_projects,
)
from git_workspace_keeper.services.prompt_service import format_shell_prompt, summarize
from git_workspace_keeper.services.registry import ProjectRegistry
from git_workspace_keeper.services.state_service import get_states
from git_workspace_keeper.logging_config import get_logger

logger = get_logger(__name__)


class WorkspaceKeeper:
    """Main class for inspecting and maintaining the projects of a workspace."""

    def __init__(
        self,
        root: Union[str, Path],
        config: Union[Config, dict],
        backend: Optional[RepositoryBackend] = None,
    ):
        """Initialize WorkspaceKeeper.

        Args:
            root: Workspace root directory
            config: Configuration dict or Config object
            backend: Repository backend (defaults to git)
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.root = Path(root).resolve()
        self.backend = backend or GitBackend(self.config)
        self.registry = ProjectRegistry(self.root, self.config)

    def _batch_options(self) -> dict:
        return {
            "workers": self.config.workers,
            "sequential": self.config.run_sequentially,
        }

    def get_states(
        self, filter_pristine: bool = False, check_dirty: bool = True
    ) -> Dict[ProjectKey, ProjectState]:
        """Collect the state of every project in the workspace."""
        return get_states(
            self.registry.scan(),
            self.backend,
            filter_pristine=filter_pristine,
            check_dirty=check_dirty,
            default_branch=self.config.default_branch,
            **self._batch_options(),
        )

    def list_projects(self) -> List[str]:
        """List projects, and their branches when configured.

        Dirty state is only needed to recognize pristine projects.
        """
        no_pristine = self.config.no_pristine
        states = self.get_states(filter_pristine=no_pristine, check_dirty=no_pristine)
        return format_project_listing(states, show_branches=self.config.show_branches)

    def shell_prompt(self, cwd: Optional[Union[str, Path]] = None) -> str:
        """Summarize project states as a single prompt line.

        Raises:
            NotInProjectError: If cwd is not inside a project
        """
        check_dirty = self.config.check_dirty
        states = self.get_states(check_dirty=check_dirty)
        current_key = self.registry.current_project_key(cwd)
        statuses = summarize(
            states,
            current_key,
            check_dirty=check_dirty,
            show_name=self.config.show_name,
            default_branch=self.config.default_branch,
        )
        return format_shell_prompt(statuses)

    def clean(self, identifiers: Sequence[str] = ()) -> List[Tuple[str, WorkspaceKeeperError]]:
        """Restore the selected projects (all when none given) to a pristine state.

        Returns:
            Identifiers that could not be resolved, with their errors

        Raises:
            CleanupError: If cleaning up any resolved project fails
        """
        projects, errors = select_projects(self.registry, identifiers)
        for identifier, error in errors:
            logger.debug(f"Skipping '{identifier}': {error}")

        cleanup(
            projects,
            self.backend,
            delete_all_branches=self.config.delete_all_branches,
            default_branch=self.config.default_branch,
            **self._batch_options(),
        )
        return errors

    def test_projects(self) -> Dict[str, List[str]]:
        """Map each configured test to the projects that can affect it."""
        return build_test_projects(load_project_tests(self.root, self.config.metadata_dir))

    def poll(self, tests: Sequence[str] = ()) -> Dict[str, List[Change]]:
        """Find pending remote changes for the projects affecting the given tests.

        With no tests every project is polled.

        Raises:
            UnknownTestError: If a test has no project mapping
            BackendError: If polling a project fails
        """
        project_names = resolve_test_projects(tests, self.test_projects()) if tests else set()
        return poll(
            self.registry.scan(),
            self.backend,
            project_names,
            **self._batch_options(),
        )

    def poll_json(self, tests: Sequence[str] = ()) -> Optional[str]:
        """Poll and render pending changes as JSON, or None when there are none."""
        update = self.poll(tests)
        if not update:
            return None
        return format_poll_json(update)
