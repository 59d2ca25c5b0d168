"""Configuration handling for git-workspace-keeper"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from git_workspace_keeper.constants import (
    CONFIG_FILE,
    DEFAULT_BRANCH,
    DEFAULT_REMOTE,
    METADATA_DIR,
)
from git_workspace_keeper.exceptions import DiscoveryError
from git_workspace_keeper.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Configuration for git-workspace-keeper with validation."""

    # Repository conventions
    default_branch: str = DEFAULT_BRANCH
    remote_name: str = DEFAULT_REMOTE
    metadata_dir: str = METADATA_DIR

    # Shell prompt
    check_dirty: bool = True
    show_name: bool = False

    # Listing
    show_branches: bool = False
    no_pristine: bool = False

    # Cleanup
    delete_all_branches: bool = False

    # Execution modes
    verbose: bool = False
    debug: bool = False
    sequential: bool = False  # Force sequential processing (disable parallelism)
    workers: Optional[int] = None  # Number of parallel workers (None = auto-detect)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_default_branch()
        self._validate_remote_name()
        self._validate_metadata_dir()
        self._validate_workers()

    def _validate_default_branch(self):
        """Validate default_branch is not empty."""
        if not self.default_branch or not self.default_branch.strip():
            raise ValueError("default_branch cannot be empty")
        self.default_branch = self.default_branch.strip()

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_metadata_dir(self):
        """Validate metadata_dir is a plain directory name."""
        if not self.metadata_dir or not self.metadata_dir.strip():
            raise ValueError("metadata_dir cannot be empty")
        self.metadata_dir = self.metadata_dir.strip()
        if "/" in self.metadata_dir or "\\" in self.metadata_dir:
            raise ValueError(f"metadata_dir must be a directory name, got '{self.metadata_dir}'")

    def _validate_workers(self):
        """Validate workers is positive when given."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    @property
    def run_sequentially(self) -> bool:
        """Debug mode forces sequential processing for readable logs."""
        return self.sequential or self.debug

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "default_branch": self.default_branch,
            "remote_name": self.remote_name,
            "metadata_dir": self.metadata_dir,
            "check_dirty": self.check_dirty,
            "show_name": self.show_name,
            "show_branches": self.show_branches,
            "no_pristine": self.no_pristine,
            "delete_all_branches": self.delete_all_branches,
            "verbose": self.verbose,
            "debug": self.debug,
            "sequential": self.sequential,
            "workers": self.workers,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {
            "default_branch",
            "remote_name",
            "metadata_dir",
            "check_dirty",
            "show_name",
            "show_branches",
            "no_pristine",
            "delete_all_branches",
            "verbose",
            "debug",
            "sequential",
            "workers",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def load_project_tests(
    root: Union[str, Path], metadata_dir: str = METADATA_DIR
) -> Dict[str, List[str]]:
    """Load the project -> tests table from the workspace configuration file.

    The file lives at ``<root>/<metadata_dir>/config.toml``::

        [project-tests]
        "release.go.core" = ["go-test", "go-vet"]

    A missing file means no tests are configured.

    Raises:
        DiscoveryError: If the file cannot be read or is malformed
    """
    config_path = Path(root) / metadata_dir / CONFIG_FILE
    if not config_path.exists():
        logger.debug(f"No workspace config at {config_path}")
        return {}

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise DiscoveryError(str(e), str(config_path)) from e

    table = data.get("project-tests", {})
    if not isinstance(table, dict):
        raise DiscoveryError("'project-tests' must be a table", str(config_path))

    project_tests: Dict[str, List[str]] = {}
    for project, tests in table.items():
        if not isinstance(tests, list) or not all(isinstance(t, str) for t in tests):
            raise DiscoveryError(
                f"tests for project '{project}' must be a list of strings", str(config_path)
            )
        project_tests[project] = list(tests)

    logger.debug(f"Loaded tests for {len(project_tests)} projects from {config_path}")
    return project_tests
