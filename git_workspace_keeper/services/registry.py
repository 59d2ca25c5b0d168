"""Project registry: discovers the projects of a workspace."""

import os
import tomllib
from pathlib import Path
from typing import Dict, List, Optional, Union, TYPE_CHECKING

from git_workspace_keeper.constants import MANIFEST_FILE, METADATA_DIR, ROOT_ENV_VAR
from git_workspace_keeper.exceptions import (
    AmbiguousMatchError,
    DiscoveryError,
    NotFoundError,
    NotInProjectError,
)
from git_workspace_keeper.models.project import Project, ProjectKey
from git_workspace_keeper.logging_config import get_logger

if TYPE_CHECKING:
    from git_workspace_keeper.config import Config

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "remote", "path")


def find_workspace_root(start: Optional[Union[str, Path]] = None, metadata_dir: str = METADATA_DIR) -> Path:
    """Locate the workspace root.

    The WORKSPACE_ROOT environment variable wins; otherwise the closest
    directory at or above ``start`` (default: cwd) containing the metadata
    directory is used.

    Raises:
        DiscoveryError: If no workspace root can be found
    """
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        root = Path(env_root).expanduser().resolve()
        if not (root / metadata_dir).is_dir():
            raise DiscoveryError(f"{ROOT_ENV_VAR} has no '{metadata_dir}' directory", str(root))
        return root

    current = Path(start or os.getcwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / metadata_dir).is_dir() and (candidate / metadata_dir / MANIFEST_FILE).is_file():
            logger.debug(f"Workspace root found at {candidate}")
            return candidate

    raise DiscoveryError(f"no '{metadata_dir}/{MANIFEST_FILE}' found in any parent directory", str(current))


class ProjectRegistry:
    """The set of projects checked out in a workspace."""

    def __init__(self, root: Union[str, Path], config: Union["Config", dict]):
        """Initialize the registry.

        Args:
            root: Workspace root directory
            config: Configuration dictionary or Config object
        """
        self.root = Path(root).resolve()
        self.config = config
        self.metadata_dir = config.get("metadata_dir", METADATA_DIR)
        self.manifest_path = self.root / self.metadata_dir / MANIFEST_FILE
        self._projects: Optional[Dict[ProjectKey, Project]] = None

    def scan(self) -> Dict[ProjectKey, Project]:
        """Read the manifest and return the locally checked-out projects.

        Results are memoized for the lifetime of the registry.

        Raises:
            DiscoveryError: If the manifest is missing, unreadable or malformed
        """
        if self._projects is None:
            self._projects = self._read_manifest()
        return dict(self._projects)

    def _read_manifest(self) -> Dict[ProjectKey, Project]:
        try:
            with open(self.manifest_path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError as e:
            raise DiscoveryError("manifest not found", str(self.manifest_path)) from e
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise DiscoveryError(str(e), str(self.manifest_path)) from e

        entries = data.get("project", [])
        if not isinstance(entries, list):
            raise DiscoveryError("'project' must be an array of tables", str(self.manifest_path))

        projects: Dict[ProjectKey, Project] = {}
        for index, entry in enumerate(entries):
            project = self._parse_entry(index, entry)
            if project.key in projects:
                raise DiscoveryError(
                    f"duplicate project key '{project.key}'", str(self.manifest_path)
                )
            if not Path(project.path).is_dir():
                logger.warning(f"Skipping project {project.name}: {project.path} is not checked out")
                continue
            projects[project.key] = project

        logger.debug(f"Discovered {len(projects)} local projects in {self.root}")
        return projects

    def _parse_entry(self, index: int, entry) -> Project:
        if not isinstance(entry, dict):
            raise DiscoveryError(f"project entry {index} is not a table", str(self.manifest_path))
        for field_name in REQUIRED_FIELDS:
            value = entry.get(field_name)
            if not isinstance(value, str) or not value.strip():
                raise DiscoveryError(
                    f"project entry {index} is missing '{field_name}'", str(self.manifest_path)
                )

        path = Path(entry["path"])
        if not path.is_absolute():
            path = self.root / path
        return Project(
            name=entry["name"].strip(),
            remote=entry["remote"].strip(),
            path=str(path.resolve()),
        )

    def find_unique(self, identifier: str) -> Project:
        """Find the single project matching a key, a name or a path.

        Raises:
            AmbiguousMatchError: If several projects match
            NotFoundError: If no project matches
        """
        projects = self.scan()
        if identifier in projects:
            return projects[identifier]

        resolved = str(Path(identifier).expanduser().resolve())
        matches: List[Project] = [
            project
            for project in projects.values()
            if project.name == identifier or project.path == resolved
        ]
        if len(matches) > 1:
            raise AmbiguousMatchError(identifier, sorted(p.key for p in matches))
        if not matches:
            raise NotFoundError(identifier)
        return matches[0]

    def current_project_key(self, cwd: Optional[Union[str, Path]] = None) -> ProjectKey:
        """Key of the project containing cwd; the innermost project wins.

        Raises:
            NotInProjectError: If cwd is not inside any project
        """
        current = Path(cwd or os.getcwd()).resolve()
        best: Optional[Project] = None
        for project in self.scan().values():
            project_path = Path(project.path)
            if current == project_path or project_path in current.parents:
                if best is None or len(project.path) > len(best.path):
                    best = project

        if best is None:
            raise NotInProjectError(str(current))
        return best.key
