"""Project identity models."""

from dataclasses import dataclass
from typing import NewType

from git_workspace_keeper.constants import KEY_SEPARATOR

# Unique, totally ordered identifier of a project within a workspace
ProjectKey = NewType("ProjectKey", str)


def make_project_key(name: str, remote: str) -> ProjectKey:
    """Build the key identifying a project from its name and remote."""
    return ProjectKey(f"{name}{KEY_SEPARATOR}{remote}")


@dataclass(frozen=True)
class Project:
    """A repository registered in the workspace."""

    name: str
    remote: str
    path: str  # Absolute path of the local checkout

    @property
    def key(self) -> ProjectKey:
        return make_project_key(self.name, self.remote)

    def __str__(self) -> str:
        return f"{self.name} @ {self.path}"
