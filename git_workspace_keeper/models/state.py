"""Branch and project state models"""
from dataclasses import dataclass, field
from typing import Tuple

from git_workspace_keeper.models.project import Project


@dataclass(frozen=True)
class Branch:
    """A local branch of a project."""
    name: str
    is_current: bool = False
    has_review_marker: bool = False  # Branch was exported for code review


@dataclass(frozen=True)
class ProjectState:
    """Snapshot of a project's branch topology and working tree state."""
    project: Project
    current_branch: str
    branches: Tuple[Branch, ...] = field(default_factory=tuple)  # Backend order
    has_uncommitted: bool = False
    has_untracked: bool = False


@dataclass(frozen=True)
class Change:
    """A remote commit that is not present locally."""
    revision: str
    author: str
    email: str
    description: str
