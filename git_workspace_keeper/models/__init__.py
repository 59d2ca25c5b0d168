"""Data models for git-workspace-keeper."""

from .project import Project, ProjectKey, make_project_key
from .state import Branch, Change, ProjectState

__all__ = [
    "Project",
    "ProjectKey",
    "make_project_key",
    "Branch",
    "Change",
    "ProjectState",
]
