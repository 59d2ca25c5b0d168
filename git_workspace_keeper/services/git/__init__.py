"""Git-related services for git-workspace-keeper."""

from .operations import GitOperations
from .branch_queries import BranchQueries
from .git_backend import GitBackend

__all__ = [
    "GitOperations",
    "BranchQueries",
    "GitBackend",
]
