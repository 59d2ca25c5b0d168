"""
git-workspace-keeper - Branch and sync status for multi-repository workspaces
"""

from .__version__ import __version__
from .core import WorkspaceKeeper
from .cli.main import main

__all__ = ["WorkspaceKeeper", "main", "__version__"]
