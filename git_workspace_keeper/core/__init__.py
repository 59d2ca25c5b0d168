"""Core workspace management for git-workspace-keeper."""

from .workspace_keeper import WorkspaceKeeper

__all__ = ["WorkspaceKeeper"]
