"""Formatting utilities for git-workspace-keeper.

This package provides the text surfaces built from project states:
- project: Project and branch listing lines
- poll: JSON rendering of pending remote changes
"""

# Listing formatters
from .project import (
    format_project_line,
    format_branch_line,
    format_project_listing,
)

# Poll formatters
from .poll import format_poll_json

__all__ = [
    # Listing
    "format_project_line",
    "format_branch_line",
    "format_project_listing",
    # Poll
    "format_poll_json",
]
