"""Shared constants for git-workspace-keeper."""

# Branch every project is reset to and compared against
DEFAULT_BRANCH = "master"
DEFAULT_REMOTE = "origin"

# Workspace metadata directory (at the workspace root and inside each project)
METADATA_DIR = ".workspace"
MANIFEST_FILE = "manifest.toml"
CONFIG_FILE = "config.toml"
ROOT_ENV_VAR = "WORKSPACE_ROOT"

# Separator between project name and remote in a project key
KEY_SEPARATOR = "="

# Per-branch file written when a branch is exported for code review
REVIEW_MESSAGE_FILE = ".gerrit_commit_message"


# Shell prompt status symbols
SYMBOL_UNCOMMITTED = "*"
SYMBOL_UNTRACKED = "%"
PROMPT_SEPARATOR = ","


# Listing markers
LISTING_INDENT = "  "
SYMBOL_CURRENT_BRANCH = "* "
REVIEW_EXPORTED_NOTE = " (exported to gerrit)"
