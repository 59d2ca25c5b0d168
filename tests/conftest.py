"""Pytest fixtures for git-workspace-keeper tests"""
import tempfile
from pathlib import Path
from typing import Dict, Iterable, Tuple
from unittest.mock import Mock

import git
import pytest

from git_workspace_keeper.config import Config
from git_workspace_keeper.exceptions import BackendError
from git_workspace_keeper.models.project import Project
from git_workspace_keeper.models.state import Branch, ProjectState
from git_workspace_keeper.services.backend import RepositoryBackend


def init_repo(path: Path) -> git.Repo:
    """Create a git repository with one commit on master."""
    path.mkdir(parents=True, exist_ok=True)
    repo = git.Repo.init(path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    readme = path / "README.md"
    readme.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Normalize the default branch whatever init.defaultBranch says
    repo.git.branch("-M", "master")
    return repo


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> git.Commit:
    """Write a file in the repository and commit it."""
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


def write_manifest(root: Path, projects: Iterable[Tuple[str, str, str]]) -> Path:
    """Write .workspace/manifest.toml listing (name, remote, path) entries."""
    meta = root / ".workspace"
    meta.mkdir(parents=True, exist_ok=True)
    lines = []
    for name, remote, path in projects:
        lines.extend([
            "[[project]]",
            f'name = "{name}"',
            f'remote = "{remote}"',
            f'path = "{path}"',
            "",
        ])
    manifest = meta / "manifest.toml"
    manifest.write_text("\n".join(lines))
    return manifest


def make_state(
    project: Project,
    current: str = "master",
    branches: Iterable[str] = ("master",),
    uncommitted: bool = False,
    untracked: bool = False,
) -> ProjectState:
    """Build a ProjectState with is_current derived from current."""
    return ProjectState(
        project=project,
        current_branch=current,
        branches=tuple(Branch(name=name, is_current=name == current) for name in branches),
        has_uncommitted=uncommitted,
        has_untracked=untracked,
    )


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def config():
    """Create a configuration that runs batches in the calling thread."""
    return Config(sequential=True)


@pytest.fixture
def projects():
    """Three projects keyed by ProjectKey."""
    items = [
        Project(name="release/go/core", remote="https://example.com/core", path="/ws/core"),
        Project(name="release/js/app", remote="https://example.com/app", path="/ws/app"),
        Project(name="tools", remote="https://example.com/tools", path="/ws/tools"),
    ]
    return {project.key: project for project in items}


@pytest.fixture
def fake_backend():
    """Build a mock backend answering from a table of per-project states.

    The table maps project name to a dict with any of: current, branches
    (list of names or Branch objects), uncommitted, untracked, changes,
    error (exception raised by every query for that project).
    """
    def factory(table: Dict[str, dict]) -> Mock:
        backend = Mock(spec=RepositoryBackend)

        def entry(project: Project) -> dict:
            data = table.get(project.name, {})
            if "error" in data:
                raise data["error"]
            return data

        def branches(project):
            names = entry(project).get("branches", ["master"])
            return [b if isinstance(b, Branch) else Branch(name=b) for b in names]

        backend.current_branch.side_effect = lambda p: entry(p).get("current", "master")
        backend.branches.side_effect = branches
        backend.has_uncommitted_changes.side_effect = lambda p: entry(p).get("uncommitted", False)
        backend.has_untracked_files.side_effect = lambda p: entry(p).get("untracked", False)
        backend.remote_divergence.side_effect = lambda p: entry(p).get("changes", [])
        backend.reset_to_default_branch.side_effect = lambda p: entry(p) and None
        backend.delete_local_branches.side_effect = lambda p, keep: entry(p) and None
        return backend

    return factory


@pytest.fixture
def backend_error():
    """A backend failure for project 'tools'."""
    return BackendError("current_branch", "tools", "repository is locked")


@pytest.fixture
def git_workspace(temp_dir):
    """Create a workspace with two real git projects, 'alpha' and 'beta'.

    alpha is pristine; beta has an extra branch 'feature' checked out.
    """
    root = temp_dir / "workspace"
    alpha = init_repo(root / "alpha")
    beta = init_repo(root / "beta")
    beta.git.checkout("-b", "feature")
    commit_file(beta, "feature.txt", "Feature content\n", "Add feature")

    write_manifest(root, [
        ("alpha", "https://example.com/alpha", "alpha"),
        ("beta", "https://example.com/beta", "beta"),
    ])

    yield root

    alpha.close()
    beta.close()


@pytest.fixture
def upstream_and_clone(temp_dir):
    """Create an upstream repository and a clone of it tracking origin."""
    upstream = init_repo(temp_dir / "upstream")
    clone = git.Repo.clone_from(str(temp_dir / "upstream"), str(temp_dir / "clone"))
    clone.config_writer().set_value("user", "name", "Test User").release()
    clone.config_writer().set_value("user", "email", "test@example.com").release()

    yield upstream, clone

    upstream.close()
    clone.close()
