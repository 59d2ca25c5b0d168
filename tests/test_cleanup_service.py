"""Tests for project cleanup"""
from unittest.mock import Mock

import pytest

from git_workspace_keeper.exceptions import (
    AmbiguousMatchError,
    BackendError,
    CleanupError,
    NotFoundError,
)
from git_workspace_keeper.services.cleanup_service import cleanup, cleanup_project, select_projects
from git_workspace_keeper.services.registry import ProjectRegistry


@pytest.fixture
def registry(projects):
    """Registry answering from the projects fixture."""
    registry = Mock(spec=ProjectRegistry)
    registry.scan.return_value = dict(projects)

    def find_unique(identifier):
        matches = [p for p in projects.values() if identifier in (p.key, p.name, p.path)]
        if not matches:
            raise NotFoundError(identifier)
        if len(matches) > 1:
            raise AmbiguousMatchError(identifier, [p.key for p in matches])
        return matches[0]

    registry.find_unique.side_effect = find_unique
    return registry


class TestSelectProjects:
    """Test cleanup target resolution."""

    def test_no_identifiers_selects_all(self, registry, projects):
        """Test every project is selected when none are named."""
        selected, errors = select_projects(registry, [])
        assert selected == projects
        assert errors == []

    def test_named_projects(self, registry):
        """Test projects can be selected by name or path."""
        selected, errors = select_projects(registry, ["tools", "/ws/app"])

        assert sorted(p.name for p in selected.values()) == ["release/js/app", "tools"]
        assert errors == []

    def test_unresolved_identifiers_reported(self, registry):
        """Test failed lookups are collected without stopping the others."""
        selected, errors = select_projects(registry, ["nope", "tools"])

        assert [p.name for p in selected.values()] == ["tools"]
        assert len(errors) == 1
        identifier, error = errors[0]
        assert identifier == "nope"
        assert isinstance(error, NotFoundError)

    def test_repeated_identifier(self, registry):
        """Test naming a project twice selects it once."""
        selected, _ = select_projects(registry, ["tools", "/ws/tools"])
        assert len(selected) == 1


class TestCleanupProject:
    """Test single project cleanup."""

    def test_reset_only(self, projects, fake_backend):
        """Test branches are kept without delete_all_branches."""
        backend = fake_backend({})
        project = next(iter(projects.values()))

        cleanup_project(project, backend)

        backend.reset_to_default_branch.assert_called_once_with(project)
        backend.delete_local_branches.assert_not_called()

    def test_delete_all_keeps_default(self, projects, fake_backend):
        """Test branch deletion keeps the default branch."""
        backend = fake_backend({})
        project = next(iter(projects.values()))

        cleanup_project(project, backend, delete_all_branches=True, default_branch="main")

        backend.delete_local_branches.assert_called_once_with(project, {"main"})

    def test_failure_wrapped(self, projects, fake_backend, backend_error):
        """Test backend failures surface as CleanupError."""
        backend = fake_backend({"tools": {"error": backend_error}})
        tools = [p for p in projects.values() if p.name == "tools"][0]

        with pytest.raises(CleanupError) as exc_info:
            cleanup_project(tools, backend)

        assert exc_info.value.project == "tools"
        assert isinstance(exc_info.value.cause, BackendError)


class TestCleanup:
    """Test batch cleanup."""

    def test_cleans_every_project(self, projects, fake_backend):
        """Test each project is reset exactly once."""
        backend = fake_backend({})

        cleanup(projects, backend, delete_all_branches=True, workers=3)

        assert backend.reset_to_default_branch.call_count == 3
        assert backend.delete_local_branches.call_count == 3

    def test_failure_aborts(self, projects, fake_backend, backend_error):
        """Test a failure raises CleanupError for the failing project."""
        backend = fake_backend({"tools": {"error": backend_error}})

        with pytest.raises(CleanupError, match="tools"):
            cleanup(projects, backend, sequential=True)

    def test_failure_aborts_parallel(self, projects, fake_backend, backend_error):
        """Test a failure on a worker thread raises CleanupError for that project."""
        backend = fake_backend({"tools": {"error": backend_error}})

        with pytest.raises(CleanupError) as exc_info:
            cleanup(projects, backend, workers=2)

        assert exc_info.value.project == "tools"

    def test_empty_selection(self, fake_backend):
        """Test nothing happens with no projects."""
        backend = fake_backend({})
        cleanup({}, backend)
        backend.reset_to_default_branch.assert_not_called()
