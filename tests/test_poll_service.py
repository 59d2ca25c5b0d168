"""Tests for remote change polling"""
import pytest

from git_workspace_keeper.exceptions import BackendError, UnknownTestError
from git_workspace_keeper.models.project import Project
from git_workspace_keeper.models.state import Change
from git_workspace_keeper.services.poll_service import (
    build_test_projects,
    poll,
    resolve_test_projects,
)

CHANGE = Change(revision="abc123", author="Dev", email="dev@example.com", description="Fix bug")


class TestBuildTestProjects:
    """Test project -> tests inversion."""

    def test_inverts_table(self):
        """Test each test maps to the projects listing it."""
        result = build_test_projects({
            "release/go/core": ["go-test", "integration"],
            "release/js/app": ["js-test", "integration"],
        })

        assert result == {
            "go-test": ["release/go/core"],
            "js-test": ["release/js/app"],
            "integration": ["release/go/core", "release/js/app"],
        }

    def test_duplicate_test_listed_once(self):
        """Test a project repeating a test is recorded once."""
        assert build_test_projects({"tools": ["t", "t"]}) == {"t": ["tools"]}

    def test_empty(self):
        """Test no configuration gives no mapping."""
        assert build_test_projects({}) == {}


class TestResolveTestProjects:
    """Test test name resolution."""

    def test_union_of_projects(self):
        """Test the result covers every named test."""
        table = {"a": ["p1"], "b": ["p2", "p3"]}
        assert resolve_test_projects(["a", "b"], table) == {"p1", "p2", "p3"}

    def test_unknown_test(self):
        """Test an unmapped test raises UnknownTestError."""
        with pytest.raises(UnknownTestError, match="Failed to find any projects for test 'c'"):
            resolve_test_projects(["a", "c"], {"a": ["p1"]})


class TestPoll:
    """Test polling projects."""

    def test_polls_all_when_unrestricted(self, projects, fake_backend):
        """Test an empty name set polls every project."""
        backend = fake_backend({"tools": {"changes": [CHANGE]}})

        update = poll(projects, backend, sequential=True)

        assert update == {"tools": [CHANGE]}
        assert backend.remote_divergence.call_count == 3

    def test_restricted_to_names(self, projects, fake_backend):
        """Test only the named projects are polled."""
        backend = fake_backend({
            "tools": {"changes": [CHANGE]},
            "release/js/app": {"changes": [CHANGE]},
        })

        update = poll(projects, backend, {"release/js/app"}, sequential=True)

        assert list(update) == ["release/js/app"]
        assert backend.remote_divergence.call_count == 1

    def test_empty_change_sets_dropped(self, projects, fake_backend):
        """Test projects without changes are left out."""
        assert poll(projects, fake_backend({}), workers=2) == {}

    def test_changes_keep_reported_order(self, projects, fake_backend):
        """Test changes are returned as the backend reports them."""
        newer = Change(revision="def456", author="Dev", email="dev@example.com", description="Newer")
        backend = fake_backend({"tools": {"changes": [newer, CHANGE]}})

        assert poll(projects, backend, sequential=True)["tools"] == [newer, CHANGE]

    def test_failure_fails_poll(self, projects, fake_backend):
        """Test a failing project fails the whole poll."""
        backend = fake_backend({"tools": {"error": OSError("network down")}})

        with pytest.raises(BackendError) as exc_info:
            poll(projects, backend, workers=3)

        assert exc_info.value.project == "tools"
        assert "network down" in str(exc_info.value)

    def test_same_name_projects_merged(self, fake_backend):
        """Test projects sharing a name keep both change sets, in key order."""
        mirror = Project(name="core", remote="https://mirror.example.com/core", path="/ws/mirror")
        origin = Project(name="core", remote="https://example.com/core", path="/ws/core")
        other = Change(revision="def456", author="Dev", email="dev@example.com", description="Other")
        backend = fake_backend({})
        backend.remote_divergence.side_effect = lambda p: [CHANGE] if p is origin else [other]

        update = poll({p.key: p for p in (mirror, origin)}, backend, sequential=True)

        # "core=https://example.com/core" sorts before the mirror key
        assert update == {"core": [CHANGE, other]}
