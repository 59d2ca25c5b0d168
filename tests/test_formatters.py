"""Tests for listing and poll formatters"""
import json

from git_workspace_keeper.formatters import (
    format_branch_line,
    format_poll_json,
    format_project_line,
    format_project_listing,
)
from git_workspace_keeper.models.project import Project
from git_workspace_keeper.models.state import Branch, Change

from conftest import make_state


class TestProjectLine:
    """Test project identity lines."""

    def test_quoted_fields(self):
        """Test every field is quoted."""
        project = Project(name="release/go/core", remote="https://example.com/core", path="/ws/core")
        assert format_project_line(project) == (
            'name="release/go/core" remote="https://example.com/core" path="/ws/core"'
        )

    def test_escaped_fields(self):
        """Test quotes and backslashes are escaped."""
        project = Project(name='odd"name', remote="r", path="C:\\ws")
        assert format_project_line(project) == 'name="odd\\"name" remote="r" path="C:\\\\ws"'


class TestBranchLine:
    """Test branch lines."""

    def test_plain(self):
        """Test a non-current branch."""
        assert format_branch_line(Branch(name="feature")) == "  feature"

    def test_current(self):
        """Test the current branch is starred."""
        assert format_branch_line(Branch(name="master", is_current=True)) == "  * master"

    def test_exported(self):
        """Test an exported branch is annotated."""
        branch = Branch(name="fix", is_current=True, has_review_marker=True)
        assert format_branch_line(branch) == "  * fix (exported to gerrit)"


class TestProjectListing:
    """Test full listings."""

    def test_key_order_without_branches(self, projects):
        """Test one line per project in key order."""
        states = {key: make_state(project) for key, project in reversed(list(projects.items()))}

        lines = format_project_listing(states)

        assert [line.split('"')[1] for line in lines] == ["release/go/core", "release/js/app", "tools"]

    def test_with_branches(self, projects):
        """Test branches follow their project in backend order."""
        tools = [p for p in projects.values() if p.name == "tools"][0]
        states = {tools.key: make_state(tools, current="feature", branches=["master", "feature"])}

        lines = format_project_listing(states, show_branches=True)

        assert lines[1:] == ["  master", "  * feature"]

    def test_empty(self):
        """Test no states give no lines."""
        assert format_project_listing({}, show_branches=True) == []


class TestPollJson:
    """Test poll output."""

    def test_structure(self):
        """Test changes are grouped by sorted project name."""
        change = Change(revision="abc", author="Dev", email="dev@example.com", description="Fix")
        output = format_poll_json({"tools": [change], "app": [change]})

        data = json.loads(output)
        assert list(data) == ["app", "tools"]
        assert data["tools"] == [{
            "revision": "abc",
            "author": "Dev",
            "email": "dev@example.com",
            "description": "Fix",
        }]
        assert output.startswith("{\n  ")
