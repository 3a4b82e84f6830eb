"""Unit tests for commit indexing and message-based reconciliation."""

from unittest.mock import MagicMock

import pytest

from commitsync.errors import GitCommandFailed, LogUnavailable, MalformedCommitLine
from commitsync.reconcile import (
    CommitIndex,
    build_commit_index,
    parse_log_line,
    reconcile,
    unique_by_message,
)


def make_index(branch, pairs):
    return CommitIndex.from_lines(branch, [f"{h}::{m}" for h, m in pairs])


class TestParseLogLine:
    """Test splitting of log lines."""

    def test_splits_and_trims(self):
        assert parse_log_line("main", "abc1234:: [T-1] fix  ") == ("abc1234", "[T-1] fix")

    def test_message_may_contain_delimiter(self):
        assert parse_log_line("main", "abc1234::a::b") == ("abc1234", "a::b")

    @pytest.mark.parametrize("line", ["", "abc1234", "abc1234::", "::message", "   ::   "])
    def test_malformed(self, line):
        with pytest.raises(MalformedCommitLine) as exc_info:
            parse_log_line("main", line)
        assert exc_info.value.branch == "main"
        assert exc_info.value.line == line


class TestCommitIndex:
    """Test CommitIndex construction."""

    def test_preserves_log_order(self):
        index = make_index("main", [("h3", "third"), ("h2", "second"), ("h1", "first")])

        assert index.messages() == ["third", "second", "first"]
        assert list(index) == [("third", "h3"), ("second", "h2"), ("first", "h1")]
        assert len(index) == 3

    def test_duplicate_message_keeps_last_hash(self):
        """The later-inserted hash wins and the key keeps its first position."""
        index = make_index("main", [("h3", "same"), ("h2", "other"), ("h1", "same")])

        assert index.messages() == ["same", "other"]
        assert dict(index)["same"] == "h1"

    def test_empty_log_output_is_malformed(self):
        """An empty log yields a single blank line, which cannot be parsed."""
        with pytest.raises(MalformedCommitLine):
            CommitIndex.from_lines("main", [""])


class TestBuildCommitIndex:
    """Test reading a branch through the git collaborator."""

    def test_reads_branch_log(self):
        git_client = MagicMock()
        git_client.read_branch_log.return_value = ["abc1234::[T-1] fix", "def5678::[T-2] feat"]

        index = build_commit_index(git_client, "develop")

        git_client.read_branch_log.assert_called_once_with("develop")
        assert index.branch == "develop"
        assert index.messages() == ["[T-1] fix", "[T-2] feat"]

    def test_git_failure_is_log_unavailable(self):
        git_client = MagicMock()
        git_client.read_branch_log.side_effect = GitCommandFailed(
            ["log"], "fatal: ambiguous argument 'nope'", 128
        )

        with pytest.raises(LogUnavailable) as exc_info:
            build_commit_index(git_client, "nope")

        assert exc_info.value.branch == "nope"
        assert "ambiguous argument" in str(exc_info.value)

    def test_real_repository(self, test_repo):
        from commitsync.extraction import GitClient

        index = build_commit_index(GitClient(test_repo), "main")

        assert index.messages() == ["[T-9] target only", "[T-2] feat shared", "Initial commit"]


class TestReconcile:
    """Test set difference by message."""

    def test_scenario_source_has_extra_commit(self):
        source = make_index("feature", [("hashT1", "[T-1] fix"), ("hashT2", "[T-2] feat")])
        target = make_index("main", [("otherT2", "[T-2] feat")])

        result = reconcile(source, target)

        assert [(r.hash, r.message) for r in result.unique_to_source] == [("hashT1", "[T-1] fix")]
        assert result.unique_to_target == []

    def test_partition_property(self):
        a = make_index("a", [("a5", "e"), ("a4", "d"), ("a3", "c"), ("a2", "b"), ("a1", "a")])
        b = make_index("b", [("b9", "x"), ("b3", "c"), ("b1", "a")])

        unique = unique_by_message(a, b)
        unique_messages = {r.message for r in unique}
        common = {m for m in a.messages() if m in b}

        assert unique_messages.isdisjoint(set(b.messages()))
        assert unique_messages | common == set(a.messages())

    def test_deterministic(self):
        a = make_index("a", [("a3", "c"), ("a2", "b"), ("a1", "a")])
        b = make_index("b", [("b2", "b")])

        assert unique_by_message(a, b) == unique_by_message(a, b)
        assert reconcile(a, b) == reconcile(a, b)

    def test_no_common_messages_returns_all_in_order(self):
        a = make_index("a", [("a3", "c"), ("a2", "b"), ("a1", "a")])
        b = make_index("b", [("b2", "y"), ("b1", "x")])

        assert [r.hash for r in unique_by_message(a, b)] == ["a3", "a2", "a1"]
        assert [r.hash for r in unique_by_message(b, a)] == ["b2", "b1"]

    def test_identical_branches(self):
        a = make_index("a", [("a1", "same")])
        b = make_index("b", [("b1", "same")])

        result = reconcile(a, b)

        assert result.unique_to_source == []
        assert result.unique_to_target == []
