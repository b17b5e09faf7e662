"""Tests for commit message classification."""

import sys

import pytest

sys.path.insert(0, "scripts")

from commit_types import classify_commit


class TestClassifyCommit:
    """Keyword classification."""

    @pytest.mark.parametrize("message,expected", [
        ("Add login page", "feature"),
        ("Implement caching", "feature"),
        ("Fix crash on startup", "fix"),
        ("Resolve issue with dates", "fix"),
        ("Update README", "docs"),
        ("Refactor parser", "refactor"),
        ("Improve error messages", "refactor"),
        ("Write tests for parser", "test"),
        ("Bump version", "other"),
    ])
    def test_keywords(self, message, expected):
        """Each keyword group maps to its type."""
        assert classify_commit(message) == expected

    def test_case_insensitive(self):
        """Matching ignores case."""
        assert classify_commit("FIX BUILD") == "fix"

    def test_first_rule_wins(self):
        """Earlier rules take precedence."""
        # "add" is checked before "fix"
        assert classify_commit("Add fix for login") == "feature"

    def test_empty_message(self):
        """Empty or missing messages are other."""
        assert classify_commit("") == "other"
        assert classify_commit(None) == "other"
