"""Tests for draft2jira.labels."""

import pytest

from draft2jira.labels import merge_labels, normalize_label, resolve_labels, split_labels
from draft2jira.models import JiraConfig


class TestNormalizeLabel:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Needs Review", "needs-review"),
            ("URGENT!!", "urgent"),
            ("  spaced   out  ", "spaced-out"),
            ("snake_case_tag", "snake-case-tag"),
            ("a__b -- c", "a-b-c"),
            ("release/2.0", "release-2-0"),
            ("-already-ok-", "already-ok"),
            ("café", "caf"),
            ("!!!", ""),
            ("", ""),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_label(raw) == expected

    @pytest.mark.parametrize("raw", ["Needs Review", "URGENT!!", "a__b -- c", "x.y.z", "ÅÄÖ tag"])
    def test_idempotent(self, raw: str) -> None:
        once = normalize_label(raw)
        assert normalize_label(once) == once


class TestSplitLabels:
    def test_none(self) -> None:
        assert split_labels(None) == []

    def test_comma_string(self) -> None:
        assert split_labels("a, b,c") == ["a", " b", "c"]

    def test_list(self) -> None:
        assert split_labels(("a", "b")) == ["a", "b"]


class TestMergeLabels:
    def test_dedupes_in_first_seen_order(self) -> None:
        merged = merge_labels(["Needs Review", "bug"], ["needs_review", "BUG", "sent-from-drafts"])
        assert merged == ["needs-review", "bug", "sent-from-drafts"]

    def test_comma_separated_source(self) -> None:
        assert merge_labels(["x"], "sent-from-drafts, Inbox") == ["x", "sent-from-drafts", "inbox"]

    def test_empty_tokens_dropped(self) -> None:
        assert merge_labels(["!!!", "ok"], ",,") == ["ok"]

    def test_no_sources(self) -> None:
        assert merge_labels() == []


class TestResolveLabels:
    def test_tags_and_static_label(self) -> None:
        config = JiraConfig(site="acme.atlassian.net", project_key="PROJ")
        assert resolve_labels(["Needs Review", "URGENT!!"], config) == ["needs-review", "urgent", "sent-from-drafts"]

    def test_tags_disabled_keeps_static(self) -> None:
        config = JiraConfig(site="s", project_key="P", include_tags_as_labels=False)
        assert resolve_labels(["bug"], config) == ["sent-from-drafts"]

    def test_static_disabled_keeps_tags(self) -> None:
        config = JiraConfig(site="s", project_key="P", include_jira_labels=False)
        assert resolve_labels(["bug"], config) == ["bug"]

    def test_both_disabled(self) -> None:
        config = JiraConfig(site="s", project_key="P", include_tags_as_labels=False, include_jira_labels=False)
        assert resolve_labels(["bug"], config) == []

    def test_static_label_duplicating_tag(self) -> None:
        config = JiraConfig(site="s", project_key="P", static_labels=["Sent From Drafts"])
        assert resolve_labels(["sent_from_drafts"], config) == ["sent-from-drafts"]
