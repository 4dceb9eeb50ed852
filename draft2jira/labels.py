"""Label normalization and merging.

Jira labels may not contain spaces, so tags are folded into lowercase
hyphenated tokens: ``"Needs Review"`` becomes ``needs-review`` and
``"URGENT!!"`` becomes ``urgent``. Any character outside ``[a-z0-9-]`` is
replaced by a hyphen, then hyphen runs are collapsed and trimmed, so
symbols never survive into a label. Tokens that normalize to nothing are
dropped.
"""

import re
from collections.abc import Iterable

from draft2jira.models import JiraConfig

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHENS = re.compile(r"-{2,}")


def normalize_label(raw: str) -> str:
    label = raw.strip().lower()
    label = _WHITESPACE.sub("-", label)
    label = label.replace("_", "-")
    label = _DISALLOWED.sub("-", label)
    label = _HYPHENS.sub("-", label)
    return label.strip("-")


def split_labels(value: str | Iterable[str] | None) -> list[str]:
    """Accept a comma-separated string or a list of labels."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.split(",")
    return list(value)


def merge_labels(*sources: str | Iterable[str] | None) -> list[str]:
    """Normalize every source, concatenate, and dedupe in first-seen order."""
    merged: dict[str, None] = {}
    for source in sources:
        for raw in split_labels(source):
            label = normalize_label(raw)
            if label:
                merged.setdefault(label)
    return list(merged)


def resolve_labels(tags: Iterable[str], config: JiraConfig) -> list[str]:
    tag_labels = list(tags) if config.include_tags_as_labels else []
    static_labels = config.static_labels if config.include_jira_labels else []
    return merge_labels(tag_labels, static_labels)
