"""Rewrite issue label sets onto their canonical spellings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from label_norm.errors import UnmappedLabelError
from label_norm.models import Issue, LabelUpdate


def rewrite_labels(
    issue_labels: Iterable[str],
    mapping: Mapping[str, str],
    issue_id: str | None = None,
) -> frozenset[str]:
    """Return the canonical label set for one issue.

    Raises UnmappedLabelError if a label is not in ``mapping``.
    """
    desired = set()
    for label in issue_labels:
        try:
            desired.add(mapping[label])
        except KeyError:
            raise UnmappedLabelError(label, issue_id) from None
    return frozenset(desired)


def needs_update(current: Iterable[str], desired: Iterable[str]) -> bool:
    return set(current) != set(desired)


def plan_updates(issues: Iterable[Issue], mapping: Mapping[str, str]) -> list[LabelUpdate]:
    """Build one LabelUpdate per issue whose labels would change.

    Issues already carrying only canonical labels are left out.
    """
    updates: list[LabelUpdate] = []
    for issue in issues:
        desired = rewrite_labels(issue.labels, mapping, issue_id=issue.key or issue.id)
        if not needs_update(issue.labels, desired):
            continue
        updates.append(
            LabelUpdate(
                issue_id=issue.id,
                issue_key=issue.key,
                current=frozenset(issue.labels),
                labels=desired,
            )
        )
    return updates
