"""Label canonicalization.

Labels that only differ in case, punctuation, digits or whitespace share a
canonical key ("My Label", "my-label" and "MYLABEL" all reduce to "mylabel").
Each group of labels gets one representative: the longest raw spelling, first
seen wins ties, stored lowercase. Longer spellings tend to be the readable
ones ("my-long-label" rather than "mylonglabel").

Labels with no ASCII letters at all ("123", "--") reduce to the empty key and
end up in a single shared group.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_NON_LETTERS = re.compile(r"[^A-Za-z]+")


def canonical_key(label: str) -> str:
    """Reduce a label to its ASCII letters, lowercased."""
    return _NON_LETTERS.sub("", label).lower()


def canonicalize(labels: Iterable[str]) -> dict[str, str]:
    """Map every distinct raw label to the canonical spelling of its group.

    ``labels`` is every label occurrence across the issues being processed;
    repeats are fine. Representatives are picked while walking ``labels`` in
    order, so the first longest spelling of a group wins.
    """
    groups: dict[str, list[str]] = {}
    seen: set[str] = set()
    for label in labels:
        if label in seen:
            continue
        seen.add(label)
        groups.setdefault(canonical_key(label), []).append(label)

    mapping: dict[str, str] = {}
    for members in groups.values():
        best = members[0]
        for label in members[1:]:
            if len(label) > len(best):
                best = label
        canonical = best.lower()
        for label in members:
            mapping[label] = canonical
    return mapping
