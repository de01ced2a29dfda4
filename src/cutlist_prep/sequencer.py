"""
Part ordering ahead of packing.

Same-role panels are grouped (BACK, LEFT, RIGHT, TOP, BOTTOM, then the rest)
and, within a group, larger panels come first. The sort is stable, so equal
keys keep their input order.
"""

import re
from typing import List, Sequence, Tuple

from cutlist_prep.contracts import NormalizedPart

OTHER_PRIORITY = 6

_PRIORITY_PATTERNS: Tuple[Tuple[int, re.Pattern], ...] = (
    (1, re.compile(r"\bback\b")),
    (2, re.compile(r"\bleft\b")),
    (3, re.compile(r"\bright\b")),
    (4, re.compile(r"\btop\b")),
    (5, re.compile(r"\bbottom\b")),
)


def sort_priority(name: str) -> int:
    """Group rank of a panel name; first matching word wins."""
    lowered = str(name).lower()
    for priority, pattern in _PRIORITY_PATTERNS:
        if pattern.search(lowered):
            return priority
    return OTHER_PRIORITY


def sequence_key(part: NormalizedPart) -> Tuple[int, float]:
    return (sort_priority(part.name), -part.area)


def sequence_parts(parts: Sequence[NormalizedPart]) -> List[NormalizedPart]:
    """Return a new, ordered list; the parts themselves are untouched."""
    return sorted(parts, key=sequence_key)
