"""
Rotation constraints for the packing optimizer.

Directional grain has to run the same real-world way on the finished cabinet.
For LEFT/RIGHT sides that pins height x depth, for TOP/BOTTOM it pins
width x depth, and BACK and unnamed panels are pinned the same way. The
outcome is one rule for every role: a grain-locked part may not rotate.
"""

import logging
from typing import Iterable, List

from cutlist_prep.contracts import NormalizedPart

logger = logging.getLogger(__name__)


def resolve_rotation(part: NormalizedPart) -> bool:
    """Whether the optimizer may swap this part's width and height."""
    return not part.grain_locked


def apply_rotation_constraints(parts: Iterable[NormalizedPart]) -> List[NormalizedPart]:
    """Set ``rotation_allowed`` on each part and return them as a list."""
    constrained = []
    locked = 0
    for part in parts:
        part.rotation_allowed = resolve_rotation(part)
        if not part.rotation_allowed:
            locked += 1
        constrained.append(part)
    logger.debug("Rotation locked for %d/%d parts", locked, len(constrained))
    return constrained
