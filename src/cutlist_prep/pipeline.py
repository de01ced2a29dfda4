"""Panel preparation: normalize -> rotation constraints -> sequence."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from cutlist_prep.contracts import PrepConfig, PrepRunResult
from cutlist_prep.normalizer import normalize_panels
from cutlist_prep.observers import PrepObserver
from cutlist_prep.rotation import apply_rotation_constraints
from cutlist_prep.sequencer import sequence_parts

logger = logging.getLogger(__name__)


def prepare_parts(
    panels: Sequence[Any],
    grain_lookup: Optional[Mapping[str, Any]] = None,
    *,
    config: Optional[PrepConfig] = None,
    observer: Optional[PrepObserver] = None,
) -> PrepRunResult:
    """Turn raw panels into ordered, optimizer-ready parts.

    Args:
        panels: Raw panel mappings/objects, one per physical panel.
        grain_lookup: Front laminate code -> directional grain flag.
        config: Preparation settings.
        observer: Receives the finished result (debug tables, recording).

    Returns:
        Parts in packing order plus the per-role id counters of this run.
    """
    if config is None:
        config = PrepConfig()

    parts, role_counts = normalize_panels(panels, grain_lookup, config)
    parts = apply_rotation_constraints(parts)
    ordered = sequence_parts(parts)

    result = PrepRunResult(parts=ordered, role_counts=dict(role_counts))
    locked = sum(1 for part in ordered if not part.rotation_allowed)
    logger.info("Prepared %d parts (%d grain locked)", len(ordered), locked)

    if observer is not None:
        observer.on_parts_prepared(result)
    return result
