"""Public API for cut-list panel preparation and GADDI marking."""

from cutlist_prep.contracts import (
    MarkingConfig,
    MarkingStyle,
    NormalizedPart,
    PanelRole,
    PlacementError,
    PrepConfig,
    PrepError,
    PrepRunResult,
)
from cutlist_prep.marking import marking_for_part, markings_for_parts
from cutlist_prep.materials import build_grain_lookup
from cutlist_prep.pipeline import prepare_parts

__all__ = [
    "MarkingConfig",
    "MarkingStyle",
    "NormalizedPart",
    "PanelRole",
    "PlacementError",
    "PrepConfig",
    "PrepError",
    "PrepRunResult",
    "build_grain_lookup",
    "marking_for_part",
    "markings_for_parts",
    "prepare_parts",
]
