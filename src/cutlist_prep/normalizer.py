"""
Panel normalization: loosely-typed raw panels -> NormalizedPart records.

Field aliases are resolved once here, in a fixed order; nothing downstream
sees the raw field names. Normalization never raises: missing or malformed
values fall back to documented defaults.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import MutableMapping
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from cutlist_prep.contracts import NormalizedPart, PanelRole, PrepConfig
from cutlist_prep.materials import coerce_flag, split_laminate_code

logger = logging.getLogger(__name__)

WIDTH_ALIASES = ("nomW", "nominal_width", "width", "w")
HEIGHT_ALIASES = ("nomH", "nominal_height", "height", "h")
LAMINATE_ALIASES = ("laminateCode", "laminate_code")
MARKING_ALIASES = ("gaddi", "marking_requested")

# Detection order matters only for names carrying several role words.
_ROLE_PATTERNS: Tuple[Tuple[PanelRole, re.Pattern], ...] = (
    (PanelRole.TOP, re.compile(r"\btop\b")),
    (PanelRole.BOTTOM, re.compile(r"\bbottom\b")),
    (PanelRole.LEFT, re.compile(r"\bleft\b")),
    (PanelRole.RIGHT, re.compile(r"\bright\b")),
    (PanelRole.BACK, re.compile(r"\bback\b")),
)


def _field(raw: Any, key: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(key)
    return getattr(raw, key, None)


def _first(raw: Any, aliases: Sequence[str]) -> Any:
    for key in aliases:
        value = _field(raw, key)
        if value is not None:
            return value
    return None


def _to_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def detect_role(name: str) -> PanelRole:
    """Role from whole-word matches in the panel name ("backrest" is OTHER)."""
    lowered = str(name).lower()
    for role, pattern in _ROLE_PATTERNS:
        if pattern.search(lowered):
            return role
    return PanelRole.OTHER


def normalize_panel(
    raw: Any,
    index: int,
    grain_lookup: Optional[Mapping[str, Any]] = None,
    role_counters: Optional[Dict[str, int]] = None,
    config: Optional[PrepConfig] = None,
) -> NormalizedPart:
    """Normalize one raw panel.

    Args:
        raw: Panel mapping or object with aliased fields.
        index: Position of the panel in the input sequence.
        grain_lookup: Front laminate code -> directional grain flag.
        role_counters: Per-role counters shared across one run. A fresh dict
            is used when omitted, so every part gets counter 1.
        config: Preparation settings (display backfill).

    Returns:
        The normalized part, with ``rotation_allowed`` left at its default
        until the rotation resolver runs.
    """
    if config is None:
        config = PrepConfig()
    if role_counters is None:
        role_counters = {}
    grain_lookup = grain_lookup or {}

    raw_id = _field(raw, "id")
    name_value = _first(raw, ("name", "id"))
    name = str(name_value) if name_value is not None else f"panel-{index}"
    original_id = str(raw_id) if raw_id is not None else f"idx{index}"

    nominal_width = _to_float(_first(raw, WIDTH_ALIASES))
    nominal_height = _to_float(_first(raw, HEIGHT_ALIASES))

    laminate_value = _first(raw, LAMINATE_ALIASES)
    laminate_code = str(laminate_value).strip() if laminate_value is not None else ""
    front_code, _ = split_laminate_code(laminate_code)
    grain_locked = coerce_flag(grain_lookup.get(front_code))

    role = detect_role(name)
    role_counters[role.value] = role_counters.get(role.value, 0) + 1
    part_id = f"{role.value}_{role_counters[role.value]}_{original_id}"

    part = NormalizedPart(
        id=part_id,
        name=name,
        role=role,
        nominal_width=nominal_width,
        nominal_height=nominal_height,
        placed_width=nominal_width,
        placed_height=nominal_height,
        laminate_code=laminate_code,
        front_code=front_code,
        grain_locked=grain_locked,
        marking_requested=coerce_flag(_first(raw, MARKING_ALIASES)),
        original_id=original_id,
        source_index=index,
    )

    if config.backfill_display and isinstance(raw, MutableMapping):
        _backfill_display(raw, part)

    return part


def normalize_panels(
    panels: Sequence[Any],
    grain_lookup: Optional[Mapping[str, Any]] = None,
    config: Optional[PrepConfig] = None,
) -> Tuple[List[NormalizedPart], Dict[str, int]]:
    """Normalize a run of panels with fresh per-role id counters.

    Returns:
        (parts in input order, role counters keyed by role name)
    """
    role_counters: Dict[str, int] = {}
    parts = [
        normalize_panel(raw, index, grain_lookup, role_counters, config)
        for index, raw in enumerate(panels)
    ]
    logger.debug("Normalized %d panels: %s", len(parts), role_counters)
    return parts, role_counters


def _backfill_display(raw: MutableMapping, part: NormalizedPart) -> None:
    """Write resolved dimensions back onto the caller's panel for display."""
    raw["display_width"] = part.nominal_width
    raw["display_height"] = part.nominal_height
    raw["nominal_width"] = part.nominal_width
    raw["nominal_height"] = part.nominal_height
    raw["grain_locked"] = part.grain_locked
