"""
GADDI edge marking: which nominal dimension a placed panel's dashed line
tracks, and which sheet axis that dimension ended up on.

Rules:
  - LEFT/RIGHT panels mark HEIGHT (nominal height), wherever it lies.
  - TOP/BOTTOM panels mark WIDTH (nominal width), wherever it lies.
  - Any other panel marks HEIGHT, always on the Y axis.

For LEFT/RIGHT/TOP/BOTTOM the axis is read off the placed geometry rather
than an optimizer rotation flag: if the placed width equals the tracked
dimension (within tolerance) the line runs along X, otherwise along Y.
Sheet X is horizontal, Y vertical.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Union

import numpy as np
from shapely.geometry import LineString
from shapely.ops import substring

from cutlist_prep.contracts import MarkingConfig, NormalizedPart, PanelRole, PrepConfig

logger = logging.getLogger(__name__)

WIDTH = "width"
HEIGHT = "height"
AXIS_X = "x"
AXIS_Y = "y"


def should_show_marking(
    part: NormalizedPart, min_size_mm: float = 15.0
) -> bool:
    """Marking is drawn only when requested and the placed panel is big enough."""
    return (
        part.marking_requested is True
        and part.placed_width > min_size_mm
        and part.placed_height > min_size_mm
    )


def _role_label(role: Union[PanelRole, str, None]) -> str:
    label = role.value if isinstance(role, PanelRole) else str(role or "")
    return label.upper()


def _is_side_or_cap(label: str) -> bool:
    return any(word in label for word in ("LEFT", "RIGHT", "TOP", "BOTTOM"))


def tracked_dimension(role: Union[PanelRole, str, None]) -> str:
    """Nominal dimension the line follows for a role or panel-type label."""
    label = _role_label(role)
    if "LEFT" in label or "RIGHT" in label:
        return HEIGHT
    if "TOP" in label or "BOTTOM" in label:
        return WIDTH
    return HEIGHT


def resolve_marking_axis(
    role: Union[PanelRole, str, None],
    nominal_width: float,
    nominal_height: float,
    placed_width: float,
    placed_height: float,
    config: Optional[PrepConfig] = None,
) -> MarkingConfig:
    """Work out the marked dimension and its current sheet axis.

    ``placed_height`` is accepted for symmetry with the placement record; the
    axis test only needs the placed width. When neither placed side matches
    the tracked dimension (a trimmed or scaled part) the result falls back
    to the Y axis. Roles other than LEFT/RIGHT/TOP/BOTTOM always mark height
    on the Y axis, however they were placed.
    """
    if config is None:
        config = PrepConfig()

    mark_dimension = tracked_dimension(role)
    tracked = nominal_height if mark_dimension == HEIGHT else nominal_width

    if not _is_side_or_cap(_role_label(role)):
        sheet_axis = AXIS_Y
    elif abs(placed_width - tracked) < config.axis_tolerance_mm:
        sheet_axis = AXIS_X
    else:
        sheet_axis = AXIS_Y

    style = config.style
    return MarkingConfig(
        mark_dimension=mark_dimension,
        sheet_axis=sheet_axis,
        inset=style.inset_mm,
        dash_pattern=tuple(style.dash_pattern_mm),
        line_width=style.line_width_mm,
        color=style.color,
    )


def marking_for_part(
    part: NormalizedPart, config: Optional[PrepConfig] = None
) -> Optional[MarkingConfig]:
    """MarkingConfig for an eligible placed part, otherwise None."""
    if config is None:
        config = PrepConfig()
    if not should_show_marking(part, config.marking_min_size_mm):
        return None
    return resolve_marking_axis(
        part.role,
        part.nominal_width,
        part.nominal_height,
        part.placed_width,
        part.placed_height,
        config,
    )


def markings_for_parts(
    parts: Iterable[NormalizedPart], config: Optional[PrepConfig] = None
) -> Dict[str, MarkingConfig]:
    """Marking configs keyed by part id; ineligible parts are left out."""
    markings: Dict[str, MarkingConfig] = {}
    for part in parts:
        marking = marking_for_part(part, config)
        if marking is not None:
            markings[part.id] = marking
    logger.info("Resolved GADDI marking for %d parts", len(markings))
    return markings


# ─── Geometry for renderers ──────────────────────────────────────────────────


def marking_line(
    marking: MarkingConfig,
    x: float,
    y: float,
    width: float,
    height: float,
) -> LineString:
    """Reference line inside a placed rectangle, ``inset`` from its edges.

    An X-axis marking runs horizontally near the lower edge; a Y-axis marking
    runs vertically near the left edge.
    """
    inset = marking.inset
    if marking.sheet_axis == AXIS_X:
        return LineString([(x + inset, y + inset), (x + width - inset, y + inset)])
    return LineString([(x + inset, y + inset), (x + inset, y + height - inset)])


def dash_segments(
    line: LineString, dash_pattern: Sequence[float] = (2.0, 2.0)
) -> List[LineString]:
    """Split a line into dashes following an (on, off) pattern."""
    on, off = float(dash_pattern[0]), float(dash_pattern[1])
    length = line.length
    step = on + off
    if length <= 0 or on <= 0 or step <= 0:
        return []

    dashes = []
    count = math.ceil(length / step)
    for start in np.arange(count) * step:
        if start >= length - 1e-9:
            break
        end = min(start + on, length)
        dashes.append(substring(line, float(start), float(end)))
    return dashes
