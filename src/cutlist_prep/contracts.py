"""Contracts for the cut-list panel preparation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


class PrepError(Exception):
    """Base error for the preparation package."""


class PlacementError(PrepError, ValueError):
    """Placement geometry that violates a part's rotation constraint."""


class PanelRole(Enum):
    """Logical position of a panel in a cabinet carcass."""

    TOP = "TOP"
    BOTTOM = "BOTTOM"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    BACK = "BACK"
    OTHER = "OTHER"


@dataclass(frozen=True)
class MarkingStyle:
    """Presentation constants for the GADDI dashed line (mm)."""

    inset_mm: float = 2.0
    dash_pattern_mm: Tuple[float, float] = (2.0, 2.0)
    line_width_mm: float = 0.5
    color: int = 100  # neutral gray


@dataclass(frozen=True)
class PrepConfig:
    """Configuration for panel preparation and marking resolution."""

    backfill_display: bool = False
    marking_min_size_mm: float = 15.0
    axis_tolerance_mm: float = 0.5
    style: MarkingStyle = field(default_factory=MarkingStyle)


@dataclass
class NormalizedPart:
    """Optimizer-ready part produced from one raw panel.

    ``nominal_*`` are fixed at normalization; the optimizer only writes
    ``placed_*`` (through :meth:`apply_placement`) and ``rotated``.
    """

    id: str
    name: str
    role: PanelRole
    nominal_width: float
    nominal_height: float
    placed_width: float
    placed_height: float
    laminate_code: str = ""
    front_code: str = ""
    grain_locked: bool = False
    rotation_allowed: bool = True
    marking_requested: bool = False
    quantity: int = 1
    original_id: str = ""
    source_index: int = 0
    rotated: bool = False

    @property
    def area(self) -> float:
        return self.nominal_width * self.nominal_height

    def apply_placement(
        self, width: float, height: float, tolerance_mm: float = 0.5
    ) -> None:
        """Record the optimizer's placed size for this part.

        Raises:
            PlacementError: if a size is not a number, or the part is
                rotation-locked and the placement swaps its sides or does
                not match its nominal size.
        """
        try:
            width = float(width)
            height = float(height)
        except (TypeError, ValueError) as exc:
            raise PlacementError(
                f"Part {self.id} placed with non-numeric size "
                f"{width!r}x{height!r}"
            ) from exc
        straight = (
            abs(width - self.nominal_width) < tolerance_mm
            and abs(height - self.nominal_height) < tolerance_mm
        )
        swapped = (
            abs(width - self.nominal_height) < tolerance_mm
            and abs(height - self.nominal_width) < tolerance_mm
        )

        if not self.rotation_allowed:
            if not straight and swapped:
                raise PlacementError(
                    f"Part {self.id} is grain locked and cannot be rotated "
                    f"({self.nominal_width}x{self.nominal_height} placed as "
                    f"{width}x{height})"
                )
            if not straight:
                raise PlacementError(
                    f"Part {self.id} placed as {width}x{height}, expected "
                    f"{self.nominal_width}x{self.nominal_height}"
                )

        self.placed_width = width
        self.placed_height = height
        self.rotated = swapped and not straight

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "nomW": self.nominal_width,
            "nomH": self.nominal_height,
            "w": self.placed_width,
            "h": self.placed_height,
            "qty": self.quantity,
            "rotate": self.rotation_allowed,
            "gaddi": self.marking_requested,
            "laminateCode": self.laminate_code,
            "grainLocked": self.grain_locked,
        }


@dataclass(frozen=True)
class MarkingConfig:
    """Which nominal dimension the GADDI line tracks and where it lies."""

    mark_dimension: str  # "width" | "height"
    sheet_axis: str  # "x" | "y"
    inset: float = 2.0
    dash_pattern: Tuple[float, float] = (2.0, 2.0)
    line_width: float = 0.5
    color: int = 100

    def to_dict(self) -> Dict[str, object]:
        return {
            "markDimension": self.mark_dimension,
            "sheetAxis": self.sheet_axis,
            "inset": self.inset,
            "dashPattern": list(self.dash_pattern),
            "lineWidth": self.line_width,
            "color": self.color,
        }


@dataclass
class PrepRunResult:
    """Ordered parts plus the per-role counters of one preparation run."""

    parts: List[NormalizedPart]
    role_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def ids(self) -> List[str]:
        return [part.id for part in self.parts]
