"""
Laminate master data as served by the material settings service.

Turns laminate catalog records into the grain preference lookup used by the
normalizer, and splits composite ``front+back`` laminate codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

CODE_SEPARATOR = "+"


def coerce_flag(value: Any) -> bool:
    """Read a boolean that may arrive as a real bool or as "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def split_laminate_code(code: Optional[str]) -> Tuple[str, str]:
    """Split ``"L101+L202"`` into ``("L101", "L202")``; back is "" if absent."""
    text = str(code or "").strip()
    front, _, back = text.partition(CODE_SEPARATOR)
    return front.strip(), back.strip()


@dataclass
class LaminateRecord:
    """A laminate code in the godown (stock) catalog."""

    code: str
    name: str = ""
    wood_grains_enabled: bool = False
    inner_code: Optional[str] = None
    supplier: Optional[str] = None
    thickness: Optional[float] = None
    description: Optional[str] = None

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "LaminateRecord":
        """Build from a service record (camelCase keys, string booleans)."""
        code = str(record.get("code") or "").strip()
        thickness = record.get("thickness")
        try:
            thickness = float(thickness) if thickness is not None else None
        except (TypeError, ValueError):
            thickness = None
        return cls(
            code=code,
            name=str(record.get("name") or code),
            wood_grains_enabled=coerce_flag(
                record.get("woodGrainsEnabled", record.get("wood_grains_enabled"))
            ),
            inner_code=record.get("innerCode", record.get("inner_code")),
            supplier=record.get("supplier"),
            thickness=thickness,
            description=record.get("description"),
        )


def build_grain_lookup(
    records: Iterable[LaminateRecord | Mapping[str, Any]],
) -> Dict[str, bool]:
    """Map each laminate code to its directional-grain flag.

    Records without a code are skipped. A later record for the same code
    overrides an earlier one.
    """
    lookup: Dict[str, bool] = {}
    for record in records:
        if not isinstance(record, LaminateRecord):
            record = LaminateRecord.from_mapping(record)
        if not record.code:
            continue
        lookup[record.code] = record.wood_grains_enabled
    return lookup
