"""
Shared fixtures for the panel preparation tests.
"""
import json
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cutlist_prep.contracts import NormalizedPart, PanelRole


@pytest.fixture
def cabinet_panels():
    """A single carcass: two sides, top, bottom, back and a shelf."""
    return [
        {"id": "p1", "name": "Left Side", "width": 560, "height": 720,
         "laminateCode": "L101+L101", "gaddi": True},
        {"id": "p2", "name": "Right Side", "width": 560, "height": 720,
         "laminateCode": "L101+L101", "gaddi": True},
        {"id": "p3", "name": "Top", "width": 800, "height": 560,
         "laminateCode": "L101+L101", "gaddi": True},
        {"id": "p4", "name": "Bottom", "width": 800, "height": 560,
         "laminateCode": "L101+L101"},
        {"id": "p5", "name": "Back Panel", "width": 780, "height": 700,
         "laminateCode": "W200+W200"},
        {"id": "p6", "name": "Shelf", "width": 764, "height": 540,
         "laminateCode": "W200"},
    ]


@pytest.fixture
def grain_lookup():
    return {"L101": True, "W200": False}


@pytest.fixture
def make_part():
    """Factory for NormalizedPart records with placed size = nominal."""

    def _make(
        role=PanelRole.OTHER,
        width=100.0,
        height=100.0,
        name=None,
        part_id="part",
        marking=True,
        grain_locked=False,
    ):
        return NormalizedPart(
            id=part_id,
            name=name or role.value.lower(),
            role=role,
            nominal_width=float(width),
            nominal_height=float(height),
            placed_width=float(width),
            placed_height=float(height),
            grain_locked=grain_locked,
            rotation_allowed=not grain_locked,
            marking_requested=marking,
        )

    return _make


@pytest.fixture
def panels_file(cabinet_panels, tmp_path):
    path = tmp_path / "panels.json"
    path.write_text(json.dumps(cabinet_panels), encoding="utf-8")
    return str(path)
