"""End-to-end tests for prepare_parts."""
import logging

from cutlist_prep import PanelRole, PrepConfig, markings_for_parts, prepare_parts
from cutlist_prep.observers import LoggingObserver, RecordingObserver, format_parts_table

ROLE_ORDER = [
    PanelRole.BACK, PanelRole.LEFT, PanelRole.RIGHT,
    PanelRole.TOP, PanelRole.BOTTOM, PanelRole.OTHER,
]


class TestPrepareParts:
    def test_two_panel_example(self):
        panels = [
            {"name": "Left Side", "width": 600, "height": 720, "laminateCode": "L101+L101"},
            {"name": "Top", "width": 800, "height": 600, "laminateCode": "L101+L101"},
        ]
        result = prepare_parts(panels, {"L101": True})
        assert [p.role for p in result.parts] == [PanelRole.LEFT, PanelRole.TOP]
        assert all(p.grain_locked for p in result.parts)
        assert not any(p.rotation_allowed for p in result.parts)
        assert result.ids == ["LEFT_1_idx0", "TOP_1_idx1"]

    def test_permutation_grouping_and_area(self, cabinet_panels, grain_lookup):
        result = prepare_parts(cabinet_panels + cabinet_panels, grain_lookup)
        assert len(result.parts) == 12
        assert sorted(p.original_id for p in result.parts) == sorted(
            p["id"] for p in cabinet_panels + cabinet_panels
        )

        ranks = [ROLE_ORDER.index(p.role) for p in result.parts]
        assert ranks == sorted(ranks)
        for role in ROLE_ORDER:
            areas = [p.area for p in result.parts if p.role == role]
            assert areas == sorted(areas, reverse=True)

    def test_rotation_matches_grain(self, cabinet_panels, grain_lookup):
        result = prepare_parts(cabinet_panels, grain_lookup)
        for part in result.parts:
            assert part.rotation_allowed is (not part.grain_locked)
        shelf = next(p for p in result.parts if p.role == PanelRole.OTHER)
        assert shelf.rotation_allowed is True

    def test_nominal_dimensions_preserved(self, cabinet_panels, grain_lookup):
        result = prepare_parts(cabinet_panels, grain_lookup)
        by_id = {p.original_id: p for p in result.parts}
        for raw in cabinet_panels:
            part = by_id[raw["id"]]
            assert part.nominal_width == raw["width"]
            assert part.nominal_height == raw["height"]

    def test_idempotent(self, cabinet_panels, grain_lookup):
        first = prepare_parts(cabinet_panels, grain_lookup)
        second = prepare_parts(cabinet_panels, grain_lookup)
        assert first.ids == second.ids
        assert [p.rotation_allowed for p in first.parts] == [
            p.rotation_allowed for p in second.parts
        ]
        assert first.role_counts == second.role_counts

    def test_empty_input(self):
        result = prepare_parts([])
        assert result.parts == []
        assert result.role_counts == {}

    def test_garbage_panels_still_produce_parts(self):
        result = prepare_parts([{}, {"name": None, "width": "x"}, {"laminateCode": 5}])
        assert len(result.parts) == 3
        assert len(set(result.ids)) == 3
        assert all(p.role == PanelRole.OTHER for p in result.parts)

    def test_backfill_through_config(self, cabinet_panels, grain_lookup):
        prepare_parts(cabinet_panels, grain_lookup, config=PrepConfig(backfill_display=True))
        assert cabinet_panels[0]["display_width"] == 560.0
        assert cabinet_panels[0]["grain_locked"] is True

    def test_markings_after_placement(self, cabinet_panels, grain_lookup):
        result = prepare_parts(cabinet_panels, grain_lookup)
        markings = markings_for_parts(result.parts)
        assert set(markings) == {"LEFT_1_p1", "RIGHT_1_p2", "TOP_1_p3"}
        assert markings["LEFT_1_p1"].sheet_axis == "y"
        assert markings["TOP_1_p3"].mark_dimension == "width"
        assert markings["TOP_1_p3"].sheet_axis == "x"


class TestObservers:
    def test_recording_observer_receives_result(self, cabinet_panels):
        observer = RecordingObserver()
        result = prepare_parts(cabinet_panels, observer=observer)
        assert observer.results == [result]

    def test_logging_observer_writes_table(self, cabinet_panels, grain_lookup, caplog):
        with caplog.at_level(logging.DEBUG, logger="cutlist_prep.observers"):
            prepare_parts(cabinet_panels, grain_lookup, observer=LoggingObserver())
        assert "BACK_1_p5" in caplog.text
        assert "LOCKED" in caplog.text

    def test_table_has_row_per_part(self, cabinet_panels):
        result = prepare_parts(cabinet_panels)
        assert len(format_parts_table(result)) == len(cabinet_panels) + 2
