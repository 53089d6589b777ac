"""
Unit Tests for the Session snapshot models.

Covers camelCase aliasing and the total (never-raising) coercion rules.
"""
import math

import pytest

from neurodx.models import (
    Session, Pupils, TriState, Reliability, Laterality, Congruity,
)


class TestAliases:
    """The store's camelCase keys map onto snake_case fields."""

    def test_camel_case_keys(self):
        s = Session.from_snapshot({
            "triage": {"acuteOnset": True, "neuroSx": True},
            "pupils": {"odLight": "4.0", "lightNearDissociation": True},
            "visualFields": {"centralScotoma": True, "testType": "24-2"},
        })
        assert s.triage.acute_onset is True
        assert s.triage.neuro_sx is True
        assert s.pupils.od_light == "4.0"
        assert s.pupils.light_near_dissociation is True
        assert s.visual_fields.central_scotoma is True
        assert s.visual_fields.test_type == "24-2"

    def test_snake_case_keys_also_accepted(self):
        s = Session.from_snapshot({"visual_fields": {"new_defect": True}})
        assert s.visual_fields.new_defect is True

    def test_unknown_keys_ignored(self):
        s = Session.from_snapshot({"meta": {"updatedAt": 1}, "pupils": {"colour": "blue"}})
        assert s.pupils == Pupils()

    def test_session_passes_through(self):
        s = Session()
        assert Session.from_snapshot(s) is s


class TestTotalCoercion:
    """Malformed input never raises."""

    @pytest.mark.parametrize("snapshot", [None, 42, "session", [], {"triage": "yes"},
                                          {"pupils": None, "eom": [1, 2], "visualFields": 3.5}])
    def test_malformed_snapshots_give_empty_session(self, snapshot):
        assert Session.from_snapshot(snapshot) == Session()

    @pytest.mark.parametrize("value,expected", [
        (True, True), (1, True), ("x", True), ({"a": 1}, True),
        (False, False), (0, False), ("", False), (None, False), (float("nan"), False),
    ])
    def test_flag_truthiness(self, value, expected):
        s = Session.from_snapshot({"eom": {"ptosis": value}})
        assert s.eom.ptosis is expected

    @pytest.mark.parametrize("value,expected", [
        (True, TriState.PRESENT),
        (False, TriState.ABSENT),
        (None, TriState.UNASSESSED),
        ("true", TriState.UNASSESSED),
        (1, TriState.UNASSESSED),
    ])
    def test_tri_state(self, value, expected):
        s = Session.from_snapshot({"eom": {"abductionDeficit": value, "comitant": value}})
        assert s.eom.abduction_deficit is expected
        assert s.eom.comitant is expected

    def test_missing_tri_state_is_unassessed(self):
        s = Session.from_snapshot({"eom": {}})
        assert s.eom.vertical_limitation is TriState.UNASSESSED

    def test_tri_state_round_trip_to_raw(self):
        assert TriState.PRESENT.to_raw() is True
        assert TriState.ABSENT.to_raw() is False
        assert TriState.UNASSESSED.to_raw() is None

    def test_categoricals_outside_domain_collapse(self):
        s = Session.from_snapshot({"visualFields": {
            "reliability": "POOR", "laterality": 7, "congruity": "medium",
        }})
        assert s.visual_fields.reliability is Reliability.UNSPECIFIED
        assert s.visual_fields.laterality is Laterality.UNSPECIFIED
        assert s.visual_fields.congruity is Congruity.UNSPECIFIED

    def test_categoricals_in_domain(self):
        s = Session.from_snapshot({"visualFields": {
            "reliability": "poor", "laterality": "mono", "congruity": "high",
        }})
        assert s.visual_fields.reliability is Reliability.POOR
        assert s.visual_fields.laterality is Laterality.MONO
        assert s.visual_fields.congruity is Congruity.HIGH

    def test_measurements_kept_raw(self):
        s = Session.from_snapshot({"pupils": {"odLight": "", "osLight": "abc", "odDark": 5}})
        assert s.pupils.od_light == ""
        assert s.pupils.os_light == "abc"
        assert s.pupils.od_dark == 5
        assert s.pupils.os_dark is None

    def test_non_string_notes_become_empty(self):
        s = Session.from_snapshot({"eom": {"notes": math.pi}})
        assert s.eom.notes == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
