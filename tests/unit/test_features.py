"""
Unit Tests for the Feature Deriver and the Pupil Gating Policy.
"""
import pytest

from neurodx.config import ANISO_THRESHOLD_MM
from neurodx.core.clinical import Dominance, derive_features, is_pupil_dataset_complete
from neurodx.core.clinical.features import parse_measurement, resolve_dominance
from neurodx.models import TriState, Reliability, Laterality


class TestParseMeasurement:
    """Numeric parsing of pupil diameters."""

    @pytest.mark.parametrize("raw,expected", [
        (3, 3.0), (3.5, 3.5), ("3", 3.0), ("3.0", 3.0), (" 4.2 ", 4.2), ("0", 0.0),
        ("   ", 0.0), ("\t", 0.0), (".5", 0.5), ("1e1", 10.0), ("+2", 2.0),
        ("0x10", 16.0), ("0b11", 3.0), ("0o7", 7.0),
    ])
    def test_present_values(self, raw, expected):
        assert parse_measurement(raw) == expected

    @pytest.mark.parametrize("raw", [
        "", None, "abc", "nan", "inf", "Infinity", "1_000", "-0x10", "1.2.3", "3mm",
        float("nan"), float("inf"), True, False, [3], {},
    ])
    def test_absent_values(self, raw):
        assert parse_measurement(raw) is None

    def test_empty_string_is_not_zero(self):
        f = derive_features({"pupils": {"odLight": "", "osLight": 0}})
        assert f.od_light is None
        assert f.os_light == 0.0
        assert f.anis_light is None

    def test_blank_string_is_zero(self):
        f = derive_features({"pupils": {"odLight": " ", "osLight": 0.6, "odDark": 5, "osDark": 5}})
        assert f.od_light == 0.0
        assert f.anis_light == pytest.approx(0.6)
        assert f.dominance is Dominance.LIGHT
        assert f.pupil_dataset_complete is True


class TestAnisocoria:
    """anisL / anisD need both operands."""

    def test_reference_case(self, light_dominant_pupils):
        f = derive_features({"pupils": light_dominant_pupils})
        assert f.anis_light == pytest.approx(2.0)
        assert f.anis_dark == pytest.approx(0.2)
        assert f.dominance is Dominance.LIGHT

    def test_partial_pair_is_none(self):
        f = derive_features({"pupils": {"odLight": 4.0, "osLight": None, "odDark": 5.0}})
        assert f.anis_light is None
        assert f.anis_dark is None

    def test_equivalent_strings_give_identical_values(self):
        a = derive_features({"pupils": {"odLight": "3", "osLight": "2", "odDark": "6", "osDark": "5"}})
        b = derive_features({"pupils": {"odLight": "3.0", "osLight": "2.00", "odDark": 6, "osDark": 5.0}})
        assert a.anis_light == b.anis_light
        assert a.anis_dark == b.anis_dark

    def test_always_non_negative(self):
        f = derive_features({"pupils": {"odLight": 2.0, "osLight": 5.0, "odDark": 1.0, "osDark": 7.5}})
        assert f.anis_light == pytest.approx(3.0)
        assert f.anis_dark == pytest.approx(6.5)


class TestDominance:
    """Threshold-gated light/dark pattern call."""

    def test_threshold_constant(self):
        assert ANISO_THRESHOLD_MM == 0.5

    @pytest.mark.parametrize("anis_l,anis_d,expected", [
        (None, None, None),
        (0.2, 0.4, None),           # both below threshold
        (0.49, None, None),
        (0.5, 0.2, Dominance.LIGHT),  # threshold is inclusive
        (0.3, 1.5, Dominance.DARK),
        (1.0, 1.0, Dominance.EQUAL),
        (1.2, 0.8, Dominance.LIGHT),  # both meet, larger wins
        (0.6, None, Dominance.LIGHT),  # one-sided fallback
        (None, 0.7, Dominance.DARK),
    ])
    def test_resolution(self, anis_l, anis_d, expected):
        assert resolve_dominance(anis_l, anis_d) is expected

    def test_one_sided_fallback_from_session(self):
        f = derive_features({"pupils": {"odDark": 6.0, "osDark": 4.0}})
        assert f.anis_light is None
        assert f.dominance is Dominance.DARK


class TestPassThrough:
    """Boolean, tri-state and categorical fields."""

    def test_missing_namespaces(self):
        f = derive_features({})
        assert f.acute is False and f.ptosis is False and f.vf_bitemporal is False
        assert f.anis_light is None and f.dominance is None
        assert f.comitant is TriState.UNASSESSED
        assert f.vf_reliability is Reliability.UNSPECIFIED
        assert f.pupil_dataset_complete is False

    def test_tri_states_preserved(self):
        f = derive_features({"eom": {"abductionDeficit": True, "adductionDeficit": False, "comitant": None}})
        assert f.abduction_deficit is TriState.PRESENT
        assert f.adduction_deficit is TriState.ABSENT
        assert f.comitant is TriState.UNASSESSED

    def test_meridian_flags_only_true_counts(self):
        f = derive_features({"visualFields": {"respectsVerticalMeridian": True,
                                              "respectsHorizontalMeridian": False}})
        assert f.vf_respects_vertical is True
        assert f.vf_respects_horizontal is False

    def test_categoricals(self):
        f = derive_features({"visualFields": {"laterality": "mono", "testType": "30-2"}})
        assert f.vf_laterality is Laterality.MONO
        assert f.vf_test_type == "30-2"

    def test_to_dict_shape(self, light_dominant_pupils):
        d = derive_features({"pupils": light_dominant_pupils, "eom": {"comitant": False}}).to_dict()
        assert d["dominance"] == "light"
        assert d["anisL"] == pytest.approx(2.0)
        assert d["comitant"] is False
        assert d["abductionDeficit"] is None
        assert d["vf_reliability"] == ""

    def test_deterministic(self, light_dominant_pupils):
        session = {"pupils": light_dominant_pupils, "triage": {"acuteOnset": True}}
        assert derive_features(session) == derive_features(session)


class TestPupilGate:
    """Both light and both dark measurements must be entered."""

    def test_complete(self, equal_pupils):
        assert is_pupil_dataset_complete({"pupils": equal_pupils}) is True

    @pytest.mark.parametrize("missing", ["odLight", "osLight", "odDark", "osDark"])
    @pytest.mark.parametrize("blank", [None, ""])
    def test_any_missing_value_fails(self, equal_pupils, missing, blank):
        pupils = dict(equal_pupils, **{missing: blank})
        assert is_pupil_dataset_complete({"pupils": pupils}) is False

    def test_absent_key_fails(self):
        assert is_pupil_dataset_complete({"pupils": {"odLight": 3, "osLight": 3, "odDark": 6}}) is False

    def test_missing_namespace_fails(self):
        assert is_pupil_dataset_complete({}) is False
        assert is_pupil_dataset_complete(None) is False

    def test_presence_not_parseability(self):
        # entered but unparseable still counts as entered
        pupils = {"odLight": "abc", "osLight": 3, "odDark": 6, "osDark": 6}
        assert is_pupil_dataset_complete({"pupils": pupils}) is True
        assert derive_features({"pupils": pupils}).anis_light is None

    def test_zero_counts_as_entered(self):
        pupils = {"odLight": 0, "osLight": 0, "odDark": 0, "osDark": 0}
        assert is_pupil_dataset_complete({"pupils": pupils}) is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
