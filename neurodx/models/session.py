"""
Session snapshot models.

The form layer owns the session and stores it with camelCase keys
(``triage.acuteOnset``, ``pupils.odLight`` ...).  These models give the
engine a typed, read-only view of one snapshot.  Validation is total:
anything malformed collapses to the empty value of its field instead of
raising, so a half-filled form always produces a usable Session.

Pupil measurements are kept raw on purpose.  The gating policy needs to
know whether a value was entered at all, while the feature deriver decides
whether it parses as a number; collapsing both here would lose the first.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


class TriState(str, Enum):
    """
    Three-valued examination finding.

    PRESENT    – assessed, finding present (stored as ``true``)
    ABSENT     – assessed, finding absent  (stored as ``false``)
    UNASSESSED – not examined yet          (stored as ``null`` / missing)
    """
    PRESENT    = "present"
    ABSENT     = "absent"
    UNASSESSED = "unassessed"

    @classmethod
    def from_raw(cls, value: Any) -> "TriState":
        if isinstance(value, cls):
            return value
        if value is True:
            return cls.PRESENT
        if value is False:
            return cls.ABSENT
        return cls.UNASSESSED

    def to_raw(self):
        """Inverse of ``from_raw``: True / False / None."""
        if self is TriState.PRESENT:
            return True
        if self is TriState.ABSENT:
            return False
        return None


class Reliability(str, Enum):
    GOOD        = "good"
    BORDERLINE  = "borderline"
    POOR        = "poor"
    UNSPECIFIED = ""


class Laterality(str, Enum):
    MONO        = "mono"
    BINOCULAR   = "binocular"
    UNKNOWN     = "unknown"
    UNSPECIFIED = ""


class Congruity(str, Enum):
    LOW         = "low"
    MODERATE    = "moderate"
    HIGH        = "high"
    UNSPECIFIED = ""


# ── Coercion helpers ─────────────────────────────────────────────────────────

def truthy(value: Any) -> bool:
    """Loose truthiness as the form layer means it: None, 0, "" and NaN are False."""
    if isinstance(value, float) and math.isnan(value):
        return False
    try:
        return bool(value)
    except (TypeError, ValueError):
        # objects with an ambiguous truth value were still *entered*
        return True


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _choice(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    return enum_cls("")


class _Namespace(BaseModel):
    """Shared config: camelCase aliases, unknown keys ignored, immutable."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# ── Namespaces ───────────────────────────────────────────────────────────────

class Triage(_Namespace):
    acute_onset: bool = False
    painful: bool = False
    neuro_sx: bool = False
    trauma: bool = False

    @field_validator("acute_onset", "painful", "neuro_sx", "trauma", mode="before")
    @classmethod
    def _flag(cls, v):
        return truthy(v)


class Pupils(_Namespace):
    # raw measurements in mm: number, numeric string, "" or None
    od_light: Any = None
    os_light: Any = None
    od_dark: Any = None
    os_dark: Any = None

    # reaction codes, displayed but not scored
    od_light_rxn: str = ""
    os_light_rxn: str = ""

    dilation_lag: bool = False
    anhidrosis: bool = False
    light_near_dissociation: bool = False
    vermiform: bool = False
    anticholinergic_exposure: bool = False
    sympathomimetic_exposure: bool = False

    @field_validator(
        "dilation_lag", "anhidrosis", "light_near_dissociation", "vermiform",
        "anticholinergic_exposure", "sympathomimetic_exposure",
        mode="before",
    )
    @classmethod
    def _flag(cls, v):
        return truthy(v)

    @field_validator("od_light_rxn", "os_light_rxn", mode="before")
    @classmethod
    def _code(cls, v):
        return _text(v)


class ExtraocularMotility(_Namespace):
    diplopia: bool = False
    ptosis: bool = False
    fatigable: bool = False
    pain_on_movement: bool = False

    abduction_deficit: TriState = TriState.UNASSESSED
    adduction_deficit: TriState = TriState.UNASSESSED
    vertical_limitation: TriState = TriState.UNASSESSED
    comitant: TriState = TriState.UNASSESSED

    notes: str = ""

    @field_validator("diplopia", "ptosis", "fatigable", "pain_on_movement", mode="before")
    @classmethod
    def _flag(cls, v):
        return truthy(v)

    @field_validator(
        "abduction_deficit", "adduction_deficit", "vertical_limitation", "comitant",
        mode="before",
    )
    @classmethod
    def _tri(cls, v):
        return TriState.from_raw(v)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, v):
        return _text(v)


class VisualFields(_Namespace):
    test_type: str = ""
    reliability: Reliability = Reliability.UNSPECIFIED

    complaint: bool = False
    new_defect: bool = False
    homonymous: bool = False
    bitemporal: bool = False
    altitudinal: bool = False
    central_scotoma: bool = False

    laterality: Laterality = Laterality.UNSPECIFIED
    respects_vertical_meridian: TriState = TriState.UNASSESSED
    respects_horizontal_meridian: TriState = TriState.UNASSESSED
    congruity: Congruity = Congruity.UNSPECIFIED

    notes: str = ""

    @field_validator(
        "complaint", "new_defect", "homonymous", "bitemporal", "altitudinal",
        "central_scotoma",
        mode="before",
    )
    @classmethod
    def _flag(cls, v):
        return truthy(v)

    @field_validator("respects_vertical_meridian", "respects_horizontal_meridian", mode="before")
    @classmethod
    def _tri(cls, v):
        return TriState.from_raw(v)

    @field_validator("test_type", "notes", mode="before")
    @classmethod
    def _free_text(cls, v):
        return _text(v)

    @field_validator("reliability", mode="before")
    @classmethod
    def _reliability(cls, v):
        return _choice(Reliability, v)

    @field_validator("laterality", mode="before")
    @classmethod
    def _laterality(cls, v):
        return _choice(Laterality, v)

    @field_validator("congruity", mode="before")
    @classmethod
    def _congruity(cls, v):
        return _choice(Congruity, v)


_NAMESPACE_TYPES = {
    "triage": Triage,
    "pupils": Pupils,
    "eom": ExtraocularMotility,
    "visualFields": VisualFields,
    "visual_fields": VisualFields,
}


class Session(_Namespace):
    """One read-only snapshot of the clinician's findings."""
    triage: Triage = Triage()
    pupils: Pupils = Pupils()
    eom: ExtraocularMotility = ExtraocularMotility()
    visual_fields: VisualFields = VisualFields()

    @model_validator(mode="before")
    @classmethod
    def _drop_malformed_namespaces(cls, data):
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            return {}
        cleaned = dict(data)
        for key, model in _NAMESPACE_TYPES.items():
            if key in cleaned and not isinstance(cleaned[key], (Mapping, model)):
                del cleaned[key]
        return cleaned

    @classmethod
    def from_snapshot(cls, snapshot: Any) -> "Session":
        """Build a Session from a store snapshot (mapping) or pass one through."""
        if isinstance(snapshot, cls):
            return snapshot
        return cls.model_validate(snapshot)
