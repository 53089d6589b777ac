"""
Clinical Decision Layer — Base Types

Defines the data contracts produced by the feature deriver, the rule table
and the urgency classifier.  All of them are immutable once built and
serialise to the camelCase shape the form layer already uses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from neurodx.models.session import TriState, Reliability, Laterality, Congruity


class Dominance(str, Enum):
    """
    Lighting condition that produces the larger anisocoria.

    LIGHT – larger in light → the large pupil is the abnormal one
    DARK  – larger in dark  → the small pupil is the abnormal one
    EQUAL – same in both, pattern called but not lateralising
    """
    LIGHT = "light"
    DARK  = "dark"
    EQUAL = "equal"


class UrgencyLevel(str, Enum):
    """
    Triage banner level, least to most severe.

    NONE   – nothing to flag (or not enough data)
    INFO   – noteworthy pattern, no alert
    WARN   – elevated concern
    DANGER – high concern, act now
    """
    NONE   = "none"
    INFO   = "info"
    WARN   = "warn"
    DANGER = "danger"


@dataclass(frozen=True)
class FeatureVector:
    """
    Normalised, flattened view of one session snapshot.

    Pupil numerics are ``None`` when absent, never NaN or 0.  EOM deficits,
    comitance and the VF meridian flags keep their tri-state so "not
    assessed" stays distinct from "assessed, absent".
    """
    # ── Triage ────────────────────────────────────────────────────────────
    acute: bool = False
    painful: bool = False
    neuro_sx: bool = False
    trauma: bool = False

    # ── Pupils ────────────────────────────────────────────────────────────
    od_light: Optional[float] = None
    os_light: Optional[float] = None
    od_dark: Optional[float] = None
    os_dark: Optional[float] = None
    anis_light: Optional[float] = None
    anis_dark: Optional[float] = None
    dominance: Optional[Dominance] = None
    pupil_dataset_complete: bool = False

    dilation_lag: bool = False
    anhidrosis: bool = False
    light_near_dissociation: bool = False
    vermiform: bool = False
    anticholinergic: bool = False
    sympathomimetic: bool = False

    # ── Extraocular motility ─────────────────────────────────────────────
    diplopia: bool = False
    ptosis: bool = False
    fatigable: bool = False
    pain_on_movement: bool = False
    comitant: TriState = TriState.UNASSESSED
    abduction_deficit: TriState = TriState.UNASSESSED
    adduction_deficit: TriState = TriState.UNASSESSED
    vertical_limitation: TriState = TriState.UNASSESSED

    # ── Visual fields ─────────────────────────────────────────────────────
    vf_complaint: bool = False
    vf_test_type: str = ""
    vf_reliability: Reliability = Reliability.UNSPECIFIED
    vf_new_defect: bool = False
    vf_laterality: Laterality = Laterality.UNSPECIFIED
    vf_respects_vertical: bool = False
    vf_respects_horizontal: bool = False
    vf_homonymous: bool = False
    vf_bitemporal: bool = False
    vf_altitudinal: bool = False
    vf_central_scotoma: bool = False
    vf_congruity: Congruity = Congruity.UNSPECIFIED

    @property
    def has_anisocoria_measurement(self) -> bool:
        return self.anis_light is not None or self.anis_dark is not None

    @property
    def red_flags(self) -> bool:
        """Acute onset, pain or other neuro symptoms."""
        return self.acute or self.painful or self.neuro_sx

    def to_dict(self) -> dict:
        return {
            "acute": self.acute,
            "painful": self.painful,
            "neuroSx": self.neuro_sx,
            "trauma": self.trauma,

            "odLight": self.od_light,
            "osLight": self.os_light,
            "odDark": self.od_dark,
            "osDark": self.os_dark,
            "anisL": self.anis_light,
            "anisD": self.anis_dark,
            "dominance": self.dominance.value if self.dominance else None,
            "pupilDatasetComplete": self.pupil_dataset_complete,
            "dilationLag": self.dilation_lag,
            "anhidrosis": self.anhidrosis,
            "lnd": self.light_near_dissociation,
            "vermiform": self.vermiform,
            "anticholinergic": self.anticholinergic,
            "sympathomimetic": self.sympathomimetic,

            "diplopia": self.diplopia,
            "ptosis": self.ptosis,
            "fatigable": self.fatigable,
            "painOnMovement": self.pain_on_movement,
            "comitant": self.comitant.to_raw(),
            "abductionDeficit": self.abduction_deficit.to_raw(),
            "adductionDeficit": self.adduction_deficit.to_raw(),
            "verticalLimitation": self.vertical_limitation.to_raw(),

            "vf_symptoms": self.vf_complaint,
            "vf_test_type": self.vf_test_type,
            "vf_reliability": self.vf_reliability.value,
            "vf_new_defect": self.vf_new_defect,
            "vf_laterality": self.vf_laterality.value,
            "vf_respects_vertical": self.vf_respects_vertical,
            "vf_respects_horizontal": self.vf_respects_horizontal,
            "vf_homonymous": self.vf_homonymous,
            "vf_bitemporal": self.vf_bitemporal,
            "vf_altitudinal": self.vf_altitudinal,
            "vf_central_scotoma": self.vf_central_scotoma,
            "vf_congruity": self.vf_congruity.value,
        }


@dataclass(frozen=True)
class DifferentialEntry:
    """One candidate diagnosis: rule name, positive score, matched reasons."""
    name: str
    score: int
    why: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"name": self.name, "score": self.score, "why": list(self.why)}


@dataclass(frozen=True)
class UrgencyVerdict:
    """The single triage banner for a computation."""
    level: UrgencyLevel
    text: str

    def to_dict(self) -> dict:
        return {"level": self.level.value, "text": self.text}


@dataclass(frozen=True)
class EngineResult:
    """Everything a presentation layer needs from one computation."""
    features: FeatureVector
    differential: List[DifferentialEntry] = field(default_factory=list)
    urgency: UrgencyVerdict = UrgencyVerdict(UrgencyLevel.NONE, "")

    @property
    def top(self) -> Optional[DifferentialEntry]:
        return self.differential[0] if self.differential else None

    def to_dict(self) -> dict:
        return {
            "features": self.features.to_dict(),
            "differential": [d.to_dict() for d in self.differential],
            "urgency": self.urgency.to_dict(),
        }
