"""
Feature Deriver and Pupil Gating Policy

Turns a session snapshot into a FeatureVector.  Total over its input:
absent or malformed values degrade to ``None`` / ``False``, nothing raises.

Dominance resolution (threshold ``ANISO_THRESHOLD_MM``):
  1. neither anisocoria meets the threshold          → None
  2. both sides measured                              → larger wins, tie → EQUAL
  3. only one side measured and it meets threshold    → that side

Step 3 calls a pattern from a single lighting condition without any
comparison.  It is a known asymmetry that downstream triage depends on;
keep it.
"""
from __future__ import annotations

import math
import re
from numbers import Real
from typing import Any, Optional

from neurodx.config import ANISO_THRESHOLD_MM
from neurodx.models.session import Session, TriState
from neurodx.utils import get_logger
from .base import Dominance, FeatureVector

logger = get_logger(__name__)


# ── Numeric helpers ──────────────────────────────────────────────────────────

# Form inputs arrive as strings and follow number-literal rules: surrounding
# whitespace is ignored, a blank string is 0, 0x/0o/0b prefixes are accepted
# unsigned, digit separators ("1_000") are not.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_PREFIXED = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_RADIX = {"x": 16, "o": 8, "b": 2}


def is_entered(value: Any) -> bool:
    """A measurement counts as entered unless it is None or the empty string."""
    return value is not None and value != ""


def _parse_text(text: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return 0.0
    if _DECIMAL.fullmatch(text):
        return float(text)
    prefixed = _PREFIXED.fullmatch(text)
    if prefixed:
        digits = prefixed.group(1)
        return float(int(digits[1:], _RADIX[digits[0].lower()]))
    return None


def parse_measurement(value: Any) -> Optional[float]:
    """
    Parse a pupil diameter in mm.

    ``""`` and ``None`` are absent *before* conversion so an empty field never
    turns into 0.  Any other string is converted as a number literal, so a
    whitespace-only entry is 0.  Booleans are not measurements.  Non-finite
    results are absent too.
    """
    if not is_entered(value) or isinstance(value, bool):
        return None
    if isinstance(value, str):
        number = _parse_text(value)
    elif isinstance(value, Real):
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
    else:
        return None
    if number is None or not math.isfinite(number):
        return None
    return number


def abs_diff(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None or b is None:
        return None
    return abs(a - b)


def meets_threshold(anisocoria: Optional[float]) -> bool:
    return anisocoria is not None and anisocoria >= ANISO_THRESHOLD_MM


def resolve_dominance(
    anis_light: Optional[float],
    anis_dark: Optional[float],
) -> Optional[Dominance]:
    """Which lighting condition produces the larger, clinically relevant anisocoria."""
    light_meets = meets_threshold(anis_light)
    dark_meets = meets_threshold(anis_dark)

    if not (light_meets or dark_meets):
        return None

    if anis_light is not None and anis_dark is not None:
        if anis_light > anis_dark:
            return Dominance.LIGHT
        if anis_dark > anis_light:
            return Dominance.DARK
        return Dominance.EQUAL

    # one-sided fallback, see module docstring
    return Dominance.LIGHT if light_meets else Dominance.DARK


# ── Gating ───────────────────────────────────────────────────────────────────

def is_pupil_dataset_complete(session: Any) -> bool:
    """
    True only when both eyes have both a light and a dark measurement entered.

    Presence is judged on the raw values, not on whether they parse.
    """
    p = Session.from_snapshot(session).pupils
    has_light_pair = is_entered(p.od_light) and is_entered(p.os_light)
    has_dark_pair = is_entered(p.od_dark) and is_entered(p.os_dark)
    return has_light_pair and has_dark_pair


# ── Deriver ──────────────────────────────────────────────────────────────────

def derive_features(session: Any) -> FeatureVector:
    """
    Build the FeatureVector for a session snapshot.

    Args:
        session: a ``Session`` or the store's plain mapping (camelCase keys).
                 Missing namespaces are treated as empty records.
    """
    s = Session.from_snapshot(session)
    t, p, e, vf = s.triage, s.pupils, s.eom, s.visual_fields

    od_light, os_light = parse_measurement(p.od_light), parse_measurement(p.os_light)
    od_dark, os_dark = parse_measurement(p.od_dark), parse_measurement(p.os_dark)

    anis_light = abs_diff(od_light, os_light)
    anis_dark = abs_diff(od_dark, os_dark)
    dominance = resolve_dominance(anis_light, anis_dark)
    complete = is_pupil_dataset_complete(s)

    logger.debug(
        f"derive_features: anisL={anis_light} anisD={anis_dark} "
        f"dominance={dominance.value if dominance else None} complete={complete}"
    )

    return FeatureVector(
        acute=t.acute_onset,
        painful=t.painful,
        neuro_sx=t.neuro_sx,
        trauma=t.trauma,

        od_light=od_light,
        os_light=os_light,
        od_dark=od_dark,
        os_dark=os_dark,
        anis_light=anis_light,
        anis_dark=anis_dark,
        dominance=dominance,
        pupil_dataset_complete=complete,
        dilation_lag=p.dilation_lag,
        anhidrosis=p.anhidrosis,
        light_near_dissociation=p.light_near_dissociation,
        vermiform=p.vermiform,
        anticholinergic=p.anticholinergic_exposure,
        sympathomimetic=p.sympathomimetic_exposure,

        diplopia=e.diplopia,
        ptosis=e.ptosis,
        fatigable=e.fatigable,
        pain_on_movement=e.pain_on_movement,
        comitant=e.comitant,
        abduction_deficit=e.abduction_deficit,
        adduction_deficit=e.adduction_deficit,
        vertical_limitation=e.vertical_limitation,

        vf_complaint=vf.complaint,
        vf_test_type=vf.test_type,
        vf_reliability=vf.reliability,
        vf_new_defect=vf.new_defect,
        vf_laterality=vf.laterality,
        vf_respects_vertical=vf.respects_vertical_meridian is TriState.PRESENT,
        vf_respects_horizontal=vf.respects_horizontal_meridian is TriState.PRESENT,
        vf_homonymous=vf.homonymous,
        vf_bitemporal=vf.bitemporal,
        vf_altitudinal=vf.altitudinal,
        vf_central_scotoma=vf.central_scotoma,
        vf_congruity=vf.congruity,
    )
