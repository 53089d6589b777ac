"""
Urgency Classifier

Picks exactly one triage banner from the feature vector.  Independent of
the ranked differential and of whether it was computed.

The table is evaluated top to bottom and the first match wins.  Overlaps
are resolved by position, not by severity: the clinical alerts come first
and the "pupils incomplete" banner is only the fallback when none of them
fires, so a bitemporal field defect is still flagged before pupils are
measured.
"""
from __future__ import annotations

from typing import Callable, Tuple

from neurodx.models.session import Reliability
from .base import Dominance, FeatureVector, UrgencyLevel, UrgencyVerdict

_Branch = Tuple[Callable[[FeatureVector], bool], UrgencyVerdict]


def _large_pupil_alert(f: FeatureVector) -> bool:
    return f.dominance is Dominance.LIGHT and (f.ptosis or f.diplopia) and f.red_flags


def _small_pupil_alert(f: FeatureVector) -> bool:
    return (
        f.dominance is Dominance.DARK
        and (f.dilation_lag or f.ptosis or f.anhidrosis)
        and f.red_flags
    )


def _chiasmal_field(f: FeatureVector) -> bool:
    return f.vf_bitemporal and f.vf_reliability is not Reliability.POOR


URGENCY_TABLE: Tuple[_Branch, ...] = (
    (_large_pupil_alert, UrgencyVerdict(
        UrgencyLevel.DANGER,
        "High concern: large pupil pattern with acute/pain/neuro + ptosis/diplopia.",
    )),
    (_small_pupil_alert, UrgencyVerdict(
        UrgencyLevel.WARN,
        "Elevated concern: small pupil pattern with acute/pain/neuro + supportive sympathetic signs.",
    )),
    (_chiasmal_field, UrgencyVerdict(
        UrgencyLevel.INFO,
        "VF pattern flagged: bitemporal/vertical-meridian patterns raise chiasmal considerations "
        "(confirm reliability and pattern).",
    )),
    (lambda f: f.red_flags, UrgencyVerdict(
        UrgencyLevel.INFO,
        "Acute/pain/neuro symptoms selected. Use discriminators across modules to tighten localization.",
    )),
    (lambda f: not f.pupil_dataset_complete, UrgencyVerdict(
        UrgencyLevel.NONE,
        "Pupils: enter BOTH light and dark measurements to generate pupil-based differentials.",
    )),
)

DEFAULT_VERDICT = UrgencyVerdict(UrgencyLevel.NONE, "Enter findings to build a live differential.")


def classify_urgency(features: FeatureVector) -> UrgencyVerdict:
    for matches, verdict in URGENCY_TABLE:
        if matches(features):
            return verdict
    return DEFAULT_VERDICT
