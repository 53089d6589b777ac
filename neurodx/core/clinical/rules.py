"""
Differential Scoring Rules

A fixed, ordered table of independent rules.  Each rule is a list of
weighted criteria; a rule's score is the sum of the weights whose predicate
matched, and its rationale is the matched reasons in table order.

Design principles:
  - Rules are data (ScoringRule / Criterion), not a chain of conditionals,
    so tests can toggle one feature and assert the exact score delta.
  - Shared derived values (large/small pupil pattern, poor VF reliability)
    are computed once per call into a ScoringContext.
  - No per-rule floor: entries are kept only when score > 0, after all
    criteria (penalties included) are summed.
  - Table order is the tie-break order of the ranked list.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Tuple

from neurodx.config import ANISO_THRESHOLD_MM, MAX_DIFFERENTIAL, RELIABILITY_PENALTY
from neurodx.models.session import Congruity, Laterality, Reliability, TriState
from .base import DifferentialEntry, Dominance, FeatureVector


@dataclass(frozen=True)
class ScoringContext:
    """Per-call derived booleans shared by several rules."""
    large_pattern: bool        # anisocoria greater in light → large pupil abnormal
    small_pattern: bool        # anisocoria greater in dark  → small pupil abnormal
    poor_reliability: bool     # VF reliability marked poor

    @classmethod
    def from_features(cls, f: FeatureVector) -> "ScoringContext":
        return cls(
            large_pattern=f.dominance is Dominance.LIGHT,
            small_pattern=f.dominance is Dominance.DARK,
            poor_reliability=f.vf_reliability is Reliability.POOR,
        )


Predicate = Callable[[FeatureVector, ScoringContext], bool]


@dataclass(frozen=True)
class Criterion:
    weight: int
    reason: str
    when: Predicate


@dataclass(frozen=True)
class ScoringRule:
    name: str
    criteria: Tuple[Criterion, ...]

    def evaluate(self, f: FeatureVector, ctx: ScoringContext) -> Tuple[int, List[str]]:
        score = 0
        why: List[str] = []
        for c in self.criteria:
            if c.when(f, ctx):
                score += c.weight
                why.append(c.reason)
        return score, why


# ── Shared criteria ──────────────────────────────────────────────────────────

POOR_RELIABILITY = Criterion(
    RELIABILITY_PENALTY, "Poor reliability reduces weight",
    lambda f, ctx: ctx.poor_reliability,
)

MONOCULAR = Criterion(
    1, "Monocular pattern",
    lambda f, ctx: f.vf_laterality is Laterality.MONO,
)


def _physiologic_candidate(f: FeatureVector) -> bool:
    # only once anisocoria can be computed, and only when no pattern is called
    return f.has_anisocoria_measurement and f.dominance is None


def _no_red_flags(f: FeatureVector) -> bool:
    return not (f.acute or f.painful or f.neuro_sx or f.diplopia or f.ptosis)


# ── Rule table (order = tie-break order) ─────────────────────────────────────

RULES: Tuple[ScoringRule, ...] = (
    ScoringRule("Physiologic anisocoria", (
        Criterion(3, f"Anisocoria does not meet {ANISO_THRESHOLD_MM:.1f} mm threshold-based pattern criteria",
                  lambda f, ctx: _physiologic_candidate(f)),
        Criterion(1, "No acute/pain/neuro/EOM flags",
                  lambda f, ctx: _physiologic_candidate(f) and _no_red_flags(f)),
    )),

    ScoringRule("Horner syndrome", (
        Criterion(4, "Greater in dark → small pupil abnormal pattern", lambda f, ctx: ctx.small_pattern),
        Criterion(2, "Dilation lag", lambda f, ctx: f.dilation_lag),
        Criterion(2, "Ptosis", lambda f, ctx: f.ptosis),
        Criterion(1, "Anhidrosis", lambda f, ctx: f.anhidrosis),
        Criterion(1, "Acute/painful context", lambda f, ctx: f.acute or f.painful),
    )),

    ScoringRule("Compressive 3rd nerve palsy concern", (
        Criterion(4, "Greater in light → large pupil abnormal pattern", lambda f, ctx: ctx.large_pattern),
        Criterion(2, "Ptosis", lambda f, ctx: f.ptosis),
        Criterion(2, "Diplopia/EOM concern", lambda f, ctx: f.diplopia),
        Criterion(2, "Acute onset", lambda f, ctx: f.acute),
        Criterion(2, "Pain/headache", lambda f, ctx: f.painful),
        Criterion(2, "Other neuro symptoms", lambda f, ctx: f.neuro_sx),
    )),

    ScoringRule("Adie / tonic pupil", (
        Criterion(2, "Large pupil pattern", lambda f, ctx: ctx.large_pattern),
        Criterion(3, "Light–near dissociation", lambda f, ctx: f.light_near_dissociation),
        Criterion(2, "Segmental/vermiform movement", lambda f, ctx: f.vermiform),
    )),

    ScoringRule("Pharmacologic mydriasis", (
        Criterion(2, "Large pupil pattern", lambda f, ctx: ctx.large_pattern),
        Criterion(4, "Anticholinergic exposure", lambda f, ctx: f.anticholinergic),
        Criterion(2, "Sympathomimetic exposure", lambda f, ctx: f.sympathomimetic),
    )),

    ScoringRule("CN VI palsy pattern (EOM-based starter)", (
        Criterion(3, "Diplopia + abduction deficit",
                  lambda f, ctx: f.diplopia and f.abduction_deficit is TriState.PRESENT),
        Criterion(1, "Incomitant deviation", lambda f, ctx: f.comitant is TriState.ABSENT),
    )),

    ScoringRule("Chiasmal process / sellar compression pattern (VF-based)", (
        Criterion(6, "Bitemporal field pattern", lambda f, ctx: f.vf_bitemporal),
        Criterion(2, "Respects vertical meridian", lambda f, ctx: f.vf_respects_vertical),
        Criterion(1, "Binocular / both eyes", lambda f, ctx: f.vf_laterality is Laterality.BINOCULAR),
        POOR_RELIABILITY,
    )),

    ScoringRule("Retrochiasmal lesion pattern (VF-based)", (
        Criterion(6, "Homonymous pattern", lambda f, ctx: f.vf_homonymous),
        Criterion(2, "Respects vertical meridian", lambda f, ctx: f.vf_respects_vertical),
        Criterion(2, "High congruity", lambda f, ctx: f.vf_congruity is Congruity.HIGH),
        Criterion(1, "Lower congruity", lambda f, ctx: f.vf_congruity is Congruity.LOW),
        POOR_RELIABILITY,
    )),

    ScoringRule("Optic nerve / anterior pathway pattern (VF-based)", (
        Criterion(6, "Altitudinal + respects horizontal meridian",
                  lambda f, ctx: f.vf_altitudinal and f.vf_respects_horizontal),
        Criterion(4, "Altitudinal pattern",
                  lambda f, ctx: f.vf_altitudinal and not f.vf_respects_horizontal),
        MONOCULAR,
        POOR_RELIABILITY,
    )),

    ScoringRule("Central scotoma pattern (macula/optic nerve) (VF-based)", (
        Criterion(6, "Central scotoma", lambda f, ctx: f.vf_central_scotoma),
        MONOCULAR,
        Criterion(1, "Visual complaint present", lambda f, ctx: f.vf_complaint),
        Criterion(1, "New vs baseline", lambda f, ctx: f.vf_new_defect),
        POOR_RELIABILITY,
    )),
)


def rank(entries: List[DifferentialEntry], limit: int = MAX_DIFFERENTIAL) -> List[DifferentialEntry]:
    """Keep positive scores, sort descending (stable), truncate."""
    positive = [d for d in entries if d.score > 0]
    positive.sort(key=lambda d: d.score, reverse=True)
    return positive[:limit]


def score_differential(
    features: FeatureVector,
    rules: Tuple[ScoringRule, ...] = RULES,
) -> List[DifferentialEntry]:
    """
    Evaluate every rule and return the ranked, capped differential.

    Callers gate this on ``is_pupil_dataset_complete``; the rules themselves
    do not look at the gate.
    """
    ctx = ScoringContext.from_features(features)
    entries = []
    for rule in rules:
        score, why = rule.evaluate(features, ctx)
        entries.append(DifferentialEntry(rule.name, score, tuple(why)))
    return rank(entries)
