"""
Clinical Decision Layer

Transforms a session snapshot into features, a ranked differential and an
urgency banner.

Usage:
    from neurodx.core.clinical import DifferentialEngine

    result = DifferentialEngine().compute(session)
"""
from .base import (
    Dominance,
    UrgencyLevel,
    FeatureVector,
    DifferentialEntry,
    UrgencyVerdict,
    EngineResult,
)
from .features import derive_features, is_pupil_dataset_complete
from .rules import RULES, ScoringRule, Criterion, score_differential
from .urgency import classify_urgency
from .engine import DifferentialEngine, compute

__all__ = [
    "Dominance",
    "UrgencyLevel",
    "FeatureVector",
    "DifferentialEntry",
    "UrgencyVerdict",
    "EngineResult",
    "derive_features",
    "is_pupil_dataset_complete",
    "RULES",
    "ScoringRule",
    "Criterion",
    "score_differential",
    "classify_urgency",
    "DifferentialEngine",
    "compute",
]
