"""
NeuroDx — neuro-ophthalmic differential engine.

Turns pupil, ocular-motility and visual-field findings into a feature
vector, a ranked and explained differential, and one urgency banner.
"""
from neurodx.config import ANISO_THRESHOLD_MM, MAX_DIFFERENTIAL, RELIABILITY_PENALTY
from neurodx.models import Session, TriState
from neurodx.core.clinical import (
    DifferentialEngine,
    EngineResult,
    FeatureVector,
    DifferentialEntry,
    UrgencyVerdict,
    UrgencyLevel,
    Dominance,
    compute,
    derive_features,
    is_pupil_dataset_complete,
    score_differential,
    classify_urgency,
)

__version__ = "0.1.0"

__all__ = [
    "ANISO_THRESHOLD_MM",
    "MAX_DIFFERENTIAL",
    "RELIABILITY_PENALTY",
    "Session",
    "TriState",
    "DifferentialEngine",
    "EngineResult",
    "FeatureVector",
    "DifferentialEntry",
    "UrgencyVerdict",
    "UrgencyLevel",
    "Dominance",
    "compute",
    "derive_features",
    "is_pupil_dataset_complete",
    "score_differential",
    "classify_urgency",
]
