"""
Input models for the differential engine.
"""
from .session import (
    Session,
    Triage,
    Pupils,
    ExtraocularMotility,
    VisualFields,
    TriState,
    Reliability,
    Laterality,
    Congruity,
)

__all__ = [
    "Session",
    "Triage",
    "Pupils",
    "ExtraocularMotility",
    "VisualFields",
    "TriState",
    "Reliability",
    "Laterality",
    "Congruity",
]
