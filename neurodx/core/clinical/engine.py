"""
Differential Engine

Central entry point.  Takes one session snapshot and returns the feature
vector, the ranked differential and the urgency banner in a single
EngineResult.

Usage:
    from neurodx.core.clinical import DifferentialEngine

    engine = DifferentialEngine()
    result = engine.compute(session)          # mapping or Session
    for d in result.differential:
        print(d.score, d.name, list(d.why))
    print(result.urgency.level, result.urgency.text)

Adding a rule:
    1. Append a ScoringRule to RULES in rules.py (position = tie-break order).
    2. Add a parametrized score-delta test in tests/unit/test_rules.py.
"""
from __future__ import annotations

from typing import Any, Dict, List

from neurodx.config import ANISO_THRESHOLD_MM, MAX_DIFFERENTIAL
from neurodx.utils import get_logger
from .base import DifferentialEntry, EngineResult, UrgencyLevel
from .features import derive_features
from .rules import RULES, score_differential
from .urgency import classify_urgency

logger = get_logger(__name__)


def compute(session: Any) -> EngineResult:
    """
    Derive features, score the differential (when pupils are complete) and
    classify urgency.  Pure: the same snapshot always gives the same result.
    """
    features = derive_features(session)

    # Pupil-driven rules need both light and dark pairs.  Until then no
    # partial differential is shown, whatever EOM/VF data exists.
    # EOM/VF-only differentials would need their own gate here.
    if features.pupil_dataset_complete:
        differential = score_differential(features)
    else:
        differential = []

    urgency = classify_urgency(features)

    if differential:
        logger.debug(
            f"compute: {len(differential)} candidate(s) — "
            + ", ".join(f"{d.name}={d.score}" for d in differential)
        )
    else:
        logger.debug(f"compute: no differential (pupils complete={features.pupil_dataset_complete})")
    if urgency.level in (UrgencyLevel.WARN, UrgencyLevel.DANGER):
        logger.info(f"compute: urgency {urgency.level.value} — {urgency.text}")

    return EngineResult(features=features, differential=differential, urgency=urgency)


class DifferentialEngine:
    """
    Transforms session snapshots into EngineResults.

    Stateless — safe to call from multiple threads.  Call again on every
    session change; each result fully replaces the previous one.
    """

    threshold_mm = ANISO_THRESHOLD_MM

    def compute(self, session: Any) -> EngineResult:
        return compute(session)

    @staticmethod
    def registered_rules() -> List[str]:
        """Rule names in table (tie-break) order."""
        return [r.name for r in RULES]

    @staticmethod
    def summarise(result: EngineResult, top_n: int = 5) -> Dict:
        """
        Build a compact summary dict suitable for JSON output.

        Example output:
        {
            "threshold_mm": 0.5,
            "anisL": 2.0, "anisD": 0.2, "dominance": "light",
            "pupil_dataset_complete": true,
            "total_candidates": 3,
            "top_diagnosis": "Compressive 3rd nerve palsy concern",
            "candidates": [{...}, ...],
            "urgency": {"level": "danger", "text": "..."}
        }
        """
        f = result.features
        shown: List[DifferentialEntry] = result.differential[:max(0, min(top_n, MAX_DIFFERENTIAL))]
        return {
            "threshold_mm": ANISO_THRESHOLD_MM,
            "anisL": f.anis_light,
            "anisD": f.anis_dark,
            "dominance": f.dominance.value if f.dominance else None,
            "pupil_dataset_complete": f.pupil_dataset_complete,
            "total_candidates": len(result.differential),
            "top_diagnosis": result.top.name if result.top else None,
            "candidates": [d.to_dict() for d in shown],
            "urgency": result.urgency.to_dict(),
        }
