"""Fairness aggregation: four sub-dimensions combined with fixed weights.

Rights protection and outcome equity carry the most weight. Sub-scores come
either from the remote model's free text (regex capture, default 0.7 each) or
from the fixed per-category table used by the local engine. Every sub-score
and the aggregate are clamped to [0, 1].
"""

from __future__ import annotations

import math
import re
import logging
from dataclasses import dataclass

from fra_advisor.pipeline.utils import clamp

logger = logging.getLogger(__name__)

FAIRNESS_WEIGHTS: dict[str, float] = {
    "rights_protection": 0.35,
    "outcome_equity": 0.30,
    "procedural_fairness": 0.20,
    "implementation_feasibility": 0.15,
}

if math.fsum(FAIRNESS_WEIGHTS.values()) != 1.0:
    raise ValueError(f"Fairness weights must sum to 1.0, got {math.fsum(FAIRNESS_WEIGHTS.values())}")

DEFAULT_SUB_SCORE = 0.7

# "<dimension> score [(0-1)] ... <number>" in model text; an echoed range is skipped
_SCORE_TAIL = r" score(?:\s*\([^)]*\))?.*?(\d+\.?\d*)"
_DIMENSION_PATTERNS: dict[str, re.Pattern] = {
    "rights_protection": re.compile(r"rights protection" + _SCORE_TAIL, re.IGNORECASE),
    "procedural_fairness": re.compile(r"procedural fairness" + _SCORE_TAIL, re.IGNORECASE),
    "outcome_equity": re.compile(r"outcome equity" + _SCORE_TAIL, re.IGNORECASE),
    "implementation_feasibility": re.compile(r"implementation feasibility" + _SCORE_TAIL, re.IGNORECASE),
}


@dataclass(frozen=True)
class FairnessAssessment:
    rights_protection: float
    procedural_fairness: float
    outcome_equity: float
    implementation_feasibility: float

    def __post_init__(self):
        for name in FAIRNESS_WEIGHTS:
            object.__setattr__(self, name, clamp(float(getattr(self, name)), 0.0, 1.0))

    @property
    def aggregate(self) -> float:
        total = math.fsum(getattr(self, name) * weight for name, weight in FAIRNESS_WEIGHTS.items())
        return clamp(total, 0.0, 1.0)

    def components(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in FAIRNESS_WEIGHTS}


# Local sub-score table; categories without a row use the generic one
CATEGORY_FAIRNESS: dict[str, FairnessAssessment] = {
    "boundary": FairnessAssessment(
        rights_protection=0.85, procedural_fairness=0.90,
        outcome_equity=0.80, implementation_feasibility=0.75,
    ),
    "individual_vs_community": FairnessAssessment(
        rights_protection=0.80, procedural_fairness=0.85,
        outcome_equity=0.75, implementation_feasibility=0.80,
    ),
    "inheritance": FairnessAssessment(
        rights_protection=0.90, procedural_fairness=0.85,
        outcome_equity=0.85, implementation_feasibility=0.80,
    ),
    "resource_use": FairnessAssessment(
        rights_protection=0.85, procedural_fairness=0.80,
        outcome_equity=0.85, implementation_feasibility=0.75,
    ),
}

GENERAL_FAIRNESS = FairnessAssessment(
    rights_protection=0.75, procedural_fairness=0.75,
    outcome_equity=0.75, implementation_feasibility=0.75,
)


def fairness_for_category(category: str) -> FairnessAssessment:
    """Fixed local assessment for a normalized conflict category."""
    return CATEGORY_FAIRNESS.get(category, GENERAL_FAIRNESS)


def _extract_sub_score(text: str, pattern: re.Pattern) -> float:
    match = pattern.search(text)
    if not match:
        return DEFAULT_SUB_SCORE
    try:
        value = float(match.group(1))
    except ValueError:
        return DEFAULT_SUB_SCORE
    # A captured 0 is treated as "no score given"
    return clamp(value, 0.0, 1.0) if value else DEFAULT_SUB_SCORE


def fairness_from_text(text: str) -> FairnessAssessment:
    """Recover the four sub-scores from free-form model output."""
    text = text or ""
    return FairnessAssessment(
        **{name: _extract_sub_score(text, pattern) for name, pattern in _DIMENSION_PATTERNS.items()}
    )
