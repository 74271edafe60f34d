"""Response extraction heuristics for free-form model output.

Recovers the structured response fields (scheme names, scores, approach,
timeline, anomalies) from model text by pattern matching. Every extractor
has an explicit default and none of them raise; a model answer that matches
nothing still yields a complete response.
"""

import re
import logging

from fra_advisor.pipeline.scheme_catalog import KNOWN_SCHEME_NAMES
from fra_advisor.pipeline.utils import clamp

logger = logging.getLogger(__name__)

DEFAULT_TIMELINE = "30-60 days"
DEFAULT_RISK_SCORE = 0.3
DEFAULT_APPROACH = "Standard Process"
DEFAULT_PRIMARY_CONCERN = "General verification needed"

_IMPLEMENTATION_BASE = 0.5
_IMPLEMENTATION_STEP = 0.1
_POSITIVE_WORDS = ("improve", "enhance", "strengthen", "develop")

_TIMELINE_RE = re.compile(r"(\d+[-–]\d+|\d+)\s*(days?|weeks?|months?)", re.IGNORECASE)
# An echoed "(0-1, ...)" range after "risk score" is skipped
_RISK_RE = re.compile(r"risk(?:\s*score)?(?:\s*\([^)]*\))?.*?(\d+\.?\d*)", re.IGNORECASE)

# Ordered: first (keywords, label) with any keyword present wins
_APPROACH_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("mediation", "mediated"), "Mediated Settlement"),
    (("legal", "court"), "Legal Resolution"),
    (("community", "consultation"), "Community Consultation"),
)

# keyword → (primary concern, anomaly), in precedence order
_FRAUD_KEYWORDS: tuple[tuple[str, str, str], ...] = (
    ("duplicate", "Duplicate records", "Duplicate records found"),
    ("inconsistent", "Data inconsistency", "Data inconsistencies"),
    ("suspicious", "Suspicious patterns", "Suspicious patterns"),
)

MODEL_VERIFICATION_STEPS = (
    "Physical document verification",
    "Field verification",
    "Cross-check with revenue records",
    "Interview with applicant",
)

MODEL_KEY_TRENDS = ("Digital adoption", "Improved documentation", "Better coordination")
MODEL_INSIGHT_RECOMMENDATIONS = (
    "Enhance digital infrastructure",
    "Strengthen training programs",
    "Improve monitoring systems",
)


# ═══════════════════════════════════════════════════
# POLICY RECOMMENDATIONS
# ═══════════════════════════════════════════════════

def extract_funding_schemes(text: str) -> list[str]:
    """Known scheme names mentioned in ``text``, in catalog-list order."""
    lc = (text or "").lower()
    return [name for name in KNOWN_SCHEME_NAMES if name.lower() in lc]


def calculate_implementation_score(text: str) -> float:
    """0.5 plus 0.1 per positive action word present, capped at 1.0."""
    lc = (text or "").lower()
    score = _IMPLEMENTATION_BASE + sum(_IMPLEMENTATION_STEP for w in _POSITIVE_WORDS if w in lc)
    return round(min(score, 1.0), 2)


# ═══════════════════════════════════════════════════
# CONFLICT ANALYSIS
# ═══════════════════════════════════════════════════

def extract_recommended_approach(text: str) -> str:
    text = text or ""
    for keywords, label in _APPROACH_RULES:
        if any(k in text for k in keywords):
            return label
    return DEFAULT_APPROACH


def extract_timeline(text: str) -> str:
    """First day/week/month span in ``text`` (e.g. "45-90 days")."""
    match = _TIMELINE_RE.search(text or "")
    return match.group(0) if match else DEFAULT_TIMELINE


# ═══════════════════════════════════════════════════
# FRAUD DETECTION
# ═══════════════════════════════════════════════════

def extract_risk_score(text: str) -> float:
    """First number following "risk" on the same line, capped to [0, 1]."""
    match = _RISK_RE.search(text or "")
    if not match:
        return DEFAULT_RISK_SCORE
    try:
        return clamp(float(match.group(1)), 0.0, 1.0)
    except ValueError:
        return DEFAULT_RISK_SCORE


def extract_primary_concern(text: str) -> str:
    text = text or ""
    for keyword, concern, _anomaly in _FRAUD_KEYWORDS:
        if keyword in text:
            return concern
    return DEFAULT_PRIMARY_CONCERN


def extract_anomalies(text: str) -> list[str]:
    text = text or ""
    return [anomaly for keyword, _concern, anomaly in _FRAUD_KEYWORDS if keyword in text]


def extract_verification_steps(text: str) -> list[str]:
    return list(MODEL_VERIFICATION_STEPS)


# ═══════════════════════════════════════════════════
# INSIGHTS
# ═══════════════════════════════════════════════════

def extract_key_trends(text: str) -> list[str]:
    return list(MODEL_KEY_TRENDS)


def extract_insight_recommendations(text: str) -> list[str]:
    return list(MODEL_INSIGHT_RECOMMENDATIONS)
