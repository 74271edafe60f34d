"""Keyword signal extraction from free-text dispute narratives.

Signals are literal pattern presence on the lower-cased description; there is
no false-positive suppression. They tailor both the locally rendered analysis
and the remote model's text (see :func:`tailor_by_keywords`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from fra_advisor.pipeline.utils import to_text

_MIGRATION_RE = re.compile(r"migration|seasonal work|distress")
_ILLEGAL_EXTRACTION_RE = re.compile(r"illegal (logging|felling)|encroach")
_URGENT_RE = re.compile(r"violence|threat|evict|eviction|demolition|court stay")
_LEGAL_CASE_RE = re.compile(r"court|case|litigation|writ|appeal")
_SURVEY_DATA_RE = re.compile(r"survey|old map|no gps|chain survey")
_MAPPING_RE = re.compile(r"gps|gis|map")

# Ordered: first matching state wins
_STATE_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"maharashtra"), "Maharashtra FRA Rules 2014"),
    (re.compile(r"odisha|orissa"), "Odisha FRA Rules"),
)

_SURVEY_ROOT_CAUSE = "Inaccurate or outdated cadastral/survey data"
_MAPPING_RESOLUTION = "Use GPS/GIS-based participatory mapping with third-party facilitation"

_PREFACE_LABELS_RE = re.compile(r"Urgency:|Note:|Enforcement:|Livelihoods:", re.IGNORECASE)
_CONFLICT_TYPE_LINE_RE = re.compile(r"Conflict Type:\s*.*", re.IGNORECASE)


@dataclass(frozen=True)
class KeywordSignals:
    urgent: bool = False
    legal_case_likely: bool = False
    migration_mentioned: bool = False
    illegal_extraction_mentioned: bool = False
    state_specific_rule_hint: Optional[str] = None
    additional_root_cause: Optional[str] = None
    additional_resolution_step: Optional[str] = None


def extract_keyword_signals(description: Any) -> KeywordSignals:
    """Scan a dispute description for the fixed term groups."""
    d = to_text(description).lower()

    state_rule = None
    for pattern, rule in _STATE_RULES:
        if pattern.search(d):
            state_rule = rule
            break

    return KeywordSignals(
        urgent=bool(_URGENT_RE.search(d)),
        legal_case_likely=bool(_LEGAL_CASE_RE.search(d)),
        migration_mentioned=bool(_MIGRATION_RE.search(d)),
        illegal_extraction_mentioned=bool(_ILLEGAL_EXTRACTION_RE.search(d)),
        state_specific_rule_hint=state_rule,
        additional_root_cause=_SURVEY_ROOT_CAUSE if _SURVEY_DATA_RE.search(d) else None,
        additional_resolution_step=_MAPPING_RESOLUTION if _MAPPING_RE.search(d) else None,
    )


def build_preface(signals: KeywordSignals) -> list[str]:
    """Short advisory sentences highlighting the detected signals."""
    preface = []
    if signals.urgent:
        preface.append("Urgency: Immediate risk mitigation recommended.")
    if signals.legal_case_likely:
        preface.append("Note: Ongoing/likely litigation detected; align mediation with legal timelines.")
    if signals.illegal_extraction_mentioned:
        preface.append("Enforcement: Address illegal extraction/encroachment with joint inspections.")
    if signals.migration_mentioned:
        preface.append("Livelihoods: Consider seasonal livelihood support to reduce conflict drivers.")
    return preface


def tailor_by_keywords(text: str, normalized_category: str, description: Any) -> str:
    """Prepend signal-driven guidance and normalize the conflict type header.

    The preface is only added when the text does not already carry one of the
    preface labels. Only the first ``Conflict Type: ...`` line is rewritten.
    """
    tailored = text or ""
    preface = build_preface(extract_keyword_signals(description))
    if preface and not _PREFACE_LABELS_RE.search(tailored):
        tailored = f"{' '.join(preface)}\n\n{tailored}"
    return _CONFLICT_TYPE_LINE_RE.sub(
        lambda _m: f"Conflict Type: {normalized_category}", tailored, count=1
    )
