"""Conflict category normalization and per-category response tables.

A free-text conflict label is mapped onto the closed category set by an
ORDERED ``(pattern, category)`` table. The first matching pattern wins, so a
label such as "boundary dispute over grazing land" resolves to ``boundary``
even though it also matches the resource-use terms. Anything unmatched is
``general``.

Two static tables are keyed by category:
  - ``MODEL_FOCUS``: focus / legal sections / approach injected into the
    remote-model prompt
  - ``LOCAL_TEMPLATES``: root causes / resolution steps / legal provisions
    used by the local analysis renderer
"""

from __future__ import annotations

import re
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from fra_advisor.pipeline.utils import to_text

logger = logging.getLogger(__name__)

GENERAL = "general"

# ───────────────────────────────────────────────────────
# Ordered precedence, evaluated top to bottom, first match wins
# ───────────────────────────────────────────────────────

CATEGORY_PATTERNS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"bound|demarc|map|border"), "boundary"),
    (re.compile(r"community.*individual|individual.*community|cfr.*ifr|ifr.*cfr"), "individual_vs_community"),
    (re.compile(r"inherit|succession|heir|widow|daughter|son"), "inheritance"),
    (re.compile(r"resource|ntfp|collection|grazing|firewood|timber"), "resource_use"),
    (re.compile(r"dept|forest.*revenue|revenue.*forest|inter.?department"), "interdepartmental"),
)

# Closed category set, in precedence order with the fallback last
CONFLICT_CATEGORIES: tuple[str, ...] = tuple(c for _, c in CATEGORY_PATTERNS) + (GENERAL,)


def normalize_conflict_type(raw_type: Any) -> str:
    """Map a free-text conflict label to its canonical category."""
    t = to_text(raw_type).lower().strip()
    for pattern, category in CATEGORY_PATTERNS:
        if pattern.search(t):
            return category
    return GENERAL


@dataclass(frozen=True)
class ConflictCase:
    raw_type: str
    normalized_category: str
    description: str = ""
    parties_involved: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_request(cls, conflict_type: Any, description: Any = "",
                     parties_involved: Mapping[str, Any] | None = None) -> "ConflictCase":
        raw = to_text(conflict_type)
        parties = parties_involved if isinstance(parties_involved, Mapping) else {}
        return cls(
            raw_type=raw,
            normalized_category=normalize_conflict_type(raw),
            description=to_text(description),
            parties_involved=dict(parties),
        )


# ───────────────────────────────────────────────────────
# Remote-model prompt focus per category
# ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class ModelFocus:
    focus: str
    legal: tuple[str, ...]
    approach: str


MODEL_FOCUS: dict[str, ModelFocus] = {
    "boundary": ModelFocus(
        focus="spatial analysis, historical usage patterns, community rights",
        legal=("Section 3(1)(i)", "Section 4(2)(d)", "Rule 12(3)"),
        approach="participatory mapping and joint verification",
    ),
    "individual_vs_community": ModelFocus(
        focus="balancing individual and collective rights, traditional practices",
        legal=("Section 3(1)(a)", "Section 3(1)(c)", "Section 4(1)(e)"),
        approach="community consultation and rights harmonization",
    ),
    "inheritance": ModelFocus(
        focus="succession rights, family dynamics, gender equity",
        legal=("Section 4(4)", "Section 2(g)", "Rule 12(4)"),
        approach="family mediation and documentation verification",
    ),
    "interdepartmental": ModelFocus(
        focus="jurisdictional clarity, administrative coordination",
        legal=("Section 3(2)", "Section 5", "Rule 9"),
        approach="inter-departmental coordination committee",
    ),
    "resource_use": ModelFocus(
        focus="sustainable use, access rights, benefit sharing",
        legal=("Section 3(1)(c)", "Section 3(1)(i)", "Section 5"),
        approach="resource management planning and usage agreements",
    ),
}

GENERAL_MODEL_FOCUS = ModelFocus(
    focus="general rights and responsibilities under FRA",
    legal=("Section 3", "Section 4", "Rule 11"),
    approach="standard dispute resolution",
)


def model_focus_for(category: str) -> ModelFocus:
    return MODEL_FOCUS.get(category, GENERAL_MODEL_FOCUS)


# ───────────────────────────────────────────────────────
# Local analysis templates per category
# ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class ConflictTemplate:
    root_causes: tuple[str, ...]
    resolution: tuple[str, ...]
    legal: tuple[str, ...]


LOCAL_TEMPLATES: dict[str, ConflictTemplate] = {
    "boundary": ConflictTemplate(
        root_causes=(
            "Unclear historical boundaries between villages",
            "Overlapping traditional use areas",
            "Seasonal variation in resource use patterns",
            "Missing or outdated land records",
        ),
        resolution=(
            "Participatory mapping with both communities",
            "Documentation of seasonal use patterns",
            "Joint resource management planning",
            "Clear boundary demarcation with natural markers",
        ),
        legal=(
            "Section 3(1)(i) on habitat rights",
            "Section 4(2)(d) on boundary determination",
            "Rule 12(3) on resolution of overlapping claims",
        ),
    ),
    "individual_vs_community": ConflictTemplate(
        root_causes=(
            "Competing claims over forest resources",
            "Misunderstanding of individual vs community rights",
            "Historical inequities in resource access",
            "Changes in traditional use patterns",
        ),
        resolution=(
            "Rights awareness workshops",
            "Community-led resource mapping",
            "Development of shared use guidelines",
            "Documentation of traditional practices",
        ),
        legal=(
            "Section 3(1)(a) on individual rights",
            "Section 3(1)(c) on community rights",
            "Section 4(1)(e) on rights recognition process",
        ),
    ),
    "inheritance": ConflictTemplate(
        root_causes=(
            "Unclear succession documentation",
            "Multiple claimants to rights",
            "Gender-based discrimination",
            "Inter-generational disputes",
        ),
        resolution=(
            "Family tree verification",
            "Gender-sensitive mediation",
            "Documentation of succession rights",
            "Joint rights recognition where applicable",
        ),
        legal=(
            "Section 4(4) on inheritance",
            "Section 2(g) on family definition",
            "Rule 12(4) on succession procedures",
        ),
    ),
    "resource_use": ConflictTemplate(
        root_causes=(
            "Unsustainable resource extraction",
            "Inequitable benefit sharing",
            "Seasonal resource scarcity",
            "Market pressures on forest products",
        ),
        resolution=(
            "Sustainable harvesting guidelines",
            "Equitable benefit sharing mechanism",
            "Community monitoring system",
            "Value addition training",
        ),
        legal=(
            "Section 3(1)(c) on NTFP rights",
            "Section 3(1)(i) on sustainable use",
            "Section 5 on conservation duties",
        ),
    ),
}

GENERAL_TEMPLATE = ConflictTemplate(
    root_causes=(
        "Unclear rights and responsibilities",
        "Documentation gaps",
        "Communication barriers",
        "Process delays",
    ),
    resolution=(
        "Stakeholder consultation",
        "Documentation review",
        "Mediated discussion",
        "Action plan development",
    ),
    legal=(
        "Section 3 on forest rights",
        "Section 4 on recognition process",
        "Rule 11 on dispute resolution",
    ),
)


def local_template_for(category: str) -> ConflictTemplate:
    """Template for ``category``; interdepartmental and general share the generic block."""
    return LOCAL_TEMPLATES.get(category, GENERAL_TEMPLATE)


for _table in (MODEL_FOCUS, LOCAL_TEMPLATES):
    if not set(_table) <= set(CONFLICT_CATEGORIES):
        raise ValueError(f"Unknown conflict categories in table: {sorted(set(_table) - set(CONFLICT_CATEGORIES))}")
