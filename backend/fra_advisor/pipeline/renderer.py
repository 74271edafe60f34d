"""Ranker & renderer for scheme recommendations.

Selects the top schemes by score (ties keep catalog order) and assembles the
narrative: one context line, numbered scheme blocks, then the phased plan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from fra_advisor.config import TOP_N_SCHEMES
from fra_advisor.pipeline.context import AdvisoryContext
from fra_advisor.pipeline.scheme_catalog import (
    PHASED_PLAN,
    outcomes_for,
    rationale_for,
    risks_for,
    steps_for,
)
from fra_advisor.pipeline.scorer import ScoredScheme
from fra_advisor.pipeline.utils import clamp, compact_json

logger = logging.getLogger(__name__)

HIGH_PRIORITY_BONUS = 0.05


@dataclass(frozen=True)
class RecommendationBlock:
    name: str
    score: float
    rationale: str
    steps: tuple[str, ...]
    outcomes: tuple[str, ...]
    risks: tuple[str, ...]
    tags: tuple[str, ...] = ()

    def render(self, position: int) -> str:
        return (
            f"{position}. {self.name}\n"
            f"Why it fits: {self.rationale}\n"
            "What to implement:\n- " + "\n- ".join(self.steps) + "\n"
            "Expected outcomes & indicators:\n- " + "\n- ".join(self.outcomes) + "\n"
            "Risks & mitigations:\n- " + "\n- ".join(self.risks)
        )


def rank_schemes(scored: Iterable[ScoredScheme], top_n: int = TOP_N_SCHEMES) -> list[ScoredScheme]:
    """Top ``top_n`` schemes by descending score; ties broken by catalog position."""
    ordered = sorted(scored, key=lambda s: (-s.score, s.catalog_index))
    top: list[ScoredScheme] = []
    seen: set[str] = set()
    for s in ordered:
        if len(top) >= top_n:
            break
        if s.name in seen:
            continue
        seen.add(s.name)
        top.append(s)
    return top


def build_blocks(top: Iterable[ScoredScheme]) -> list[RecommendationBlock]:
    """Attach the static narrative tables to each selected scheme."""
    return [
        RecommendationBlock(
            name=s.name,
            score=s.score,
            rationale=rationale_for(s.name),
            steps=tuple(steps_for(s.name)),
            outcomes=tuple(outcomes_for(s.name)),
            risks=tuple(risks_for(s.name)),
            tags=tuple(sorted(s.tags)),
        )
        for s in top
    ]


def render_context_line(ctx: AdvisoryContext) -> str:
    return (
        f"Context: Target = {ctx.target_descriptor or 'N/A'}, "
        f"State = {ctx.location.state or 'N/A'}, "
        f"District = {ctx.location.district or 'N/A'}, "
        f"Land = {compact_json(ctx.land.as_display())}. "
        f"Priority: {ctx.priority or 'N/A'}."
    )


def render_recommendation(blocks: list[RecommendationBlock], ctx: AdvisoryContext) -> str:
    """Full recommendation text: context line, numbered blocks, phased plan."""
    body = "\n\n".join(block.render(i + 1) for i, block in enumerate(blocks))
    return f"{render_context_line(ctx)}\n\n{body}\n\n{PHASED_PLAN}"


def implementation_score(top: list[ScoredScheme], priority: str = "") -> float:
    """Mean normalized score of the selection, +0.05 for high priority, in [0, 1]."""
    if not top:
        return 0.0
    base = sum(s.score for s in top) / (len(top) * 10)
    bonus = HIGH_PRIORITY_BONUS if (priority or "").lower() == "high" else 0.0
    return round(clamp(base + bonus, 0.0, 1.0), 2)
