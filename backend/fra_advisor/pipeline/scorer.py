"""Scheme scorer: evaluates every catalog scheme against a context.

Pure and side-effect free apart from logging. Each scheme's rule function is
evaluated in catalog order and its result clamped to [0, 10]. A rule that
raises or returns a non-number scores 0 rather than failing the request.
"""

import math
import logging
from dataclasses import dataclass
from typing import Iterable

from fra_advisor.config import TRACE_ENABLED
from fra_advisor.pipeline.context import AdvisoryContext
from fra_advisor.pipeline.scheme_catalog import SCHEME_CATALOG, SchemeCandidate
from fra_advisor.pipeline.utils import clamp

logger = logging.getLogger(__name__)

MIN_SCHEME_SCORE = 0.0
MAX_SCHEME_SCORE = 10.0


def _trace(msg: str):
    """Emit a trace-level debug message when ADVISOR_TRACE is enabled."""
    if TRACE_ENABLED:
        logger.debug(f"[TRACE] {msg}")


@dataclass(frozen=True)
class ScoredScheme:
    name: str
    score: float
    tags: frozenset[str]
    catalog_index: int


def score_scheme(scheme: SchemeCandidate, ctx: AdvisoryContext) -> float:
    """Evaluate one scheme's rule and clamp it to [0, 10]."""
    try:
        raw = scheme.score_fn(ctx)
    except Exception as e:
        logger.error(f"Scheme scorer [{scheme.name}] failed: {e}")
        return MIN_SCHEME_SCORE
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or math.isnan(raw):
        logger.error(f"Scheme scorer [{scheme.name}] returned non-numeric score {raw!r}")
        return MIN_SCHEME_SCORE
    return clamp(float(raw), MIN_SCHEME_SCORE, MAX_SCHEME_SCORE)


def score_schemes(
    ctx: AdvisoryContext, catalog: Iterable[SchemeCandidate] = SCHEME_CATALOG
) -> list[ScoredScheme]:
    """Score every scheme in ``catalog``, preserving catalog order."""
    scored = []
    for index, scheme in enumerate(catalog):
        score = score_scheme(scheme, ctx)
        _trace(f"SCORE {scheme.name} = {score}")
        scored.append(ScoredScheme(
            name=scheme.name,
            score=score,
            tags=scheme.tags,
            catalog_index=index,
        ))
    return scored
