"""Advisory pipeline: one explicit two-path decision per request.

Each operation follows the same linear flow:

    build context → attempt remote model (once) → extraction heuristics
                                    └─ on any failure → local heuristic engine

``AdvisoryPipeline._generate()`` is the single decision point. A gateway
failure is never surfaced: it switches that request to the local engine,
which reads only static tables and always succeeds. There are no retries.
Both paths return the same response shape plus a ``source`` marker
("model" or "local").
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from fra_advisor.config import GENERATION_PARAMS, TOP_N_SCHEMES
from fra_advisor.pipeline import extraction
from fra_advisor.pipeline.conflict_report import render_conflict_analysis
from fra_advisor.pipeline.conflict_types import ConflictCase, model_focus_for
from fra_advisor.pipeline.context import build_context
from fra_advisor.pipeline.fairness import fairness_from_text
from fra_advisor.pipeline.fraud import assess_fraud_risk, render_fraud_report
from fra_advisor.pipeline.llm_client import ModelGateway, ModelGatewayError
from fra_advisor.pipeline.prompts import (
    build_conflict_prompt,
    build_fraud_prompt,
    build_insights_prompt,
    build_policy_prompt,
)
from fra_advisor.pipeline.renderer import (
    build_blocks,
    implementation_score,
    rank_schemes,
    render_recommendation,
)
from fra_advisor.pipeline.scorer import score_schemes
from fra_advisor.pipeline.signals import tailor_by_keywords
from fra_advisor.pipeline.utils import utc_now_iso

logger = logging.getLogger(__name__)

SOURCE_MODEL = "model"
SOURCE_LOCAL = "local"


# ═══════════════════════════════════════════════════
# LOCAL ENGINE (no I/O)
# ═══════════════════════════════════════════════════

def local_policy_recommendations(
    target_demographic: Any = "",
    land_data: Mapping[str, Any] | None = None,
    guidelines: Mapping[str, Any] | None = None,
    state: Any = "",
    district: Any = "",
) -> dict:
    """Rank the scheme catalog for the given context and render the top schemes."""
    ctx = build_context(target_demographic, land_data, guidelines, state, district)
    top = rank_schemes(score_schemes(ctx), TOP_N_SCHEMES)
    blocks = build_blocks(top)
    return {
        "recommendations": render_recommendation(blocks, ctx),
        "funding_schemes": [b.name for b in blocks],
        "implementation_score": implementation_score(top, ctx.priority),
        "ranked": [
            {
                "name": b.name,
                "score": b.score,
                "rationale": b.rationale,
                "steps": list(b.steps),
                "outcomes": list(b.outcomes),
                "risks": list(b.risks),
                "tags": list(b.tags),
            }
            for b in blocks
        ],
        "generated_at": utc_now_iso(),
        "source": SOURCE_LOCAL,
    }


def local_conflict_analysis(
    conflict_type: Any = "",
    description: Any = "",
    parties_involved: Mapping[str, Any] | None = None,
) -> dict:
    case = ConflictCase.from_request(conflict_type, description, parties_involved)
    result = render_conflict_analysis(case)
    return {
        "analysis": result.analysis,
        "conflict_category": case.normalized_category,
        "recommended_approach": result.recommended_approach,
        "fairness_score": result.fairness.aggregate,
        "fairness_components": result.fairness.components(),
        "timeline": result.timeline,
        "generated_at": utc_now_iso(),
        "source": SOURCE_LOCAL,
    }


def local_fraud_analysis(
    record_data: Mapping[str, Any] | None,
    similar_records: Sequence[Any] | None = None,
    check_type: str = "comprehensive",
) -> dict:
    assessment = assess_fraud_risk(record_data, similar_records)
    return {
        "analysis": render_fraud_report(assessment),
        "risk_score": assessment.risk_score,
        "primary_concern": assessment.primary_concern,
        "anomalies": assessment.anomalies,
        "verification_steps": assessment.verification_steps,
        "check_type": check_type,
        "generated_at": utc_now_iso(),
        "source": SOURCE_LOCAL,
    }


def local_insights(state: Any = "", district: Any = "", timeframe: str = "30d") -> dict:
    summary = f"""FRA Implementation Insights for {state or 'the region'}:

**Key Trends:**
- Increasing digital adoption in record management
- Growing awareness of community forest rights
- Improved coordination between departments

**Areas of Concern:**
- Processing delays in complex cases
- Need for better conflict resolution mechanisms
- Limited technical capacity at grassroots level

**Recommendations:**
- Expand digital infrastructure
- Enhance training programs
- Strengthen monitoring systems"""
    return {
        "summary": summary,
        "key_trends": ["Digital adoption", "Increased awareness", "Better coordination"],
        "recommendations": ["Expand digital infrastructure", "Enhance training", "Strengthen monitoring"],
        "timeframe": timeframe,
        "generated_at": utc_now_iso(),
        "source": SOURCE_LOCAL,
    }


# ═══════════════════════════════════════════════════
# PIPELINE
# ═══════════════════════════════════════════════════

class AdvisoryPipeline:
    """Runs each advisory operation through the remote-or-local decision."""

    def __init__(self, gateway: ModelGateway | None = None):
        self.gateway = gateway

    async def _generate(self, operation: str, prompt: str) -> str | None:
        """Single decision point: model text, or None to take the local path."""
        if self.gateway is None or not self.gateway.enabled:
            logger.info(f"[{operation}] Remote model not configured, using local engine")
            return None
        max_tokens, temperature = GENERATION_PARAMS[operation]
        try:
            return await self.gateway.generate(
                prompt, max_tokens=max_tokens, temperature=temperature, task_label=operation,
            )
        except ModelGatewayError as e:
            logger.warning(f"[{operation}] Remote model failed, falling back to local engine: {e}")
            return None
        except Exception as e:
            logger.error(f"[{operation}] Unexpected gateway error, falling back to local engine: {e}")
            return None

    async def recommend_policies(
        self,
        target_demographic: Any,
        land_data: Mapping[str, Any] | None,
        guidelines: Mapping[str, Any] | None = None,
        state: Any = "",
        district: Any = "",
    ) -> dict:
        prompt = build_policy_prompt(target_demographic, land_data, guidelines, state, district)
        content = await self._generate("policy", prompt)
        if content is None:
            return local_policy_recommendations(target_demographic, land_data, guidelines, state, district)

        return {
            "recommendations": content,
            "funding_schemes": extraction.extract_funding_schemes(content)[:TOP_N_SCHEMES],
            "implementation_score": extraction.calculate_implementation_score(content),
            "ranked": [],
            "generated_at": utc_now_iso(),
            "source": SOURCE_MODEL,
        }

    async def analyze_conflict(
        self,
        conflict_type: Any,
        description: Any,
        parties_involved: Mapping[str, Any] | None = None,
        documents: Any = None,
        record_context: Any = None,
    ) -> dict:
        case = ConflictCase.from_request(conflict_type, description, parties_involved)
        prompt = build_conflict_prompt(
            case.normalized_category, case.description, case.parties_involved,
            record_context, documents, model_focus_for(case.normalized_category),
        )
        content = await self._generate("conflict", prompt)
        if content is None:
            return local_conflict_analysis(conflict_type, description, parties_involved)

        content = tailor_by_keywords(content, case.normalized_category, case.description)
        fairness = fairness_from_text(content)
        return {
            "analysis": content,
            "conflict_category": case.normalized_category,
            "recommended_approach": extraction.extract_recommended_approach(content),
            "fairness_score": fairness.aggregate,
            "fairness_components": fairness.components(),
            "timeline": extraction.extract_timeline(content),
            "generated_at": utc_now_iso(),
            "source": SOURCE_MODEL,
        }

    async def detect_fraud(
        self,
        record_data: Mapping[str, Any],
        similar_records: Sequence[Any] | None = None,
        check_type: str = "comprehensive",
    ) -> dict:
        prompt = build_fraud_prompt(record_data, similar_records, check_type)
        content = await self._generate("fraud", prompt)
        if content is None:
            return local_fraud_analysis(record_data, similar_records, check_type)

        return {
            "analysis": content,
            "risk_score": extraction.extract_risk_score(content),
            "primary_concern": extraction.extract_primary_concern(content),
            "anomalies": extraction.extract_anomalies(content),
            "verification_steps": extraction.extract_verification_steps(content),
            "check_type": check_type,
            "generated_at": utc_now_iso(),
            "source": SOURCE_MODEL,
        }

    async def generate_insights(
        self,
        recent_policies: Sequence[Any] | None = None,
        recent_conflicts: Sequence[Any] | None = None,
        fraud_alerts: Sequence[Any] | None = None,
        state: Any = "",
        district: Any = "",
        timeframe: str = "30d",
    ) -> dict:
        prompt = build_insights_prompt(
            recent_policies, recent_conflicts, fraud_alerts, state, district, timeframe,
        )
        content = await self._generate("insights", prompt)
        if content is None:
            return local_insights(state, district, timeframe)

        return {
            "summary": content,
            "key_trends": extraction.extract_key_trends(content),
            "recommendations": extraction.extract_insight_recommendations(content),
            "timeframe": timeframe,
            "generated_at": utc_now_iso(),
            "source": SOURCE_MODEL,
        }
