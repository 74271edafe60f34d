"""Advisory endpoints: policy recommendations, conflict analysis, fraud checks, insights.

Input defects are rejected here (400) before the pipeline runs; everything
past the boundary always produces a structured response.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fra_advisor.config import FRAUD_ALERT_THRESHOLD
from fra_advisor.pipeline.orchestrator import AdvisoryPipeline

router = APIRouter()
logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    """Accepts both camelCase (frontend) and snake_case field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PolicyRequest(_CamelModel):
    target_demographic: Optional[str] = None
    land_data: Optional[dict[str, Any]] = None
    guidelines: dict[str, Any] = Field(default_factory=dict)
    state: Optional[str] = None
    district: Optional[str] = None


class ConflictRequest(_CamelModel):
    record_id: Optional[str] = None
    conflict_type: Optional[str] = None
    description: Optional[str] = None
    parties_involved: dict[str, Any] = Field(default_factory=dict)
    documents: Optional[Any] = None
    record_context: Optional[dict[str, Any]] = None


class FraudRequest(_CamelModel):
    record_data: Optional[dict[str, Any]] = None
    similar_records: list[Any] = Field(default_factory=list)
    check_type: str = "comprehensive"


def get_pipeline(request: Request) -> AdvisoryPipeline:
    """The pipeline constructed in the application lifespan."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        # App started without lifespan (e.g. mounted elsewhere): local engine only
        pipeline = AdvisoryPipeline(gateway=None)
    return pipeline


@router.post("/policy-recommendations")
async def policy_recommendations(
    body: PolicyRequest, pipeline: AdvisoryPipeline = Depends(get_pipeline)
):
    """Top-3 scheme recommendations for a target population and land profile."""
    if not body.target_demographic or body.land_data is None:
        raise HTTPException(status_code=400, detail="Target demographic and land data are required")

    result = await pipeline.recommend_policies(
        body.target_demographic, body.land_data, body.guidelines, body.state, body.district,
    )
    return {"success": True, "recommendations": result}


@router.post("/conflict-analysis")
async def conflict_analysis(
    body: ConflictRequest, pipeline: AdvisoryPipeline = Depends(get_pipeline)
):
    """Conflict-resolution analysis with a weighted fairness score."""
    if not body.conflict_type or not body.description:
        raise HTTPException(status_code=400, detail="Conflict type and description are required")

    result = await pipeline.analyze_conflict(
        body.conflict_type, body.description, body.parties_involved,
        documents=body.documents, record_context=body.record_context,
    )
    return {"success": True, "analysis": result}


@router.post("/fraud-detection")
async def fraud_detection(
    body: FraudRequest, pipeline: AdvisoryPipeline = Depends(get_pipeline)
):
    """Fraud-risk assessment for a claim record against similar records."""
    if body.record_data is None:
        raise HTTPException(status_code=400, detail="Record data is required")

    result = await pipeline.detect_fraud(body.record_data, body.similar_records, body.check_type)
    alert = result["risk_score"] >= FRAUD_ALERT_THRESHOLD
    if alert:
        logger.info(f"Fraud alert raised: risk={result['risk_score']}, concern={result['primary_concern']}")
    return {"success": True, "fraud_analysis": result, "alert_created": alert}


@router.get("/insights")
async def insights(
    state: Optional[str] = None,
    district: Optional[str] = None,
    timeframe: str = "30d",
    pipeline: AdvisoryPipeline = Depends(get_pipeline),
):
    """Implementation insights summary for a state/district."""
    result = await pipeline.generate_insights(
        recent_policies=[], recent_conflicts=[], fraud_alerts=[],
        state=state or "", district=district or "", timeframe=timeframe,
    )
    return {"success": True, "insights": result}
