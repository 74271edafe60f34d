"""Local fraud-risk heuristics for FRA claim records.

Deterministic checks that run when the remote model is unavailable:
  - Duplicate check: any similar record (same patta id or claimant name)
  - Field checks: claimant name, patta id, land area, coordinates

Risk is additive over a small base and clamped to [0, 1], so identical
inputs always produce the identical assessment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from fra_advisor.pipeline.utils import clamp, pick, to_number, to_text

logger = logging.getLogger(__name__)

BASE_RISK = 0.1
SIMILAR_RECORDS_RISK = 0.25
FIELD_ANOMALY_RISK = 0.1
MAX_COUNTED_FIELD_ANOMALIES = 3
MEDIUM_RISK_THRESHOLD = 0.3

LOCAL_VERIFICATION_STEPS = (
    "Physical document check",
    "Field verification",
    "Revenue record cross-check",
)


@dataclass(frozen=True)
class FieldAnomaly:
    field_name: str
    concern: str
    detail: str


@dataclass
class FraudAssessment:
    risk_score: float
    primary_concern: str
    anomalies: list[str] = field(default_factory=list)
    verification_steps: list[str] = field(default_factory=list)
    similar_count: int = 0
    field_anomalies: list[FieldAnomaly] = field(default_factory=list)

    @property
    def risk_level(self) -> str:
        return "MEDIUM RISK" if self.risk_score > MEDIUM_RISK_THRESHOLD else "LOW RISK"


def _valid_coordinates(coords: Any) -> bool:
    if not isinstance(coords, Mapping):
        return False
    lat = pick(coords, "lat", "latitude")
    lng = pick(coords, "lng", "lon", "longitude")
    if lat is None or lng is None:
        return False
    lat_n, lng_n = to_number(lat), to_number(lng)
    if lat_n == 0 and lng_n == 0:
        return False
    return -90 <= lat_n <= 90 and -180 <= lng_n <= 180


def check_record_fields(record: Mapping[str, Any]) -> list[FieldAnomaly]:
    """Field-level consistency checks on a single claim record (camelCase or snake_case keys)."""
    anomalies = []
    if not to_text(record.get("name")).strip():
        anomalies.append(FieldAnomaly("name", "Missing claimant name", "Claimant name is empty"))
    if not to_text(pick(record, "pattaId", "patta_id")).strip():
        anomalies.append(FieldAnomaly("patta_id", "Missing patta id", "Patta id is empty"))
    raw_area = pick(record, "landArea", "land_area")
    land_area = to_number(raw_area)
    if land_area <= 0:
        anomalies.append(FieldAnomaly(
            "land_area", "Implausible land area",
            f"Land area is not a positive number ({raw_area!r})",
        ))
    if not _valid_coordinates(record.get("coordinates")):
        anomalies.append(FieldAnomaly(
            "coordinates", "Missing or invalid coordinates",
            "Coordinates are absent or outside valid lat/lng ranges",
        ))
    return anomalies


def assess_fraud_risk(record: Mapping[str, Any] | None,
                      similar_records: Sequence[Any] | None) -> FraudAssessment:
    """Deterministic fraud-risk assessment for one record."""
    record = record if isinstance(record, Mapping) else {}
    similar_count = len(similar_records) if isinstance(similar_records, Sequence) and not isinstance(similar_records, str) else 0
    field_anomalies = check_record_fields(record)

    risk = BASE_RISK
    if similar_count:
        risk += SIMILAR_RECORDS_RISK
    risk += FIELD_ANOMALY_RISK * min(len(field_anomalies), MAX_COUNTED_FIELD_ANOMALIES)
    risk = round(clamp(risk, 0.0, 1.0), 2)

    anomalies = []
    if similar_count:
        anomalies.append("Multiple similar records")
    anomalies.extend(a.concern for a in field_anomalies)

    if risk > MEDIUM_RISK_THRESHOLD and similar_count:
        primary = "Similar records found"
    elif risk > MEDIUM_RISK_THRESHOLD and field_anomalies:
        primary = field_anomalies[0].concern
    else:
        primary = "No major concerns"

    logger.info(
        f"Local fraud check: risk={risk}, similar={similar_count}, "
        f"field_anomalies={len(field_anomalies)}"
    )
    return FraudAssessment(
        risk_score=risk,
        primary_concern=primary,
        anomalies=anomalies,
        verification_steps=list(LOCAL_VERIFICATION_STEPS),
        similar_count=similar_count,
        field_anomalies=field_anomalies,
    )


def render_fraud_report(assessment: FraudAssessment) -> str:
    """Narrative report for a local fraud assessment."""
    if assessment.field_anomalies:
        consistency = "FLAGGED\n" + "\n".join(f"- {a.detail}" for a in assessment.field_anomalies)
    else:
        consistency = (
            "PASSED\n"
            "- Personal details are consistent\n"
            "- Geographic coordinates fall within expected range\n"
            "- Land area is reasonable for the region"
        )
    duplicate = "FLAGGED" if assessment.similar_count else "PASSED"
    return f"""Fraud Risk Analysis:

**Data Consistency Check:** {consistency}

**Duplicate Check:** {duplicate}
- {assessment.similar_count} similar records found
- Requires manual verification for final determination

**Document Verification:** PENDING
- Recommend physical document verification
- Cross-check with revenue records

**Overall Assessment:** {assessment.risk_level}"""
