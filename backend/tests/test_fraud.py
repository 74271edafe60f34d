"""Tests for the local fraud-risk heuristics."""

import pytest

from fra_advisor.pipeline.fraud import (
    LOCAL_VERIFICATION_STEPS,
    assess_fraud_risk,
    check_record_fields,
    render_fraud_report,
)


# ═══════════════════════════════════════════════════
# Field checks
# ═══════════════════════════════════════════════════

class TestRecordFields:

    def test_complete_record_clean(self, complete_record):
        assert check_record_fields(complete_record) == []

    def test_empty_record_flags_everything(self):
        fields = [a.field_name for a in check_record_fields({})]
        assert fields == ["name", "patta_id", "land_area", "coordinates"]

    @pytest.mark.parametrize("area", [0, -1, "abc", None])
    def test_implausible_land_area(self, complete_record, area):
        record = {**complete_record, "land_area": area}
        assert [a.field_name for a in check_record_fields(record)] == ["land_area"]

    @pytest.mark.parametrize("coords", [
        None,
        {},
        {"lat": 0, "lng": 0},
        {"lat": 95, "lng": 10},
        {"latitude": 21.1},
    ])
    def test_invalid_coordinates(self, complete_record, coords):
        record = {**complete_record, "coordinates": coords}
        assert [a.field_name for a in check_record_fields(record)] == ["coordinates"]

    def test_camel_case_record_clean(self):
        record = {
            "pattaId": "PT-1",
            "name": "Sita",
            "landArea": "2.5",
            "coordinates": {"lat": "21.1", "lng": "79.0"},
        }
        assert check_record_fields(record) == []
        assert assess_fraud_risk(record, []).risk_score == 0.1

    def test_camel_case_implausible_area(self):
        record = {"pattaId": "PT-1", "name": "Sita", "landArea": "0",
                  "coordinates": {"lat": 21.1, "lng": 79.0}}
        assert [a.field_name for a in check_record_fields(record)] == ["land_area"]

    def test_alternate_coordinate_keys(self, complete_record):
        record = {**complete_record, "coordinates": {"latitude": "21.1", "longitude": "79.0"}}
        assert check_record_fields(record) == []


# ═══════════════════════════════════════════════════
# Risk assessment
# ═══════════════════════════════════════════════════

class TestAssessFraudRisk:

    def test_clean_record_low_risk(self, complete_record):
        a = assess_fraud_risk(complete_record, [])
        assert a.risk_score == 0.1
        assert a.primary_concern == "No major concerns"
        assert a.anomalies == []
        assert a.risk_level == "LOW RISK"
        assert a.verification_steps == list(LOCAL_VERIFICATION_STEPS)

    def test_similar_records_raise_risk(self, complete_record):
        a = assess_fraud_risk(complete_record, [{"patta_id": "PT-2019-0042"}, {"name": "Sita Devi"}])
        assert a.risk_score == 0.35
        assert a.primary_concern == "Similar records found"
        assert a.anomalies == ["Multiple similar records"]
        assert a.risk_level == "MEDIUM RISK"

    def test_field_anomalies_counted_up_to_three(self):
        a = assess_fraud_risk({}, None)
        assert a.risk_score == 0.4
        assert a.primary_concern == "Missing claimant name"
        assert len(a.anomalies) == 4

    def test_combined(self):
        a = assess_fraud_risk({}, [{"x": 1}])
        assert a.risk_score == 0.65
        assert a.primary_concern == "Similar records found"
        assert a.anomalies[0] == "Multiple similar records"

    def test_single_field_anomaly_stays_low(self, complete_record):
        a = assess_fraud_risk({**complete_record, "name": ""}, [])
        assert a.risk_score == 0.2
        assert a.primary_concern == "No major concerns"
        assert a.anomalies == ["Missing claimant name"]

    def test_non_mapping_record(self):
        a = assess_fraud_risk(None, "not a list")
        assert a.similar_count == 0
        assert 0.0 <= a.risk_score <= 1.0

    def test_deterministic(self, complete_record):
        assert assess_fraud_risk(complete_record, [1]) == assess_fraud_risk(complete_record, [1])


# ═══════════════════════════════════════════════════
# Report
# ═══════════════════════════════════════════════════

class TestFraudReport:

    def test_clean_report(self, complete_record):
        text = render_fraud_report(assess_fraud_risk(complete_record, []))
        assert "**Data Consistency Check:** PASSED" in text
        assert "**Duplicate Check:** PASSED" in text
        assert "- 0 similar records found" in text
        assert text.endswith("**Overall Assessment:** LOW RISK")

    def test_flagged_report(self):
        text = render_fraud_report(assess_fraud_risk({}, [{"x": 1}]))
        assert "**Data Consistency Check:** FLAGGED\n- Claimant name is empty" in text
        assert "**Duplicate Check:** FLAGGED" in text
        assert text.endswith("**Overall Assessment:** MEDIUM RISK")
