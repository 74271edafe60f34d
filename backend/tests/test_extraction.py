"""Tests for response extraction heuristics over free-form model output."""

import pytest

from fra_advisor.pipeline import extraction
from fra_advisor.pipeline.extraction import (
    DEFAULT_APPROACH,
    DEFAULT_PRIMARY_CONCERN,
    DEFAULT_RISK_SCORE,
    DEFAULT_TIMELINE,
)


# ═══════════════════════════════════════════════════
# Policy text
# ═══════════════════════════════════════════════════

class TestPolicyExtraction:

    def test_schemes_in_catalog_list_order(self, policy_model_text):
        # mentioned as PMKSY, PM-KISAN, MGNREGA, Kisan Credit Card
        assert extraction.extract_funding_schemes(policy_model_text) == [
            "PM-KISAN", "MGNREGA", "PMKSY", "Kisan Credit Card",
        ]

    def test_scheme_matching_case_insensitive(self):
        assert extraction.extract_funding_schemes("enrol in mgnrega and campa") == ["MGNREGA", "CAMPA"]

    def test_no_schemes(self):
        assert extraction.extract_funding_schemes("") == []

    def test_implementation_score(self, policy_model_text):
        # develop, improve, strengthen present
        assert extraction.calculate_implementation_score(policy_model_text) == 0.8

    def test_implementation_score_bounds(self):
        assert extraction.calculate_implementation_score("") == 0.5
        assert extraction.calculate_implementation_score("improve enhance strengthen develop") == 0.9


# ═══════════════════════════════════════════════════
# Conflict text
# ═══════════════════════════════════════════════════

class TestConflictExtraction:

    @pytest.mark.parametrize("text, expected", [
        ("A mediated settlement via legal route", "Mediated Settlement"),
        ("Approach the court", "Legal Resolution"),
        ("Hold a community meeting", "Community Consultation"),
        ("Nothing relevant", DEFAULT_APPROACH),
    ])
    def test_recommended_approach(self, text, expected):
        assert extraction.extract_recommended_approach(text) == expected

    def test_approach_keywords_case_sensitive(self):
        assert extraction.extract_recommended_approach("Mediation") == DEFAULT_APPROACH

    def test_timeline(self):
        assert extraction.extract_timeline("Resolution within 45-90 days of filing") == "45-90 days"
        assert extraction.extract_timeline("expect 6 months") == "6 months"
        assert extraction.extract_timeline("3–4 weeks") == "3–4 weeks"

    def test_timeline_default(self):
        assert extraction.extract_timeline("soon") == DEFAULT_TIMELINE == "30-60 days"


# ═══════════════════════════════════════════════════
# Fraud text
# ═══════════════════════════════════════════════════

class TestFraudExtraction:

    def test_risk_score(self):
        assert extraction.extract_risk_score("Risk score: 0.65 based on duplicates") == 0.65

    def test_risk_score_default(self):
        assert extraction.extract_risk_score("no numbers at all") == DEFAULT_RISK_SCORE == 0.3

    def test_risk_score_after_echoed_range(self):
        text = "Risk score (0-1, where 1 is highest risk): 0.65"
        assert extraction.extract_risk_score(text) == 0.65

    def test_risk_score_capped(self):
        assert extraction.extract_risk_score("risk level 8 out of 10") == 1.0

    def test_risk_number_must_be_on_same_line(self):
        assert extraction.extract_risk_score("Risk:\n0.9") == DEFAULT_RISK_SCORE

    def test_primary_concern_precedence(self):
        assert extraction.extract_primary_concern("suspicious and duplicate") == "Duplicate records"
        assert extraction.extract_primary_concern("inconsistent dates") == "Data inconsistency"
        assert extraction.extract_primary_concern("clean") == DEFAULT_PRIMARY_CONCERN

    def test_anomalies(self):
        assert extraction.extract_anomalies("duplicate ids, suspicious edits") == [
            "Duplicate records found", "Suspicious patterns",
        ]
        assert extraction.extract_anomalies("Duplicate") == []

    def test_verification_steps_fixed(self):
        steps = extraction.extract_verification_steps("anything")
        assert len(steps) == 4
        assert steps[-1] == "Interview with applicant"


# ═══════════════════════════════════════════════════
# Insights text
# ═══════════════════════════════════════════════════

class TestInsightsExtraction:

    def test_fixed_lists(self):
        assert extraction.extract_key_trends("x") == [
            "Digital adoption", "Improved documentation", "Better coordination",
        ]
        assert len(extraction.extract_insight_recommendations("x")) == 3
