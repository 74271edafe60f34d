"""Shared fixtures for the FRA advisory engine test suite."""

import pytest
from unittest.mock import AsyncMock, MagicMock


# ═══════════════════════════════════════════════════
# Request fixtures (dicts shaped like real API bodies)
# ═══════════════════════════════════════════════════

@pytest.fixture
def small_farmer_request():
    """Small farmers needing irrigation on agricultural land."""
    return {
        "target_demographic": "Small farmers needing irrigation",
        "land_data": {
            "totalArea": 120,
            "forestCover": 10,
            "agriculturalLand": 40,
            "population": 0,
        },
        "guidelines": {},
        "state": "Maharashtra",
        "district": "Gadchiroli",
    }


@pytest.fixture
def tribal_forest_request():
    """Tribal community with high forest cover."""
    return {
        "target_demographic": "Tribal community",
        "land_data": {"forestCover": 45, "population": 0},
        "guidelines": {"focusArea": "", "priority": "medium"},
        "state": "Odisha",
        "district": "Mayurbhanj",
    }


@pytest.fixture
def complete_record():
    """Claim record with every checked field present and plausible."""
    return {
        "name": "Sita Devi",
        "patta_id": "PT-2019-0042",
        "land_area": 2.5,
        "coordinates": {"lat": 21.15, "lng": 79.09},
        "village": "Mendha Lekha",
    }


# ═══════════════════════════════════════════════════
# Model output fixtures
# ═══════════════════════════════════════════════════

@pytest.fixture
def conflict_model_text():
    return (
        "Conflict Type: Resource dispute\n"
        "1. Detailed Conflict Analysis\n"
        "The dispute stems from overlapping grazing claims.\n"
        "5. Fairness Assessment\n"
        "- Rights protection score: 0.9\n"
        "- Procedural fairness score: 0.8\n"
        "- Outcome equity score: 0.6\n"
        "- Implementation feasibility score: 0.5\n"
        "6. Recommendations\n"
        "Community mediation is advised; resolution expected in 45-90 days."
    )


@pytest.fixture
def policy_model_text():
    return (
        "Summary of context.\n"
        "1. PMKSY - develop micro-irrigation\n"
        "2. PM-KISAN - improve farm incomes\n"
        "3. MGNREGA - strengthen water conservation works\n"
        "Also consider Kisan Credit Card."
    )


# ═══════════════════════════════════════════════════
# Gateway doubles
# ═══════════════════════════════════════════════════

def make_gateway(text=None, side_effect=None, enabled=True):
    """Gateway double: ``generate`` returns ``text`` or raises ``side_effect``."""
    gateway = MagicMock()
    gateway.enabled = enabled
    gateway.generate = AsyncMock(return_value=text, side_effect=side_effect)
    gateway.aclose = AsyncMock()
    return gateway


@pytest.fixture
def gateway_factory():
    return make_gateway
