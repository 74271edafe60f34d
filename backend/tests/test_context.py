"""Tests for the context builder and flag derivation."""

import dataclasses

import pytest

from fra_advisor.pipeline.context import AdvisoryContext, LandStats, build_context, derive_flags


# ═══════════════════════════════════════════════════
# build_context
# ═══════════════════════════════════════════════════

class TestBuildContext:

    def test_empty_inputs_give_defaults(self):
        ctx = build_context()
        assert ctx.target_descriptor == ""
        assert ctx.focus_area == ""
        assert ctx.priority == ""
        assert ctx.land == LandStats(0, 0, 0, 0)
        assert ctx.location.state == ""
        assert not any(dataclasses.asdict(ctx.flags).values())

    def test_non_mapping_inputs_tolerated(self):
        ctx = build_context(None, "not a dict", ["x"], None, None)
        assert isinstance(ctx, AdvisoryContext)
        assert ctx.land.total_area == 0

    def test_text_lower_cased(self):
        ctx = build_context("Tribal Women SHG", {}, {"focusArea": "Livelihood", "priority": "HIGH"})
        assert ctx.target_descriptor == "tribal women shg"
        assert ctx.focus_area == "livelihood"
        assert ctx.priority == "high"

    def test_camel_and_snake_keys(self):
        camel = build_context("x", {"totalArea": "100", "forestCover": 35, "agriculturalLand": 20, "population": 800})
        snake = build_context("x", {"total_area": "100", "forest_cover": 35, "agricultural_land": 20, "population": 800})
        assert camel.land == snake.land == LandStats(100, 35, 20, 800)

    def test_non_numeric_land_becomes_zero(self):
        ctx = build_context("x", {"forestCover": "lots", "population": None})
        assert ctx.land.forest_cover == 0
        assert ctx.land.population == 0

    def test_location_kept_as_given(self):
        ctx = build_context("x", {}, {}, "Madhya Pradesh", "Mandla")
        assert ctx.location.state == "Madhya Pradesh"
        assert ctx.location.district == "Mandla"

    def test_context_is_immutable(self):
        ctx = build_context("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.priority = "high"


# ═══════════════════════════════════════════════════
# derive_flags
# ═══════════════════════════════════════════════════

class TestDeriveFlags:

    def _flags(self, td="", focus="", forest=0):
        return derive_flags(td, focus, LandStats(forest_cover=forest))

    def test_tribal_terms(self):
        assert self._flags("adivasi households").is_tribal
        assert self._flags("forest dwellers").is_tribal
        assert self._flags("st community").is_tribal
        assert not self._flags("urban poor").is_tribal

    def test_small_farmer_terms(self):
        assert self._flags("marginal cultivators").is_small_farmer
        assert self._flags("farmer collective").is_small_farmer

    def test_women_group_terms(self):
        assert self._flags("self help groups").is_women_group
        assert self._flags("nrlm members").is_women_group

    def test_housing_from_descriptor_or_infrastructure_focus(self):
        assert self._flags("families needing housing").wants_housing
        assert self._flags("x", "infrastructure").wants_housing

    def test_focus_driven_needs(self):
        flags = self._flags("x", "livelihood health education")
        assert flags.wants_livelihood
        assert flags.wants_healthcare
        assert flags.wants_education

    def test_irrigation_from_either_text(self):
        assert self._flags("irrigation users").wants_irrigation
        assert self._flags("x", "irrigation").wants_irrigation

    def test_conservation_from_focus_or_forest_cover(self):
        assert self._flags("x", "conservation").conservation_focus
        assert self._flags("x", "", forest=40).conservation_focus
        assert not self._flags("x", "", forest=39).conservation_focus
