"""Context builder — normalizes raw request fields into a scoring context.

The context is built once per request and is immutable afterwards. Every
field has a best-effort default, so building never fails: absent numbers
become 0, absent text becomes "", and all text is lower-cased before the
need/demographic flags are derived from it.
"""

from __future__ import annotations

import re
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from fra_advisor.pipeline.utils import pick, to_number, to_text

logger = logging.getLogger(__name__)

# Tribal communities are also recognized through "<group> community/people"
_TRIBAL_GROUP_RE = re.compile(r"(tribal|adivasi|forest dependent|st).*(com|people)")


@dataclass(frozen=True)
class LandStats:
    """Land statistics; every field defaults to 0."""
    total_area: int | float = 0
    forest_cover: int | float = 0
    agricultural_land: int | float = 0
    population: int | float = 0

    def as_display(self) -> dict:
        """Key layout used in rendered narrative text."""
        return {
            "totalArea": self.total_area,
            "forestCover": self.forest_cover,
            "agri": self.agricultural_land,
            "population": self.population,
        }


@dataclass(frozen=True)
class Location:
    state: str = ""
    district: str = ""


@dataclass(frozen=True)
class ContextFlags:
    """Need/demographic flags derived from the descriptor and focus text."""
    is_tribal: bool = False
    is_small_farmer: bool = False
    is_women_group: bool = False
    wants_housing: bool = False
    wants_livelihood: bool = False
    wants_healthcare: bool = False
    wants_education: bool = False
    wants_irrigation: bool = False
    conservation_focus: bool = False


@dataclass(frozen=True)
class AdvisoryContext:
    target_descriptor: str = ""
    focus_area: str = ""
    priority: str = ""
    land: LandStats = field(default_factory=LandStats)
    location: Location = field(default_factory=Location)
    flags: ContextFlags = field(default_factory=ContextFlags)


def _contains_any(text: str, terms: tuple[str, ...]) -> bool:
    return any(t in text for t in terms)


def derive_flags(td: str, focus: str, land: LandStats) -> ContextFlags:
    """Derive the flag set from lower-cased descriptor/focus text and land stats."""
    return ContextFlags(
        is_tribal=bool(_TRIBAL_GROUP_RE.search(td)) or _contains_any(td, ("tribal", "adivasi", "forest")),
        is_small_farmer=_contains_any(td, ("small", "marginal", "farmer")),
        is_women_group=_contains_any(td, ("women", "shg", "self help", "nrlm")),
        wants_housing="housing" in td or "infrastructure" in focus,
        wants_livelihood="livelihood" in focus,
        wants_healthcare="health" in focus,
        wants_education="education" in focus,
        wants_irrigation="irrigation" in td or "irrigation" in focus,
        conservation_focus="conservation" in focus or land.forest_cover >= 40,
    )


def build_context(
    target_descriptor: Any = "",
    land_data: Mapping[str, Any] | None = None,
    guidelines: Mapping[str, Any] | None = None,
    state: Any = "",
    district: Any = "",
) -> AdvisoryContext:
    """Build an :class:`AdvisoryContext` from raw request fields.

    Args:
        target_descriptor: free-text demographic description
        land_data: ``{totalArea, forestCover, agriculturalLand, population}``
            (camelCase or snake_case keys)
        guidelines: ``{focusArea, priority}`` (camelCase or snake_case keys)
        state: state name, kept as given
        district: district name, kept as given

    Returns:
        The normalized, immutable context. Never raises.
    """
    land_data = land_data if isinstance(land_data, Mapping) else {}
    guidelines = guidelines if isinstance(guidelines, Mapping) else {}

    td = to_text(target_descriptor).lower()
    focus = to_text(pick(guidelines, "focusArea", "focus_area")).lower()
    priority = to_text(pick(guidelines, "priority")).lower()

    land = LandStats(
        total_area=to_number(pick(land_data, "totalArea", "total_area")),
        forest_cover=to_number(pick(land_data, "forestCover", "forest_cover")),
        agricultural_land=to_number(pick(land_data, "agriculturalLand", "agricultural_land")),
        population=to_number(pick(land_data, "population")),
    )

    return AdvisoryContext(
        target_descriptor=td,
        focus_area=focus,
        priority=priority,
        land=land,
        location=Location(state=to_text(state), district=to_text(district)),
        flags=derive_flags(td, focus, land),
    )
