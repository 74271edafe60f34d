"""Scheme catalog — single source of truth for all candidate interventions.

Each scheme defines:
  - name: official short name, unique within the catalog
  - tags: category labels
  - score_fn: pure ``AdvisoryContext -> number`` rule (weighted flags plus
    numeric-threshold bonuses; the scorer clamps the result to [0, 10])
  - rationale / steps / outcomes / risks: static narrative tables used by
    the renderer

Catalog ORDER matters: the ranker breaks score ties by catalog position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from fra_advisor.pipeline.context import AdvisoryContext

ScoreFn = Callable[[AdvisoryContext], float]

# Prepended to every scheme's implementation steps
COMMON_STEPS: tuple[str, ...] = (
    "Identify eligible households with Gram Sabha validation",
    "Create beneficiary lists and digitize records in MIS",
    "Conduct awareness and grievance redressal camps",
)

GENERIC_RATIONALE = "High alignment with stated needs and constraints."
GENERIC_OUTCOMES: tuple[str, ...] = ("Improved outcomes aligned to scheme objectives",)
GENERIC_RISKS: tuple[str, ...] = ("Operational delays → Tight governance",)

PHASED_PLAN = (
    "Phased plan: 0-3 months (mobilization, targeting, approvals); "
    "3-6 months (rollout & disbursement); 6-12 months (convergence & monitoring); "
    "12+ months (scaling)."
)


@dataclass(frozen=True)
class SchemeCandidate:
    name: str
    tags: frozenset[str]
    score_fn: ScoreFn
    rationale: str
    steps: tuple[str, ...]
    outcomes: tuple[str, ...]
    risks: tuple[str, ...]


def _pts(condition: bool, points: int) -> int:
    return points if condition else 0


SCHEME_CATALOG: tuple[SchemeCandidate, ...] = (
    SchemeCandidate(
        name="MGNREGA",
        tags=frozenset({"livelihood", "rural", "works"}),
        score_fn=lambda c: _pts(c.flags.wants_livelihood, 4) + _pts(c.land.population > 0, 2) + 2,
        rationale=(
            "Provides guaranteed wage employment; ideal for immediate income support, "
            "land development, water conservation works in rural FRA geographies."
        ),
        steps=(
            "Prepare shelf of works: water harvesting, land leveling, plantation",
            "Issue job cards; schedule works pre-monsoon",
            "Converge with PMKSY/CAMPA for eco-works",
        ),
        outcomes=(
            "150–200 person-days per HH",
            "Water storage + soil moisture improved",
            "Reduction in distress migration",
        ),
        risks=(
            "Delayed payments → Use PFMS monitoring",
            "Leakages → Social audits",
        ),
    ),
    SchemeCandidate(
        name="PM-KISAN",
        tags=frozenset({"farmer", "income-support"}),
        score_fn=lambda c: _pts(c.flags.is_small_farmer, 5) + _pts(c.land.agricultural_land >= 30, 2),
        rationale=(
            "Direct income support to small/marginal farmers; aligns with agricultural "
            "dependence and low, stable cashflows."
        ),
        steps=(
            "Verify land records; seed bank account & Aadhaar",
            "Onboard beneficiaries on PM-KISAN portal",
            "Track DBT status and resolve rejections",
        ),
        outcomes=(
            "Stable seasonal cashflows (INR 6k/year)",
            "Higher input uptake; yield gains",
            "Lower informal debt",
        ),
        risks=(
            "Record mismatches → Land record drives",
            "Exclusion errors → Helpdesks",
        ),
    ),
    SchemeCandidate(
        name="PMKSY",
        tags=frozenset({"irrigation", "water"}),
        score_fn=lambda c: _pts(c.flags.wants_irrigation, 5) + _pts(c.land.agricultural_land >= 30, 2),
        rationale=(
            "Improves irrigation efficiency and water access; crucial when agricultural "
            "share is high or irrigation is a constraint."
        ),
        steps=(
            "Baseline irrigation gaps; micro-irrigation DPRs",
            "Mobilize drip/sprinkler subsidies; demo plots",
            "Train farmers on water-use efficiency",
        ),
        outcomes=(
            "Irrigated area expanded",
            "Water-use efficiency > 30%",
            "Yield increase 10–20%",
        ),
        risks=(
            "Asset maintenance lapses → Farmer groups MoUs",
            "Low adoption → Demo plots",
        ),
    ),
    SchemeCandidate(
        name="PMAY-G",
        tags=frozenset({"housing"}),
        score_fn=lambda c: _pts(c.flags.wants_housing, 5) + _pts(c.flags.is_tribal, 2),
        rationale=(
            "Supports pucca housing in rural areas; relevant for vulnerable FRA "
            "beneficiaries lacking adequate housing."
        ),
        steps=(
            "Geo-tag eligible homes; prioritize vulnerable",
            "Facilitate sanctions and convergences (toilets, LPG)",
            "Enable community monitoring of construction",
        ),
        outcomes=(
            "Pucca housing coverage increased",
            "Improved health & safety",
            "Higher asset security",
        ),
        risks=(
            "Construction delays → Milestone-based tracking",
            "Quality issues → Community oversight",
        ),
    ),
    SchemeCandidate(
        name="NRLM",
        tags=frozenset({"women", "shg", "livelihood"}),
        score_fn=lambda c: _pts(c.flags.is_women_group, 5) + _pts(c.flags.wants_livelihood, 2),
        rationale=(
            "Empowers women SHGs with credit and livelihoods; strong fit where "
            "women/SHGs are a focus and livelihood diversification is needed."
        ),
        steps=(
            "Form/strengthen SHGs; initiate savings/credit",
            "Skilling for local value chains",
            "Credit linkage via bank/SHG federations",
        ),
        outcomes=(
            "Increased SHG incomes",
            "Higher credit access",
            "Women’s participation in governance",
        ),
        risks=(
            "Credit risk → Phased limits, mentoring",
            "Market risk → Diversification",
        ),
    ),
    SchemeCandidate(
        name="Van Dhan Vikas Yojana",
        tags=frozenset({"tribal", "ntfp"}),
        score_fn=lambda c: _pts(c.flags.is_tribal, 5) + _pts(c.land.forest_cover >= 30, 3),
        rationale=(
            "Targets tribal NTFP value-add & market linkages; high forest cover and "
            "tribal dependence make this a strong match."
        ),
        steps=(
            "Map NTFP species & seasonality; identify clusters",
            "Set up Van Dhan Vikas Kendras; processing units",
            "Market linkage with TRIFED/private buyers",
        ),
        outcomes=(
            "NTFP value-add margins 20–40%",
            "SHG/VDVK enterprise formation",
            "Better market price realization",
        ),
        risks=(
            "Market volatility → MSP/Buy-back MoUs",
            "Overharvest → Community bylaws",
        ),
    ),
    SchemeCandidate(
        name="CAMPA",
        tags=frozenset({"afforestation", "conservation"}),
        score_fn=lambda c: _pts(c.flags.conservation_focus, 5) + _pts(c.land.forest_cover >= 40, 3),
        rationale=(
            "Funds afforestation & ecosystem restoration; suitable where conservation "
            "and high forest cover are priorities."
        ),
        steps=(
            "Select degraded sites; native species plan",
            "Community-led plantation and protection",
            "Create eco-restoration jobs with MGNREGA support",
        ),
        outcomes=(
            "Tree cover added",
            "Biodiversity restored",
            "Ecosystem jobs created",
        ),
        risks=(
            "Survival rates → Species mix & aftercare",
            "Conflict → Participatory site selection",
        ),
    ),
    SchemeCandidate(
        name="PM-JAY",
        tags=frozenset({"health"}),
        score_fn=lambda c: _pts(c.flags.wants_healthcare, 5),
        rationale=(
            "Provides secondary/tertiary care coverage; relevant where healthcare "
            "access is a priority."
        ),
        steps=(
            "E-KYC and card issuance drives",
            "Empanel district hospitals; referral protocols",
            "Health literacy & fraud mitigation campaigns",
        ),
        outcomes=(
            "Reduced OOP health expenses",
            "Higher hospitalization coverage",
            "Better treatment continuity",
        ),
        risks=(
            "Fraud/overuse → Audits & empanelment norms",
            "Low awareness → IEC campaigns",
        ),
    ),
    SchemeCandidate(
        name="Samagra Shiksha",
        tags=frozenset({"education"}),
        score_fn=lambda c: _pts(c.flags.wants_education, 5),
        rationale="Systemic school education support; appropriate for education-focus contexts.",
        steps=(
            "Identify infrastructure and learning gaps",
            "Deploy bridge courses & teacher support",
            "Community-led school management strengthening",
        ),
        outcomes=(
            "Improved attendance & learning",
            "Reduced dropouts",
            "Infra gaps closed",
        ),
        risks=(
            "Teacher shortage → Contract hiring",
            "Low community buy-in → SMC training",
        ),
    ),
    SchemeCandidate(
        name="Kisan Credit Card",
        tags=frozenset({"credit"}),
        score_fn=lambda c: _pts(c.flags.is_small_farmer, 3),
        rationale=(
            "Flexible, low-cost credit for farm inputs; complements income support in "
            "smallholder contexts."
        ),
        steps=(
            "Household KCC camps with banks",
            "Digitize land records & KYC",
            "Bundle crop insurance and PMFBY awareness",
        ),
        outcomes=(
            "Lower borrowing costs",
            "Timely input purchase",
            "Debt-cycle reduction",
        ),
        risks=(
            "Over-indebtedness → Credit counseling",
            "NPA risk → Insurance linkages",
        ),
    ),
    SchemeCandidate(
        name="PMGSY",
        tags=frozenset({"roads", "infra"}),
        score_fn=lambda c: _pts("infrastructure" in c.focus_area, 3),
        rationale=(
            "All-weather road connectivity; boosts market access and service delivery "
            "in remote FRA villages."
        ),
        steps=(
            "Prioritize habitations; prepare DPRs",
            "Secure forest clearances where needed",
            "Community monitoring of works quality",
        ),
        outcomes=(
            "All-weather connectivity",
            "Market access time reduced",
            "Service utilization increased",
        ),
        risks=(
            "Clearance delays → Early approvals",
            "Cost overruns → Third-party QC",
        ),
    ),
    SchemeCandidate(
        name="NTFP",
        tags=frozenset({"forest", "livelihood"}),
        score_fn=lambda c: _pts(c.flags.is_tribal, 3) + _pts(c.land.forest_cover >= 30, 2),
        rationale=(
            "Boosts incomes from forest produce; pragmatic where forest dependency and "
            "access to NTFP exist."
        ),
        steps=(
            "Train on sustainable harvest & grading",
            "Create storage/processing micro-units",
            "Link to e-markets and MSP schemes",
        ),
        outcomes=(
            "Higher seasonal incomes",
            "Sustainable resource use",
            "Local enterprise growth",
        ),
        risks=(
            "Price crashes → Aggregation & storage",
            "Quality gaps → Training & standards",
        ),
    ),
)

SCHEME_BY_NAME: dict[str, SchemeCandidate] = {s.name: s for s in SCHEME_CATALOG}

if len(SCHEME_BY_NAME) != len(SCHEME_CATALOG):
    raise ValueError("Scheme catalog contains duplicate names")

# Names recognized in free-form model output, in reporting order
KNOWN_SCHEME_NAMES: tuple[str, ...] = (
    "PM-KISAN", "MGNREGA", "PMAY-G", "NRLM", "PMKSY", "PM-JAY", "CAMPA",
    "Van Dhan Vikas Yojana", "NTFP", "Kisan Credit Card", "PMGSY",
    "Samagra Shiksha", "Mission LiFE", "PMFME", "FPO Formation",
)


def rationale_for(name: str) -> str:
    scheme = SCHEME_BY_NAME.get(name)
    return scheme.rationale if scheme else GENERIC_RATIONALE


def steps_for(name: str) -> list[str]:
    scheme = SCHEME_BY_NAME.get(name)
    return [*COMMON_STEPS, *(scheme.steps if scheme else ())]


def outcomes_for(name: str) -> list[str]:
    scheme = SCHEME_BY_NAME.get(name)
    return list(scheme.outcomes if scheme else GENERIC_OUTCOMES)


def risks_for(name: str) -> list[str]:
    scheme = SCHEME_BY_NAME.get(name)
    return list(scheme.risks if scheme else GENERIC_RISKS)
