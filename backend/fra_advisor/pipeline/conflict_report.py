"""Local conflict analysis renderer.

Builds the structured conflict-resolution analysis from the category
template, the category's fairness table and the description's keyword
signals. Output is byte-identical for identical inputs.
"""

from __future__ import annotations

from dataclasses import dataclass

from fra_advisor.pipeline.conflict_types import ConflictCase, local_template_for
from fra_advisor.pipeline.fairness import FairnessAssessment, fairness_for_category
from fra_advisor.pipeline.signals import extract_keyword_signals, tailor_by_keywords

URGENT_TIMELINE = "45-75 days"
STANDARD_TIMELINE = "60-90 days"


@dataclass(frozen=True)
class LocalConflictAnalysis:
    analysis: str
    recommended_approach: str
    fairness: FairnessAssessment
    timeline: str


def _bullets(items) -> list[str]:
    return [f"- {item}" for item in items]


def render_conflict_analysis(case: ConflictCase) -> LocalConflictAnalysis:
    category = case.normalized_category
    template = local_template_for(category)
    fairness = fairness_for_category(category)
    signals = extract_keyword_signals(case.description)
    parties = list(case.parties_involved.keys())

    lines = [f"Conflict Analysis for {category}:", "", "**1. Detailed Conflict Analysis**",
             "Root Causes and Contributing Factors:"]
    lines += _bullets(template.root_causes)
    if signals.additional_root_cause:
        lines.append(f"- {signals.additional_root_cause}")

    lines += [
        "",
        "Impact Assessment:",
        f"- Direct stakeholders affected: {len(parties) or 'Multiple'}",
        "- Environmental implications: "
        + ("Significant" if "environment" in case.description.lower() else "Moderate"),
        f"- Social dynamics: Complex interactions between {' and '.join(parties) or 'the parties involved'}",
    ]
    if signals.migration_mentioned:
        lines.append("- Migration pressures identified due to seasonal livelihood gaps")
    if signals.illegal_extraction_mentioned:
        lines.append("- Pressure from illegal logging/encroachment noted in the vicinity")

    lines += ["", "**2. Legal Framework**", "Applicable Provisions:"]
    lines += _bullets(template.legal)
    if signals.state_specific_rule_hint:
        lines.append(f"- State-specific rule: {signals.state_specific_rule_hint}")

    lines += ["", "**3. Resolution Framework**", "Recommended Steps:"]
    lines += [f"{i + 1}. {step}" for i, step in enumerate(template.resolution)]
    if signals.additional_resolution_step:
        lines.append(f"{len(template.resolution) + 1}. {signals.additional_resolution_step}")

    lines += [
        "",
        "**4. Fairness Assessment**",
        f"- Rights Protection Score: {fairness.rights_protection:.2f}",
        f"- Procedural Fairness Score: {fairness.procedural_fairness:.2f}",
        f"- Outcome Equity Score: {fairness.outcome_equity:.2f}",
        f"- Implementation Feasibility Score: {fairness.implementation_feasibility:.2f}",
        f"- Overall Fairness Score: {fairness.aggregate:.2f}",
        "",
        "**5. Implementation Timeline**",
        f"- Documentation and Preparation: {'7-14 days' if signals.urgent else '15-30 days'}",
        f"- Stakeholder Consultations: {'10-20 days' if signals.urgent else '20-30 days'}",
        "- Resolution Process: "
        + ("45-90 days (if litigation pending)" if signals.legal_case_likely else "30-45 days"),
        "- Implementation and Monitoring: Ongoing",
        "",
        "**6. Success Indicators**",
        "- Agreement by all parties",
        "- Clear documentation of resolution",
        "- Sustainable implementation plan",
        "- Established monitoring mechanism",
    ]

    return LocalConflictAnalysis(
        analysis=tailor_by_keywords("\n".join(lines), category, case.description),
        recommended_approach=template.resolution[0],
        fairness=fairness,
        timeline=URGENT_TIMELINE if signals.urgent else STANDARD_TIMELINE,
    )
