"""Prompt templates for the remote model, one builder per operation."""

from typing import Any

from fra_advisor.pipeline.conflict_types import ModelFocus
from fra_advisor.pipeline.utils import compact_json


def build_policy_prompt(target_demographic: str, land_data: Any, guidelines: Any,
                        state: str, district: str) -> str:
    return f"""You are an AI policy expert for FRA implementation. Analyze inputs and produce a HIGH-QUALITY, INPUT-SPECIFIC recommendation focused ONLY on the TOP 3 government schemes.

Inputs:
- Target Demographic: {target_demographic}
- State: {state or 'Not specified'}
- District: {district or 'Not specified'}
- Land Data: {compact_json(land_data or {})}
- Guidelines: {compact_json(guidelines or {})}

Output Requirements (strict):
1) Begin with a one-paragraph summary of the context.
2) Then list EXACTLY three schemes, numbered 1..3, each block including:
   - Scheme Name (official)
   - Why this scheme fits THESE inputs (tie back to forest cover, land area, livelihoods, irrigation, housing, tribal focus, etc.)
   - What to implement (3-5 concrete steps with stakeholders)
   - Expected outcomes and 2-3 measurable indicators
   - Risks and mitigations
3) Close with a short execution plan (phased timeline).

Only propose schemes that realistically match the inputs (e.g., MGNREGA, PM-KISAN, PMAY-G, NRLM/SHGs, PMKSY (irrigation), Van Dhan Vikas Yojana (NTFP), CAMPA, PM-JAY for health, etc.).
Do not exceed three schemes. Avoid generic text."""


def build_conflict_prompt(category: str, description: str, parties_involved: Any,
                          record_context: Any, documents: Any, focus: ModelFocus) -> str:
    return f"""As an AI conflict resolution specialist for Forest Rights Act disputes, provide a detailed, context-specific analysis of the following conflict:

Conflict Type: {category}
Description: {description}
Parties Involved: {compact_json(parties_involved or {})}
Record Context: {compact_json(record_context) if record_context else 'Not available'}
Supporting Documents: {compact_json(documents) if documents else 'None provided'}

Focus Areas for Analysis:
- {focus.focus}
- Relevant FRA Sections: {', '.join(focus.legal)}
- Recommended Approach: {focus.approach}

Please provide a comprehensive analysis including:

1. Detailed Conflict Analysis: root causes, historical context, power dynamics, stakeholder impact, environmental and social implications
2. Legal Framework Analysis: applicable FRA provisions, precedents, constitutional safeguards, state-specific rules, procedural requirements
3. Stakeholder-Specific Impact: rights and responsibilities, current challenges, potential losses/gains, long-term implications
4. Resolution Framework: immediate actions, medium-term interventions, long-term solutions, role of authorities, community participation
5. Fairness Assessment:
   - Rights protection score (0-1)
   - Procedural fairness score (0-1)
   - Outcome equity score (0-1)
   - Implementation feasibility score (0-1)
   - Overall fairness score (weighted average)
6. Detailed Recommendations: step-by-step process, timeline with milestones, risk mitigation, monitoring, success indicators
7. Post-Resolution Framework: documentation, implementation monitoring, grievance mechanisms, review process

Ensure all recommendations are legally compliant with FRA, practically implementable, culturally sensitive, environmentally sustainable, socially equitable and economically viable."""


def build_fraud_prompt(record_data: Any, similar_records: Any, check_type: str) -> str:
    return f"""As an AI fraud detection specialist for Forest Rights Act records, analyze the following record for potential fraud or anomalies:

Record Data: {compact_json(record_data or {})}
Similar Records: {compact_json(similar_records or [])}
Check Type: {check_type}

Please analyze for:
1. Data consistency issues
2. Duplicate or conflicting records
3. Suspicious patterns in land area, coordinates, or personal details
4. Document authenticity concerns
5. Timeline inconsistencies
6. Geographic anomalies

Provide:
- Risk score (0-1, where 1 is highest risk)
- Primary concerns
- Specific anomalies found
- Recommended verification steps
- Confidence level in the analysis

Be thorough but avoid false positives for legitimate variations."""


def build_insights_prompt(recent_policies: Any, recent_conflicts: Any, fraud_alerts: Any,
                          state: str, district: str, timeframe: str) -> str:
    return f"""Generate insights and trends analysis for FRA implementation based on:

Recent Policies: {compact_json(recent_policies or [])}
Recent Conflicts: {compact_json(recent_conflicts or [])}
Fraud Alerts: {compact_json(fraud_alerts or [])}
Location: {state or 'Not specified'}, {district or 'Not specified'}
Timeframe: {timeframe}

Provide:
1. Key trends and patterns
2. Areas of concern
3. Success indicators
4. Recommendations for improvement
5. Predictive insights for upcoming challenges

Focus on actionable insights for policy makers and administrators."""
