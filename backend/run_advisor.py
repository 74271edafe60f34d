#!/usr/bin/env python3
"""CLI tool to run the advisory engine on a JSON request file.

Usage:
    python run_advisor.py policy <request.json>              # Scheme recommendations
    python run_advisor.py conflict <request.json>            # Conflict analysis
    python run_advisor.py fraud <request.json>               # Fraud-risk check
    python run_advisor.py policy <request.json> --local      # Skip the remote model
    python run_advisor.py conflict <request.json> --trace    # Run with ADVISOR_TRACE
    python run_advisor.py fraud <request.json> --json        # Output raw JSON

Request files use the same fields as the HTTP API, e.g. for policy:
    {"targetDemographic": "small farmers", "landData": {"forestCover": 35}}
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

# Ensure the backend package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent))


def load_request(path_str: str) -> dict:
    """Load a request body from a JSON file."""
    path = Path(path_str)
    if not path.exists():
        print(f"Request file '{path_str}' not found.")
        sys.exit(1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print(f"Request file '{path_str}' is not valid JSON: {e}")
        sys.exit(1)
    if not isinstance(data, dict):
        print("Request file must contain a JSON object.")
        sys.exit(1)
    return data


def _pick(data: dict, camel: str, snake: str, default=None):
    value = data.get(camel)
    return data.get(snake, default) if value is None else value


async def run_request(command: str, data: dict, local_only: bool = False) -> dict:
    """Run one advisory operation; the gateway is closed before returning."""
    from fra_advisor.pipeline.llm_client import ModelGateway
    from fra_advisor.pipeline.orchestrator import AdvisoryPipeline

    gateway = None if local_only else ModelGateway()
    pipeline = AdvisoryPipeline(gateway)
    try:
        if command == "policy":
            return await pipeline.recommend_policies(
                _pick(data, "targetDemographic", "target_demographic", ""),
                _pick(data, "landData", "land_data", {}),
                _pick(data, "guidelines", "guidelines", {}),
                _pick(data, "state", "state", ""),
                _pick(data, "district", "district", ""),
            )
        if command == "conflict":
            return await pipeline.analyze_conflict(
                _pick(data, "conflictType", "conflict_type", ""),
                _pick(data, "description", "description", ""),
                _pick(data, "partiesInvolved", "parties_involved", {}),
                documents=data.get("documents"),
                record_context=_pick(data, "recordContext", "record_context"),
            )
        return await pipeline.detect_fraud(
            _pick(data, "recordData", "record_data", {}),
            _pick(data, "similarRecords", "similar_records", []),
            _pick(data, "checkType", "check_type", "comprehensive"),
        )
    finally:
        if gateway is not None:
            await gateway.aclose()


def print_result(command: str, result: dict):
    """Pretty-print an advisory result."""
    print(f"\n{'═' * 70}")
    print(f"  FRA Advisor — {command} (source: {result.get('source', '?')})")
    print(f"{'═' * 70}\n")

    if command == "policy":
        print(result["recommendations"])
        print(f"\n  {'─' * 60}")
        print(f"  Schemes: {', '.join(result['funding_schemes']) or '—'}")
        print(f"  Implementation score: {result['implementation_score']}")
    elif command == "conflict":
        print(result["analysis"])
        print(f"\n  {'─' * 60}")
        print(f"  Category: {result['conflict_category']}")
        print(f"  Approach: {result['recommended_approach']}")
        print(f"  Fairness: {result['fairness_score']:.2f}")
        print(f"  Timeline: {result['timeline']}")
    else:
        print(result["analysis"])
        print(f"\n  {'─' * 60}")
        print(f"  Risk score: {result['risk_score']}")
        print(f"  Primary concern: {result['primary_concern']}")
        for a in result["anomalies"]:
            print(f"  ⚠ {a}")

    print(f"\n{'═' * 70}\n")


def main():
    parser = argparse.ArgumentParser(
        description="FRA Advisor CLI — Run advisory operations on a request file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("command", choices=["policy", "conflict", "fraud"], help="Advisory operation")
    parser.add_argument("request", help="Path to a JSON request file")
    parser.add_argument("--local", action="store_true", help="Use the local engine only")
    parser.add_argument("--trace", action="store_true", help="Enable ADVISOR_TRACE debug output")
    parser.add_argument("--json", action="store_true", help="Output raw JSON instead of pretty print")

    args = parser.parse_args()

    if args.trace:
        # Must be set before fra_advisor.config is first imported
        os.environ["ADVISOR_TRACE"] = "1"
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    data = load_request(args.request)
    result = asyncio.run(run_request(args.command, data, local_only=args.local))

    if args.json:
        print(json.dumps(result, indent=2, default=str, ensure_ascii=False))
        return
    print_result(args.command, result)


if __name__ == "__main__":
    main()
