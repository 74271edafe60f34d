"""Shared utility functions for the advisory pipeline.

Consolidates the small numeric/text helpers used by the context builder,
scorer, fairness aggregator and extraction heuristics:
  - Lenient number parsing (absent / non-numeric → 0)
  - Range clamping
  - Compact JSON rendering for narrative text
  - Timestamps
"""

import json
import math
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════
# 1. NUMBER PARSING
# ═══════════════════════════════════════════════════

def to_number(value: Any) -> int | float:
    """Parse a request value into a number, defaulting to 0.

    Handles:
      - Numeric types (int, float; NaN/inf collapse to 0)
      - Numeric strings, with or without thousands separators
      - None, empty strings and anything else → 0

    Integral values come back as ``int`` so rendered land figures read
    ``40`` rather than ``40.0``.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        s = value.strip().replace(",", "")
        if not s:
            return 0
        try:
            num = float(s)
        except ValueError:
            return 0
    else:
        return 0
    if math.isnan(num) or math.isinf(num):
        return 0
    return int(num) if num.is_integer() else num


def clamp(value: float, lo: float, hi: float) -> float:
    """Bound ``value`` to ``[lo, hi]``."""
    return max(lo, min(hi, value))


def to_text(value: Any) -> str:
    """Coerce an optional request value to a string ("" for None)."""
    if value is None:
        return ""
    return str(value)


def pick(data: Mapping[str, Any], *keys: str) -> Any:
    """First present, non-None value among ``keys`` (e.g. camelCase then snake_case)."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


# ═══════════════════════════════════════════════════
# 2. RENDERING
# ═══════════════════════════════════════════════════

def compact_json(data: Any) -> str:
    """Serialize ``data`` without whitespace, preserving key order."""
    return json.dumps(data, separators=(",", ":"), default=str, ensure_ascii=False)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
