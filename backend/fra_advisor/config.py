"""Application configuration."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from backend root (before any os.getenv calls)
load_dotenv(BASE_DIR / ".env")

# Remote model (OpenAI-compatible chat completions endpoint)
# Leave MODEL_API_KEY empty to run fully on the local heuristic engine.
MODEL_API_KEY = os.getenv("MODEL_API_KEY", "") or os.getenv("OPENAI_API_KEY", "")
MODEL_BASE_URL = os.getenv("MODEL_BASE_URL", "https://api.openai.com/v1").rstrip("/")
MODEL_NAME = os.getenv("MODEL_NAME", "gpt-3.5-turbo")
MODEL_TIMEOUT = float(os.getenv("MODEL_TIMEOUT", "30"))   # Seconds per gateway call, then local fallback
MODEL_ENABLED = bool(MODEL_API_KEY)

# Generation parameters per operation: (max_tokens, temperature)
GENERATION_PARAMS: dict[str, tuple[int, float]] = {
    "policy": (1500, 0.7),
    "conflict": (1200, 0.6),
    "fraud": (800, 0.3),
    "insights": (1000, 0.6),
}

# Engine
TOP_N_SCHEMES = 3                   # Schemes returned per recommendation
FRAUD_ALERT_THRESHOLD = 0.7         # risk_score at/above this raises an alert flag

# HTTP
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if o.strip()
]

# Debug trace mode: set ADVISOR_TRACE=1 to get detailed engine logs
TRACE_ENABLED = os.getenv("ADVISOR_TRACE", "").strip().lower() in ("1", "true", "yes")
