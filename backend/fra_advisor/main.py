"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fra_advisor.api import advisory
from fra_advisor.config import CORS_ORIGINS, MODEL_ENABLED, MODEL_NAME
from fra_advisor.pipeline.llm_client import ModelGateway
from fra_advisor.pipeline.orchestrator import AdvisoryPipeline

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: own the model gateway for the life of the process."""
    gateway = ModelGateway()
    app.state.gateway = gateway
    app.state.pipeline = AdvisoryPipeline(gateway)
    if MODEL_ENABLED:
        logger.info(f"Advisory engine started with remote model {MODEL_NAME}")
    else:
        logger.info("Advisory engine started in local-only mode (no model API key)")
    try:
        yield
    finally:
        await gateway.aclose()


app = FastAPI(
    title="FRA Advisory Engine",
    description="Scheme recommendations, conflict analysis and fraud checks for Forest Rights Act claims",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(advisory.router, prefix="/api/ai", tags=["Advisory"])


@app.get("/api/health")
async def health():
    gateway = getattr(app.state, "gateway", None)
    model = await gateway.status() if gateway is not None else {"status": "disabled"}
    return {"status": "operational", "platform": "FRA Advisory Engine", "model": model}
