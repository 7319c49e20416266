"""
FastAPI Application Entry Point

Integrates:
  - Slack Events API webhook handler
  - Health checks
  - Middleware for logging & error handling

Run: uvicorn main:app --reload --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from webhook.slack import router as slack_router
from infra import bootstrap_services
from config import Config

# Setup logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    # Startup
    logger.info("=" * 60)
    logger.info("Slack agent relay starting up...")
    logger.info(f"Environment: {Config.ENVIRONMENT}")
    logger.info(f"Agent Backend: {Config.AGENT_BACKEND}")
    logger.info("=" * 60)

    try:
        app.state.services = bootstrap_services()
    except ValueError as e:
        # Handshakes still work; events get 500 until configured
        logger.error(f"Service bootstrap failed: {e}")

    yield

    # Shutdown
    logger.info("Slack agent relay shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Slack Agent Relay",
    description="Relays Slack conversations to an external conversational agent",
    version="1.0.0",
    lifespan=lifespan,
)


# Middleware for logging
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    logger.debug(f"{request.method} {request.url.path}")
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"Request error: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )


# Include routers
app.include_router(slack_router)


# Health check endpoints
@app.get("/health/live")
async def health_live():
    """Live health check (Kubernetes liveness check)."""
    return {"status": "alive"}


@app.get("/health/ready")
async def health_ready():
    """Readiness health check (Kubernetes readiness check)."""
    missing = Config.missing()
    if missing:
        return {"status": "not_ready", "reason": f"missing: {', '.join(missing)}"}
    return {"status": "ready"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Slack Agent Relay",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "slack_events": "POST /api/events",
            "slack_health": "GET /api/slack/health",
            "health_live": "GET /health/live",
            "health_ready": "GET /health/ready",
        },
    }


@app.get("/config/info")
async def config_info():
    """Get non-sensitive configuration info."""
    return {
        "environment": Config.ENVIRONMENT,
        "agent_backend": Config.AGENT_BACKEND,
        "agent": f"{Config.OWNER_LOGIN}/{Config.AGENT_NAME}",
        "port": Config.AGENT_PORT,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=Config.AGENT_PORT,
        reload=Config.ENVIRONMENT == "development",
    )
