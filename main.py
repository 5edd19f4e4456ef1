from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from symptom_checker.config.settings import settings
from symptom_checker.api.checker import router as checker_router
from symptom_checker.engine import RULE_TABLE
from symptom_checker.services.session_service import get_session_service
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting Symptom Checker Service...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(
        f"Loaded {len(RULE_TABLE)} condition rules, "
        f"analysis delay {settings.analysis_delay_seconds}s"
    )

    yield

    # Shutdown
    logger.info("Shutting down Symptom Checker Service...")
    await get_session_service().shutdown()


# Initialize FastAPI app
app = FastAPI(
    title="Symptom Checker",
    description="Declare symptoms, get ranked candidate conditions with a triage urgency, then find a doctor and book an appointment.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(checker_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": "1.0.0",
        "rules_loaded": len(RULE_TABLE),
    }


@app.get("/")
async def root():
    return {
        "message": "Symptom Checker Service",
        "description": "Rule-based symptom analysis, triage and appointment booking",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.symptom_checker_port,
        reload=settings.environment == "development",
    )
