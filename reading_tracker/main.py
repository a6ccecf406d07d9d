"""Reading Tracker FastAPI Application."""
from datetime import datetime, timezone
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reading_tracker.config import get_settings
from reading_tracker.models.schemas import HealthCheck
from reading_tracker.routers import data, notes, plans, preferences, progress
from reading_tracker.services.plan_catalog import load_builtin_plans
from reading_tracker.storage import InMemoryKeyValueStore, create_store
from reading_tracker.utils.exceptions import StorageError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Get settings
settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Daily reading plans with streaks and notes",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Build the key-value store and load the plan catalog."""
    logger.info("Initializing application resources...")
    app.state.settings = settings
    try:
        app.state.store = create_store(settings)
    except StorageError as e:
        # Keep serving; progress for this session will not outlive the process
        logger.error(f"Storage backend {settings.storage_backend} unavailable, using memory: {e}")
        app.state.store = InMemoryKeyValueStore()
    app.state.builtin_plans = load_builtin_plans(settings.plans_file)
    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up resources on application shutdown."""
    logger.info("Shutting down application...")
    store = getattr(app.state, "store", None)
    if store is not None:
        store.close()
    logger.info("Application shutdown complete")


# Include routers
app.include_router(plans.router)
app.include_router(progress.router)
app.include_router(notes.router)
app.include_router(preferences.router)
app.include_router(data.router)


@app.get("/", response_model=HealthCheck)
async def health_check():
    """Health check endpoint."""
    return HealthCheck(
        status="healthy",
        timestamp=datetime.now(timezone.utc)
    )
