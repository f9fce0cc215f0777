"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import database
from app.routers import analytics, export, goals, habits, reminders, rollover
from app.services.rollover_service import RolloverService
from app.services.store_service import StaleWriteError
from app.utils.dates import local_today

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events."""
    # Startup
    await database.connect()
    result = await RolloverService(database.db).run(local_today())
    if result.performed:
        logger.info("Daily rollover to %s reset %d habits", result.last_reset_date, result.reset_habits)
    yield
    # Shutdown
    await database.disconnect()


app = FastAPI(
    title="HabitFlow API",
    description="Habit tracking with completion ledgers and derived statistics",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StaleWriteError)
async def stale_write_handler(request: Request, exc: StaleWriteError):
    """Answer writes that lost a race with 409."""
    logger.warning("Rejected stale write to '%s'", exc.key)
    return JSONResponse(status_code=409, content={"detail": str(exc)})


# Include routers
app.include_router(habits.router)
app.include_router(goals.router)
app.include_router(reminders.router)
app.include_router(analytics.router)
app.include_router(export.router)
app.include_router(rollover.router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"status": "ok", "message": "HabitFlow API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
