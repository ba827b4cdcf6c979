from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.db.base import get_db
from app.core.config import settings
from app.core.logging import configure_logging
from app.routers import activities as activities_router
from app.routers import dashboard as dashboard_router
from app.routers import export as export_router
from app.routers import grid_intensity as grid_intensity_router
from app.routers import profile as profile_router
from app.core.errors import (
    CarbonCoachException,
    carbon_coach_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Carbon Coach API",
    description=(
        "**Personal carbon accounting**\n\n"
        "Logs driving and electricity use, converts each activity to kg CO₂, "
        "joins it with the daily grid carbon-intensity series and serves weekly "
        "dashboards and monthly CSV reports.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(CarbonCoachException, carbon_coach_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(activities_router.router)
app.include_router(dashboard_router.router)
app.include_router(export_router.router)
app.include_router(grid_intensity_router.router)
app.include_router(profile_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when both the API and the database
    are reachable. Returns HTTP 503 if the DB is down.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception:
        db_status = "unreachable"

    if db_status != "ok":
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": db_status},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
