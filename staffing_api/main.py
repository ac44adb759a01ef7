"""
Staffing API -- Application entry point.

Run with:
    uvicorn staffing_api.main:app --reload
or
    python -m staffing_api

Then open http://localhost:3000/docs for the interactive Swagger UI.

This file:
  1. Configures logging
  2. Creates the FastAPI application
  3. Adds CORS middleware
  4. Mounts the three resource routers (providers and offers behind the auth gate)
  5. Installs the process-wide error handlers
  6. Defines the health check endpoint
"""

import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from staffing_api import config
from staffing_api.errors import StorageError
from staffing_api.models.schemas import HealthResponse
from staffing_api.routes import clients, offers, providers
from staffing_api.store import COLLECTIONS, get_store

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Create the FastAPI application
#
# The metadata here powers the auto-generated Swagger docs at /docs.
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Staffing API",
    version=config.VERSION,
    description=(
        "Connects clients, care providers and job offers.\n\n"
        "| Collection | Auth |\n"
        "|------------|------|\n"
        "| `/clients` | none (register / login here to get a token) |\n"
        "| `/providers` | `Authorization: Bearer <token>` |\n"
        "| `/offers` | `Authorization: Bearer <token>` |\n"
    ),
)

# ---------------------------------------------------------------------------
# CORS Middleware
#
# Defaults to allowing every origin. Set CORS_ORIGINS to a comma-separated
# list to restrict it.
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Mount route modules
#
# providers and offers carry the auth gate as a router-level dependency.
# ---------------------------------------------------------------------------

app.include_router(clients.router)
app.include_router(providers.router)
app.include_router(offers.router)


# ---------------------------------------------------------------------------
# Error handlers
#
# Routes map NotFound to 404 themselves. Everything else ends up here and
# gets a generic 500 so internal details (file paths, tracebacks) never
# reach the caller.
# ---------------------------------------------------------------------------

@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get(
    "/v1/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the current status of the API. Use this for uptime monitoring.",
    tags=["System"],
)
async def health() -> HealthResponse:
    counts = {}
    for name in COLLECTIONS:
        counts[name] = await asyncio.to_thread(get_store(name).count)

    return HealthResponse(status="healthy", version=config.VERSION, records=counts)
