"""FastAPI application entry point.

Employee Records Service - a REST API for managing employee records.
Any authenticated user can read; only admins can create, update or delete.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.error_handlers import register_error_handlers
from config.settings import settings
from routers.v1 import router as v1_router

SERVICE_NAME = "employee-records-service"
SERVICE_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Employee Records Service",
    description="""
    Service for managing employee records.

    ## Features

    - Create, read, update and delete employees
    - Search by name, email or position, filtered by department and status
    - Field validation with every violation reported at once
    - Email uniqueness enforced by the database

    ## Authentication

    All employee endpoints require an Azure AD Bearer token.
    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    Reads are open to every user; writes require the `admin` role.
    """,
    version=SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get(
    "/health",
    tags=["Health"],
    summary="Health Check",
    description="Check if the service is running.",
)
async def health_check() -> dict:
    """Return service health status."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


# Include API routers
app.include_router(
    v1_router,
    prefix="/api",
)

logger.info("Employee Records Service initialized")
