"""
Solar Inventory Service
Warehouse stock, staff, stock movements, client reports and RFQ documents
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
import os
from alembic import command
from alembic.config import Config
from alembic.util import CommandError

from solar_inventory.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from solar_inventory.core_settings import get_settings
from solar_inventory.api import auth, inventory, navigation, reports, rfq, staff, transactions
from solar_inventory.infrastructure.db import engine, init_models

# Service configuration
SERVICE_NAME = "solar-inventory"
SERVICE_VERSION = os.getenv("SERVICE_VERSION", "1.0.0")
SERVICE_DESCRIPTION = "Inventory, stock movement and RFQ service for solar installation projects"

settings = get_settings()

# Setup structured logging
setup_logging(
    service_name=SERVICE_NAME,
    level=settings.LOG_LEVEL
)

logger = get_logger(__name__)

def migration_config() -> Config:
    """Alembic config pointing at the migrations shipped inside the package."""
    config = Config()
    config.set_main_option("script_location", settings.MIGRATIONS_LOCATION)
    # configparser interpolation treats a bare % as a reference
    config.set_main_option("sqlalchemy.url", settings.database_url.replace("%", "%%"))
    return config

def run_migrations():
    logger.info("Running database migrations")
    try:
        command.upgrade(migration_config(), "head")
    except (CommandError, SQLAlchemyError) as e:
        logger.warning(f"Migration error: {e}")
        return
    logger.info("Database migrations completed")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    if settings.RUN_MIGRATIONS:
        run_migrations()

    # create_all is a no-op for tables the migrations already built
    try:
        init_models()
        logger.info("Database models initialized")
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database models: {e}")
        raise

    logger.info(f"{SERVICE_NAME} started successfully")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")

# Create FastAPI application
app = FastAPI(
    title=SERVICE_NAME,
    description=SERVICE_DESCRIPTION,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    # get_db has already rolled the session back
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": str(exc)})

# Initialize health checks
health_service = ServiceHealth(SERVICE_NAME, engine, SERVICE_VERSION)
app.include_router(health_service.create_health_router())

# Include business logic routes
app.include_router(auth.router)
app.include_router(navigation.router)
app.include_router(inventory.router)
app.include_router(staff.router)
app.include_router(transactions.router)
app.include_router(reports.router)
app.include_router(rfq.router)

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/api/docs"
    }

@app.get("/info")
async def info():
    """Service information endpoint"""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "health": "/health",
            "ready": "/health/ready",
            "live": "/health/live",
            "metrics": "/metrics",
            "docs": "/api/docs"
        }
    }
