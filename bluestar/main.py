"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bluestar.api import auth, categories, inventory, otp
from bluestar.config import get_settings
from bluestar.database import Database
from bluestar.errors import register_exception_handlers

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the datastore client for the lifetime of the process."""
    app.state.database = Database(settings.database_url, echo=settings.is_development)
    logger.info(f"Started in {settings.environment} mode")
    yield
    app.state.database.dispose()


app = FastAPI(
    title="Blue Star API",
    description="Volunteer and service member registration with donation inventory",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

allowed_origins = [settings.frontend_url]
if settings.is_development:
    allowed_origins += ["http://localhost:3000", "http://localhost:3001"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=sorted(set(allowed_origins)),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Register routers
app.include_router(auth.router)
app.include_router(otp.router)
app.include_router(categories.router)
app.include_router(inventory.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
