"""FastAPI application for the Truth Meter service."""

import contextlib
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from .. import __version__
from ..config import get_settings
from ..infrastructure.dependencies import get_service_container
from .endpoints import health, statements

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application.

    Reference providers are created lazily on the first verification,
    so only shutdown work happens here.
    """
    logger.info(f"🚀 Truth Meter starting with backend {get_settings().backend.value}")

    yield  # Application runs here

    logger.info("🛑 Shutting down reference providers...")
    await get_service_container().shutdown()


# Create FastAPI application
app = FastAPI(
    title="Truth Meter API",
    description="Rates statements and headlines against reference sources",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(statements.router)
