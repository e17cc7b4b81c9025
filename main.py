"""
Airlane - Backend Application

FastAPI application that runs the website-builder conversation: an
interview agent collects a business brief, a generation agent turns it into
a single-page site, and an editing agent applies follow-up changes.

Features:
    - Goal-based routing between the three agents
    - Gemini generation with deadlines and retry
    - Baseline-constrained CSS generation
    - Stateless turns: the client persists the returned context

Run:
    python main.py
    # or
    uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from config.settings import settings
from core.dependencies import get_initialized_services
from utils.logging import setup_logging, get_logger
from utils.exceptions import AirlaneError

from routers import airlane

# Initialize logging
setup_logging()
logger = get_logger(__name__)


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.
    
    Logs startup configuration; services are created lazily on first use.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"Generation model: {settings.GEMINI_MODEL}")
    
    yield
    
    logger.info("Shutting down application")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=settings.APP_NAME,
    description="Conversational landing page builder API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Generated code payloads compress well
app.add_middleware(GZipMiddleware, minimum_size=500)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(AirlaneError)
async def airlane_exception_handler(request: Request, exc: AirlaneError):
    """
    Handle custom Airlane exceptions.
    
    Returns standardized error response with appropriate status code.
    """
    logger.error(f"{exc.__class__.__name__}: {exc.message}", extra={"details": exc.details})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(airlane.router)


# =============================================================================
# Health Check Endpoints
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint - basic health check.
    
    Returns:
        dict: Simple status message
    """
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Detailed health check endpoint.
    
    Returns:
        dict: Generation key configuration and lazy service status
    """
    return {
        "status": "healthy" if settings.GOOGLE_API_KEY else "degraded",
        "components": {
            "gemini_configured": settings.GOOGLE_API_KEY is not None,
            "model": settings.GEMINI_MODEL,
        },
        "services_loaded": get_initialized_services(),
        "version": settings.APP_VERSION
    }


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
