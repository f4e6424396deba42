"""
FastAPI application entry point for the JLPT vocabulary backend.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.core.http_client import close_http_session, create_http_session
from app.core.openai_client import create_openai_client
from app.api import (
    ai,
    auth,
    geo,
    health,
    jlpt_voca,
    profiles
)

import logging

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="JLPT Vocabulary API",
    description="JLPT 단어 학습을 위한 API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers (prefix already defined in each router module)
app.include_router(auth.router, prefix="/api")
app.include_router(profiles.router, prefix="/api")
app.include_router(jlpt_voca.router, prefix="/api")
app.include_router(geo.router, prefix="/api")
app.include_router(ai.router, prefix="/api")
app.include_router(health.router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Create process-owned clients."""
    logger.info("JLPT Vocabulary backend starting...")
    logger.info(f"Port: {settings.PORT}")
    logger.info(f"CORS origins: {settings.CORS_ALLOWED_ORIGINS}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'configured'}")

    app.state.http_session = create_http_session()
    app.state.openai_client = create_openai_client()

    if app.state.openai_client is None:
        logger.warning("OPENAI_API_KEY is not set; example sentence generation is disabled")


@app.on_event("shutdown")
async def shutdown_event():
    """Close process-owned clients."""
    await close_http_session(app.state.http_session)

    if app.state.openai_client is not None:
        await app.state.openai_client.close()

    logger.info("JLPT Vocabulary backend shutting down...")


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "service": "JLPT Vocabulary API",
        "version": "1.0.0",
        "status": "running"
    }
