"""
Main FastAPI application entry point.
Sets up the API, middleware, error handlers and routes.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from schoolbank.core.config import settings
from schoolbank.core.exceptions import NotFound
from schoolbank.core.logging import configure_logging
from schoolbank.database import engine, Base
from schoolbank.api import accounts, banks, passbook, session, students, summary, transactions
import schoolbank.models  # noqa: F401  registers tables on Base

configure_logging()
logger = logging.getLogger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc"  # ReDoc UI
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFound)
def not_found_handler(request: Request, exc: NotFound):
    """Map ledger lookups that do not resolve to 404."""
    logger.info("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


@app.get("/")
def root():
    """
    Root endpoint - service information.
    """
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "students": f"{settings.API_V1_PREFIX}/students",
            "banks": f"{settings.API_V1_PREFIX}/banks",
            "accounts": f"{settings.API_V1_PREFIX}/accounts",
            "transactions": f"{settings.API_V1_PREFIX}/transactions",
            "passbook": f"{settings.API_V1_PREFIX}/passbook",
            "history": f"{settings.API_V1_PREFIX}/history",
            "summary": f"{settings.API_V1_PREFIX}/summary"
        }
    }


@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring.
    """
    return {
        "status": "healthy",
        "database": "connected"
    }


# Include API routers
app.include_router(session.router, prefix=settings.API_V1_PREFIX)
app.include_router(students.router, prefix=settings.API_V1_PREFIX)
app.include_router(banks.router, prefix=settings.API_V1_PREFIX)
app.include_router(accounts.router, prefix=settings.API_V1_PREFIX)
app.include_router(transactions.router, prefix=settings.API_V1_PREFIX)
app.include_router(passbook.router, prefix=settings.API_V1_PREFIX)
app.include_router(summary.router, prefix=settings.API_V1_PREFIX)
