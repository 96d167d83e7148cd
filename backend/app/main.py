"""Main FastAPI application."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import developers, events, projects, reports, sessions
from app.config import settings
from app.utils.exceptions import AppException
from app.utils.logger import logger

app = FastAPI(
    title="Bugtracker API",
    description="Backend API for bug reports, session telemetry and criticality analysis",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render application errors as {"detail": message}."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(sessions.router)
app.include_router(events.router)
app.include_router(reports.router)
app.include_router(projects.router)
app.include_router(developers.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Bugtracker API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
